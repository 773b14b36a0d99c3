"""Game orchestration: setup, character select, movement, turns and commands."""

from __future__ import annotations

import logging
import random

from engine import items as item_rules
from engine.abilities import BOARD_ABILITIES
from engine.combat import (
    activate_combat_ability,
    refresh_snapshot,
    reroll_dice,
    resolve_round,
    roll_for_attack,
    start_combat,
    start_pvp_combat,
)
from engine.dice import roll_die
from engine.events import reject, succeed
from engine.grid import (
    chebyshev_distance,
    generate_obstacles,
    living_monster_at,
    living_player_at,
    tile_content,
)
from engine.monsters import spawn_monsters
from engine.rules import MOVEMENT_PHASES, validate_move, validate_teleport
from engine.turns import advance_turn
from models.actions import ActionRequest, ActionType, CommandResult
from models.characters import CharacterDefinition, Player
from models.combat import PvPTarget
from models.game_state import GamePhase, GameSettings, GameState, TileContent

logger = logging.getLogger(__name__)


def create_game(
    game_id: str,
    settings: GameSettings | None = None,
    seed: int | None = None,
    rng: random.Random | None = None,
    name: str = "Monster Hunt",
) -> GameState:
    """Create a game waiting in the SETUP phase.

    Args:
        game_id: Unique identifier for the game.
        settings: Board, roster and catalog configuration.
        seed: Seed for the game's private random source.
        rng: Explicit random source (takes precedence over ``seed``).
        name: Display name for the game.

    Returns:
        A fresh GameState.
    """
    game_state = GameState(game_id=game_id, name=name, settings=settings or GameSettings())
    if rng is not None:
        game_state._rng = rng
    elif seed is not None:
        game_state._rng = random.Random(seed)
    return game_state


def reset_game(game_state: GameState) -> tuple[GameState, CommandResult]:
    """Return to SETUP, keeping the id, settings and random source."""
    fresh = GameState(
        game_id=game_state.game_id,
        name=game_state.name,
        settings=game_state.settings,
        player_count=game_state.player_count,
    )
    for field in GameState.model_fields:
        setattr(game_state, field, getattr(fresh, field))
    logger.info("Game %s reset", game_state.game_id)
    return game_state, succeed(game_state, ActionType.RESET, "New game! Choose the number of players.")


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def get_tile_content(game_state: GameState, x: int, y: int) -> TileContent:
    return tile_content(
        (x, y),
        game_state.players,
        game_state.monsters,
        game_state.obstacles,
        game_state.settings.characters,
    )


def available_characters(game_state: GameState) -> list[CharacterDefinition]:
    """Archetypes no seat has chosen yet."""
    chosen = {p.character for p in game_state.players}
    return [c for c in game_state.settings.characters if c.id not in chosen]


# ---------------------------------------------------------------------------
# Setup and character select
# ---------------------------------------------------------------------------


def start_character_select(game_state: GameState, player_count: int | None = None) -> tuple[GameState, CommandResult]:
    """Fix the number of seats and open character selection."""
    action = ActionType.START_CHARACTER_SELECT
    if game_state.phase != GamePhase.SETUP:
        return game_state, reject(action, "The game has already started")

    count = player_count if player_count is not None else game_state.player_count
    settings = game_state.settings
    if not settings.min_players <= count <= settings.max_players:
        return game_state, reject(
            action, f"Player count must be between {settings.min_players} and {settings.max_players}"
        )

    game_state.player_count = count
    game_state.setup_seat = 0
    game_state.players = []
    game_state.phase = GamePhase.CHARACTER_SELECT
    logger.info("Character select for %d players", count)
    return game_state, succeed(game_state, action, "Player 1 - Choose Your Character")


def select_character(
    game_state: GameState,
    character_id: str,
    player_id: int | None = None,
) -> tuple[GameState, CommandResult]:
    """Give the choosing seat an archetype; start the game once all are seated.

    Args:
        game_state: Current game state.
        character_id: CharacterDefinition id.
        player_id: Seat making the choice; defaults to the seat whose turn it is.

    Returns:
        (updated_game_state, command_result) tuple.
    """
    action = ActionType.SELECT_CHARACTER
    if game_state.phase != GamePhase.CHARACTER_SELECT:
        return game_state, reject(action, "Characters can only be chosen during character select")

    seat = game_state.setup_seat
    if player_id is not None and player_id != seat:
        return game_state, reject(action, f"It's Player {seat + 1}'s turn to choose")

    definition = game_state.settings.character(character_id)
    if definition is None:
        return game_state, reject(action, f"Unknown character '{character_id}'")
    if any(p.character == definition.id for p in game_state.players):
        return game_state, reject(action, f"{definition.name} has already been chosen")

    player = Player(
        id=seat,
        name=f"Player {seat + 1}",
        character=definition.id,
        health=game_state.settings.starting_health,
        max_health=game_state.settings.starting_health,
        color=definition.color,
        board_ability=definition.board_ability.model_copy(),
        combat_ability=definition.combat_ability.model_copy(),
    )
    game_state.players.append(player)
    game_state.setup_seat += 1
    description = f"{player.name} chose the {definition.name}"

    if game_state.setup_seat >= game_state.player_count:
        _initialize_board(game_state)
        description += f". The hunt begins! {game_state.players[0].name}'s turn!"
    else:
        description += f". Player {game_state.setup_seat + 1} - Choose Your Character"

    return game_state, succeed(game_state, action, description, player_id=player.id)


def _initialize_board(game_state: GameState) -> None:
    settings = game_state.settings
    game_state.obstacles = generate_obstacles(settings.board_size, settings.obstacle_count, game_state.rng)

    for player in game_state.players:
        player.position = settings.starting_positions[player.id]
        player.wild_shape_rounds = 0

    game_state.monsters = spawn_monsters(
        settings.monster_count,
        settings.board_size,
        game_state.obstacles,
        {tuple(p.position) for p in game_state.players},
        settings.monster_types,
        settings.monster_health,
        game_state.rng,
    )
    game_state.current_player_index = 0
    game_state.turn_number = 1
    game_state.moves_left = 0
    game_state.dice_value = None
    game_state.phase = GamePhase.PLAYING
    logger.info(
        "Game %s started: %d players, %d monsters",
        game_state.game_id, len(game_state.players), len(game_state.monsters),
    )


# ---------------------------------------------------------------------------
# Movement
# ---------------------------------------------------------------------------


def _check_actor(game_state: GameState, action: ActionType, player_id: int | None = None) -> tuple[Player | None, CommandResult | None]:
    if game_state.phase not in MOVEMENT_PHASES:
        return None, reject(action, "That can't be done right now")
    actor = game_state.current_player
    if actor is None:
        return None, reject(action, "There is no current player")
    if player_id is not None and player_id != actor.id:
        return None, reject(action, "It's not your turn")
    if actor.is_eliminated:
        return None, reject(action, f"{actor.name} has been eliminated")
    return actor, None


def roll_movement_die(game_state: GameState, player_id: int | None = None) -> tuple[GameState, CommandResult]:
    """Roll a single die for this turn's movement budget."""
    actor, error = _check_actor(game_state, ActionType.ROLL_MOVEMENT, player_id)
    if error:
        return game_state, error
    if game_state.moves_left > 0:
        return game_state, reject(ActionType.ROLL_MOVEMENT, "Use your moves before rolling again")

    value = roll_die(game_state.rng)
    game_state.dice_value = value
    game_state.moves_left = value
    return game_state, succeed(
        game_state,
        ActionType.ROLL_MOVEMENT,
        f"{actor.name} rolled {value}! Click adjacent tiles to move.",
        player_id=actor.id,
        dice_value=value,
    )


def move_to(
    game_state: GameState,
    x: int,
    y: int,
    player_id: int | None = None,
) -> tuple[GameState, CommandResult]:
    """Move the current player one tile, or teleport if Teleport is armed.

    Landing on a monster (PLAYING) or a living player (PVP) spends the rest
    of the moves and starts combat. Running out of moves ends the turn.

    Args:
        game_state: Current game state.
        x: Target column.
        y: Target row.
        player_id: Acting player; must be the current player if given.

    Returns:
        (updated_game_state, command_result) tuple.
    """
    action = ActionType.MOVE
    actor, error = _check_actor(game_state, action, player_id)
    if error:
        return game_state, error
    target = (x, y)

    if game_state.teleport_active:
        valid, reason = validate_teleport(game_state, actor, target)
        if not valid:
            return game_state, reject(action, reason)
        actor.position = target
        game_state.teleport_active = False
        return game_state, succeed(game_state, action, f"{actor.name} teleports to {target}!", player_id=actor.id)

    valid, reason = validate_move(game_state, actor, target)
    if not valid:
        return game_state, reject(action, reason)

    actor.position = target
    game_state.moves_left -= 1

    if game_state.phase == GamePhase.PVP:
        opponent = living_player_at(target, game_state.players, exclude_id=actor.id)
        if opponent is not None:
            game_state.moves_left = 0
            encounter = start_pvp_combat(game_state, actor, opponent)
            return game_state, succeed(
                game_state, action, f"{actor.name} attacks {opponent.name}!",
                player_id=actor.id, log=list(encounter.combat_log),
            )

    if game_state.phase == GamePhase.PLAYING:
        monster = living_monster_at(target, game_state.monsters)
        if monster is not None:
            game_state.moves_left = 0
            encounter = start_combat(game_state, actor, monster)
            return game_state, succeed(
                game_state, action, f"{actor.name} encountered a {monster.type}! Combat begins!",
                player_id=actor.id, log=list(encounter.combat_log),
            )

    if game_state.moves_left == 0:
        next_player = advance_turn(game_state)
        return game_state, succeed(
            game_state, action, f"{actor.name}'s turn ended. {next_player.name}'s turn!",
            player_id=actor.id, turn_ended=True,
        )

    return game_state, succeed(
        game_state, action, f"{game_state.moves_left} moves left.", player_id=actor.id,
    )


def end_turn(game_state: GameState, player_id: int | None = None) -> tuple[GameState, CommandResult]:
    """Give up any remaining moves and pass the turn."""
    action = ActionType.END_TURN
    if game_state.phase not in MOVEMENT_PHASES:
        return game_state, reject(action, "The turn can't end right now")
    current = game_state.current_player
    if current is not None and player_id is not None and player_id != current.id:
        return game_state, reject(action, "It's not your turn")

    next_player = advance_turn(game_state)
    name = current.name if current else "Nobody"
    return game_state, succeed(
        game_state, action, f"{name} ends their turn. {next_player.name}'s turn!",
        player_id=current.id if current else None, turn_ended=True,
    )


# ---------------------------------------------------------------------------
# Starting combat directly
# ---------------------------------------------------------------------------


def start_combat_against_monster(game_state: GameState, monster_id: int) -> tuple[GameState, CommandResult]:
    """Engage a living monster on or next to the current player's tile."""
    action = ActionType.START_COMBAT
    if game_state.phase != GamePhase.PLAYING:
        return game_state, reject(action, "Monsters can only be fought while exploring")
    actor, error = _check_actor(game_state, action)
    if error:
        return game_state, error
    monster = game_state.get_monster(monster_id)
    if monster is None:
        return game_state, reject(action, f"Monster {monster_id} not found")
    if monster.defeated:
        return game_state, reject(action, f"{monster.type} is already defeated")
    if chebyshev_distance(actor.position, monster.position) > 1:
        return game_state, reject(action, f"{monster.type} is too far away")

    game_state.moves_left = 0
    encounter = start_combat(game_state, actor, monster)
    return game_state, succeed(
        game_state, action, encounter.combat_log[0], player_id=actor.id, log=list(encounter.combat_log),
    )


def start_pvp_combat_against(game_state: GameState, opponent_id: int) -> tuple[GameState, CommandResult]:
    """Attack a living player on or next to the current player's tile."""
    action = ActionType.START_PVP_COMBAT
    if game_state.phase != GamePhase.PVP:
        return game_state, reject(action, "Players can only be attacked in the PvP phase")
    actor, error = _check_actor(game_state, action)
    if error:
        return game_state, error
    opponent = game_state.get_player(opponent_id)
    if opponent is None:
        return game_state, reject(action, f"Player {opponent_id} not found")
    if opponent.id == actor.id:
        return game_state, reject(action, "You can't attack yourself")
    if opponent.is_eliminated:
        return game_state, reject(action, f"{opponent.name} is already eliminated")
    if chebyshev_distance(actor.position, opponent.position) > 1:
        return game_state, reject(action, f"{opponent.name} is too far away")

    game_state.moves_left = 0
    encounter = start_pvp_combat(game_state, actor, opponent)
    return game_state, succeed(
        game_state, action, encounter.combat_log[0], player_id=actor.id, log=list(encounter.combat_log),
    )


# ---------------------------------------------------------------------------
# Items and board abilities
# ---------------------------------------------------------------------------


def use_item(game_state: GameState, player_id: int, item_index: int) -> tuple[GameState, CommandResult]:
    """Use an inventory item on the turn player or a combatant."""
    action = ActionType.USE_ITEM
    player = game_state.get_player(player_id)
    if player is None:
        return game_state, reject(action, f"Player {player_id} not found")
    if player.is_eliminated:
        return game_state, reject(action, f"{player.name} has been eliminated")

    encounter = game_state.combat
    if game_state.phase == GamePhase.COMBAT and encounter is not None:
        fighters = {encounter.actor_id}
        if isinstance(encounter.target, PvPTarget):
            fighters.add(encounter.target.opponent.id)
        if player.id not in fighters:
            return game_state, reject(action, f"{player.name} is not in this combat")
    elif game_state.phase in MOVEMENT_PHASES:
        current = game_state.current_player
        if current is None or current.id != player.id:
            return game_state, reject(action, "It's not your turn")
    else:
        return game_state, reject(action, "Items can't be used right now")

    ok, message = item_rules.use_item(
        player, item_index, game_state.settings.items, in_combat=encounter is not None,
    )
    if not ok:
        return game_state, reject(action, message)

    log: list[str] = []
    if encounter is not None:
        encounter.log(message)
        refresh_snapshot(game_state, encounter)
        log = [message]
    return game_state, succeed(game_state, action, message, player_id=player.id, log=log)


def activate_board_ability(game_state: GameState, player_id: int | None = None) -> tuple[GameState, CommandResult]:
    """Spend one use of the current player's board ability."""
    action = ActionType.BOARD_ABILITY
    actor, error = _check_actor(game_state, action, player_id)
    if error:
        return game_state, error

    ability = actor.board_ability
    if ability.uses <= 0:
        return game_state, reject(action, f"{ability.name} has no uses left")
    effect = BOARD_ABILITIES.get(ability.id)
    if effect is None:
        return game_state, reject(action, f"{ability.name} can't be used on the board")

    ok, message = effect(game_state, actor)
    if not ok:
        return game_state, reject(action, message)
    ability.uses -= 1
    logger.debug("%s used %s (%d left)", actor.name, ability.name, ability.uses)
    return game_state, succeed(game_state, action, message, player_id=actor.id)


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


def process_action(game_state: GameState, request: ActionRequest) -> tuple[GameState, CommandResult]:
    """Validate and run a single command.

    Args:
        game_state: Current game state.
        request: The command and its arguments.

    Returns:
        (updated_game_state, command_result) tuple.
    """
    action = request.action_type

    if action == ActionType.START_CHARACTER_SELECT:
        return start_character_select(game_state, request.player_count)

    if action == ActionType.SELECT_CHARACTER:
        if request.character_id is None:
            return game_state, reject(action, "Select character requires a character_id")
        return select_character(game_state, request.character_id, request.player_id)

    if action == ActionType.ROLL_MOVEMENT:
        return roll_movement_die(game_state, request.player_id)

    if action == ActionType.MOVE:
        if request.target_position is None:
            return game_state, reject(action, "Move requires a target_position")
        x, y = request.target_position
        return move_to(game_state, x, y, request.player_id)

    if action == ActionType.END_TURN:
        return end_turn(game_state, request.player_id)

    if action == ActionType.START_COMBAT:
        if request.monster_id is None:
            return game_state, reject(action, "Start combat requires a monster_id")
        return start_combat_against_monster(game_state, request.monster_id)

    if action == ActionType.START_PVP_COMBAT:
        if request.opponent_id is None:
            return game_state, reject(action, "Start PvP combat requires an opponent_id")
        return start_pvp_combat_against(game_state, request.opponent_id)

    if action == ActionType.ROLL_FOR_ATTACK:
        return roll_for_attack(game_state, chain=request.chain)

    if action == ActionType.REROLL:
        return reroll_dice(game_state)

    if action == ActionType.RESOLVE_ROUND:
        return resolve_round(game_state)

    if action == ActionType.USE_ITEM:
        if request.item_index is None:
            return game_state, reject(action, "Use item requires an item_index")
        player_id = request.player_id
        if player_id is None:
            current = game_state.current_player
            if current is None:
                return game_state, reject(action, "There is no current player")
            player_id = current.id
        return use_item(game_state, player_id, request.item_index)

    if action == ActionType.BOARD_ABILITY:
        return activate_board_ability(game_state, request.player_id)

    if action == ActionType.COMBAT_ABILITY:
        return activate_combat_ability(game_state, request.player_id)

    if action == ActionType.RESET:
        return reset_game(game_state)

    return game_state, reject(action, f"Unknown action type: {action}")
