"""Combat resolution: encounters, attack rolls, rounds, elimination and loot.

An encounter moves through ``awaiting_roll -> rolling_opponent -> resolving``
and back to ``awaiting_roll``. A monster fight lasts until one side drops; a
PvP encounter is a single exchange. Either way the finished encounter is
archived and the game phase moves on. The opponent's roll is always taken
after the actor's roll is final, and the round is always applied after both.
Callers may drive all three steps at once (``chain=True``) or one at a time.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from engine.abilities import COMBAT_ABILITIES
from engine.dice import roll_two_dice
from engine.events import reject, succeed
from engine.items import calculate_combat_bonuses, random_loot, strip_temporary_items, transfer_spoils
from engine.rules import (
    apply_damage,
    check_death,
    defeat,
    eliminate,
    strike_damage,
    wild_shape_reduce,
)
from engine.turns import advance_turn
from models.actions import ActionType, CommandResult
from models.characters import Monster, Player
from models.combat import CombatEncounter, CombatStage, MonsterTarget, PvPTarget
from models.game_state import GamePhase

if TYPE_CHECKING:
    from models.game_state import GameState

logger = logging.getLogger(__name__)

MAX_TWO_DICE = 12


# ---------------------------------------------------------------------------
# Entering combat
# ---------------------------------------------------------------------------


def start_combat(game_state: GameState, actor: Player, monster: Monster) -> CombatEncounter:
    """Open a monster encounter for ``actor`` and switch to the COMBAT phase."""
    actor.combat_bonuses = calculate_combat_bonuses(actor.inventory, game_state.settings.items)
    encounter = CombatEncounter(
        actor_id=actor.id,
        target=MonsterTarget(monster=monster.model_copy(deep=True)),
        combat_log=[f"Combat begins! {actor.name} vs {monster.type}"],
    )
    game_state.combat = encounter
    game_state.phase = GamePhase.COMBAT
    logger.info("%s engages monster %d (%s)", actor.name, monster.id, monster.type)
    return encounter


def start_pvp_combat(game_state: GameState, actor: Player, opponent: Player) -> CombatEncounter:
    """Open a PvP encounter between ``actor`` and ``opponent``."""
    for player in (actor, opponent):
        player.combat_bonuses = calculate_combat_bonuses(player.inventory, game_state.settings.items)
    encounter = CombatEncounter(
        actor_id=actor.id,
        target=PvPTarget(opponent=opponent.model_copy(deep=True)),
        combat_log=[f"PvP Combat begins! {actor.name} vs {opponent.name}"],
    )
    game_state.combat = encounter
    game_state.phase = GamePhase.COMBAT
    logger.info("%s attacks %s", actor.name, opponent.name)
    return encounter


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def participants(game_state: GameState, encounter: CombatEncounter) -> tuple[Player, Player | Monster]:
    """Live records of the actor and the opponent, looked up by id."""
    actor = game_state.get_player(encounter.actor_id)
    if isinstance(encounter.target, PvPTarget):
        opponent = game_state.get_player(encounter.target.opponent.id)
    else:
        opponent = game_state.get_monster(encounter.target.monster.id)
    if actor is None or opponent is None:
        raise LookupError("Combat participant missing from the game state")
    return actor, opponent


def refresh_snapshot(game_state: GameState, encounter: CombatEncounter) -> None:
    """Copy the opponent's current stats into the encounter."""
    _, opponent = participants(game_state, encounter)
    if isinstance(opponent, Player):
        encounter.target = PvPTarget(opponent=opponent.model_copy(deep=True))
    else:
        encounter.target = MonsterTarget(monster=opponent.model_copy(deep=True))


def _is_down(combatant: Player | Monster) -> bool:
    if isinstance(combatant, Player):
        return combatant.is_eliminated or combatant.health <= 0
    return combatant.defeated or combatant.health <= 0


def _clear_modifiers(encounter: CombatEncounter) -> None:
    encounter.bonus_damage = 0
    encounter.fixed_damage = None
    encounter.max_roll = False
    encounter.strike_first = False


def _check_combat(game_state: GameState, action_type: ActionType) -> tuple[CombatEncounter | None, CommandResult | None]:
    if game_state.phase != GamePhase.COMBAT or game_state.combat is None:
        return None, reject(action_type, "There is no combat in progress")
    return game_state.combat, None


# ---------------------------------------------------------------------------
# Rolls
# ---------------------------------------------------------------------------


def _roll_player(game_state: GameState, encounter: CombatEncounter, actor: Player) -> int:
    bonus = actor.combat_bonuses.roll_bonus
    if encounter.max_roll:
        total = MAX_TWO_DICE + bonus
        encounter.log(f"{actor.name} takes a Precise Shot: 6 + 6 = {total}!")
    else:
        result = roll_two_dice(game_state.rng, bonus=bonus)
        total = result.total
        encounter.log(f"{actor.name} rolled {result.rolls[0]} + {result.rolls[1]} = {total}!")
    encounter.player_roll = total
    encounter.opponent_roll = None
    encounter.stage = CombatStage.ROLLING_OPPONENT
    encounter.is_player_turn = False
    return total


def _roll_opponent(game_state: GameState, encounter: CombatEncounter, opponent: Player | Monster) -> int:
    bonus = opponent.combat_bonuses.roll_bonus if isinstance(opponent, Player) else 0
    result = roll_two_dice(game_state.rng, bonus=bonus)
    encounter.log(
        f"{encounter.opponent_name} rolled {result.rolls[0]} + {result.rolls[1]} = {result.total}!"
    )
    encounter.opponent_roll = result.total
    encounter.stage = CombatStage.RESOLVING
    encounter.is_player_turn = True
    return result.total


def roll_for_attack(game_state: GameState, chain: bool = True) -> tuple[GameState, CommandResult]:
    """Roll the actor's attack (two dice plus roll bonus).

    Args:
        game_state: Current game state.
        chain: Also roll for the opponent and resolve the round.

    Returns:
        (updated_game_state, command_result) tuple.
    """
    encounter, error = _check_combat(game_state, ActionType.ROLL_FOR_ATTACK)
    if error:
        return game_state, error
    if encounter.stage != CombatStage.AWAITING_ROLL:
        return game_state, reject(ActionType.ROLL_FOR_ATTACK, "A roll is already in progress")

    actor, opponent = participants(game_state, encounter)
    if _is_down(actor):
        return game_state, reject(ActionType.ROLL_FOR_ATTACK, f"{actor.name} can't fight anymore")
    if _is_down(opponent):
        return game_state, reject(ActionType.ROLL_FOR_ATTACK, f"{encounter.opponent_name} is already down")

    start = len(encounter.combat_log)
    player_roll = _roll_player(game_state, encounter, actor)
    opponent_roll = None
    if chain:
        opponent_roll = _roll_opponent(game_state, encounter, opponent)
        _resolve(game_state, encounter)

    return game_state, succeed(
        game_state,
        ActionType.ROLL_FOR_ATTACK,
        encounter.combat_log[-1],
        player_id=actor.id,
        log=encounter.combat_log[start:],
        turn_ended=encounter.stage == CombatStage.COMBAT_OVER and game_state.phase != GamePhase.GAME_OVER,
        player_roll=player_roll,
        opponent_roll=opponent_roll,
    )


def reroll_dice(game_state: GameState) -> tuple[GameState, CommandResult]:
    """Replace the actor's roll once per encounter (Lucky Charm)."""
    encounter, error = _check_combat(game_state, ActionType.REROLL)
    if error:
        return game_state, error
    actor, _ = participants(game_state, encounter)

    if not encounter.is_rolling or encounter.player_roll is None:
        return game_state, reject(ActionType.REROLL, "Roll for attack before rerolling")
    if encounter.has_used_reroll:
        return game_state, reject(ActionType.REROLL, "You have already used your reroll this combat")
    if not actor.combat_bonuses.can_reroll:
        return game_state, reject(ActionType.REROLL, "You need a Lucky Charm to reroll")

    result = roll_two_dice(game_state.rng, bonus=actor.combat_bonuses.roll_bonus)
    encounter.player_roll = result.total
    encounter.has_used_reroll = True
    line = f"{actor.name} rerolled and got {result.total}!"
    encounter.log(line)
    return game_state, succeed(
        game_state,
        ActionType.REROLL,
        line,
        player_id=actor.id,
        log=[line],
        player_roll=result.total,
    )


# ---------------------------------------------------------------------------
# Round resolution
# ---------------------------------------------------------------------------


def resolve_round(game_state: GameState) -> tuple[GameState, CommandResult]:
    """Apply the current round, rolling for the opponent first if needed."""
    encounter, error = _check_combat(game_state, ActionType.RESOLVE_ROUND)
    if error:
        return game_state, error
    if encounter.stage == CombatStage.AWAITING_ROLL or encounter.player_roll is None:
        return game_state, reject(ActionType.RESOLVE_ROUND, "Roll for attack first")

    actor, opponent = participants(game_state, encounter)
    start = len(encounter.combat_log)
    if encounter.stage == CombatStage.ROLLING_OPPONENT:
        _roll_opponent(game_state, encounter, opponent)
    player_roll, opponent_roll = encounter.player_roll, encounter.opponent_roll
    _resolve(game_state, encounter)

    return game_state, succeed(
        game_state,
        ActionType.RESOLVE_ROUND,
        encounter.combat_log[-1],
        player_id=actor.id,
        log=encounter.combat_log[start:],
        turn_ended=encounter.stage == CombatStage.COMBAT_OVER and game_state.phase != GamePhase.GAME_OVER,
        player_roll=player_roll,
        opponent_roll=opponent_roll,
    )


def _actor_strike(encounter: CombatEncounter, actor: Player, defense_bonus: int) -> int:
    if encounter.fixed_damage is not None:
        return encounter.fixed_damage
    return strike_damage(
        encounter.player_roll + encounter.bonus_damage,
        actor.combat_bonuses.attack_bonus,
        defense_bonus,
    )


def _resolve(game_state: GameState, encounter: CombatEncounter) -> None:
    actor, opponent = participants(game_state, encounter)
    if isinstance(opponent, Player):
        _resolve_pvp(game_state, encounter, actor, opponent)
    else:
        _resolve_monster(game_state, encounter, actor, opponent)


def _resolve_pvp(
    game_state: GameState,
    encounter: CombatEncounter,
    actor: Player,
    opponent: Player,
) -> None:
    actor_first = (
        encounter.strike_first
        or actor.combat_bonuses.attack_first
        or not opponent.combat_bonuses.attack_first
    )
    order = [(actor, opponent), (opponent, actor)]
    if not actor_first:
        order.reverse()
        encounter.log(f"{opponent.name} is too swift and strikes first!")

    for striker, target in order:
        if check_death(striker):
            continue
        if striker is actor:
            damage = _actor_strike(encounter, actor, opponent.combat_bonuses.defense_bonus)
        else:
            damage = strike_damage(
                encounter.opponent_roll,
                opponent.combat_bonuses.attack_bonus,
                actor.combat_bonuses.defense_bonus,
            )
        damage = wild_shape_reduce(damage, target)
        apply_damage(target, damage)
        encounter.log(f"{striker.name} deals {damage} damage to {target.name}!")

    # A PvP encounter is a single exchange
    loser = next((p for p in (opponent, actor) if check_death(p)), None)
    if loser is None:
        _end_combat(game_state, encounter, (actor, opponent), GamePhase.PVP)
        return

    winner = actor if loser is opponent else opponent
    eliminate(loser)
    encounter.log(f"{loser.name} is eliminated!")
    taken = transfer_spoils(loser, winner)
    if taken:
        encounter.log(f"{winner.name} takes {len(taken)} items from {loser.name}!")

    living = game_state.living_players()
    if len(living) <= 1:
        champion = living[0] if living else None
        if champion:
            encounter.log(f"{champion.name} is the last one standing!")
        _end_combat(game_state, encounter, (actor, opponent), GamePhase.GAME_OVER, champion)
    else:
        _end_combat(game_state, encounter, (actor, opponent), GamePhase.PVP)


def _resolve_monster(
    game_state: GameState,
    encounter: CombatEncounter,
    actor: Player,
    monster: Monster,
) -> None:
    damage = _actor_strike(encounter, actor, 0)
    apply_damage(monster, damage)
    encounter.log(f"{actor.name} deals {damage} damage!")

    if not check_death(monster):
        counter = strike_damage(encounter.opponent_roll, 0, actor.combat_bonuses.defense_bonus)
        counter = wild_shape_reduce(counter, actor)
        apply_damage(actor, counter)
        encounter.log(f"{monster.type} deals {counter} damage!")

    if check_death(monster):
        defeat(monster)
        encounter.log(f"{monster.type} is defeated!")
        strip_temporary_items(actor, game_state.settings.items)
        loot = random_loot(game_state.settings.items, game_state.rng)
        actor.inventory.append(loot.id)
        encounter.log(f"{actor.name} found: {game_state.settings.item_label(loot.id)}")

        if game_state.remaining_monsters():
            _end_combat(game_state, encounter, (actor,), GamePhase.PLAYING)
            return
        encounter.log("All monsters defeated! PvP phase begins!")
        living = game_state.living_players()
        if len(living) <= 1:
            champion = living[0] if living else None
            if champion:
                encounter.log(f"{champion.name} is the last one standing!")
            _end_combat(game_state, encounter, (actor,), GamePhase.GAME_OVER, champion)
        else:
            _end_combat(game_state, encounter, (actor,), GamePhase.PVP)
        return

    if check_death(actor):
        eliminate(actor)
        encounter.log(f"{actor.name} is defeated by {monster.type}!")
        if not game_state.living_players():
            encounter.log("All players have been defeated by monsters!")
            _end_combat(game_state, encounter, (actor,), GamePhase.GAME_OVER)
        else:
            _end_combat(game_state, encounter, (actor,), GamePhase.PLAYING)
        return

    _next_round(game_state, encounter, (actor,))


def _next_round(
    game_state: GameState,
    encounter: CombatEncounter,
    fighters: tuple[Player, ...],
) -> None:
    for player in fighters:
        if player.wild_shape_rounds > 0:
            player.wild_shape_rounds -= 1
    _clear_modifiers(encounter)
    refresh_snapshot(game_state, encounter)
    encounter.round_number += 1
    encounter.stage = CombatStage.AWAITING_ROLL
    encounter.is_player_turn = True


def _end_combat(
    game_state: GameState,
    encounter: CombatEncounter,
    fighters: tuple[Player, ...],
    phase: GamePhase,
    winner: Player | None = None,
) -> None:
    """Archive the encounter and move the game to ``phase``."""
    for player in fighters:
        player.wild_shape_rounds = 0
    _clear_modifiers(encounter)
    refresh_snapshot(game_state, encounter)
    encounter.stage = CombatStage.COMBAT_OVER
    game_state.combat_log_history.append(list(encounter.combat_log))
    game_state.combat = None
    game_state.phase = phase

    if phase == GamePhase.GAME_OVER:
        game_state.winner_id = winner.id if winner else None
        game_state.moves_left = 0
        logger.info("Game over, winner: %s", winner.name if winner else "nobody")
    else:
        logger.info("Combat over after %d rounds, phase now %s", encounter.round_number, phase.value)
        advance_turn(game_state)


# ---------------------------------------------------------------------------
# Combat abilities
# ---------------------------------------------------------------------------


def activate_combat_ability(
    game_state: GameState,
    player_id: int | None = None,
) -> tuple[GameState, CommandResult]:
    """Spend one use of the actor's combat ability on the coming round."""
    encounter, error = _check_combat(game_state, ActionType.COMBAT_ABILITY)
    if error:
        return game_state, error
    actor, _ = participants(game_state, encounter)
    if player_id is not None and player_id != actor.id:
        return game_state, reject(ActionType.COMBAT_ABILITY, f"Only {actor.name} can act in this combat")
    if encounter.stage != CombatStage.AWAITING_ROLL:
        return game_state, reject(ActionType.COMBAT_ABILITY, "Wait for the round to resolve")

    ability = actor.combat_ability
    if ability.uses <= 0:
        return game_state, reject(ActionType.COMBAT_ABILITY, f"{ability.name} has no uses left")
    effect = COMBAT_ABILITIES.get(ability.id)
    if effect is None:
        return game_state, reject(ActionType.COMBAT_ABILITY, f"{ability.name} can't be used in combat")

    ok, message = effect(game_state, encounter, actor)
    if not ok:
        return game_state, reject(ActionType.COMBAT_ABILITY, message)
    ability.uses -= 1
    encounter.log(message)
    return game_state, succeed(
        game_state,
        ActionType.COMBAT_ABILITY,
        message,
        player_id=actor.id,
        log=[message],
    )
