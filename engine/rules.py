"""Movement legality and damage rules for Monster Hunt."""

from __future__ import annotations

from typing import TYPE_CHECKING

from engine.catalog import NATURES_PATH, STEALTH
from engine.grid import (
    chebyshev_distance,
    in_bounds,
    living_monster_at,
    living_player_at,
)
from models.game_state import GamePhase

if TYPE_CHECKING:
    from models.characters import Monster, Player
    from models.game_state import GameState

MOVEMENT_PHASES = (GamePhase.PLAYING, GamePhase.PVP)


def validate_move(
    game_state: GameState,
    actor: Player,
    target: tuple[int, int],
) -> tuple[bool, str]:
    """Check if ``actor`` may step onto ``target`` this turn.

    Adjacency is 8-directional (Chebyshev distance exactly 1). Nature's Path
    ignores obstacles; Stealth ignores other players while monsters remain.
    In the PvP phase stepping onto a living player is legal and is an attack.

    Args:
        game_state: Current game state.
        actor: The moving player.
        target: Destination (x, y).

    Returns:
        (valid, error_message) tuple.
    """
    if game_state.phase not in MOVEMENT_PHASES:
        return False, "You can't move right now"
    if actor.is_eliminated:
        return False, f"{actor.name} has been eliminated"
    if game_state.moves_left <= 0:
        return False, "No moves left, roll the dice first"

    if chebyshev_distance(actor.position, target) != 1:
        return False, "You can only move to adjacent tiles!"
    if not in_bounds(target, game_state.settings.board_size):
        return False, "Can't move outside the board!"

    if target in game_state.obstacles and actor.board_ability.id != NATURES_PATH:
        return False, "An obstacle blocks the way!"

    other = living_player_at(target, game_state.players, exclude_id=actor.id)
    if other is not None and game_state.phase == GamePhase.PLAYING:
        if actor.board_ability.id != STEALTH:
            return False, "Another player is on that tile!"

    return True, ""


def is_move_legal(game_state: GameState, actor: Player, target: tuple[int, int]) -> bool:
    return validate_move(game_state, actor, target)[0]


def validate_teleport(
    game_state: GameState,
    actor: Player,
    target: tuple[int, int],
) -> tuple[bool, str]:
    """Check a teleport destination: any empty in-bounds tile."""
    if not in_bounds(target, game_state.settings.board_size):
        return False, "Can't teleport outside the board!"
    if target in game_state.obstacles:
        return False, "Can't teleport into an obstacle!"
    if living_player_at(target, game_state.players, exclude_id=actor.id) is not None:
        return False, "Another player is on that tile!"
    if living_monster_at(target, game_state.monsters) is not None:
        return False, "A monster is on that tile!"
    return True, ""


def is_tile_clickable(game_state: GameState, x: int, y: int) -> bool:
    """Whether the current player can act on tile (x, y) right now."""
    actor = game_state.current_player
    if actor is None or actor.is_eliminated:
        return False
    if game_state.phase not in MOVEMENT_PHASES:
        return False
    if game_state.teleport_active:
        return validate_teleport(game_state, actor, (x, y))[0]
    return is_move_legal(game_state, actor, (x, y))


def strike_damage(roll: int, attack_bonus: int, defense_bonus: int = 0) -> int:
    """Damage of a strike after defense. Never less than 1.

    Args:
        roll: The striker's final roll.
        attack_bonus: The striker's attack bonus.
        defense_bonus: The target's defense bonus.

    Returns:
        Damage to apply.
    """
    return max(1, roll + attack_bonus - defense_bonus)


def wild_shape_reduce(damage: int, target: Player) -> int:
    """Halve damage (rounding down, minimum 1) while Wild Shape is active."""
    if target.wild_shape_rounds > 0:
        return max(1, damage // 2)
    return damage


def apply_damage(target: Player | Monster, damage: int) -> int:
    """Reduce health, clamped at 0. Returns the remaining health."""
    target.health = max(0, target.health - damage)
    return target.health


def check_death(target: Player | Monster) -> bool:
    return target.health <= 0


def eliminate(player: Player) -> None:
    """Flag a player as eliminated. There is no inverse."""
    player.health = 0
    player.is_eliminated = True


def defeat(monster: Monster) -> None:
    """Flag a monster as defeated. There is no inverse."""
    monster.health = 0
    monster.defeated = True
