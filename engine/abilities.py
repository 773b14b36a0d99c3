"""Board and combat ability effects, dispatched by ability id.

Each effect checks its own preconditions and returns ``(ok, message)``.
When ``ok`` is False nothing has been changed and no use is spent. Adding a
character means adding an entry to the registry, not touching the callers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from config import CHARGE_EXTRA_MOVES, DIVINE_PROTECTION_HEAL, WILD_SHAPE_ROUNDS
from engine import catalog
from engine.items import heal

if TYPE_CHECKING:
    from models.characters import Player
    from models.combat import CombatEncounter
    from models.game_state import GameState

BoardEffect = Callable[["GameState", "Player"], tuple[bool, str]]
CombatEffect = Callable[["GameState", "CombatEncounter", "Player"], tuple[bool, str]]


# ---------------------------------------------------------------------------
# Board abilities
# ---------------------------------------------------------------------------


def _charge(game_state: GameState, player: Player) -> tuple[bool, str]:
    if game_state.moves_left <= 0:
        return False, "Roll for movement before charging"
    game_state.moves_left += CHARGE_EXTRA_MOVES
    return True, f"{player.name} used Charge! +{CHARGE_EXTRA_MOVES} movement this turn."


def _teleport(game_state: GameState, player: Player) -> tuple[bool, str]:
    if game_state.teleport_active:
        return False, "Teleport is already active"
    game_state.teleport_active = True
    return True, f"{player.name} can teleport to any empty tile!"


def _eagle_eye(game_state: GameState, player: Player) -> tuple[bool, str]:
    spots = ", ".join(
        f"{m.type} at {tuple(m.position)}" for m in game_state.remaining_monsters()
    )
    return True, f"{player.name} used Eagle Eye! All monsters revealed: {spots or 'none left'}."


def _stealth(game_state: GameState, player: Player) -> tuple[bool, str]:
    return True, f"{player.name} can move through other players this turn!"


def _divine_protection(game_state: GameState, player: Player) -> tuple[bool, str]:
    healed = heal(player, DIVINE_PROTECTION_HEAL)
    return True, f"{player.name} healed {healed} HP!"


def _natures_path(game_state: GameState, player: Player) -> tuple[bool, str]:
    return True, f"{player.name} can move through obstacles this turn!"


BOARD_ABILITIES: dict[str, BoardEffect] = {
    catalog.CHARGE: _charge,
    catalog.TELEPORT: _teleport,
    catalog.EAGLE_EYE: _eagle_eye,
    catalog.STEALTH: _stealth,
    catalog.DIVINE_PROTECTION: _divine_protection,
    catalog.NATURES_PATH: _natures_path,
}


# ---------------------------------------------------------------------------
# Combat abilities (apply to the actor's next round)
# ---------------------------------------------------------------------------


def _berserker_rage(game_state: GameState, encounter: CombatEncounter, player: Player) -> tuple[bool, str]:
    encounter.bonus_damage += 4
    return True, f"{player.name} flies into a Berserker Rage! (+4 damage next strike)"


def _magic_missile(game_state: GameState, encounter: CombatEncounter, player: Player) -> tuple[bool, str]:
    if encounter.fixed_damage is not None:
        return False, "A guaranteed strike is already prepared"
    encounter.fixed_damage = 8
    return True, f"{player.name} conjures a Magic Missile! (8 guaranteed damage)"


def _precise_shot(game_state: GameState, encounter: CombatEncounter, player: Player) -> tuple[bool, str]:
    if encounter.max_roll:
        return False, "Precise Shot is already active"
    encounter.max_roll = True
    return True, f"{player.name} lines up a Precise Shot! (maximum roll)"


def _backstab(game_state: GameState, encounter: CombatEncounter, player: Player) -> tuple[bool, str]:
    encounter.strike_first = True
    encounter.bonus_damage += 3
    return True, f"{player.name} slips in for a Backstab! (strikes first, +3 damage)"


def _holy_strike(game_state: GameState, encounter: CombatEncounter, player: Player) -> tuple[bool, str]:
    missing = player.max_health - player.health
    if missing <= 0:
        return False, "Holy Strike needs missing health to draw on"
    if encounter.fixed_damage is not None:
        return False, "A guaranteed strike is already prepared"
    encounter.fixed_damage = missing
    return True, f"{player.name} calls down a Holy Strike! ({missing} damage)"


def _wild_shape(game_state: GameState, encounter: CombatEncounter, player: Player) -> tuple[bool, str]:
    player.wild_shape_rounds = WILD_SHAPE_ROUNDS
    return True, f"{player.name} takes on a Wild Shape! (half damage for {WILD_SHAPE_ROUNDS} rounds)"


COMBAT_ABILITIES: dict[str, CombatEffect] = {
    catalog.BERSERKER_RAGE: _berserker_rage,
    catalog.MAGIC_MISSILE: _magic_missile,
    catalog.PRECISE_SHOT: _precise_shot,
    catalog.BACKSTAB: _backstab,
    catalog.HOLY_STRIKE: _holy_strike,
    catalog.WILD_SHAPE: _wild_shape,
}
