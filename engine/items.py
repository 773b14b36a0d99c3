"""Inventory rules: combat bonuses, item use, loot and spoils."""

from __future__ import annotations

import logging
import math
import random
from typing import TYPE_CHECKING

from models.characters import CombatBonuses

if TYPE_CHECKING:
    from models.characters import Player
    from models.items import MagicalItem

logger = logging.getLogger(__name__)


def _index(catalog: list[MagicalItem]) -> dict[str, MagicalItem]:
    return {item.id: item for item in catalog}


def calculate_combat_bonuses(inventory: list[str], catalog: list[MagicalItem]) -> CombatBonuses:
    """Fold an inventory into its bonus tuple.

    Every recognised item adds its fixed effect; unknown ids add nothing.

    Args:
        inventory: Item ids held by the player.
        catalog: The item catalog the ids refer to.

    Returns:
        A fresh CombatBonuses.
    """
    by_id = _index(catalog)
    bonuses = CombatBonuses()
    for item_id in inventory:
        item = by_id.get(item_id)
        if item is None:
            continue
        bonuses.attack_bonus += item.attack_bonus
        bonuses.defense_bonus += item.defense_bonus
        bonuses.roll_bonus += item.roll_bonus
        bonuses.can_reroll = bonuses.can_reroll or item.grants_reroll
        bonuses.attack_first = bonuses.attack_first or item.grants_attack_first
    return bonuses


def heal(player: Player, amount: int) -> int:
    """Restore health up to the maximum. Returns the amount actually healed."""
    before = player.health
    player.health = min(player.max_health, player.health + amount)
    return player.health - before


def random_loot(catalog: list[MagicalItem], rng: random.Random | None = None) -> MagicalItem:
    """Pick one item uniformly from the catalog."""
    rng = rng or random.Random()
    return rng.choice(catalog)


def strip_temporary_items(player: Player, catalog: list[MagicalItem]) -> list[str]:
    """Remove single-combat items from a player's inventory.

    Returns:
        The removed item ids.
    """
    by_id = _index(catalog)
    removed = [i for i in player.inventory if i in by_id and by_id[i].temporary]
    if removed:
        player.inventory = [i for i in player.inventory if i not in removed]
        logger.debug("Stripped %s from %s", removed, player.name)
    return removed


def transfer_spoils(loser: Player, winner: Player) -> list[str]:
    """Move the first half (rounded up) of the loser's inventory to the winner.

    Returns:
        The transferred item ids, in their original order.
    """
    count = math.ceil(len(loser.inventory) / 2)
    taken = loser.inventory[:count]
    loser.inventory = loser.inventory[count:]
    winner.inventory.extend(taken)
    return taken


def use_item(
    player: Player,
    item_index: int,
    catalog: list[MagicalItem],
    in_combat: bool = False,
) -> tuple[bool, str]:
    """Apply an inventory item.

    Args:
        player: The player using the item.
        item_index: Position of the item in the inventory.
        catalog: The item catalog.
        in_combat: Whether a combat is running, for temporary item narration.

    Returns:
        (success, message) tuple. On failure nothing is changed.
    """
    if not 0 <= item_index < len(player.inventory):
        return False, "No item in that inventory slot"

    item = _index(catalog).get(player.inventory[item_index])
    if item is None:
        return False, "Nothing happens"

    if item.heal_amount:
        healed = heal(player, item.heal_amount)
        if item.consumable:
            del player.inventory[item_index]
        return True, f"{player.name} used {item.name} and restored {healed} HP!"

    if item.temporary:
        when = "this combat" if in_combat else "next combat"
        return True, f"{player.name} used {item.name}! (+{item.attack_bonus} attack {when})"

    return False, f"{item.name} is a permanent item and is always active"
