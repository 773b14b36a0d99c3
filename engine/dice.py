"""Dice rolling utilities for Monster Hunt."""

import logging
import random
import re

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class DiceResult(BaseModel):
    """Result of a dice roll."""
    total: int
    rolls: list[int]
    modifier: int
    notation: str


def roll(notation: str, rng: random.Random | None = None) -> DiceResult:
    """Parse and roll dice notation like '2d6+1', '1d6', '2d6-1'.

    Args:
        notation: Dice notation string (e.g. "2d6+1").
        rng: Optional Random instance for seeded/testing rolls.

    Returns:
        DiceResult with total, individual rolls, modifier, and notation.
    """
    rng = rng or random.Random()
    notation = notation.strip().lower()

    match = re.match(r"^(\d+)d(\d+)([+-]\d+)?$", notation)
    if not match:
        raise ValueError(f"Invalid dice notation: {notation}")

    num_dice = int(match.group(1))
    die_size = int(match.group(2))
    modifier = int(match.group(3)) if match.group(3) else 0

    rolls = [rng.randint(1, die_size) for _ in range(num_dice)]
    total = sum(rolls) + modifier
    logger.debug("Rolled %s: %s%+d = %d", notation, rolls, modifier, total)

    return DiceResult(
        total=total,
        rolls=rolls,
        modifier=modifier,
        notation=notation,
    )


def roll_die(rng: random.Random | None = None) -> int:
    """Roll a single six-sided die (board movement)."""
    return roll("1d6", rng=rng).total


def roll_two_dice(rng: random.Random | None = None, bonus: int = 0) -> DiceResult:
    """Roll two six-sided dice and add a flat bonus (combat).

    Args:
        rng: Optional Random instance for seeded/testing rolls.
        bonus: Roll bonus added on top of the two dice.

    Returns:
        DiceResult whose total is the dice sum plus bonus.
    """
    notation = f"2d6{bonus:+d}" if bonus else "2d6"
    return roll(notation, rng=rng)
