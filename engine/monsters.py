"""Monster creation and placement for a new board."""

from __future__ import annotations

import logging
import random

from models.characters import Monster

logger = logging.getLogger(__name__)


def create_monster(
    monster_id: int,
    position: tuple[int, int],
    monster_type: str,
    health: int,
) -> Monster:
    """Create a fresh, undefeated monster at full health."""
    return Monster(
        id=monster_id,
        position=position,
        type=monster_type,
        health=health,
        max_health=health,
    )


def spawn_monsters(
    count: int,
    board_size: int,
    obstacles: set[tuple[int, int]],
    taken: set[tuple[int, int]],
    monster_types: list[str],
    health: int,
    rng: random.Random | None = None,
) -> list[Monster]:
    """Scatter monsters over free tiles inside the border.

    Candidate tiles are enumerated up front and sampled without replacement,
    so placement always terminates.

    Args:
        count: Number of monsters to place.
        board_size: Board side length.
        obstacles: Blocked tiles.
        taken: Tiles reserved for players.
        monster_types: Roster to draw each monster's type from.
        health: Starting health for every monster.
        rng: Optional Random instance for seeded/testing placement.

    Returns:
        List of monsters with ids 0..count-1.

    Raises:
        ValueError: If there are fewer free tiles than monsters.
    """
    rng = rng or random.Random()
    free = [
        (x, y)
        for y in range(1, board_size - 1)
        for x in range(1, board_size - 1)
        if (x, y) not in obstacles and (x, y) not in taken
    ]
    if count > len(free):
        raise ValueError(f"Only {len(free)} free tiles for {count} monsters")

    positions = rng.sample(free, count)
    monsters = [
        create_monster(i, pos, rng.choice(monster_types), health)
        for i, pos in enumerate(positions)
    ]
    logger.debug("Spawned %d monsters", len(monsters))
    return monsters
