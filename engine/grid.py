"""Board geometry, obstacle generation and tile occupancy for Monster Hunt."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING

from models.game_state import TileContent, TileType

if TYPE_CHECKING:
    from models.characters import CharacterDefinition, Monster, Player

logger = logging.getLogger(__name__)

OBSTACLE_GLYPH = "🗿"


def border_cells(size: int) -> set[tuple[int, int]]:
    """All cells on the four edges of a size x size board."""
    cells: set[tuple[int, int]] = set()
    for i in range(size):
        cells.add((0, i))
        cells.add((size - 1, i))
        cells.add((i, 0))
        cells.add((i, size - 1))
    return cells


def generate_obstacles(
    size: int,
    count: int,
    rng: random.Random | None = None,
) -> set[tuple[int, int]]:
    """Build the obstacle set for a new board.

    The border is always blocked. Interior obstacles are placed by rejection
    sampling on [2, size-3] so the ring just inside the border stays open.

    Args:
        size: Board side length.
        count: Number of interior obstacles.
        rng: Optional Random instance for seeded/testing placement.

    Returns:
        Set of (x, y) obstacle cells.

    Raises:
        ValueError: If the interior cannot hold ``count`` obstacles.
    """
    rng = rng or random.Random()
    interior = max(0, size - 4) ** 2
    if count > interior:
        raise ValueError(f"Cannot place {count} obstacles in an interior of {interior} cells")

    obstacles = border_cells(size)
    for _ in range(count):
        while True:
            cell = (rng.randint(2, size - 3), rng.randint(2, size - 3))
            if cell not in obstacles:
                break
        obstacles.add(cell)

    logger.debug("Generated %d obstacles for a %dx%d board", len(obstacles), size, size)
    return obstacles


def chebyshev_distance(pos1: tuple[int, int], pos2: tuple[int, int]) -> int:
    """Distance in tiles where diagonal steps cost the same as straight ones."""
    return max(abs(pos1[0] - pos2[0]), abs(pos1[1] - pos2[1]))


def is_adjacent(pos1: tuple[int, int], pos2: tuple[int, int]) -> bool:
    """Check if two distinct positions touch, diagonals included."""
    return chebyshev_distance(pos1, pos2) == 1


def in_bounds(pos: tuple[int, int], size: int) -> bool:
    x, y = pos
    return 0 <= x < size and 0 <= y < size


def living_player_at(
    pos: tuple[int, int],
    players: list[Player],
    exclude_id: int | None = None,
) -> Player | None:
    """First non-eliminated player standing on ``pos``."""
    for player in players:
        if player.is_eliminated or player.id == exclude_id:
            continue
        if tuple(player.position) == pos:
            return player
    return None


def living_monster_at(pos: tuple[int, int], monsters: list[Monster]) -> Monster | None:
    """First undefeated monster standing on ``pos``."""
    for monster in monsters:
        if not monster.defeated and tuple(monster.position) == pos:
            return monster
    return None


def tile_content(
    pos: tuple[int, int],
    players: list[Player],
    monsters: list[Monster],
    obstacles: set[tuple[int, int]],
    characters: list[CharacterDefinition] | None = None,
) -> TileContent:
    """Describe a tile, by priority obstacle > player > monster > empty.

    Args:
        pos: (x, y) of the tile.
        players: All players; eliminated ones are ignored.
        monsters: All monsters; defeated ones are ignored.
        obstacles: The board's obstacle set.
        characters: Archetypes used to pick a player's emoji.

    Returns:
        TileContent for the renderer.
    """
    if pos in obstacles:
        return TileContent(type=TileType.OBSTACLE, content=OBSTACLE_GLYPH)

    player = living_player_at(pos, players)
    if player is not None:
        emoji = "👤"
        for definition in characters or []:
            if definition.id == player.character:
                emoji = definition.emoji
                break
        return TileContent(type=TileType.PLAYER, content=emoji, occupant_id=player.id)

    monster = living_monster_at(pos, monsters)
    if monster is not None:
        return TileContent(type=TileType.MONSTER, content=monster.type, occupant_id=monster.id)

    return TileContent(type=TileType.EMPTY)


def is_occupied(
    pos: tuple[int, int],
    players: list[Player],
    monsters: list[Monster],
    obstacles: set[tuple[int, int]],
) -> bool:
    """True if anything (obstacle, living player, living monster) is on ``pos``."""
    return tile_content(pos, players, monsters, obstacles).type != TileType.EMPTY
