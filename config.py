"""Game-wide configuration constants for Monster Hunt."""

import logging
import os

BOARD_SIZE = 15            # Board side length in tiles (border included)
MONSTER_COUNT = 5
OBSTACLE_COUNT = 15        # Interior obstacles, on top of the border ring
STARTING_HEALTH = 100
MONSTER_HEALTH = 50
MIN_PLAYERS = 2
MAX_PLAYERS = 6
CHARGE_EXTRA_MOVES = 2
DIVINE_PROTECTION_HEAL = 20
WILD_SHAPE_ROUNDS = 3
GAME_ID = "monster-hunt"   # Fixed ID of the single hot-seat game
GAME_NAME = "Monster Hunt"
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


def setup_logging(level: str | None = None) -> None:
    """Configure root logging from LOG_LEVEL (or an explicit level name)."""
    logging.basicConfig(
        level=getattr(logging, (level or LOG_LEVEL).upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
