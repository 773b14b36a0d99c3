"""Turn order: whose turn it is and how it passes on."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from models.characters import Player
    from models.game_state import GameState

logger = logging.getLogger(__name__)


def advance_turn(game_state: GameState) -> Player | None:
    """Pass the turn to the next non-eliminated seat.

    Clears the movement budget, the last movement roll and any armed
    teleport. Eliminated seats are skipped; if nobody else is alive the
    scan stops back at the current seat.

    Args:
        game_state: Current game state (mutated in place).

    Returns:
        The player whose turn it now is, or None if there are no players.
    """
    game_state.moves_left = 0
    game_state.dice_value = None
    game_state.teleport_active = False

    if not game_state.players:
        return None

    seat_count = len(game_state.players)
    current = game_state.current_player_index % seat_count
    next_index = (current + 1) % seat_count
    while game_state.players[next_index].is_eliminated and next_index != current:
        next_index = (next_index + 1) % seat_count

    game_state.current_player_index = next_index
    game_state.turn_number += 1
    next_player = game_state.players[next_index]
    game_state.message = f"{next_player.name}'s turn!"
    logger.debug("Turn %d: %s", game_state.turn_number, next_player.name)
    return next_player
