"""Command results and the game event log."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from models.actions import ActionType, CommandResult
from models.game_state import GameEvent

if TYPE_CHECKING:
    from models.game_state import GameState

logger = logging.getLogger(__name__)


def reject(action_type: ActionType, error: str) -> CommandResult:
    """Build a rejected result. State is left as it was."""
    logger.debug("Rejected %s: %s", action_type.value, error)
    return CommandResult(
        success=False,
        action_type=action_type,
        description=error,
        error=error,
    )


def succeed(
    game_state: GameState,
    action_type: ActionType,
    description: str,
    *,
    player_id: int | None = None,
    log: list[str] | None = None,
    turn_ended: bool = False,
    dice_value: int | None = None,
    player_roll: int | None = None,
    opponent_roll: int | None = None,
) -> CommandResult:
    """Record a successful command in the event log and build its result.

    Args:
        game_state: Current game state (mutated: message and event log).
        action_type: The command that succeeded.
        description: Human-readable narrative, also shown as the game message.
        player_id: The acting player, if any.
        log: Combat log lines produced by the command.
        turn_ended: Whether the command passed the turn on.
        dice_value: Movement roll, if one happened.
        player_roll: Actor's combat roll, if one happened.
        opponent_roll: Opponent's combat roll, if one happened.

    Returns:
        A successful CommandResult.
    """
    game_state.message = description
    game_state.event_log.append(
        GameEvent(
            turn=game_state.turn_number,
            player_id=player_id,
            action_type=action_type.value,
            description=description,
            details={
                "dice_value": dice_value,
                "player_roll": player_roll,
                "opponent_roll": opponent_roll,
            },
            timestamp=datetime.now(timezone.utc),
        )
    )
    return CommandResult(
        success=True,
        action_type=action_type,
        description=description,
        log=log or [],
        phase=game_state.phase,
        turn_ended=turn_ended,
        dice_value=dice_value,
        player_roll=player_roll,
        opponent_roll=opponent_roll,
    )
