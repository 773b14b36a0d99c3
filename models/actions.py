"""Command request and result models for Monster Hunt."""

from enum import Enum

from pydantic import BaseModel

from models.game_state import GamePhase


class ActionType(str, Enum):
    """Commands the presentation layer can issue."""
    START_CHARACTER_SELECT = "start_character_select"
    SELECT_CHARACTER = "select_character"
    ROLL_MOVEMENT = "roll_movement"
    MOVE = "move"
    END_TURN = "end_turn"
    START_COMBAT = "start_combat"           # Fight a monster
    START_PVP_COMBAT = "start_pvp_combat"   # Fight another player
    ROLL_FOR_ATTACK = "roll_for_attack"
    REROLL = "reroll"
    RESOLVE_ROUND = "resolve_round"
    USE_ITEM = "use_item"
    BOARD_ABILITY = "board_ability"
    COMBAT_ABILITY = "combat_ability"
    RESET = "reset"


class ActionRequest(BaseModel):
    """A command with whichever arguments it needs."""
    action_type: ActionType
    player_id: int | None = None            # Defaults to the current player
    player_count: int | None = None         # START_CHARACTER_SELECT
    character_id: str | None = None         # SELECT_CHARACTER
    target_position: tuple[int, int] | None = None  # MOVE
    monster_id: int | None = None           # START_COMBAT
    opponent_id: int | None = None          # START_PVP_COMBAT
    item_index: int | None = None           # USE_ITEM
    chain: bool = True                      # ROLL_FOR_ATTACK: resolve the round too


class CommandResult(BaseModel):
    """The core's response to a command: outcome plus what happened."""
    success: bool
    action_type: ActionType
    description: str                        # Human-readable narrative
    error: str | None = None                # Rejection reason
    log: list[str] = []                     # Combat log lines added by this command
    phase: GamePhase | None = None          # Phase after the command
    turn_ended: bool = False
    dice_value: int | None = None
    player_roll: int | None = None
    opponent_roll: int | None = None
