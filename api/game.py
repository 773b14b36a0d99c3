"""Command submission, state snapshot, board and combat log endpoints."""

from fastapi import APIRouter, HTTPException, Request

from engine.game import get_tile_content, process_action
from engine.grid import in_bounds
from engine.rules import is_tile_clickable
from models.actions import ActionRequest, CommandResult
from models.game_state import GameState

router = APIRouter()


def _get_game(request: Request) -> GameState:
    """Get the singleton game from app state."""
    return request.app.state.game


@router.get("/state")
def get_game_state(request: Request) -> dict:
    """Full snapshot for the renderer."""
    game_state = _get_game(request)
    current = game_state.current_player
    return {
        "game_id": game_state.game_id,
        "phase": game_state.phase.value,
        "turn_number": game_state.turn_number,
        "current_player_id": current.id if current else None,
        "moves_left": game_state.moves_left,
        "dice_value": game_state.dice_value,
        "teleport_active": game_state.teleport_active,
        "message": game_state.message,
        "players": [p.model_dump(mode="json") for p in game_state.players],
        "monsters": [m.model_dump(mode="json") for m in game_state.monsters],
        "monsters_left": len(game_state.remaining_monsters()),
        "players_left": len(game_state.living_players()),
        "combat": game_state.combat.model_dump(mode="json") if game_state.combat else None,
        "winner_id": game_state.winner_id,
    }


@router.get("/board")
def get_board(request: Request) -> dict:
    """Every tile's content and whether the current player may click it."""
    game_state = _get_game(request)
    size = game_state.settings.board_size
    return {
        "size": size,
        "tiles": [
            [
                {
                    **get_tile_content(game_state, x, y).model_dump(mode="json"),
                    "clickable": is_tile_clickable(game_state, x, y),
                }
                for x in range(size)
            ]
            for y in range(size)
        ],
    }


@router.get("/tiles/{x}/{y}")
def get_tile(x: int, y: int, request: Request) -> dict:
    """A single tile's content and clickability."""
    game_state = _get_game(request)
    if not in_bounds((x, y), game_state.settings.board_size):
        raise HTTPException(status_code=404, detail=f"Tile ({x}, {y}) is off the board")
    return {
        **get_tile_content(game_state, x, y).model_dump(mode="json"),
        "clickable": is_tile_clickable(game_state, x, y),
    }


@router.get("/players")
def get_players(request: Request) -> list[dict]:
    return [p.model_dump(mode="json") for p in _get_game(request).players]


@router.get("/monsters")
def get_monsters(request: Request) -> list[dict]:
    return [m.model_dump(mode="json") for m in _get_game(request).monsters]


@router.get("/combat")
def get_combat(request: Request) -> dict:
    """The running encounter, if any."""
    encounter = _get_game(request).combat
    if encounter is None:
        raise HTTPException(status_code=404, detail="There is no combat in progress")
    return {
        **encounter.model_dump(mode="json"),
        "is_pvp": encounter.is_pvp,
        "is_rolling": encounter.is_rolling,
        "opponent_name": encounter.opponent_name,
    }


@router.post("/action", response_model=CommandResult)
def submit_action(action: ActionRequest, request: Request) -> CommandResult:
    """Run a command against the game.

    Rejected commands leave the game untouched and come back as 400 with
    the reason as detail.
    """
    game_state = _get_game(request)
    _, result = process_action(game_state, action)
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)
    return result


@router.get("/log")
def get_game_log(request: Request) -> list[dict]:
    """Every successful command so far."""
    game_state = _get_game(request)
    return [event.model_dump(mode="json") for event in game_state.event_log]


@router.get("/history")
def get_combat_history(request: Request) -> list[list[str]]:
    """Combat logs of every finished encounter."""
    return _get_game(request).combat_log_history
