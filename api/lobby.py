"""Player count, character select and reset endpoints."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from engine.game import available_characters, reset_game, select_character, start_character_select
from models.actions import CommandResult
from models.characters import CharacterDefinition
from models.game_state import GameState

router = APIRouter()


class SetupRequest(BaseModel):
    """Request body for choosing the number of seats."""
    player_count: int


class SelectCharacterRequest(BaseModel):
    """Request body for a seat choosing its archetype."""
    character_id: str
    player_id: int | None = None


def _get_game(request: Request) -> GameState:
    """Get the singleton game from app state."""
    return request.app.state.game


def _raise_on_reject(result: CommandResult) -> CommandResult:
    if not result.success:
        raise HTTPException(status_code=400, detail=result.error)
    return result


@router.get("/characters", response_model=list[CharacterDefinition])
def list_characters(request: Request) -> list[CharacterDefinition]:
    """Archetypes still available to choose."""
    return available_characters(_get_game(request))


@router.post("/setup", response_model=CommandResult)
def setup_game(body: SetupRequest, request: Request) -> CommandResult:
    """Fix the number of players and open character select."""
    _, result = start_character_select(_get_game(request), body.player_count)
    return _raise_on_reject(result)


@router.post("/select", response_model=CommandResult)
def choose_character(body: SelectCharacterRequest, request: Request) -> CommandResult:
    """Choose a character for the seat whose turn it is to pick."""
    _, result = select_character(_get_game(request), body.character_id, body.player_id)
    return _raise_on_reject(result)


@router.post("/reset", response_model=CommandResult)
def play_again(request: Request) -> CommandResult:
    """Throw the current game away and return to setup."""
    _, result = reset_game(_get_game(request))
    return result
