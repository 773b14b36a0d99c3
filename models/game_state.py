"""Game state, settings, board tile and event models for Monster Hunt."""

import random
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, Field, PrivateAttr, model_validator

from config import (
    BOARD_SIZE,
    MAX_PLAYERS,
    MIN_PLAYERS,
    MONSTER_COUNT,
    MONSTER_HEALTH,
    OBSTACLE_COUNT,
    STARTING_HEALTH,
)
from engine.catalog import (
    default_characters,
    default_items,
    default_monster_types,
    default_starting_positions,
)
from models.characters import CharacterDefinition, Monster, Player
from models.combat import CombatEncounter
from models.items import MagicalItem


class GamePhase(str, Enum):
    """Top-level phase; decides which commands are legal."""
    SETUP = "setup"
    CHARACTER_SELECT = "character-select"
    PLAYING = "playing"             # Exploring, monsters still alive
    COMBAT = "combat"               # An encounter is running
    PVP = "pvp"                     # All monsters cleared
    GAME_OVER = "game-over"


class TileType(str, Enum):
    EMPTY = "empty"
    OBSTACLE = "obstacle"
    PLAYER = "player"
    MONSTER = "monster"


class TileContent(BaseModel):
    """What a single board tile shows."""
    type: TileType
    content: str = ""               # Emoji for the renderer
    occupant_id: int | None = None  # Player or monster id


class GameSettings(BaseModel):
    """Per-game configuration; defaults come from config and the catalog."""
    board_size: int = BOARD_SIZE
    monster_count: int = MONSTER_COUNT
    monster_health: int = MONSTER_HEALTH
    obstacle_count: int = OBSTACLE_COUNT
    starting_health: int = STARTING_HEALTH
    min_players: int = MIN_PLAYERS
    max_players: int = MAX_PLAYERS
    characters: list[CharacterDefinition] = Field(default_factory=default_characters)
    items: list[MagicalItem] = Field(default_factory=default_items)
    monster_types: list[str] = Field(default_factory=default_monster_types)
    starting_positions: list[tuple[int, int]] = []

    @model_validator(mode="after")
    def _check_board_capacity(self) -> "GameSettings":
        if self.board_size < 5:
            raise ValueError("board_size must be at least 5")
        interior = (self.board_size - 4) ** 2
        if not 0 <= self.obstacle_count <= interior:
            raise ValueError(
                f"obstacle_count must be between 0 and {interior} for a board of {self.board_size}"
            )
        if not 1 <= self.min_players <= self.max_players:
            raise ValueError("min_players must be at least 1 and not exceed max_players")
        if self.max_players > len(self.characters):
            raise ValueError("max_players cannot exceed the number of characters")
        if not self.starting_positions:
            self.starting_positions = default_starting_positions(self.board_size)
        if len(self.starting_positions) < self.max_players:
            raise ValueError("Not enough starting positions for max_players")
        free = (self.board_size - 2) ** 2 - self.obstacle_count - self.max_players
        if self.monster_count > free:
            raise ValueError(f"Board has room for at most {free} monsters")
        if not self.items or not self.monster_types:
            raise ValueError("items and monster_types must not be empty")
        return self

    def character(self, character_id: str) -> CharacterDefinition | None:
        for definition in self.characters:
            if definition.id == character_id:
                return definition
        return None

    def item(self, item_id: str) -> MagicalItem | None:
        for item in self.items:
            if item.id == item_id:
                return item
        return None

    def item_label(self, item_id: str) -> str:
        item = self.item(item_id)
        return item.label if item else item_id


class GameEvent(BaseModel):
    """A logged, successful command."""
    turn: int
    player_id: int | None
    action_type: str
    description: str
    details: dict = {}
    timestamp: datetime


class GameState(BaseModel):
    """The full state of one game, owned by the phase controller."""
    game_id: str
    name: str = "Monster Hunt"
    settings: GameSettings = Field(default_factory=GameSettings)
    phase: GamePhase = GamePhase.SETUP
    player_count: int = MIN_PLAYERS
    setup_seat: int = 0             # Seat choosing a character
    players: list[Player] = []      # Indexed by seat; never shrinks
    monsters: list[Monster] = []    # Never shrinks; defeat is a flag
    obstacles: set[tuple[int, int]] = set()
    current_player_index: int = 0
    turn_number: int = 1
    moves_left: int = 0
    dice_value: int | None = None   # Last movement roll this turn
    teleport_active: bool = False
    combat: CombatEncounter | None = None
    winner_id: int | None = None
    message: str = ""
    event_log: list[GameEvent] = []
    combat_log_history: list[list[str]] = []
    _rng: random.Random = PrivateAttr(default_factory=random.Random)

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def current_player(self) -> Player | None:
        if 0 <= self.current_player_index < len(self.players):
            return self.players[self.current_player_index]
        return None

    def get_player(self, player_id: int) -> Player | None:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_monster(self, monster_id: int) -> Monster | None:
        for monster in self.monsters:
            if monster.id == monster_id:
                return monster
        return None

    def living_players(self) -> list[Player]:
        return [p for p in self.players if not p.is_eliminated]

    def remaining_monsters(self) -> list[Monster]:
        return [m for m in self.monsters if not m.defeated]
