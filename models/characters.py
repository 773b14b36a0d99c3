"""Player, monster and character archetype models for Monster Hunt."""

from pydantic import BaseModel


class Ability(BaseModel):
    """A limited-use power granted by a character archetype."""
    id: str                         # Registry key, e.g. "natures_path"
    name: str                       # Display name, e.g. "Nature's Path"
    description: str
    uses: int
    max_uses: int


class CharacterDefinition(BaseModel):
    """A playable archetype and the abilities it hands to its player."""
    id: str                         # e.g. "druid"
    name: str
    emoji: str
    color: str                      # Cosmetic tag, copied onto the player
    board_ability: Ability
    combat_ability: Ability


class CombatBonuses(BaseModel):
    """Bonus tuple derived from a player's inventory before each combat."""
    attack_bonus: int = 0
    defense_bonus: int = 0
    roll_bonus: int = 0
    can_reroll: bool = False
    attack_first: bool = False


class Player(BaseModel):
    """A seated player on the board."""
    id: int                         # Seat index, stable for the whole game
    name: str
    character: str                  # CharacterDefinition.id
    position: tuple[int, int] = (0, 0)
    health: int
    max_health: int
    inventory: list[str] = []       # Item ids in pickup order, duplicates allowed
    color: str = ""
    combat_bonuses: CombatBonuses = CombatBonuses()
    is_eliminated: bool = False
    board_ability: Ability
    combat_ability: Ability
    wild_shape_rounds: int = 0      # Rounds of halved incoming damage left


class Monster(BaseModel):
    """A monster guarding a tile until defeated."""
    id: int
    position: tuple[int, int]
    type: str                       # Roster tag, cosmetic only
    health: int
    max_health: int
    defeated: bool = False
