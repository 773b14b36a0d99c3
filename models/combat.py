"""Combat encounter models for Monster Hunt."""

from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from models.characters import Monster, Player


class CombatStage(str, Enum):
    """Where an encounter is in its roll/resolve cycle."""
    AWAITING_ROLL = "awaiting_roll"         # Actor may roll for attack
    ROLLING_OPPONENT = "rolling_opponent"   # Actor's roll is final, opponent's pending
    RESOLVING = "resolving"                 # Both rolls final, round not yet applied
    COMBAT_OVER = "combat_over"


class MonsterTarget(BaseModel):
    """The actor is fighting a monster."""
    kind: Literal["monster"] = "monster"
    monster: Monster                # Snapshot, refreshed after every round


class PvPTarget(BaseModel):
    """The actor is fighting another player."""
    kind: Literal["pvp"] = "pvp"
    opponent: Player                # Snapshot, refreshed after every round


CombatTarget = Annotated[Union[MonsterTarget, PvPTarget], Field(discriminator="kind")]


class CombatEncounter(BaseModel):
    """A single combat engagement, alive only during the COMBAT phase."""
    actor_id: int
    target: CombatTarget
    stage: CombatStage = CombatStage.AWAITING_ROLL
    round_number: int = 1
    player_roll: int | None = None
    opponent_roll: int | None = None
    combat_log: list[str] = []
    is_player_turn: bool = True
    has_used_reroll: bool = False
    # One-round modifiers from combat abilities, cleared after resolution
    bonus_damage: int = 0
    fixed_damage: int | None = None
    max_roll: bool = False
    strike_first: bool = False

    @property
    def is_pvp(self) -> bool:
        return isinstance(self.target, PvPTarget)

    @property
    def is_rolling(self) -> bool:
        return self.stage in (CombatStage.ROLLING_OPPONENT, CombatStage.RESOLVING)

    @property
    def opponent_name(self) -> str:
        if isinstance(self.target, PvPTarget):
            return self.target.opponent.name
        return self.target.monster.type

    def log(self, line: str) -> None:
        """Append a narrated event to the combat log."""
        self.combat_log.append(line)
