"""Magical item catalog model for Monster Hunt."""

from pydantic import BaseModel


class MagicalItem(BaseModel):
    """A lootable item and the fixed effect it contributes."""
    id: str                         # Stored in Player.inventory
    name: str
    emoji: str
    description: str
    attack_bonus: int = 0
    defense_bonus: int = 0
    roll_bonus: int = 0
    grants_reroll: bool = False
    grants_attack_first: bool = False
    heal_amount: int = 0
    temporary: bool = False         # Lasts a single combat
    consumable: bool = False        # Removed from the inventory when used

    @property
    def label(self) -> str:
        """Display label, e.g. '⚔️ Magic Sword'."""
        return f"{self.emoji} {self.name}"
