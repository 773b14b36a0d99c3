"""Built-in content: character archetypes, magical items and the monster roster."""

from __future__ import annotations

from models.characters import Ability, CharacterDefinition
from models.items import MagicalItem

# ---------------------------------------------------------------------------
# Ability ids, shared with the dispatch registries in engine.abilities
# ---------------------------------------------------------------------------

CHARGE = "charge"
TELEPORT = "teleport"
EAGLE_EYE = "eagle_eye"
STEALTH = "stealth"
DIVINE_PROTECTION = "divine_protection"
NATURES_PATH = "natures_path"

BERSERKER_RAGE = "berserker_rage"
MAGIC_MISSILE = "magic_missile"
PRECISE_SHOT = "precise_shot"
BACKSTAB = "backstab"
HOLY_STRIKE = "holy_strike"
WILD_SHAPE = "wild_shape"

# ---------------------------------------------------------------------------
# Item ids
# ---------------------------------------------------------------------------

MAGIC_SWORD = "magic_sword"
SHIELD_OF_PROTECTION = "shield_of_protection"
HEALTH_POTION = "health_potion"
CRYSTAL_OF_POWER = "crystal_of_power"
ENCHANTED_BOW = "enchanted_bow"
STRENGTH_ELIXIR = "strength_elixir"
LUCKY_CHARM = "lucky_charm"
BLADE_OF_SWIFTNESS = "blade_of_swiftness"


def _ability(ability_id: str, name: str, description: str, uses: int) -> Ability:
    return Ability(id=ability_id, name=name, description=description, uses=uses, max_uses=uses)


def default_characters() -> list[CharacterDefinition]:
    """The six playable archetypes."""
    return [
        CharacterDefinition(
            id="warrior",
            name="Warrior",
            emoji="⚔️",
            color="red",
            board_ability=_ability(CHARGE, "Charge", "Move 2 extra tiles once per turn", 1),
            combat_ability=_ability(BERSERKER_RAGE, "Berserker Rage", "Deal +4 damage for one attack", 2),
        ),
        CharacterDefinition(
            id="mage",
            name="Mage",
            emoji="🧙‍♂️",
            color="blue",
            board_ability=_ability(TELEPORT, "Teleport", "Move to any empty tile", 1),
            combat_ability=_ability(MAGIC_MISSILE, "Magic Missile", "Guaranteed 8 damage (no dice)", 1),
        ),
        CharacterDefinition(
            id="archer",
            name="Archer",
            emoji="🏹",
            color="green",
            board_ability=_ability(EAGLE_EYE, "Eagle Eye", "See all monster positions", 3),
            combat_ability=_ability(PRECISE_SHOT, "Precise Shot", "Always roll maximum on dice", 1),
        ),
        CharacterDefinition(
            id="rogue",
            name="Rogue",
            emoji="🗡️",
            color="purple",
            board_ability=_ability(STEALTH, "Stealth", "Move through other players", 2),
            combat_ability=_ability(BACKSTAB, "Backstab", "Attack first and deal +3 damage", 2),
        ),
        CharacterDefinition(
            id="paladin",
            name="Paladin",
            emoji="🛡️",
            color="yellow",
            board_ability=_ability(DIVINE_PROTECTION, "Divine Protection", "Heal 20 HP", 2),
            combat_ability=_ability(HOLY_STRIKE, "Holy Strike", "Deal damage equal to missing health", 1),
        ),
        CharacterDefinition(
            id="druid",
            name="Druid",
            emoji="🌿",
            color="emerald",
            board_ability=_ability(NATURES_PATH, "Nature's Path", "Move through obstacles", 3),
            combat_ability=_ability(WILD_SHAPE, "Wild Shape", "Take half damage for 3 rounds", 1),
        ),
    ]


def default_items() -> list[MagicalItem]:
    """The magical item pool monsters drop from."""
    return [
        MagicalItem(
            id=MAGIC_SWORD, name="Magic Sword", emoji="⚔️",
            description="Permanent +2 attack", attack_bonus=2,
        ),
        MagicalItem(
            id=SHIELD_OF_PROTECTION, name="Shield of Protection", emoji="🛡️",
            description="Permanent +2 defense", defense_bonus=2,
        ),
        MagicalItem(
            id=HEALTH_POTION, name="Health Potion", emoji="💎",
            description="Restores 30 HP", heal_amount=30, consumable=True,
        ),
        MagicalItem(
            id=CRYSTAL_OF_POWER, name="Crystal of Power", emoji="🔮",
            description="Permanent +1 to all rolls", roll_bonus=1,
        ),
        MagicalItem(
            id=ENCHANTED_BOW, name="Enchanted Bow", emoji="🏹",
            description="Permanent +2 attack", attack_bonus=2,
        ),
        MagicalItem(
            id=STRENGTH_ELIXIR, name="Strength Elixir", emoji="🧪",
            description="Temporary +3 attack for one combat", attack_bonus=3, temporary=True,
        ),
        MagicalItem(
            id=LUCKY_CHARM, name="Lucky Charm", emoji="🌟",
            description="Can reroll once per combat", grants_reroll=True,
        ),
        MagicalItem(
            id=BLADE_OF_SWIFTNESS, name="Blade of Swiftness", emoji="🗡️",
            description="Attack first in combat", grants_attack_first=True,
        ),
    ]


def default_monster_types() -> list[str]:
    return ["🐉", "👹", "🧟", "🕷️", "🐺", "🦇", "👻", "🐍"]


def default_starting_positions(board_size: int) -> list[tuple[int, int]]:
    """Seat start tiles: the four inner corners, then top and bottom centre."""
    far = board_size - 2
    mid = board_size // 2
    return [(1, 1), (far, 1), (1, far), (far, far), (mid, 1), (mid, far)]
