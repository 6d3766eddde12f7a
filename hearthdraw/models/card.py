from dataclasses import dataclass, field
from enum import Enum


class Rarity(str, Enum):
    """Card rarity as reported by HearthstoneJSON."""

    FREE = "FREE"
    COMMON = "COMMON"
    RARE = "RARE"
    EPIC = "EPIC"
    LEGENDARY = "LEGENDARY"

    @classmethod
    def parse(cls, value: str | None) -> "Rarity":
        """Parse a raw rarity string, treating missing values as COMMON."""
        if not value:
            return cls.COMMON
        return cls(value.upper())


# Rarities that satisfy the rare-or-higher pack guarantee
RARE_OR_HIGHER = (Rarity.LEGENDARY, Rarity.EPIC, Rarity.RARE)


@dataclass(frozen=True, slots=True)
class Card:
    """
    A collectible card record.

    Attributes:
        id: String card identifier (e.g., "EX1_116")
        dbf_id: Numeric identifier used by deck codes
        name: Localized card name
        rarity: Card rarity
        card_set: Set identifier (e.g., "CORE", "TITANS")
        card_class: Owning class (e.g., "MAGE", "NEUTRAL")
        cost: Mana cost, None for cards without one
    """

    id: str
    dbf_id: int
    name: str
    rarity: Rarity
    card_set: str
    card_class: str = "NEUTRAL"
    cost: int | None = None
    attack: int | None = None
    health: int | None = None
    text: str | None = None
    card_type: str | None = None
    mechanics: tuple[str, ...] = field(default_factory=tuple)
    races: tuple[str, ...] = field(default_factory=tuple)
    spell_school: str | None = None
    collectible: bool = True

    @property
    def is_legendary(self) -> bool:
        return self.rarity is Rarity.LEGENDARY
