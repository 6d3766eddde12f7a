"""
ValidatedDeck: a constructed deck that obeys the game's deck rules.

Rules enforced by ``validate_deck``:
1. Every card is known to the catalog
2. Exactly DECK_SIZE cards in total
3. At most MAX_COPIES of any card, MAX_LEGENDARY_COPIES of a legendary

Only a ValidatedDeck should be turned into a deck code for export.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field

from hearthdraw.config import DECK_SIZE, MAX_COPIES, MAX_LEGENDARY_COPIES
from hearthdraw.models.card import Card


@dataclass(frozen=True)
class ValidatedDeck:
    """
    An immutable deck whose cards have passed all validation.

    Attributes:
        hero_dbf_id: Hero the deck is built for
        cards: Validated cards as ((card, count), ...) sorted by dbfId
    """

    hero_dbf_id: int
    cards: tuple[tuple[Card, int], ...] = field(default_factory=tuple)

    def __contains__(self, card_id: str) -> bool:
        """Check if a card is in this validated deck."""
        return any(card.id == card_id for card, _ in self.cards)

    def __len__(self) -> int:
        """Number of unique cards in this deck."""
        return len(self.cards)

    def total_cards(self) -> int:
        """Total number of cards (counting quantities)."""
        return sum(count for _, count in self.cards)

    def to_code_entries(self) -> list[tuple[int, int]]:
        """Cards as (dbf_id, count) pairs ready for the deck codec."""
        return [(card.dbf_id, count) for card, count in self.cards]


class DeckValidationError(Exception):
    """
    Raised when deck validation fails.

    The entire deck is rejected; there is no partial output.
    """

    def __init__(self, card_id: str, reason: str):
        self.card_id = card_id
        self.reason = reason
        super().__init__(f"Deck validation failed for '{card_id}': {reason}")


def validate_deck(
    hero_dbf_id: int,
    cards: Mapping[str, int],
    catalog: Mapping[str, Card],
) -> ValidatedDeck:
    """
    Validate a deck against the construction rules.

    Args:
        hero_dbf_id: Hero dbfId the deck is built for
        cards: Deck contents {card_id: count}
        catalog: Known cards {card_id: Card}

    Returns:
        Immutable ValidatedDeck

    Raises:
        DeckValidationError: On the first rule violation found
    """
    entries: list[tuple[Card, int]] = []

    for card_id, count in cards.items():
        card = catalog.get(card_id)
        if card is None:
            raise DeckValidationError(card_id, "unknown card")
        if count < 1:
            raise DeckValidationError(card_id, f"invalid count {count}")

        limit = MAX_LEGENDARY_COPIES if card.is_legendary else MAX_COPIES
        if count > limit:
            raise DeckValidationError(card_id, f"{count} copies exceeds limit of {limit}")

        entries.append((card, count))

    total = sum(count for _, count in entries)
    if total != DECK_SIZE:
        raise DeckValidationError("*", f"deck has {total} cards, expected {DECK_SIZE}")

    entries.sort(key=lambda entry: entry[0].dbf_id)
    return ValidatedDeck(hero_dbf_id=hero_dbf_id, cards=tuple(entries))
