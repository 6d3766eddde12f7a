from hearthdraw.models.card import RARE_OR_HIGHER, Card, Rarity
from hearthdraw.models.deck import DecodedDeck
from hearthdraw.models.errors import (
    DeckCodeError,
    InvalidFormatError,
    NoCardsForSetError,
    SetNotLoadedError,
    UnsupportedVersionError,
    VarIntError,
)
from hearthdraw.models.validated_deck import (
    DeckValidationError,
    ValidatedDeck,
    validate_deck,
)

__all__ = [
    "Card",
    "DecodedDeck",
    "DeckCodeError",
    "DeckValidationError",
    "InvalidFormatError",
    "NoCardsForSetError",
    "RARE_OR_HIGHER",
    "Rarity",
    "SetNotLoadedError",
    "UnsupportedVersionError",
    "ValidatedDeck",
    "VarIntError",
    "validate_deck",
]
