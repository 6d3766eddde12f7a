"""
Card pool sources for the pack simulator.

The simulator only needs one query: every collectible card of a set.
"""

from collections.abc import Iterable
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from hearthdraw.db.operations import card_to_model, get_cards_by_set
from hearthdraw.models.card import Card


class CardSource(Protocol):
    """Lookup of a set's collectible card pool."""

    async def cards_for_set(self, set_id: str) -> list[Card]: ...


class InMemoryCardSource:
    """Card source over a fixed list of cards."""

    def __init__(self, cards: Iterable[Card]):
        self.cards = list(cards)

    async def cards_for_set(self, set_id: str) -> list[Card]:
        return [card for card in self.cards if card.card_set == set_id and card.collectible]


class DatabaseCardSource:
    """Card source backed by the cards table."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def cards_for_set(self, set_id: str) -> list[Card]:
        rows = await get_cards_by_set(self.session, set_id)
        return [card_to_model(row) for row in rows]
