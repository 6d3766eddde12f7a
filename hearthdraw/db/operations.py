"""
Database CRUD operations.

Provides async functions for querying the card catalog and recording
catalog refreshes.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from hearthdraw.models.card import Card, Rarity
from hearthdraw.models.db import CardDB, CardSetDB, DataUpdateLogDB

# Sets served by the core/event pool endpoint
CORE_EVENT_SETS = ("CORE", "EVENT")


@dataclass
class CardFilter:
    """Optional filters for catalog listing."""

    card_class: str | None = None
    card_set: str | None = None
    rarity: str | None = None
    cost: str | None = None  # "3" for exact, "7+" for at least
    search: str | None = None


# --- Card Operations ---


async def get_cards_by_set(session: AsyncSession, set_id: str) -> list[CardDB]:
    """Get every collectible card of a set."""
    result = await session.execute(
        select(CardDB).where(CardDB.card_set == set_id, CardDB.collectible.is_(True))
    )
    return list(result.scalars().all())


async def get_cards_by_sets(session: AsyncSession, set_ids: Iterable[str]) -> list[CardDB]:
    """Get every collectible card of several sets."""
    result = await session.execute(
        select(CardDB).where(CardDB.card_set.in_(list(set_ids)), CardDB.collectible.is_(True))
    )
    return list(result.scalars().all())


async def get_cards_by_ids(session: AsyncSession, card_ids: Iterable[str]) -> list[CardDB]:
    """Get cards by string id. Unknown ids are skipped."""
    result = await session.execute(select(CardDB).where(CardDB.id.in_(list(card_ids))))
    return list(result.scalars().all())


async def get_cards_by_dbf_ids(session: AsyncSession, dbf_ids: Iterable[int]) -> list[CardDB]:
    """Get cards by dbfId. Unknown ids are skipped."""
    result = await session.execute(select(CardDB).where(CardDB.dbf_id.in_(list(dbf_ids))))
    return list(result.scalars().all())


def _apply_filter(query: Any, filters: CardFilter) -> Any:
    query = query.where(CardDB.collectible.is_(True))

    if filters.card_class:
        query = query.where(CardDB.card_class == filters.card_class)
    if filters.card_set:
        query = query.where(CardDB.card_set == filters.card_set)
    if filters.rarity:
        query = query.where(CardDB.rarity == filters.rarity)
    if filters.cost:
        digits = filters.cost.rstrip("+")
        if digits.isdigit():
            if filters.cost.endswith("+"):
                query = query.where(CardDB.cost >= int(digits))
            else:
                query = query.where(CardDB.cost == int(digits))
    if filters.search:
        query = query.where(CardDB.name.contains(filters.search))

    return query


async def search_cards(
    session: AsyncSession,
    filters: CardFilter,
    page: int = 1,
    page_size: int = 20,
) -> tuple[list[CardDB], int]:
    """
    List collectible cards matching filters, ordered by cost then name.

    Returns:
        Tuple of (cards on the requested page, total matching cards)
    """
    query = _apply_filter(select(CardDB), filters)
    query = query.order_by(CardDB.cost.asc(), CardDB.name.asc())
    query = query.offset((page - 1) * page_size).limit(page_size)
    result = await session.execute(query)

    count_query = _apply_filter(select(func.count()).select_from(CardDB), filters)
    total = (await session.execute(count_query)).scalar_one()

    return list(result.scalars().all()), int(total)


async def upsert_cards(session: AsyncSession, rows: Iterable[dict[str, Any]]) -> int:
    """
    Insert or update cards from CardDB column dicts.

    Returns the number of cards written.
    """
    count = 0
    for row in rows:
        existing = await session.get(CardDB, row["id"])
        if existing:
            # dbf_id is immutable once assigned
            for key, value in row.items():
                if key not in ("id", "dbf_id"):
                    setattr(existing, key, value)
        else:
            session.add(CardDB(**row))
        count += 1

    await session.flush()
    return count


def card_to_model(card: CardDB) -> Card:
    """Convert a database card to a domain model."""
    return Card(
        id=card.id,
        dbf_id=card.dbf_id,
        name=card.name,
        rarity=Rarity.parse(card.rarity),
        card_set=card.card_set,
        card_class=card.card_class,
        cost=card.cost,
        attack=card.attack,
        health=card.health,
        text=card.text,
        card_type=card.card_type,
        mechanics=tuple(card.mechanics or ()),
        races=tuple(card.races or ()),
        spell_school=card.spell_school,
        collectible=card.collectible,
    )


# --- Card Set Operations ---


async def get_card_set(session: AsyncSession, set_id: str) -> CardSetDB | None:
    """Get a set by id."""
    return await session.get(CardSetDB, set_id)


async def get_card_sets(session: AsyncSession) -> list[CardSetDB]:
    """Get all sets, largest first."""
    result = await session.execute(select(CardSetDB).order_by(CardSetDB.card_count.desc()))
    return list(result.scalars().all())


async def upsert_card_set(session: AsyncSession, set_id: str, card_count: int) -> CardSetDB:
    """
    Insert or update a set's card count.

    New sets are named after their id until renamed.
    """
    existing = await get_card_set(session, set_id)
    if existing:
        existing.card_count = card_count
        await session.flush()
        return existing

    card_set = CardSetDB(id=set_id, name=set_id, card_count=card_count)
    session.add(card_set)
    await session.flush()
    return card_set


# --- Update Log Operations ---


async def create_update_log(
    session: AsyncSession,
    update_type: str,
    status: str,
    message: str | None = None,
    card_count: int | None = None,
) -> DataUpdateLogDB:
    """Record a catalog refresh event."""
    log = DataUpdateLogDB(
        update_type=update_type,
        status=status,
        message=message,
        card_count=card_count,
    )
    session.add(log)
    await session.flush()
    return log


async def get_update_logs(session: AsyncSession, limit: int = 20) -> list[DataUpdateLogDB]:
    """Most recent refresh events first."""
    result = await session.execute(
        select(DataUpdateLogDB).order_by(DataUpdateLogDB.id.desc()).limit(limit)
    )
    return list(result.scalars().all())
