"""
Card catalog API endpoints.

Read-only access to the catalog: filtered listing, batch lookups by card id
or dbfId, and the reference lists the frontend builds its filters from.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from hearthdraw.api.schemas import CardResponse
from hearthdraw.config import settings
from hearthdraw.db import (
    CORE_EVENT_SETS,
    CardFilter,
    card_to_model,
    get_card_sets,
    get_cards_by_dbf_ids,
    get_cards_by_ids,
    get_cards_by_sets,
    search_cards,
)
from hearthdraw.db.database import get_session

router = APIRouter(prefix="/cards", tags=["cards"])

RARITY_LABELS = {
    "COMMON": ("Common", "#FFFFFF"),
    "RARE": ("Rare", "#0070DD"),
    "EPIC": ("Epic", "#A335EE"),
    "LEGENDARY": ("Legendary", "#FF8000"),
    "FREE": ("Basic", "#D3D3D3"),
}

CLASS_LABELS = {
    "DEATHKNIGHT": ("Death Knight", "#91A3B0"),
    "DEMONHUNTER": ("Demon Hunter", "#A330C9"),
    "DRUID": ("Druid", "#FF7D0A"),
    "HUNTER": ("Hunter", "#ABD473"),
    "MAGE": ("Mage", "#69CCF0"),
    "PALADIN": ("Paladin", "#F58CBA"),
    "PRIEST": ("Priest", "#FFFFFF"),
    "ROGUE": ("Rogue", "#FFF569"),
    "SHAMAN": ("Shaman", "#0070DE"),
    "WARLOCK": ("Warlock", "#9482C9"),
    "WARRIOR": ("Warrior", "#C79C6E"),
    "NEUTRAL": ("Neutral", "#808080"),
}


class Pagination(BaseModel):
    page: int
    page_size: int
    total: int
    total_pages: int


class CardListResponse(BaseModel):
    """Response model for a page of cards."""

    cards: list[CardResponse]
    pagination: Pagination


class CardBatchResponse(BaseModel):
    """Response model for a lookup by card id."""

    cards: list[CardResponse]
    card_map: dict[str, CardResponse] = Field(default_factory=dict)
    missing_card_ids: list[str] = Field(default_factory=list)
    total_found: int
    total_requested: int


class DbfBatchResponse(BaseModel):
    """Response model for a lookup by dbfId."""

    cards: list[CardResponse]
    dbf_id_to_card: dict[int, CardResponse] = Field(default_factory=dict)
    missing_dbf_ids: list[int] = Field(default_factory=list)
    total_found: int
    total_requested: int


class CardSetResponse(BaseModel):
    id: str
    name: str
    card_count: int


class LabelResponse(BaseModel):
    """A reference list entry with display name and color."""

    id: str
    name: str
    color: str


class CardPoolResponse(BaseModel):
    cards: list[CardResponse]
    total_count: int


def _split_ids(ids: str) -> list[str]:
    return [part.strip() for part in ids.split(",") if part.strip()]


def _check_batch_size(count: int) -> None:
    if count == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid ids provided",
        )
    if count > settings.max_batch_size:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"At most {settings.max_batch_size} ids per request",
        )


@router.get("", response_model=CardListResponse)
async def list_cards(
    session: Annotated[AsyncSession, Depends(get_session)],
    card_class: Annotated[str | None, Query(alias="class")] = None,
    card_set: Annotated[str | None, Query(alias="set")] = None,
    rarity: str | None = None,
    cost: Annotated[str | None, Query(description="Exact cost, or '7+' for at least 7")] = None,
    search: str | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> CardListResponse:
    """
    List collectible cards.

    Ordered by cost, then name.
    """
    filters = CardFilter(
        card_class=card_class,
        card_set=card_set,
        rarity=rarity,
        cost=cost,
        search=search,
    )
    rows, total = await search_cards(session, filters, page=page, page_size=limit)

    return CardListResponse(
        cards=[CardResponse.from_card(card_to_model(row)) for row in rows],
        pagination=Pagination(
            page=page,
            page_size=limit,
            total=total,
            total_pages=-(-total // limit),
        ),
    )


@router.get("/batch", response_model=CardBatchResponse)
async def get_cards_batch(
    ids: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardBatchResponse:
    """
    Look up cards by comma-separated card ids.

    Unknown ids are reported in missing_card_ids.
    """
    card_ids = _split_ids(ids)
    _check_batch_size(len(card_ids))

    rows = await get_cards_by_ids(session, card_ids)
    cards = [CardResponse.from_card(card_to_model(row)) for row in rows]
    card_map = {card.id: card for card in cards}

    return CardBatchResponse(
        cards=cards,
        card_map=card_map,
        missing_card_ids=[card_id for card_id in card_ids if card_id not in card_map],
        total_found=len(cards),
        total_requested=len(card_ids),
    )


@router.get("/dbfid", response_model=DbfBatchResponse)
async def get_cards_by_dbf(
    ids: str,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DbfBatchResponse:
    """
    Look up cards by comma-separated dbfIds.

    Non-numeric entries are ignored; unknown ids are reported in missing_dbf_ids.
    """
    dbf_ids = [int(part) for part in _split_ids(ids) if part.isdigit()]
    _check_batch_size(len(dbf_ids))

    rows = await get_cards_by_dbf_ids(session, dbf_ids)
    cards = [CardResponse.from_card(card_to_model(row)) for row in rows]
    by_dbf = {card.dbf_id: card for card in cards}

    return DbfBatchResponse(
        cards=cards,
        dbf_id_to_card=by_dbf,
        missing_dbf_ids=[dbf_id for dbf_id in dbf_ids if dbf_id not in by_dbf],
        total_found=len(cards),
        total_requested=len(dbf_ids),
    )


@router.get("/sets", response_model=list[CardSetResponse])
async def list_sets(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> list[CardSetResponse]:
    """List card sets, largest first."""
    return [
        CardSetResponse(id=s.id, name=s.name, card_count=s.card_count)
        for s in await get_card_sets(session)
    ]


@router.get("/rarities", response_model=list[LabelResponse])
async def list_rarities() -> list[LabelResponse]:
    """Rarities with display names and colors."""
    return [
        LabelResponse(id=rarity_id, name=name, color=color)
        for rarity_id, (name, color) in RARITY_LABELS.items()
    ]


@router.get("/classes", response_model=list[LabelResponse])
async def list_classes() -> list[LabelResponse]:
    """Classes with display names and colors."""
    return [
        LabelResponse(id=class_id, name=name, color=color)
        for class_id, (name, color) in CLASS_LABELS.items()
    ]


@router.get("/core-event", response_model=CardPoolResponse)
async def get_core_event_cards(
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardPoolResponse:
    """All collectible cards of the CORE and EVENT sets."""
    rows = await get_cards_by_sets(session, CORE_EVENT_SETS)
    return CardPoolResponse(
        cards=[CardResponse.from_card(card_to_model(row)) for row in rows],
        total_count=len(rows),
    )
