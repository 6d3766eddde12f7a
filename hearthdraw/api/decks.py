"""
Deck code API endpoints.

Encodes decks to the game client's deck code and decodes codes back into
catalog cards.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from hearthdraw.api.schemas import CardResponse
from hearthdraw.db import card_to_model, get_cards_by_dbf_ids, get_cards_by_ids
from hearthdraw.db.database import get_session
from hearthdraw.models.errors import DeckCodeError
from hearthdraw.models.validated_deck import DeckValidationError, validate_deck
from hearthdraw.parsers.deck_code import decode_or_raise, encode

router = APIRouter(prefix="/decks", tags=["decks"])


class DeckEntry(BaseModel):
    """A card and its copy count, by dbfId."""

    dbf_id: int = Field(..., ge=0)
    count: int = Field(..., ge=1)


class EncodeRequest(BaseModel):
    """Request model for encoding raw dbfId entries."""

    hero_dbf_id: int = Field(..., ge=0, examples=[637])
    cards: list[DeckEntry] = Field(..., min_length=1)


class ExportRequest(BaseModel):
    """Request model for exporting a deck built from catalog cards."""

    hero_dbf_id: int = Field(..., ge=0, examples=[637])
    cards: dict[str, int] = Field(
        ...,
        description="Map of card ids to copy counts",
        examples=[{"CS2_029": 2, "EX1_559": 1}],
    )


class DeckCodeResponse(BaseModel):
    """Response model for an encoded deck."""

    code: str
    total_cards: int


class DecodeRequest(BaseModel):
    code: str = Field(..., min_length=1)


class DecodedCard(BaseModel):
    card: CardResponse
    count: int


class DecodeResponse(BaseModel):
    """Response model for a decoded deck code."""

    format_tag: int
    heroes: list[int]
    cards: list[DecodedCard] = Field(default_factory=list)
    unresolved_dbf_ids: list[int] = Field(
        default_factory=list,
        description="dbfIds in the code that are not in the catalog",
    )
    total_cards: int


def _encode_or_400(hero_dbf_id: int, entries: list[tuple[int, int]]) -> DeckCodeResponse:
    code = encode(hero_dbf_id, entries)
    if not code:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Deck could not be encoded",
        )
    return DeckCodeResponse(code=code, total_cards=sum(count for _, count in entries))


@router.post("/encode", response_model=DeckCodeResponse)
async def encode_deck(request: EncodeRequest) -> DeckCodeResponse:
    """Encode (dbfId, count) entries as a deck code without validation."""
    entries = [(entry.dbf_id, entry.count) for entry in request.cards]
    return _encode_or_400(request.hero_dbf_id, entries)


@router.post("/export", response_model=DeckCodeResponse)
async def export_deck(
    request: ExportRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DeckCodeResponse:
    """
    Validate a deck of catalog cards and encode it.

    Returns 400 if the deck breaks a construction rule.
    """
    rows = await get_cards_by_ids(session, request.cards.keys())
    catalog = {row.id: card_to_model(row) for row in rows}

    try:
        deck = validate_deck(request.hero_dbf_id, request.cards, catalog)
    except DeckValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    return _encode_or_400(deck.hero_dbf_id, deck.to_code_entries())


@router.post("/decode", response_model=DecodeResponse)
async def decode_deck(
    request: DecodeRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> DecodeResponse:
    """
    Decode a deck code and resolve its cards against the catalog.

    Returns 400 with the reason if the code is invalid.
    """
    try:
        decoded = decode_or_raise(request.code)
    except DeckCodeError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid deck code: {e}",
        ) from e

    counts = decoded.as_counts()
    rows = await get_cards_by_dbf_ids(session, counts.keys())
    by_dbf = {row.dbf_id: card_to_model(row) for row in rows}

    cards = [
        DecodedCard(card=CardResponse.from_card(by_dbf[dbf_id]), count=count)
        for dbf_id, count in counts.items()
        if dbf_id in by_dbf
    ]
    cards.sort(key=lambda entry: (entry.card.cost or 0, entry.card.name))

    return DecodeResponse(
        format_tag=decoded.format_tag,
        heroes=decoded.heroes,
        cards=cards,
        unresolved_dbf_ids=[dbf_id for dbf_id in counts if dbf_id not in by_dbf],
        total_cards=decoded.total_cards(),
    )
