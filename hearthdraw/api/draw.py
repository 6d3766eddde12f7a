"""
Pack opening API endpoints.

Each request runs its own simulation session: the set is loaded from the
catalog, then the requested number of packs is opened in sequence so the
pity timers apply across them.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from hearthdraw.api.schemas import CardResponse
from hearthdraw.config import settings
from hearthdraw.db import get_card_set
from hearthdraw.db.database import get_session
from hearthdraw.models.errors import NoCardsForSetError
from hearthdraw.services.card_source import DatabaseCardSource
from hearthdraw.services.pack_simulator import PackSimulator, summarize_packs
from hearthdraw.services.rarity_analyzer import ProbabilityConfig

router = APIRouter(prefix="/draw", tags=["draw"])


class PackResponse(BaseModel):
    """One opened pack."""

    pack_id: int
    cards: list[CardResponse]
    rarity_distribution: dict[str, int] = Field(default_factory=dict)


class DrawResponse(BaseModel):
    """Response model for a draw session."""

    set_id: str
    set_name: str
    packs_opened: int
    total_cards: int
    packs: list[PackResponse]
    total_rarity_distribution: dict[str, int] = Field(default_factory=dict)


@router.get("", response_model=DrawResponse)
async def draw_packs(
    session: Annotated[AsyncSession, Depends(get_session)],
    set_id: Annotated[str, Query(min_length=1, max_length=50)],
    count: Annotated[int, Query(ge=1, le=settings.max_packs_per_draw)] = 1,
) -> DrawResponse:
    """
    Open packs from a set.

    Returns 404 if the set does not exist and 422 if it has no
    collectible cards.
    """
    card_set = await get_card_set(session, set_id)
    if card_set is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card set '{set_id}' not found",
        )

    simulator = PackSimulator(DatabaseCardSource(session), ProbabilityConfig.from_settings())
    try:
        await simulator.load_set(set_id)
    except NoCardsForSetError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(e),
        ) from e

    packs = simulator.open_packs(set_id, count)

    return DrawResponse(
        set_id=set_id,
        set_name=card_set.name,
        packs_opened=count,
        total_cards=sum(len(pack.cards) for pack in packs),
        packs=[
            PackResponse(
                pack_id=pack.pack_number,
                cards=[CardResponse.from_card(card) for card in pack.cards],
                rarity_distribution=pack.rarity_distribution,
            )
            for pack in packs
        ],
        total_rarity_distribution=summarize_packs(packs),
    )
