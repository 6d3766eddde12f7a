"""
Catalog maintenance endpoints.

Triggers a HearthstoneJSON refresh and exposes the update log.
"""

from datetime import datetime
from typing import Annotated

import httpx
from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hearthdraw.db import get_update_logs
from hearthdraw.db.database import get_session
from hearthdraw.jobs.update_cards import refresh_catalog

router = APIRouter(prefix="/data", tags=["data"])


class UpdateResponse(BaseModel):
    """Response model for a catalog refresh."""

    message: str
    sets: int
    cards: int


class UpdateLogResponse(BaseModel):
    id: int
    update_type: str
    status: str
    message: str | None = None
    card_count: int | None = None
    created_at: datetime | None = None


@router.post("/update", response_model=UpdateResponse)
async def update_cards(
    session: Annotated[AsyncSession, Depends(get_session)],
    locale: str | None = None,
) -> UpdateResponse:
    """
    Refresh the card catalog from HearthstoneJSON.

    Returns 502 if the card data could not be fetched, parsed or stored.
    """
    try:
        async with httpx.AsyncClient(
            headers={"User-Agent": "HearthDraw/1.0"},
            follow_redirects=True,
            timeout=60.0,
        ) as client:
            result = await refresh_catalog(session, client, locale)
    except (httpx.HTTPError, ValueError, KeyError, SQLAlchemyError) as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Card data update failed: {e}",
        ) from e

    return UpdateResponse(message=result.message, sets=result.sets, cards=result.cards)


@router.get("/logs", response_model=list[UpdateLogResponse])
async def list_update_logs(
    session: Annotated[AsyncSession, Depends(get_session)],
    limit: Annotated[int, Query(ge=1, le=100)] = 20,
) -> list[UpdateLogResponse]:
    """Most recent catalog refreshes first."""
    return [
        UpdateLogResponse(
            id=log.id,
            update_type=log.update_type,
            status=log.status,
            message=log.message,
            card_count=log.card_count,
            created_at=log.created_at,
        )
        for log in await get_update_logs(session, limit=limit)
    ]
