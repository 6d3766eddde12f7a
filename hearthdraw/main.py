from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hearthdraw.api import (
    cards_router,
    data_router,
    decks_router,
    draw_router,
    health_router,
)
from hearthdraw.config import settings
from hearthdraw.db.database import init_db


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup/shutdown."""
    await init_db()
    yield


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("hearthdraw"),
    lifespan=lifespan,
)

app.include_router(cards_router)
app.include_router(data_router)
app.include_router(decks_router)
app.include_router(draw_router)
app.include_router(health_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)
