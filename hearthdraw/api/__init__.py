from hearthdraw.api.cards import router as cards_router
from hearthdraw.api.data import router as data_router
from hearthdraw.api.decks import router as decks_router
from hearthdraw.api.draw import router as draw_router
from hearthdraw.api.health import router as health_router

__all__ = [
    "cards_router",
    "data_router",
    "decks_router",
    "draw_router",
    "health_router",
]
