"""
HearthDraw services.

Pack opening simulation and the card pools it draws from.
"""

from hearthdraw.services.card_source import (
    CardSource,
    DatabaseCardSource,
    InMemoryCardSource,
)
from hearthdraw.services.pack_simulator import (
    RARITY_FALLBACK_ORDER,
    PackResult,
    PackSimulator,
    SetState,
    summarize_packs,
)
from hearthdraw.services.rarity_analyzer import (
    DEFAULT_RARITY_PROBABILITIES,
    ProbabilityConfig,
    RarityAnalyzer,
    weighted_random,
)

__all__ = [
    "CardSource",
    "DEFAULT_RARITY_PROBABILITIES",
    "DatabaseCardSource",
    "InMemoryCardSource",
    "PackResult",
    "PackSimulator",
    "ProbabilityConfig",
    "RARITY_FALLBACK_ORDER",
    "RarityAnalyzer",
    "SetState",
    "summarize_packs",
    "weighted_random",
]
