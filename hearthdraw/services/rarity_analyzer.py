"""
Pack rarity analyzer.

Decides the rarity of each of the five slots in a pack. The first four slots
are independent weighted draws; the fifth slot carries the pack's guarantees:

1. Forced legendary (pity) when no legendary landed in slots 1-4
2. Rare-or-higher when slots 1-4 are all common
3. Otherwise an ordinary weighted draw
"""

import random
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from hearthdraw.config import PACK_SIZE, settings
from hearthdraw.models.card import RARE_OR_HIGHER, Rarity

DEFAULT_RARITY_PROBABILITIES: dict[Rarity, float] = {
    Rarity.COMMON: 0.7162,
    Rarity.RARE: 0.2266,
    Rarity.EPIC: 0.0448,
    Rarity.LEGENDARY: 0.0124,
}


@dataclass(frozen=True)
class ProbabilityConfig:
    """
    Drop rates and guarantee policies for pack openings.

    Attributes:
        rarity_probabilities: Draw weights per rarity, in draw order
        guarantee_rare_or_higher: Every pack holds at least one rare or better
        early_legendary_pack: Pack number that forces the set's first
            legendary (None disables)
        legendary_pity_timer: Packs without a legendary before one is forced,
            once the first legendary is owned (None disables)
    """

    rarity_probabilities: Mapping[Rarity, float] = field(
        default_factory=lambda: dict(DEFAULT_RARITY_PROBABILITIES)
    )
    guarantee_rare_or_higher: bool = True
    early_legendary_pack: int | None = 10
    legendary_pity_timer: int | None = 40

    def validate(self) -> None:
        if not self.rarity_probabilities:
            raise ValueError("rarity_probabilities must not be empty.")
        if any(weight < 0 for weight in self.rarity_probabilities.values()):
            raise ValueError("Rarity weights must be non-negative.")
        if sum(self.rarity_probabilities.values()) <= 0:
            raise ValueError("Rarity weights must not all be zero.")
        if self.early_legendary_pack is not None and self.early_legendary_pack <= 0:
            raise ValueError("early_legendary_pack must be positive when provided.")
        if self.legendary_pity_timer is not None and self.legendary_pity_timer <= 0:
            raise ValueError("legendary_pity_timer must be positive when provided.")

    @classmethod
    def from_settings(cls) -> "ProbabilityConfig":
        """Build the config from application settings (0 disables a timer)."""
        config = cls(
            rarity_probabilities={
                Rarity.parse(name): weight for name, weight in settings.rarity_probabilities.items()
            },
            guarantee_rare_or_higher=settings.guarantee_rare_or_higher,
            early_legendary_pack=settings.early_legendary_pack or None,
            legendary_pity_timer=settings.legendary_pity_timer or None,
        )
        config.validate()
        return config


def weighted_random(
    items: Sequence[Rarity],
    weights: Sequence[float],
    rng: random.Random,
) -> Rarity | str:
    """
    Pick one item by cumulative-weight inversion.

    The range [0, total) is split into contiguous bands in item order and
    the band containing a uniform draw wins.

    Returns:
        The chosen item, or "" when items is empty
    """
    if not items:
        return ""

    cumulative: list[float] = []
    total = 0.0
    for weight in weights:
        total += weight
        cumulative.append(total)

    r = rng.random() * total
    for item, upper in zip(items, cumulative):
        if r < upper:
            return item

    # Float rounding can leave r at the very top of the range
    return items[-1]


class RarityAnalyzer:
    """Rolls the rarity of every slot in a pack."""

    def __init__(
        self,
        config: ProbabilityConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.config = config or ProbabilityConfig()
        self.config.validate()
        self.rng = rng or random.Random()

    def _draw(self, candidates: Sequence[Rarity]) -> Rarity | str:
        weights = [self.config.rarity_probabilities.get(r, 0.0) for r in candidates]
        return weighted_random(candidates, weights, self.rng)

    def determine_pack_rarities(self, force_legendary: bool = False) -> list[Rarity | str]:
        """
        Roll the rarities for one pack.

        Args:
            force_legendary: Guarantee a legendary somewhere in the pack

        Returns:
            PACK_SIZE rarities in slot order
        """
        full_table = list(self.config.rarity_probabilities)
        rarities = [self._draw(full_table) for _ in range(PACK_SIZE - 1)]

        has_legendary = Rarity.LEGENDARY in rarities
        has_rare_or_higher = any(r in RARE_OR_HIGHER for r in rarities)

        if force_legendary and not has_legendary:
            rarities.append(Rarity.LEGENDARY)
        elif self.config.guarantee_rare_or_higher and not has_rare_or_higher:
            raw = [self.config.rarity_probabilities.get(r, 0.0) for r in RARE_OR_HIGHER]
            total = sum(raw)
            if total > 0:
                normalized = [weight / total for weight in raw]
                rarities.append(weighted_random(RARE_OR_HIGHER, normalized, self.rng))
            else:
                rarities.append(Rarity.RARE)
        else:
            rarities.append(self._draw(full_table))

        return rarities
