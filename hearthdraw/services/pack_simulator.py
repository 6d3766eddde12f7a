"""
Pack opening simulator.

Owns the draw state of every loaded set and turns rolled rarities into cards.

Two pity mechanisms guard legendary drops:
- Early guarantee: the set's first legendary is forced on pack 10 if none
  has appeared yet.
- Steady-state pity: once the first legendary is owned, a legendary is
  forced after 40 packs without one.

The early guarantee is checked first, and the steady-state counter does not
advance on packs opened before the first legendary. Any legendary drawn,
forced or natural, restarts the steady-state clock.

Legendaries never repeat within a set until every legendary of that set has
been drawn once.
"""

import logging
import random
from dataclasses import dataclass, field, replace

from hearthdraw.models.card import Card, Rarity
from hearthdraw.models.errors import NoCardsForSetError, SetNotLoadedError
from hearthdraw.services.card_source import CardSource
from hearthdraw.services.rarity_analyzer import ProbabilityConfig, RarityAnalyzer

logger = logging.getLogger(__name__)

# Substitution order when a set has no card of the requested rarity
RARITY_FALLBACK_ORDER = (Rarity.LEGENDARY, Rarity.EPIC, Rarity.RARE, Rarity.COMMON)

# Rarities reported in per-pack distributions
DISTRIBUTION_RARITIES = (Rarity.COMMON, Rarity.RARE, Rarity.EPIC, Rarity.LEGENDARY)


@dataclass
class SetState:
    """Draw state for one set within a simulation session."""

    pity_counter: int = 0
    first_legendary_obtained: bool = False
    packs_opened: int = 0
    opened_legendaries: set[str] = field(default_factory=set)


@dataclass
class SetPool:
    """A set's card pool, bucketed by rarity."""

    cards: list[Card]
    by_rarity: dict[Rarity, list[Card]] = field(default_factory=dict)

    @classmethod
    def build(cls, cards: list[Card]) -> "SetPool":
        by_rarity: dict[Rarity, list[Card]] = {}
        for card in cards:
            by_rarity.setdefault(card.rarity, []).append(card)
        return cls(cards=cards, by_rarity=by_rarity)

    def bucket(self, rarity: Rarity | str) -> list[Card]:
        return self.by_rarity.get(rarity, [])  # type: ignore[call-overload]


@dataclass
class PackResult:
    """One opened pack."""

    pack_number: int
    cards: list[Card]
    forced_legendary: bool = False

    @property
    def rarity_distribution(self) -> dict[str, int]:
        distribution = {rarity.value: 0 for rarity in DISTRIBUTION_RARITIES}
        for card in self.cards:
            if card.rarity.value in distribution:
                distribution[card.rarity.value] += 1
        return distribution


def summarize_packs(packs: list[PackResult]) -> dict[str, int]:
    """Total rarity distribution across several packs."""
    totals = {rarity.value: 0 for rarity in DISTRIBUTION_RARITIES}
    for pack in packs:
        for rarity, count in pack.rarity_distribution.items():
            totals[rarity] += count
    return totals


class PackSimulator:
    """
    Simulates pack openings for one session.

    State is kept per set and lives as long as the simulator. Access from
    concurrent requests must be serialized per set by the caller.
    """

    def __init__(
        self,
        card_source: CardSource,
        config: ProbabilityConfig | None = None,
        rng: random.Random | None = None,
    ):
        self.card_source = card_source
        self.rng = rng or random.Random()
        self.analyzer = RarityAnalyzer(config, self.rng)
        self._pools: dict[str, SetPool] = {}
        self._states: dict[str, SetState] = {}

    @property
    def config(self) -> ProbabilityConfig:
        return self.analyzer.config

    def is_loaded(self, set_id: str) -> bool:
        return set_id in self._pools

    async def load_set(self, set_id: str) -> None:
        """
        Load a set's card pool. Does nothing if the set is already loaded.

        Raises:
            NoCardsForSetError: If the set has no collectible cards
        """
        if set_id in self._pools:
            return

        cards = await self.card_source.cards_for_set(set_id)
        if not cards:
            raise NoCardsForSetError(set_id)

        self._pools[set_id] = SetPool.build(cards)
        self._states[set_id] = SetState()
        logger.info("Loaded %d cards for set %s", len(cards), set_id)

    def _state_for(self, set_id: str) -> SetState:
        state = self._states.get(set_id)
        if state is None:
            raise SetNotLoadedError(set_id)
        return state

    def state(self, set_id: str) -> SetState:
        """
        Snapshot of a set's draw state.

        Raises:
            SetNotLoadedError: If the set was never loaded
        """
        state = self._state_for(set_id)
        return replace(state, opened_legendaries=set(state.opened_legendaries))

    def _should_force_legendary(self, state: SetState) -> bool:
        early_pack = self.config.early_legendary_pack
        pity_timer = self.config.legendary_pity_timer

        if not state.first_legendary_obtained and state.packs_opened == early_pack:
            return True

        if state.first_legendary_obtained and pity_timer is not None:
            state.pity_counter += 1
            if state.pity_counter >= pity_timer:
                state.pity_counter = 0
                return True

        return False

    def open_pack(self, set_id: str) -> list[Card]:
        """
        Open one pack.

        Returns:
            The pack's cards in slot order

        Raises:
            SetNotLoadedError: If load_set was not called for this set
        """
        return self._open(set_id).cards

    def _open(self, set_id: str) -> PackResult:
        state = self._state_for(set_id)
        pool = self._pools[set_id]

        state.packs_opened += 1
        force_legendary = self._should_force_legendary(state)
        if force_legendary:
            logger.debug("Forcing legendary for set %s on pack %d", set_id, state.packs_opened)

        cards: list[Card] = []
        for rarity in self.analyzer.determine_pack_rarities(force_legendary):
            card = self._draw_card(pool, state, rarity)
            cards.append(card)

            if card.rarity is Rarity.LEGENDARY:
                state.opened_legendaries.add(card.id)
                state.first_legendary_obtained = True
                state.pity_counter = 0

        return PackResult(
            pack_number=state.packs_opened,
            cards=cards,
            forced_legendary=force_legendary,
        )

    def open_packs(self, set_id: str, count: int) -> list[PackResult]:
        """
        Open several packs in a row.

        Raises:
            SetNotLoadedError: If load_set was not called for this set
            ValueError: If count is not positive
        """
        if count < 1:
            raise ValueError(f"Pack count must be positive, got {count}")
        return [self._open(set_id) for _ in range(count)]

    def _draw_card(self, pool: SetPool, state: SetState, rarity: Rarity | str) -> Card:
        """Pick a card of the requested rarity, substituting when none exist."""
        candidates = pool.bucket(rarity)

        if not candidates:
            for fallback in RARITY_FALLBACK_ORDER:
                substitutes = pool.bucket(fallback)
                if substitutes:
                    return self.rng.choice(substitutes)
            return self.rng.choice(pool.cards)

        if rarity is Rarity.LEGENDARY:
            if len(state.opened_legendaries) >= len(candidates):
                return self.rng.choice(candidates)
            unopened = [card for card in candidates if card.id not in state.opened_legendaries]
            return self.rng.choice(unopened or candidates)

        return self.rng.choice(candidates)

    def reset(self, set_id: str | None = None) -> None:
        """
        Restore draw state to its initial values, keeping loaded pools.

        Args:
            set_id: Set to reset; every loaded set when None

        Raises:
            SetNotLoadedError: If set_id names a set that was never loaded
        """
        if set_id is not None:
            self._state_for(set_id)
            self._states[set_id] = SetState()
            return

        for loaded in self._pools:
            self._states[loaded] = SetState()
