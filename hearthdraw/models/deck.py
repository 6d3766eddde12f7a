from dataclasses import dataclass, field


@dataclass
class DecodedDeck:
    """
    Contents of a deck code.

    Attributes:
        format_tag: Deck format identifier from the code header
        heroes: Hero dbfIds, in wire order
        cards: (dbf_id, count) pairs; singles, then doubles, then N-copy cards
    """

    format_tag: int
    heroes: list[int] = field(default_factory=list)
    cards: list[tuple[int, int]] = field(default_factory=list)

    @property
    def hero(self) -> int | None:
        """First hero, or None for a hero-less code."""
        return self.heroes[0] if self.heroes else None

    def total_cards(self) -> int:
        """Total number of cards (counting copies)."""
        return sum(count for _, count in self.cards)

    def as_counts(self) -> dict[int, int]:
        """Cards as {dbf_id: count}."""
        counts: dict[int, int] = {}
        for dbf_id, count in self.cards:
            counts[dbf_id] = counts.get(dbf_id, 0) + count
        return counts
