import random

import pytest

from hearthdraw.models.card import Card, Rarity


def make_card(
    card_id: str,
    rarity: Rarity,
    dbf_id: int,
    card_set: str = "TEST",
    **kwargs,
) -> Card:
    """Build a card with sensible defaults."""
    return Card(
        id=card_id,
        dbf_id=dbf_id,
        name=kwargs.pop("name", f"Card {card_id}"),
        rarity=rarity,
        card_set=card_set,
        **kwargs,
    )


def build_pool(
    commons: int = 10,
    rares: int = 6,
    epics: int = 4,
    legendaries: int = 3,
    card_set: str = "TEST",
    dbf_start: int = 1001,
) -> list[Card]:
    """Build a set pool with the given number of cards per rarity."""
    cards: list[Card] = []
    dbf_id = dbf_start
    for rarity, count in (
        (Rarity.COMMON, commons),
        (Rarity.RARE, rares),
        (Rarity.EPIC, epics),
        (Rarity.LEGENDARY, legendaries),
    ):
        for i in range(count):
            cards.append(
                make_card(
                    f"{card_set}_{rarity.value[0]}{i:02d}",
                    rarity,
                    dbf_id,
                    card_set=card_set,
                    cost=i % 8,
                )
            )
            dbf_id += 1
    return cards


@pytest.fixture
def test_pool() -> list[Card]:
    """A 23-card set: 10 commons, 6 rares, 4 epics, 3 legendaries."""
    return build_pool()


@pytest.fixture
def pool_factory():
    """Factory for pools with custom rarity counts."""
    return build_pool


@pytest.fixture
def card_factory():
    """Factory for single cards."""
    return make_card


@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for deterministic simulations."""
    return random.Random(20240419)


@pytest.fixture
def sample_hearthstonejson() -> list[dict]:
    """Sample HearthstoneJSON card dump."""
    return [
        {
            "id": "CS2_029",
            "dbfId": 315,
            "name": "Fireball",
            "type": "SPELL",
            "set": "CORE",
            "rarity": "COMMON",
            "cardClass": "MAGE",
            "cost": 4,
            "text": "Deal $6 damage.",
            "collectible": True,
            "spellSchool": "FIRE",
        },
        {
            "id": "EX1_559",
            "dbfId": 1080,
            "name": "Archmage Antonidas",
            "type": "MINION",
            "set": "CORE",
            "rarity": "LEGENDARY",
            "cardClass": "MAGE",
            "cost": 7,
            "attack": 5,
            "health": 7,
            "collectible": True,
            "elite": True,
            "mechanics": ["TRIGGER_VISUAL"],
        },
        {
            "id": "TTN_001",
            "dbfId": 90001,
            "name": "Titan Spark",
            "type": "SPELL",
            "set": "TITANS",
            "rarity": "RARE",
            "cardClass": "NEUTRAL",
            "cost": 2,
            "collectible": True,
        },
        {
            "id": "HERO_08",
            "dbfId": 637,
            "name": "Jaina Proudmoore",
            "type": "HERO",
            "set": "HERO_SKINS",
            "cardClass": "MAGE",
        },
        {
            "id": "CS2_mirror",
            "name": "Mirror Image token",
            "set": "CORE",
            "collectible": True,
        },
    ]


def card_row(card: Card) -> dict:
    """CardDB column values for a card."""
    return {
        "id": card.id,
        "dbf_id": card.dbf_id,
        "name": card.name,
        "card_set": card.card_set,
        "rarity": card.rarity.value,
        "card_class": card.card_class,
        "cost": card.cost,
        "collectible": card.collectible,
    }


@pytest.fixture
def row_factory():
    """Factory for CardDB column values from a card."""
    return card_row
