"""Tests for deck code API endpoints."""

import base64

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from hearthdraw.db import upsert_cards
from hearthdraw.db.database import get_session
from hearthdraw.main import app
from hearthdraw.models.card import Card
from hearthdraw.models.db import Base
from hearthdraw.parsers.deck_code import encode


@pytest.fixture
async def async_engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def client(async_engine):
    """Provide an async test client with overridden database session."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_session():
        async with async_session() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_session] = override_get_session

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def catalog(pool_factory) -> list[Card]:
    """27 non-legendary and 3 legendary cards."""
    return pool_factory(commons=15, rares=8, epics=4, legendaries=3, card_set="CORE")


@pytest.fixture
async def seeded_db(async_engine, catalog: list[Card], row_factory):
    """Seed the catalog."""
    async_session = async_sessionmaker(async_engine, class_=AsyncSession, expire_on_commit=False)

    async with async_session() as session:
        await upsert_cards(session, [row_factory(card) for card in catalog])
        await session.commit()


@pytest.fixture
def full_deck(catalog: list[Card]) -> dict[str, int]:
    """A legal 30-card deck: 13 pairs, 3 legendaries and one single."""
    non_legendary = [card.id for card in catalog if not card.is_legendary]
    legendary = [card.id for card in catalog if card.is_legendary]

    deck = {card_id: 2 for card_id in non_legendary[:13]}
    deck.update({card_id: 1 for card_id in legendary})
    deck[non_legendary[13]] = 1
    return deck


class TestEncodeEndpoint:
    async def test_encode_entries(self, client: AsyncClient) -> None:
        """Raw entries encode without catalog validation."""
        response = await client.post(
            "/decks/encode",
            json={
                "hero_dbf_id": 637,
                "cards": [
                    {"dbf_id": 1001, "count": 1},
                    {"dbf_id": 1002, "count": 2},
                    {"dbf_id": 1003, "count": 3},
                ],
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_cards"] == 6
        assert base64.b64decode(data["code"])[:3] == bytes([0, 1, 2])

    async def test_encode_rejects_zero_count(self, client: AsyncClient) -> None:
        response = await client.post(
            "/decks/encode",
            json={"hero_dbf_id": 637, "cards": [{"dbf_id": 1001, "count": 0}]},
        )

        assert response.status_code == 422

    async def test_encode_requires_cards(self, client: AsyncClient) -> None:
        response = await client.post("/decks/encode", json={"hero_dbf_id": 637, "cards": []})

        assert response.status_code == 422


class TestExportEndpoint:
    async def test_export_valid_deck(
        self, client: AsyncClient, seeded_db, full_deck: dict[str, int]
    ) -> None:
        response = await client.post(
            "/decks/export", json={"hero_dbf_id": 637, "cards": full_deck}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_cards"] == 30

        decoded = await client.post("/decks/decode", json={"code": data["code"]})
        assert decoded.json()["total_cards"] == 30
        assert decoded.json()["heroes"] == [637]

    async def test_export_rejects_short_deck(
        self, client: AsyncClient, seeded_db, full_deck: dict[str, int]
    ) -> None:
        full_deck.popitem()

        response = await client.post(
            "/decks/export", json={"hero_dbf_id": 637, "cards": full_deck}
        )

        assert response.status_code == 400
        assert "expected 30" in response.json()["detail"]

    async def test_export_rejects_unknown_card(
        self, client: AsyncClient, seeded_db, full_deck: dict[str, int]
    ) -> None:
        full_deck["NOT_A_CARD"] = 1

        response = await client.post(
            "/decks/export", json={"hero_dbf_id": 637, "cards": full_deck}
        )

        assert response.status_code == 400
        assert "NOT_A_CARD" in response.json()["detail"]

    async def test_export_rejects_duplicate_legendary(
        self, client: AsyncClient, seeded_db, catalog: list[Card], full_deck: dict[str, int]
    ) -> None:
        legendary = next(card.id for card in catalog if card.is_legendary)
        full_deck[legendary] = 2

        response = await client.post(
            "/decks/export", json={"hero_dbf_id": 637, "cards": full_deck}
        )

        assert response.status_code == 400
        assert "exceeds limit of 1" in response.json()["detail"]


class TestDecodeEndpoint:
    async def test_decode_resolves_cards(
        self, client: AsyncClient, seeded_db, catalog: list[Card]
    ) -> None:
        """Known dbfIds resolve to catalog cards, sorted by cost then name."""
        entries = [(card.dbf_id, 2) for card in catalog[:5]]
        code = encode(637, entries)

        response = await client.post("/decks/decode", json={"code": code})

        assert response.status_code == 200
        data = response.json()
        assert data["format_tag"] == 2
        assert data["heroes"] == [637]
        assert data["total_cards"] == 10
        assert data["unresolved_dbf_ids"] == []

        costs = [(entry["card"]["cost"], entry["card"]["name"]) for entry in data["cards"]]
        assert costs == sorted(costs)
        assert all(entry["count"] == 2 for entry in data["cards"])

    async def test_decode_reports_unknown_dbf_ids(self, client: AsyncClient, seeded_db) -> None:
        code = encode(637, [(1001, 1), (424242, 2)])

        response = await client.post("/decks/decode", json={"code": code})

        data = response.json()
        assert data["unresolved_dbf_ids"] == [424242]
        assert len(data["cards"]) == 1
        assert data["total_cards"] == 3

    async def test_decode_empty_deck(self, client: AsyncClient) -> None:
        response = await client.post("/decks/decode", json={"code": "AAECAQcAAAA="})

        assert response.status_code == 200
        data = response.json()
        assert data["heroes"] == [7]
        assert data["cards"] == []
        assert data["total_cards"] == 0

    @pytest.mark.parametrize(
        "code",
        [
            "not a deck code!",
            base64.b64encode(bytes([1, 1, 2, 1, 7, 0, 0, 0])).decode(),
            base64.b64encode(bytes([0, 2, 2, 1, 7, 0, 0, 0])).decode(),
            base64.b64encode(bytes([0, 1, 2, 1])).decode(),
        ],
    )
    async def test_decode_invalid_code(self, client: AsyncClient, code: str) -> None:
        response = await client.post("/decks/decode", json={"code": code})

        assert response.status_code == 400
        assert response.json()["detail"].startswith("Invalid deck code:")

    async def test_decode_requires_code(self, client: AsyncClient) -> None:
        response = await client.post("/decks/decode", json={"code": ""})

        assert response.status_code == 422
