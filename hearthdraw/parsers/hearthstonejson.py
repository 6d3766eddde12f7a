"""
HearthstoneJSON card data loader.

Fetches the localized card dump and maps raw entries onto CardDB columns.

Card data: https://hearthstonejson.com/docs/cards.html
"""

from typing import Any

import httpx

from hearthdraw.config import settings


def cards_url(locale: str | None = None) -> str:
    """URL of the latest card dump for a locale."""
    return f"{settings.hearthstonejson_url}/{locale or settings.card_locale}/cards.json"


async def fetch_cards(
    client: httpx.AsyncClient, locale: str | None = None
) -> list[dict[str, Any]]:
    """
    Download the full card dump.

    Raises:
        httpx.HTTPError: If the request fails
        ValueError: If the payload is not a JSON list
    """
    response = await client.get(cards_url(locale))
    response.raise_for_status()

    data = response.json()
    if not isinstance(data, list):
        raise ValueError("HearthstoneJSON response is not a card list")
    return data


def collectible_cards(raw_cards: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Keep collectible cards that carry both an id and a dbfId."""
    return [
        card
        for card in raw_cards
        if card.get("collectible") and card.get("id") and card.get("dbfId")
    ]


def count_by_set(raw_cards: list[dict[str, Any]]) -> dict[str, int]:
    """Number of cards per set id."""
    counts: dict[str, int] = {}
    for card in raw_cards:
        card_set = card.get("set")
        if card_set:
            counts[card_set] = counts.get(card_set, 0) + 1
    return counts


def to_card_row(raw: dict[str, Any]) -> dict[str, Any]:
    """Map a HearthstoneJSON entry onto CardDB column values."""
    return {
        "id": raw["id"],
        "dbf_id": int(raw["dbfId"]),
        "name": raw.get("name") or "",
        "card_type": raw.get("type"),
        "card_set": raw.get("set") or "UNKNOWN",
        "rarity": raw.get("rarity"),
        "card_class": raw.get("cardClass") or "NEUTRAL",
        "cost": raw.get("cost"),
        "attack": raw.get("attack"),
        "health": raw.get("health"),
        "text": raw.get("text"),
        "flavor": raw.get("flavor"),
        "artist": raw.get("artist"),
        "collectible": bool(raw.get("collectible")),
        "mechanics": raw.get("mechanics"),
        "race": raw.get("race"),
        "races": raw.get("races"),
        "spell_school": raw.get("spellSchool"),
        "elite": raw.get("elite"),
        "referenced_tags": raw.get("referencedTags"),
        "rune_cost": raw.get("runeCost"),
    }
