"""
Job to refresh the card catalog.

Downloads the latest HearthstoneJSON card dump and upserts collectible cards
and set counts. Every run is recorded in the data update log.
Can be run as a standalone script or triggered from the API.
"""

import argparse
import asyncio
import logging
from dataclasses import dataclass

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from hearthdraw.db.database import async_session_factory, init_db
from hearthdraw.db.operations import create_update_log, upsert_card_set, upsert_cards
from hearthdraw.parsers.hearthstonejson import (
    collectible_cards,
    count_by_set,
    fetch_cards,
    to_card_row,
)

logger = logging.getLogger(__name__)

UPDATE_TYPE = "cards"


@dataclass
class CardUpdateResult:
    """Outcome of a catalog refresh."""

    cards: int
    sets: int

    @property
    def message(self) -> str:
        return f"Updated {self.cards} cards across {self.sets} sets"


async def refresh_catalog(
    session: AsyncSession,
    client: httpx.AsyncClient,
    locale: str | None = None,
) -> CardUpdateResult:
    """
    Download card data and write it to the catalog.

    Commits the session. On failure the partial write is rolled back and a
    failed log entry is committed before the error is re-raised.

    Raises:
        httpx.HTTPError: If the download fails
        ValueError: If the payload is malformed
        SQLAlchemyError: If the catalog write fails
    """
    log = await create_update_log(
        session, UPDATE_TYPE, "started", message="Fetching card data from HearthstoneJSON"
    )
    await session.commit()

    try:
        raw_cards = collectible_cards(await fetch_cards(client, locale))
        set_counts = count_by_set(raw_cards)

        for set_id, count in set_counts.items():
            await upsert_card_set(session, set_id, count)
        written = await upsert_cards(session, (to_card_row(card) for card in raw_cards))

        result = CardUpdateResult(cards=written, sets=len(set_counts))
        log.status = "completed"
        log.message = result.message
        log.card_count = written
        await session.commit()

    except (httpx.HTTPError, ValueError, KeyError, SQLAlchemyError) as e:
        await session.rollback()
        await create_update_log(session, UPDATE_TYPE, "failed", message=f"Update failed: {e}")
        await session.commit()
        raise

    logger.info("Catalog refresh complete: %s", result.message)
    return result


async def run_card_update(locale: str | None = None) -> int:
    """
    Refresh the catalog in a fresh session.

    Returns:
        Number of cards written, 0 on failure
    """
    logger.info("Downloading HearthstoneJSON card data...")

    try:
        async with (
            httpx.AsyncClient(
                headers={"User-Agent": "HearthDraw/1.0"},
                follow_redirects=True,
                timeout=60.0,
            ) as client,
            async_session_factory() as session,
        ):
            result = await refresh_catalog(session, client, locale)
        return result.cards

    except httpx.HTTPError as e:
        logger.error("HTTP error fetching card data: %s", e)
        return 0
    except (ValueError, KeyError) as e:
        logger.error("Malformed card data: %s", e)
        return 0
    except Exception as e:
        logger.error("Error updating card catalog: %s", e)
        return 0


async def _main(locale: str | None) -> None:
    await init_db()
    await run_card_update(locale)


def main() -> None:
    """CLI entry point for running the catalog refresh."""
    parser = argparse.ArgumentParser(description="Refresh the card catalog from HearthstoneJSON")
    parser.add_argument(
        "--locale",
        default=None,
        help="Card text locale (default: CARD_LOCALE setting)",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(_main(args.locale))


if __name__ == "__main__":
    main()
