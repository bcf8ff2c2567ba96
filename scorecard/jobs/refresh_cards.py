"""
Maintenance job to re-extract stored cards.

Re-runs the extraction pipeline over every stored title and overwrites the
derived fields. Extraction is idempotent, so the job can be re-run at any
time. With --summary-only, only the summary titles are recomposed from the
fields already stored.
"""

import argparse
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from scorecard.config import settings
from scorecard.db.database import async_session_factory, get_reference_database
from scorecard.db.operations import (
    apply_record,
    card_to_model,
    get_card,
    list_cards,
    listing_from_card,
    update_card,
)
from scorecard.models.db import CardDB
from scorecard.services.pipeline import process_listing
from scorecard.services.reference_db import ReferenceDatabase
from scorecard.services.sport_classifier import SportClassifier, build_sport_classifier
from scorecard.services.summary_title import compose_summary_title

logger = logging.getLogger(__name__)


async def refresh_card(
    session: AsyncSession,
    card: CardDB,
    classifier: SportClassifier,
    reference: ReferenceDatabase | None,
) -> bool:
    """
    Re-extract one card and write all derived fields together.

    Returns:
        True if any stored field changed
    """
    before = card_to_model(card).derived_fields()
    record = await process_listing(listing_from_card(card), classifier, reference)
    if record.derived_fields() == before:
        return False

    await apply_record(session, card, record)
    return True


async def regenerate_summary(session: AsyncSession, card: CardDB) -> bool:
    """
    Recompose one card's summary title from its stored fields.

    Returns:
        True if the summary title changed
    """
    summary = compose_summary_title(card_to_model(card))
    if summary == card.summary_title:
        return False

    await update_card(session, card.id, {"summary_title": summary})
    return True


async def run_refresh(summary_only: bool = False, limit: int | None = None) -> dict[str, int]:
    """
    Refresh every stored card.

    Args:
        summary_only: Only recompose summary titles; no extraction, no external calls
        limit: Max number of cards to process

    Returns:
        Dict with processed, updated and failed counts
    """
    results = {"processed": 0, "updated": 0, "failed": 0}

    reference = None if summary_only else get_reference_database()
    classifier = None if summary_only else build_sport_classifier(reference)
    throttle = not summary_only and settings.sport_lookup_enabled

    async with async_session_factory() as session:
        card_ids = [card.id for card in await list_cards(session, limit=limit)]
        logger.info("Refreshing %d cards (summary only: %s)", len(card_ids), summary_only)

        for card_id in card_ids:
            results["processed"] += 1
            try:
                # Re-read per card; a rollback expires everything loaded before it
                card = await get_card(session, card_id)
                if card is None:
                    continue
                if classifier is None:
                    changed = await regenerate_summary(session, card)
                else:
                    changed = await refresh_card(session, card, classifier, reference)
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.error("Error refreshing card %s: %s", card_id, e)
                results["failed"] += 1
                continue

            if changed:
                results["updated"] += 1
            if throttle:
                await asyncio.sleep(settings.maintenance_delay_seconds)

    logger.info(
        "Refresh complete. %d processed, %d updated, %d failed",
        results["processed"],
        results["updated"],
        results["failed"],
    )
    return results


def main() -> None:
    """CLI entry point for the refresh job."""
    parser = argparse.ArgumentParser(description="Re-extract stored card listings")
    parser.add_argument(
        "--summary-only",
        action="store_true",
        help="Only recompose summary titles from stored fields",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Max number of cards to process",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_refresh(summary_only=args.summary_only, limit=args.limit))


if __name__ == "__main__":
    main()
