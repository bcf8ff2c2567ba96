"""
Maintenance job to repair bad player names.

Re-derives each stored player name with the repair denylist applied and
falls back to stripping known-bad brand and jargon words from the stored
name. Changed names are written together with a recomposed summary title.
"""

import argparse
import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from scorecard.db.database import async_session_factory
from scorecard.db.operations import card_to_model, get_card, list_cards, update_card
from scorecard.models.db import CardDB
from scorecard.parsers.player_name import repair_player_name
from scorecard.services.summary_title import compose_summary_title

logger = logging.getLogger(__name__)


async def repair_card(session: AsyncSession, card: CardDB) -> bool:
    """
    Repair one card's player name.

    Returns:
        True if the name changed
    """
    repaired = repair_player_name(card.player_name, card.title)
    if repaired == card.player_name:
        return False

    record = card_to_model(card)
    record.player_name = repaired
    summary = compose_summary_title(record)

    logger.debug("Card %s: %r -> %r", card.id, card.player_name, repaired)
    await update_card(session, card.id, {"player_name": repaired, "summary_title": summary})
    return True


async def run_repair(limit: int | None = None) -> dict[str, int]:
    """
    Repair player names across the card store.

    Args:
        limit: Max number of cards to examine

    Returns:
        Dict with processed, repaired and failed counts
    """
    results = {"processed": 0, "repaired": 0, "failed": 0}

    async with async_session_factory() as session:
        card_ids = [card.id for card in await list_cards(session, limit=limit)]
        logger.info("Checking player names on %d cards", len(card_ids))

        for card_id in card_ids:
            results["processed"] += 1
            try:
                card = await get_card(session, card_id)
                if card is None:
                    continue
                changed = await repair_card(session, card)
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.error("Error repairing card %s: %s", card_id, e)
                results["failed"] += 1
                continue

            if changed:
                results["repaired"] += 1

    logger.info(
        "Repair complete. %d processed, %d repaired, %d failed",
        results["processed"],
        results["repaired"],
        results["failed"],
    )
    return results


def main() -> None:
    """CLI entry point for the player-name repair job."""
    parser = argparse.ArgumentParser(description="Repair bad player names")
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Max number of cards to examine",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_repair(limit=args.limit))


if __name__ == "__main__":
    main()
