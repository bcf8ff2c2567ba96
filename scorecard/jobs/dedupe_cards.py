"""
Maintenance job to remove duplicate cards.

Groups stored cards by identity (player, card number, year) and keeps the
best-priced card of each group. Use --dry-run to see the plan first.
"""

import argparse
import asyncio
import logging

from scorecard.db.database import async_session_factory
from scorecard.services.deduplicator import DeduplicationReport, run_deduplication

logger = logging.getLogger(__name__)


async def run_dedupe(dry_run: bool = False) -> DeduplicationReport:
    """
    Run one deduplication pass and commit it.

    Args:
        dry_run: Report the plan without deleting anything

    Returns:
        The deduplication report
    """
    async with async_session_factory() as session:
        try:
            report = await run_deduplication(session, dry_run=dry_run)
            if not dry_run:
                await session.commit()
        except Exception as e:
            await session.rollback()
            logger.error("Deduplication failed: %s", e)
            raise
    return report


def main() -> None:
    """CLI entry point for the deduplication job."""
    parser = argparse.ArgumentParser(description="Remove duplicate card listings")
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Report duplicates without deleting them",
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_dedupe(dry_run=args.dry_run))


if __name__ == "__main__":
    main()
