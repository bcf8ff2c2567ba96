"""
Identity-based deduplication of stored cards.

Cards with equal CardIdentity (lower-cased player, card number, year) are
duplicates. In each group the card with the highest price score survives,
ties going to the oldest card; every other card in the group is deleted.
The merge is one-directional: no fields are copied from the losers.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from scorecard.db.operations import delete_card, list_cards
from scorecard.models.card import CardIdentity
from scorecard.models.db import CardDB

logger = logging.getLogger(__name__)

_NO_TIMESTAMP = datetime.min


@dataclass
class DuplicateGroup:
    """One identity with its survivor and the cards to remove."""

    identity: CardIdentity
    survivor: CardDB
    duplicates: list[CardDB]


@dataclass
class DeduplicationReport:
    """Outcome of a deduplication pass."""

    examined: int = 0
    groups: int = 0
    kept_ids: list[int] = field(default_factory=list)
    removed_ids: list[int] = field(default_factory=list)
    dry_run: bool = False


def card_identity(card: CardDB) -> CardIdentity | None:
    return CardIdentity.build(card.player_name, card.card_number, card.year)


def group_by_identity(cards: Iterable[CardDB]) -> dict[CardIdentity, list[CardDB]]:
    """Group cards by identity, skipping cards with an incomplete identity."""
    groups: dict[CardIdentity, list[CardDB]] = {}
    for card in cards:
        identity = card_identity(card)
        if identity is not None:
            groups.setdefault(identity, []).append(card)
    return groups


def survivor_key(card: CardDB) -> tuple[float, bool, datetime, int]:
    """Sort key: best price score first, then oldest, then lowest id."""
    return (
        -card.price_score(),
        card.created_at is None,
        card.created_at or _NO_TIMESTAMP,
        card.id or 0,
    )


def choose_survivor(cards: list[CardDB]) -> CardDB:
    return min(cards, key=survivor_key)


def plan_deduplication(cards: Iterable[CardDB]) -> list[DuplicateGroup]:
    """
    Work out which cards to keep and which to delete.

    Pure function of the given cards; nothing is written.
    """
    plan = []
    for identity, members in group_by_identity(cards).items():
        if len(members) < 2:
            continue
        survivor = choose_survivor(members)
        duplicates = [card for card in members if card is not survivor]
        plan.append(DuplicateGroup(identity=identity, survivor=survivor, duplicates=duplicates))
    return plan


async def run_deduplication(session: AsyncSession, dry_run: bool = False) -> DeduplicationReport:
    """
    Remove duplicate cards from the store.

    Args:
        session: Open session; the caller commits
        dry_run: Report the plan without deleting anything

    Returns:
        DeduplicationReport with kept and removed ids
    """
    cards = await list_cards(
        session,
        CardDB.player_name.is_not(None),
        CardDB.card_number.is_not(None),
        CardDB.year.is_not(None),
    )
    plan = plan_deduplication(cards)

    report = DeduplicationReport(examined=len(cards), groups=len(plan), dry_run=dry_run)
    for group in plan:
        report.kept_ids.append(group.survivor.id)
        for duplicate in group.duplicates:
            report.removed_ids.append(duplicate.id)
            if not dry_run:
                await delete_card(session, duplicate.id)

    logger.info(
        "Deduplication %s: %d cards examined, %d groups, %d removed",
        "planned" if dry_run else "complete",
        report.examined,
        report.groups,
        len(report.removed_ids),
    )
    return report
