"""
Read-only card-set reference lookups.

The card_sets table holds known set metadata (name, display name, search
text, sport). It is consulted for two advisory purposes: aggregating the
sport of sets named in a title, and telling set jargon apart from player
names. Both are optional; callers absorb SQLAlchemyError.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import func, literal, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from scorecard.config import MIN_REFERENCE_TOKEN_LENGTH
from scorecard.models.card import UNKNOWN_SPORT
from scorecard.models.db import CardSetDB

logger = logging.getLogger(__name__)

# Metadata words that mark a matched token as set terminology
SET_JARGON_MARKERS: frozenset[str] = frozenset({"edition", "collection", "chrome", "prizm"})

MAX_SET_ROWS = 25


@dataclass(frozen=True, slots=True)
class CardSetRow:
    """One reference row, as exposed to the extraction core."""

    name: str
    display_name: str
    search_text: str
    sport: str

    def looks_like_jargon(self) -> bool:
        text = f"{self.name} {self.display_name} {self.search_text}".lower()
        return any(marker in text.split() for marker in SET_JARGON_MARKERS)


def rank_sports(counts: list[tuple[str, int]]) -> list[tuple[str, int]]:
    """Order sport counts by count descending, then sport name ascending."""
    return sorted(counts, key=lambda item: (-item[1], item[0]))


class ReferenceDatabase:
    """Queries against the card-set reference store."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self.session_factory = session_factory

    async def find_sets(self, substring: str, limit: int = MAX_SET_ROWS) -> list[CardSetRow]:
        """
        Find set rows whose name, display name or search text contains substring.

        Raises:
            SQLAlchemyError: If the reference store is unreachable
        """
        needle = substring.strip().lower()
        if not needle:
            return []

        pattern = f"%{needle}%"
        async with self.session_factory() as session:
            result = await session.execute(
                select(CardSetDB)
                .where(
                    or_(
                        func.lower(CardSetDB.name).like(pattern),
                        func.lower(CardSetDB.display_name).like(pattern),
                        func.lower(CardSetDB.search_text).like(pattern),
                    )
                )
                .order_by(CardSetDB.id)
                .limit(limit)
            )
            return [
                CardSetRow(
                    name=row.name,
                    display_name=row.display_name,
                    search_text=row.search_text or "",
                    sport=row.sport,
                )
                for row in result.scalars()
            ]

    async def sport_counts(self, normalized_title: str) -> list[tuple[str, int]]:
        """
        Count set rows per sport whose name appears in the title.

        Args:
            normalized_title: Output of normalize_title

        Returns:
            (sport, row count) pairs, highest count first, ties by sport name

        Raises:
            SQLAlchemyError: If the reference store is unreachable
        """
        if not normalized_title:
            return []

        title = literal(normalized_title)
        async with self.session_factory() as session:
            result = await session.execute(
                select(CardSetDB.sport, func.count(CardSetDB.id))
                .where(
                    func.length(CardSetDB.name) >= MIN_REFERENCE_TOKEN_LENGTH,
                    or_(
                        title.contains(func.lower(CardSetDB.name)),
                        title.contains(func.lower(CardSetDB.display_name)),
                    ),
                )
                .group_by(CardSetDB.sport)
            )
            counts = [(sport, count) for sport, count in result.all() if sport]
        return rank_sports(counts)

    async def best_sport(self, normalized_title: str) -> str:
        """Sport with the most matching set rows, or "Unknown"."""
        ranked = await self.sport_counts(normalized_title)
        return ranked[0][0] if ranked else UNKNOWN_SPORT

    async def is_set_jargon(self, token: str) -> bool:
        """
        True when token appears in set metadata that reads like set terminology.

        Raises:
            SQLAlchemyError: If the reference store is unreachable
        """
        rows = await self.find_sets(token)
        return any(row.looks_like_jargon() for row in rows)

    async def filter_name_tokens(self, tokens: list[str]) -> list[str]:
        """
        Drop candidate name tokens that the reference store marks as set jargon.

        Advisory only: a failed lookup keeps the token.
        """
        kept = []
        for token in tokens:
            if len(token) < MIN_REFERENCE_TOKEN_LENGTH:
                kept.append(token)
                continue
            try:
                if await self.is_set_jargon(token):
                    logger.debug("Dropping set jargon token %r", token)
                    continue
            except SQLAlchemyError as e:
                logger.warning("Reference lookup failed for %r: %s", token, e)
            kept.append(token)
        return kept
