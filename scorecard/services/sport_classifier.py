"""
Sport classification cascade.

Stages run in order and stop at the first answer other than "Unknown":

1. External player lookup (only when a player name was extracted)
2. Reference-store aggregate over set names found in the title
3. Keyword indicator tables over the normalized title

Stages 1 and 2 depend on unreliable collaborators. Their failures are
logged and treated as "no answer".
"""

import logging

import httpx
from sqlalchemy.exc import SQLAlchemyError

from scorecard.config import settings
from scorecard.models.card import UNKNOWN_SPORT
from scorecard.parsers.normalizer import normalize_title
from scorecard.services.reference_db import ReferenceDatabase
from scorecard.services.sport_lookup import SportLookupClient, get_sport_lookup_client
from scorecard.vocabulary.sports import SPORT_INDICATORS

logger = logging.getLogger(__name__)


def classify_by_keywords(normalized_title: str) -> str:
    """First indicator table, in priority order, with any hit."""
    for indicators in SPORT_INDICATORS:
        if indicators.matches(normalized_title):
            return indicators.sport
    return UNKNOWN_SPORT


class SportClassifier:
    """
    Resolves a listing's sport from every available signal.

    Both collaborators are optional; a missing one skips its stage.
    """

    def __init__(
        self,
        reference: ReferenceDatabase | None = None,
        lookup: SportLookupClient | None = None,
    ) -> None:
        self.reference = reference
        self.lookup = lookup

    async def _from_lookup(self, player_name: str) -> str:
        if self.lookup is None:
            return UNKNOWN_SPORT
        try:
            return await self.lookup.lookup_sport(player_name)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Sport lookup failed for %r: %s", player_name, e)
            return UNKNOWN_SPORT

    async def _from_reference(self, normalized_title: str) -> str:
        if self.reference is None:
            return UNKNOWN_SPORT
        try:
            return await self.reference.best_sport(normalized_title)
        except SQLAlchemyError as e:
            logger.warning("Reference sport lookup failed: %s", e)
            return UNKNOWN_SPORT

    async def classify(self, title: str, player_name: str | None) -> str:
        """
        Classify the sport of a listing.

        Args:
            title: Raw listing title
            player_name: Extracted player name, None when extraction failed

        Returns:
            Sport label; "Unknown" when every stage came up empty
        """
        normalized = normalize_title(title)

        if player_name:
            sport = await self._from_lookup(player_name)
            if sport != UNKNOWN_SPORT:
                return sport

        sport = await self._from_reference(normalized)
        if sport != UNKNOWN_SPORT:
            return sport

        sport = classify_by_keywords(normalized)
        if sport == UNKNOWN_SPORT:
            logger.debug("No sport signal in %r", title)
        return sport


def build_sport_classifier(reference: ReferenceDatabase | None = None) -> SportClassifier:
    """Classifier wired to the configured lookup service and the given reference store."""
    lookup = get_sport_lookup_client() if settings.sport_lookup_enabled else None
    return SportClassifier(reference=reference, lookup=lookup)
