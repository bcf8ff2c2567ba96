"""
Title extraction pipeline.

raw title -> field extractors + player name -> sport -> summary title

Each extractor runs behind a guard: an unexpected failure is logged and
replaced by that extractor's soft-miss value, so one broken extractor
never stops the others. The only hard error is an invalid listing.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from scorecard.models.card import (
    BASE_CARD_TYPE,
    UNKNOWN_SPORT,
    CardRecord,
    ExtractedYear,
    RawListing,
)
from scorecard.parsers.card_set import extract_card_set
from scorecard.parsers.card_type import extract_card_type
from scorecard.parsers.flags import is_autograph, is_rookie
from scorecard.parsers.normalizer import normalize_title
from scorecard.parsers.numbering import extract_card_number, extract_print_run
from scorecard.parsers.player_name import build_player_name, candidate_name_tokens
from scorecard.parsers.year import extract_year
from scorecard.services.reference_db import ReferenceDatabase
from scorecard.services.sport_classifier import SportClassifier, classify_by_keywords
from scorecard.services.summary_title import compose_summary_title

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _guarded(name: str, title: str, default: T, extractor: Callable[[], T]) -> T:
    try:
        return extractor()
    except Exception as e:
        logger.error("Extractor %s failed for %r: %s", name, title, e)
        return default


def extract_card_fields(listing: RawListing) -> CardRecord:
    """
    Run every synchronous extractor over a listing.

    Sport comes from the keyword tables only and the player name skips the
    reference-store filter. Use process_listing for the full cascade.

    Raises:
        InvalidListingError: If the listing title is empty
    """
    listing.validate()
    title = listing.title

    tokens = _guarded("name_tokens", title, [], lambda: candidate_name_tokens(title))
    record = _extract_fields(listing, tokens)
    record.sport = _guarded(
        "sport", title, UNKNOWN_SPORT, lambda: classify_by_keywords(normalize_title(title))
    )
    record.summary_title = _compose(record)
    return record


def _extract_fields(listing: RawListing, name_tokens: list[str]) -> CardRecord:
    title = listing.title

    year: ExtractedYear | None = _guarded(
        "year", title, None, lambda: extract_year(title, listing.search_term)
    )
    card_set = _guarded("card_set", title, None, lambda: extract_card_set(title))
    card_type = _guarded(
        "card_type", title, BASE_CARD_TYPE, lambda: extract_card_type(title, card_set)
    )

    return CardRecord(
        title=title,
        player_name=_guarded("player_name", title, None, lambda: build_player_name(name_tokens)),
        year=year.year if year else None,
        year_inferred=year.inferred if year else False,
        card_set=card_set,
        card_type=card_type,
        card_number=_guarded("card_number", title, None, lambda: extract_card_number(title)),
        print_run=_guarded("print_run", title, None, lambda: extract_print_run(title)),
        is_rookie=_guarded("is_rookie", title, False, lambda: is_rookie(title)),
        is_autograph=_guarded("is_autograph", title, False, lambda: is_autograph(title)),
        search_term=listing.search_term,
    )


def _compose(record: CardRecord) -> str:
    return _guarded(
        "summary_title", record.title, record.title, lambda: compose_summary_title(record)
    )


async def process_listing(
    listing: RawListing,
    classifier: SportClassifier | None = None,
    reference: ReferenceDatabase | None = None,
) -> CardRecord:
    """
    Turn a raw listing into a fully populated CardRecord.

    Args:
        listing: Scraped listing
        classifier: Sport cascade; keyword tables only when omitted
        reference: Reference store used to filter set jargon from names

    Returns:
        CardRecord with summary_title composed

    Raises:
        InvalidListingError: If the listing title is empty
    """
    listing.validate()
    title = listing.title

    tokens = _guarded("name_tokens", title, [], lambda: candidate_name_tokens(title))
    if reference is not None and tokens:
        try:
            tokens = await reference.filter_name_tokens(tokens)
        except Exception as e:
            logger.error("Reference name filter failed for %r: %s", title, e)

    record = _extract_fields(listing, tokens)

    classifier = classifier or SportClassifier()
    try:
        record.sport = await classifier.classify(title, record.player_name)
    except Exception as e:
        logger.error("Sport classification failed for %r: %s", title, e)
        record.sport = UNKNOWN_SPORT

    record.summary_title = _compose(record)
    return record
