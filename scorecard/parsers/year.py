"""
Year extraction.

The first 4-digit 19xx/20xx token wins, so a season range like "1994-95"
yields 1994. A listing with no usable year gets the current year, flagged
as inferred.
"""

import logging
import re
from datetime import date

from scorecard.config import MIN_VALID_YEAR
from scorecard.models.card import ExtractedYear
from scorecard.parsers.normalizer import normalize_title

logger = logging.getLogger(__name__)

YEAR_PATTERN = re.compile(r"(?<!\d)((?:19|20)\d{2})(?!\d)")


def find_year(text: str | None) -> int | None:
    """Return the first 4-digit year in text, or None."""
    match = YEAR_PATTERN.search(normalize_title(text))
    return int(match.group(1)) if match else None


def extract_year(
    title: str,
    search_term: str | None = None,
    today: date | None = None,
) -> ExtractedYear:
    """
    Extract the card year from a title, falling back to the search term.

    Args:
        title: Raw listing title
        search_term: Query that surfaced the listing
        today: Reference date for defaulting and range checks

    Returns:
        ExtractedYear; inferred is True when the year was defaulted
    """
    current_year = (today or date.today()).year

    year = find_year(title)
    if year is None:
        year = find_year(search_term)

    if year is None:
        logger.debug("No year in %r, defaulting to %d", title, current_year)
        return ExtractedYear(year=current_year, inferred=True)

    if year < MIN_VALID_YEAR or year > current_year + 1:
        logger.debug("Year %d out of range in %r, coercing", year, title)
        return ExtractedYear(year=current_year, inferred=True)

    return ExtractedYear(year=year)
