"""
Summary title composition.

The summary title is a pure function of a record's other fields, so it
can be regenerated at any time. Field order is fixed:

    year, card set, card type, player, "auto", card number, print run
"""

import re

from scorecard.models.card import BASE_CARD_TYPE, CardRecord
from scorecard.parsers.normalizer import collapse_whitespace
from scorecard.vocabulary.sports import SPORT_NAMES
from scorecard.vocabulary.teams import phrase_pattern, strip_team_names

# Removed anywhere, any case
UNWANTED_TERMS: frozenset[str] = SPORT_NAMES | frozenset(
    {"nfl", "nba", "mlb", "nhl", "psa", "gem", "mint", "graded"}
)
UNWANTED_PATTERN = phrase_pattern(UNWANTED_TERMS)

# Team abbreviations; matched upper-case only so "De La Cruz" survives
TEAM_ABBREVIATIONS_PATTERN = re.compile(r"(?<![\w'])(?:LA|NY|SF|KC|TB|GB)(?![\w'])")

SPORT_NAME_PATTERN = phrase_pattern(SPORT_NAMES)

TRAILING_PUNCTUATION = " -,.;:/|&"

_REPEATED_WORD = re.compile(r"(?<!\S)(\S+)(?:\s+\1)+(?!\S)", re.IGNORECASE)


def clean_card_set(card_set: str | None) -> str:
    """Card-set label without sport words ("Topps Football" -> "Topps")."""
    if not card_set:
        return ""
    return collapse_whitespace(SPORT_NAME_PATTERN.sub(" ", card_set))


def clean_summary(text: str) -> str:
    """
    Final cleanup of a joined summary title.

    Removes unwanted terms and repeated adjacent words, collapses
    whitespace and strips trailing punctuation. Idempotent.
    """
    text = UNWANTED_PATTERN.sub(" ", text)
    text = TEAM_ABBREVIATIONS_PATTERN.sub(" ", text)
    text = collapse_whitespace(text).rstrip(TRAILING_PUNCTUATION)
    # Stripping can expose a repeat ("Auto Auto/"), so dedupe after it
    text = _REPEATED_WORD.sub(r"\1", text)
    return text.rstrip(TRAILING_PUNCTUATION)


def compose_summary_title(record: CardRecord) -> str:
    """
    Build the canonical summary title from a record's fields.

    Args:
        record: Populated record; its summary_title is ignored

    Returns:
        The summary title, or the original title when nothing is left
    """
    card_set = clean_card_set(record.card_set)

    parts: list[str] = []
    if record.year:
        parts.append(str(record.year))
    if card_set:
        parts.append(card_set)
    if record.card_type and record.card_type != BASE_CARD_TYPE:
        parts.append(record.card_type)
    if record.player_name:
        player = strip_team_names(record.player_name)
        if player and player.lower() not in card_set.lower():
            parts.append(player)
    if record.is_autograph:
        parts.append("auto")
    if record.card_number:
        parts.append(record.card_number)
    if record.print_run:
        parts.append(record.print_run)

    summary = clean_summary(" ".join(parts))
    return summary or record.title
