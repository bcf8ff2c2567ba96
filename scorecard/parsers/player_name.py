"""
Player name extraction.

Works on a cleaned copy of the raw title so tokens keep their original
case, hyphens and apostrophes. Everything that is provably not a name
(years, numbers, grading, team and city names, set/parallel/descriptor
jargon) is removed, and the first surviving tokens become the name.

The extractor is heuristic. Known failure: a team or jargon word that
swallows the surname leaves a single given name. repair_player_name
re-runs extraction with a curated denylist of bad outputs observed in
stored data; it does not generalize beyond that list.
"""

import logging
import re
from collections.abc import Iterable

from scorecard.config import MAX_PLAYER_NAME_LENGTH, MIN_PLAYER_NAME_LENGTH
from scorecard.parsers import card_set, card_type
from scorecard.vocabulary.jargon import (
    DESCRIPTOR_TERMS,
    GRADING_PATTERN,
    JARGON_PHRASE_PATTERN,
    NAME_SUFFIXES,
)
from scorecard.vocabulary.sports import SPORT_NAMES
from scorecard.vocabulary.teams import ALL_TEAM_PATTERN, CITY_PATTERN

logger = logging.getLogger(__name__)

# Every single token that can never be part of a name
NAME_STOPWORDS: frozenset[str] = (
    card_set.SET_VOCABULARY | card_type.PARALLEL_VOCABULARY | DESCRIPTOR_TERMS | SPORT_NAMES
)

# Lower-case particles that continue a surname ("Elly De La Cruz")
NAME_PARTICLES: frozenset[str] = frozenset(
    {"de", "la", "del", "da", "di", "van", "von", "le", "st"}
)

# Initials-style given names written without vowels are upper-cased
INITIALS = frozenset({"aj", "ej"})

# ==========================================================================
# Cleanup patterns, applied in order to the raw title
# ==========================================================================
_PARENTHESIZED = re.compile(r"\([^)]*\)|\[[^\]]*\]")
_YEAR_OR_SEASON = re.compile(r"(?<!\d)(?:19|20)\d{2}(?:\s*-\s*\d{2,4})?(?!\d)")
_CARD_NUMBER = re.compile(r"#\s*[\w-]+")
_PRINT_RUN = re.compile(r"\d*\s*/\s*\d+")
_ORDINAL = re.compile(r"(?<!\w)\d+(?:st|nd|rd|th)(?!\w)", re.IGNORECASE)
_COLLIDING_PHRASES = re.compile(
    r"(?<![\w'])(?:allen\s*(?:&|and)?\s*ginter|tiger\s+stripes?)(?![\w'])", re.IGNORECASE
)
_TOKEN = re.compile(r"[^\W\d_][\w'’.-]*")


def _clean(title: str) -> str:
    text = _PARENTHESIZED.sub(" ", title)
    text = GRADING_PATTERN.sub(" ", text)
    text = _YEAR_OR_SEASON.sub(" ", text)
    text = _CARD_NUMBER.sub(" ", text)
    text = _PRINT_RUN.sub(" ", text)
    text = _ORDINAL.sub(" ", text)
    text = JARGON_PHRASE_PATTERN.sub(" ", text)
    text = _COLLIDING_PHRASES.sub(" ", text)
    text = ALL_TEAM_PATTERN.sub(" ", text)
    return CITY_PATTERN.sub(" ", text)


def _lookup_key(token: str) -> str:
    return token.lower().replace("'", "").replace("’", "")


def candidate_name_tokens(
    title: str, extra_stopwords: Iterable[str] = frozenset()
) -> list[str]:
    """
    Surviving name tokens of a title, in title order.

    Args:
        title: Raw listing title
        extra_stopwords: Additional lower-case tokens to discard

    Returns:
        Tokens with original casing; empty when nothing survives
    """
    if not title:
        return []

    stopwords = NAME_STOPWORDS | frozenset(extra_stopwords)
    tokens = []
    for raw in _TOKEN.findall(_clean(title)):
        token = raw.replace(".", "").strip("-'’")
        if len(token) < 2 or any(ch.isdigit() for ch in token):
            continue
        if _lookup_key(token) in stopwords:
            continue
        tokens.append(token)
    return tokens


def _case_part(part: str) -> str:
    if len(part) > 3 and part.startswith("mc"):
        return "Mc" + part[2:].capitalize()
    return part.capitalize()


def proper_case(token: str) -> str:
    """
    Proper-case one name token.

    Mixed-case tokens from the title ("LaMelo", "McDavid") are kept as
    written; all-caps or all-lower tokens are rebuilt.
    """
    if token[1:] != token[1:].lower() and token != token.upper():
        return token

    lowered = token.lower()
    if lowered in ("jr", "sr"):
        return lowered.capitalize()
    if lowered in NAME_SUFFIXES:
        return lowered.upper()
    if lowered in INITIALS or (len(lowered) <= 3 and not re.search(r"[aeiouy]", lowered)):
        return lowered.upper()

    hyphen_parts = []
    for hyphen_part in lowered.split("-"):
        pieces = re.split(r"(['’])", hyphen_part)
        hyphen_parts.append("".join(_case_part(piece) for piece in pieces))
    return "-".join(hyphen_parts)


def build_player_name(tokens: list[str]) -> str | None:
    """
    Choose and format the name from surviving tokens.

    Takes the first token, any surname particles, the surname, and a
    trailing generational suffix when present.

    Returns:
        Proper-cased name, or None when no viable candidate remains
    """
    if not tokens:
        return None

    picked = [tokens[0]]
    index = 1
    while index < len(tokens) and tokens[index].lower() in NAME_PARTICLES:
        picked.append(tokens[index])
        index += 1
    if index < len(tokens):
        picked.append(tokens[index])
        index += 1
    if index < len(tokens) and tokens[index].lower() in NAME_SUFFIXES:
        picked.append(tokens[index])

    name = " ".join(proper_case(token) for token in picked)
    if not MIN_PLAYER_NAME_LENGTH <= len(name) <= MAX_PLAYER_NAME_LENGTH:
        return None
    return name


def extract_player_name(title: str, extra_stopwords: Iterable[str] = frozenset()) -> str | None:
    """
    Extract a proper-cased player name from a listing title.

    None means extraction failed, not that the card has no player.
    """
    name = build_player_name(candidate_name_tokens(title, extra_stopwords))
    if name is None:
        logger.debug("No player name in %r", title)
    return name


# ==========================================================================
# Repair of previously stored bad names
# ==========================================================================

# Leading words observed in stored names that were set/insert jargon
BAD_PREFIXES: tuple[str, ...] = (
    "panini", "topps", "score", "upper deck", "fleer", "donruss", "bowman",
    "leaf", "skybox", "pinnacle", "stadium club", "finest", "chrome",
    "sapphire", "prizm", "mosaic", "optic", "select", "update", "refractor",
    "rated", "retro", "choice", "wave", "scope", "pulsar", "genesis",
    "firestorm", "emergent", "essentials", "uptown", "logo", "lightboard",
    "planetary", "pursuit", "mars", "premium", "box", "set", "pitch",
    "prodigies", "image", "clear", "cut", "premier", "young", "guns", "star",
    "starquest", "tint", "pandora", "allies", "apex", "on", "iconic",
    "classic", "events", "wwe", "wwf", "formula", "f1", "pokemon", "graded",
)  # fmt: skip

# Trailing words observed in stored names that were insert or theme names
BAD_SUFFIXES: tuple[str, ...] = (
    "supernatural", "pitching", "catching", "storm chasers", "case hits",
    "case hit", "winning ticket", "focus", "stormfront", "helmet heroes",
    "color blast", "premium box set", "liv", "euro", "warming", "usa", "big",
    "club", "explosive", "vision", "design", "color", "new",
)  # fmt: skip

REPAIR_DENYLIST: frozenset[str] = frozenset(
    word for phrase in BAD_PREFIXES + BAD_SUFFIXES for word in phrase.split()
)

_BAD_PREFIX_PATTERN = re.compile(
    r"^(?:" + "|".join(re.escape(p).replace(r"\ ", r"\s+") for p in BAD_PREFIXES) + r")\s+",
    re.IGNORECASE,
)
_BAD_SUFFIX_PATTERN = re.compile(
    r"\s+(?:" + "|".join(re.escape(s).replace(r"\ ", r"[\s-]+") for s in BAD_SUFFIXES) + r")$",
    re.IGNORECASE,
)


def strip_bad_affixes(name: str) -> str:
    """Repeatedly drop known-bad leading and trailing words."""
    previous = None
    while previous != name:
        previous = name
        name = _BAD_PREFIX_PATTERN.sub("", name)
        name = _BAD_SUFFIX_PATTERN.sub("", name)
    return name.strip()


def repair_player_name(current: str | None, title: str) -> str | None:
    """
    Re-derive a player name, discarding known-bad outputs.

    Args:
        current: Name currently stored for the record
        title: The record's immutable listing title

    Returns:
        The repaired name, or None when neither re-extraction nor affix
        stripping yields a viable name
    """
    extracted = extract_player_name(title, extra_stopwords=REPAIR_DENYLIST)
    if extracted:
        return extracted

    if not current:
        return None
    stripped = strip_bad_affixes(current)
    if all(word.lower() in REPAIR_DENYLIST for word in stripped.split()):
        return None
    if MIN_PLAYER_NAME_LENGTH <= len(stripped) <= MAX_PLAYER_NAME_LENGTH:
        return stripped
    return None
