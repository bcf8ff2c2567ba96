"""
Card-listing jargon that is never part of a player name.

Grading noise, listing descriptors and multi-word hobby phrases. Brand,
set and parallel vocabularies live with their extractors and are merged
with these terms by the player-name extractor.
"""

import re

from scorecard.vocabulary.teams import phrase_pattern

# Grader slabs, condition grades, population and certification numbers
GRADING_PATTERN = re.compile(
    r"""
    \b(?:psa|bgs|sgc|cgc|csg|hga|beckett)\s*\#?\s*\d{1,2}(?:\.\d)?(?!\d)
    | \bgem\s*-?\s*(?:mt|mint)\b(?:\s*\d{1,2}(?:\.\d)?(?!\d))?
    | \b(?:nm|near\s+mint)\s*-?\s*mt\b(?:\s*\d{1,2}(?:\.\d)?(?!\d))?
    | \bmint\s*\d{1,2}(?:\.\d)?(?!\d)
    | \bcert(?:ification)?\s*(?:\#|no\.?|number)?\s*\d+
    | \bpop(?:ulation)?\s*\d+
    """,
    re.IGNORECASE | re.VERBOSE,
)

GRADER_NAMES: frozenset[str] = frozenset(
    {"psa", "bgs", "sgc", "cgc", "csg", "hga", "beckett", "graded", "gem", "mint", "mt", "nm"}
)

# Phrases removed as a unit before name tokens are considered
JARGON_PHRASES: frozenset[str] = frozenset(
    {
        "case hit",
        "first bowman",
        "1st bowman",
        "game used",
        "game worn",
        "hall of fame",
        "on card",
        "rated rookie",
        "rookie card",
        "short print",
        "sticker auto",
        "true rookie",
        "young guns",
    }
)

DESCRIPTOR_TERMS: frozenset[str] = frozenset(
    {
        "1st",
        "and",
        "au",
        "auto",
        "autograph",
        "autographed",
        "autographs",
        "base",
        "blaster",
        "box",
        "card",
        "cards",
        "case",
        "debut",
        "draft",
        "edition",
        "first",
        "hit",
        "hobby",
        "hof",
        "insert",
        "inserts",
        "invest",
        "jersey",
        "lot",
        "mem",
        "memorabilia",
        "mtg",
        "nba",
        "ncaa",
        "nfl",
        "nhl",
        "mlb",
        "numbered",
        "of",
        "pack",
        "parallel",
        "patch",
        "pick",
        "pokemon",
        "pokémon",
        "pop",
        "prospect",
        "prospects",
        "rc",
        "relic",
        "retail",
        "rookie",
        "rookies",
        "serial",
        "set",
        "signed",
        "sp",
        "ssp",
        "tcg",
        "the",
        "ufc",
        "variation",
        "var",
        "wnba",
        "yg",
        "yugioh",
    }
) | GRADER_NAMES

JARGON_PHRASE_PATTERN = phrase_pattern(JARGON_PHRASES)

# Generational suffixes kept on a name ("Ken Griffey Jr")
NAME_SUFFIXES: frozenset[str] = frozenset({"jr", "sr", "ii", "iii", "iv"})
