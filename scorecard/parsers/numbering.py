"""
Card-number and print-run extraction.

Card numbers come from an ordered cascade of patterns over the raw title,
most explicit first. A candidate sitting right after a grading word is a
grade or population count, not a card number, and a bare number directly
followed by "/N" is the numerator of a print run.
"""

import re

# Words that turn the following number into a grade or population count
GRADING_NEIGHBORS: frozenset[str] = frozenset(
    {"psa", "pop", "gem", "mint", "mt", "bgs", "sgc", "cgc", "grade", "graded"}
)

# With an explicit "#" only a grader or population label disqualifies
# ("PSA #10", "Pop #3"); "Gem Mint #339" is still a card number
HASH_GRADING_NEIGHBORS: frozenset[str] = frozenset({"psa", "pop", "bgs", "sgc", "cgc"})

# Words that make the following bare number part of a set name ("Series 1")
SET_NUMBER_NEIGHBORS: frozenset[str] = frozenset(
    {"series", "set", "vol", "volume", "chapter", "part"}
)

# Ordered: explicit "#" forms, manufacturer codes, then bare digits
CARD_NUMBER_PATTERNS: tuple[tuple[re.Pattern[str], frozenset[str]], ...] = (
    # #123
    (re.compile(r"#\s*(\d+)(?![\w])"), HASH_GRADING_NEIGHBORS),
    # #BDC-12, #RA-CS, #TC12
    (
        re.compile(r"#\s*([A-Za-z]+-?[A-Za-z]*\d[\dA-Za-z-]*|[A-Za-z]+-[A-Za-z\d]+)(?![\w])"),
        HASH_GRADING_NEIGHBORS,
    ),
    # #12a
    (re.compile(r"#\s*(\d+[A-Za-z]+)(?![\w])"), HASH_GRADING_NEIGHBORS),
    # Bowman codes without "#"
    (re.compile(r"\b(BD[A-Z]?-?\d+|BCP-?\d+|BS\d+)\b", re.IGNORECASE), GRADING_NEIGHBORS),
    # Bare 1-3 digit number, not part of a decimal, price, range or print run
    (
        re.compile(r"(?<![\w#/.$-])(\d{1,3})(?![\w.%/-])(?!\s*/\s*\d)"),
        GRADING_NEIGHBORS | SET_NUMBER_NEIGHBORS,
    ),
)

PRINT_RUN_PATTERN = re.compile(r"/\s*(\d+)(?!\d)")

_PREVIOUS_WORD = re.compile(r"([A-Za-z]+)[^\w]*$")


def _previous_word(text: str, index: int) -> str:
    match = _PREVIOUS_WORD.search(text[:index])
    return match.group(1).lower() if match else ""


def extract_card_number(title: str) -> str | None:
    """
    Extract the card number from a listing title.

    Args:
        title: Raw listing title

    Returns:
        "#"-prefixed card number, or None
    """
    if not title:
        return None

    for pattern, neighbors in CARD_NUMBER_PATTERNS:
        for match in pattern.finditer(title):
            if _previous_word(title, match.start()) in neighbors:
                continue
            return f"#{match.group(1).upper()}"

    return None


def extract_print_run(title: str) -> str | None:
    """
    Extract the print run ("/99") from a listing title.

    Returns:
        "/"-prefixed print run, or None
    """
    if not title:
        return None

    match = PRINT_RUN_PATTERN.search(title)
    return f"/{match.group(1)}" if match else None
