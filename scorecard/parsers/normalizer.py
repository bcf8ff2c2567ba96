"""
Token normalizer for listing titles.

Every extractor that matches vocabulary works on the normalized form:
lower-cased, grading noise removed, punctuation other than '#', '/' and
'-' dropped, whitespace collapsed.
"""

import re

from scorecard.vocabulary.jargon import GRADING_PATTERN

# Everything except word characters, whitespace and the three kept marks
PUNCTUATION_PATTERN = re.compile(r"[^\w\s#/\-]")

# Apostrophes are deleted rather than spaced ("bowman's" -> "bowmans")
APOSTROPHE_PATTERN = re.compile(r"['‘’`]")

WHITESPACE_PATTERN = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def normalize_title(title: str | None) -> str:
    """
    Normalize a listing title for vocabulary matching.

    Args:
        title: Raw listing title (may be None)

    Returns:
        Normalized title, or "" for empty input
    """
    if not title:
        return ""

    text = title.lower()
    text = GRADING_PATTERN.sub(" ", text)
    text = APOSTROPHE_PATTERN.sub("", text)
    text = PUNCTUATION_PATTERN.sub(" ", text)
    # Underscore is a word character but never meaningful in a title
    text = text.replace("_", " ")
    return collapse_whitespace(text)


# Words in a rule may be joined by plain space or a dash ("bowman - chrome")
WORD_SEPARATOR = r"(?:\s*-\s*|\s+)"


def compile_rule(expression: str) -> re.Pattern[str]:
    """
    Compile a rule expression written against the normalized title.

    Spaces in the expression match any run of whitespace or a spaced dash;
    the whole expression must sit on word boundaries.
    """
    body = expression.replace(" ", WORD_SEPARATOR)
    return re.compile(rf"(?<![\w'])(?:{body})(?![\w'])")
