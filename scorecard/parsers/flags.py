"""Rookie and autograph indicators. Both flags are independent."""

import re

from scorecard.parsers.normalizer import normalize_title

ROOKIE_PATTERN = re.compile(
    r"(?<![\w'])(?:rookies?|rc|yg|young\s+guns|(?:1st|first)\s+bowman|debut)(?![\w'])"
)

AUTOGRAPH_PATTERN = re.compile(
    r"(?<![\w'])(?:"
    r"(?:on[\s-]+card|sticker)\s+auto(?:graph)?"
    r"|autos?|autographs?|autographed|signed"
    r")(?![\w'])"
)


def is_rookie(title: str) -> bool:
    return ROOKIE_PATTERN.search(normalize_title(title)) is not None


def is_autograph(title: str) -> bool:
    return AUTOGRAPH_PATTERN.search(normalize_title(title)) is not None
