"""
Parallel / card-type extraction.

Parallel names overlap with colors, set names and plain English words
("Green", "Wave", "Chrome"), so matching is driven by a priority-tiered
rule table evaluated in a single pass:

    Tier 2  fully qualified compound parallels unique to one product line.
            The first tier-2 rule in table order that matches wins outright.
    Tier 1  color pairs ("green/yellow" -> "Green and Yellow").
    Tier 0  single generic terms (colors, "Refractor", "Holo", ...).

Without a tier-2 hit, tier-0/1 matches are accepted highest tier and
longest span first, skipping any span that overlaps one already taken,
then joined in title order. Tokens already present in the card set are
removed from each matched label, so card set and card type never repeat a
word; a label left as a fragment ("Cracked" of "Cracked Ice") is dropped.
"""

import logging
import re
from dataclasses import dataclass
from functools import cached_property

from scorecard.models.card import BASE_CARD_TYPE
from scorecard.parsers.normalizer import collapse_whitespace, compile_rule, normalize_title
from scorecard.vocabulary.teams import CITY_PATTERN, strip_team_names

logger = logging.getLogger(__name__)

COMPOUND = 2
COLOR_PAIR = 1
GENERIC = 0

COLORS = (
    "red",
    "blue",
    "green",
    "orange",
    "purple",
    "pink",
    "gold",
    "silver",
    "black",
    "white",
    "yellow",
    "teal",
    "aqua",
    "bronze",
    "ruby",
    "emerald",
    "platinum",
)
COLOR_ALTERNATION = "|".join(COLORS)

# Connectors kept in labels but never treated as repeatable tokens
CONNECTORS: frozenset[str] = frozenset({"and", "&"})


@dataclass(frozen=True)
class ParallelRule:
    """
    One row of the parallel table.

    label may carry "{0}", "{1}" placeholders filled from the pattern's
    capture groups, title-cased.
    """

    expression: str
    label: str
    tier: int = GENERIC

    @cached_property
    def pattern(self) -> re.Pattern[str]:
        return compile_rule(self.expression)

    def render(self, match: re.Match[str]) -> str:
        if "{" not in self.label:
            return self.label
        return self.label.format(*(group.title() for group in match.groups()))


@dataclass(frozen=True, slots=True)
class ParallelMatch:
    start: int
    end: int
    tier: int
    label: str
    rule_index: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def overlaps(self, other: "ParallelMatch") -> bool:
        return self.start < other.end and other.start < self.end


PARALLEL_RULES: tuple[ParallelRule, ...] = (
    # ==========================================================================
    # Tier 2: product-specific compounds
    # ==========================================================================
    ParallelRule(
        r"black (?:and )?green die-?cut prizm",
        "Black and Green Die-Cut Prizm",
        COMPOUND,
    ),
    ParallelRule(r"disco red prizm", "Disco Red Prizm", COMPOUND),
    ParallelRule(r"choice red fusion(?: mosaic)?", "Choice Red Fusion Mosaic", COMPOUND),
    ParallelRule(r"fast break silver(?: mosaic)?", "Fast Break Silver Mosaic", COMPOUND),
    ParallelRule(r"neon green pulsar(?: prizm)?", "Neon Green Pulsar", COMPOUND),
    ParallelRule(r"gold vinyl(?: prizm)?", "Gold Vinyl", COMPOUND),
    ParallelRule(r"black finite(?: prizm)?", "Black Finite", COMPOUND),
    ParallelRule(r"gold shimmer(?: prizm)?", "Gold Shimmer", COMPOUND),
    ParallelRule(r"white sparkle(?: prizm)?", "White Sparkle", COMPOUND),
    ParallelRule(r"tiger stripe(?: prizm)?", "Tiger Stripe", COMPOUND),
    ParallelRule(r"super ?fractor", "Superfractor", COMPOUND),
    ParallelRule(r"color blast", "Color Blast", COMPOUND),
    ParallelRule(r"kaboom", "Kaboom", COMPOUND),
    ParallelRule(r"downtown", "Downtown", COMPOUND),
    ParallelRule(r"rated rookies?", "Rated Rookies", COMPOUND),
    # ==========================================================================
    # Tier 1: color pairs
    # ==========================================================================
    ParallelRule(r"red white (?:and )?blue", "Red White & Blue", COLOR_PAIR),
    ParallelRule(
        rf"({COLOR_ALTERNATION})\s*/\s*({COLOR_ALTERNATION})",
        "{0} and {1}",
        COLOR_PAIR,
    ),
    ParallelRule(
        rf"({COLOR_ALTERNATION}) and ({COLOR_ALTERNATION})",
        "{0} and {1}",
        COLOR_PAIR,
    ),
    ParallelRule(r"neon (green|orange|pink)", "Neon {0}", COLOR_PAIR),
    ParallelRule(r"(sky|light|dark) blue", "{0} Blue", COLOR_PAIR),
    # ==========================================================================
    # Tier 0: generic terms
    # ==========================================================================
    *(ParallelRule(color, color.title()) for color in COLORS),
    ParallelRule(r"refractors?", "Refractor"),
    ParallelRule(r"x-?fractor", "X-Fractor"),
    ParallelRule(r"prizms?", "Prizm"),
    ParallelRule(r"chrome", "Chrome"),
    ParallelRule(r"holo", "Holo"),
    ParallelRule(r"wave", "Wave"),
    ParallelRule(r"scope", "Scope"),
    ParallelRule(r"shock", "Shock"),
    ParallelRule(r"mojo", "Mojo"),
    ParallelRule(r"sapphire", "Sapphire"),
    ParallelRule(r"cracked ice", "Cracked Ice"),
    ParallelRule(r"stained glass", "Stained Glass"),
    ParallelRule(r"lava", "Lava"),
    ParallelRule(r"tectonic", "Tectonic"),
    ParallelRule(r"reactive", "Reactive"),
    ParallelRule(r"fluorescent", "Fluorescent"),
    ParallelRule(r"swirl", "Swirl"),
    ParallelRule(r"fusion", "Fusion"),
    ParallelRule(r"nebula", "Nebula"),
    ParallelRule(r"choice", "Choice"),
    ParallelRule(r"fast break", "Fast Break"),
    ParallelRule(r"genesis", "Genesis"),
    ParallelRule(r"disco", "Disco"),
    ParallelRule(r"snakeskin", "Snakeskin"),
    ParallelRule(r"zebra", "Zebra"),
    ParallelRule(r"elephant", "Elephant"),
    ParallelRule(r"leopard", "Leopard"),
    ParallelRule(r"peacock", "Peacock"),
    ParallelRule(r"dragon", "Dragon"),
    ParallelRule(r"camo", "Camo"),
    ParallelRule(r"die-?cut", "Die-Cut"),
    ParallelRule(r"velocity", "Velocity"),
    ParallelRule(r"hyper", "Hyper"),
    ParallelRule(r"laser", "Laser"),
    ParallelRule(r"lazer", "Lazer"),
    ParallelRule(r"pulsar", "Pulsar"),
    ParallelRule(r"ice", "Ice"),
    ParallelRule(r"finite", "Finite"),
)

# Applied whole-word to the joined, title-cased label
REWRITES: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"(?<![\w&]){source}(?![\w&])"), target)
    for source, target in (
        (r"Blue Red White", "Red White & Blue"),
        (r"Red White (?:and |& )?Blue", "Red White & Blue"),
        (r"White Red Blue", "Red White & Blue"),
        (r"Rookies", "Rookie"),
        (r"Refractors", "Refractor"),
        (r"Prizms", "Prizm"),
        (r"Xfractor", "X-Fractor"),
    )
)

# Parallel words that are also common given names
NAME_COLLISIONS: frozenset[str] = frozenset({"tiger"})


def _label_tokens(label: str) -> set[str]:
    return {
        token
        for token in re.split(r"[\s/&-]+", label.lower())
        if token and token not in CONNECTORS and "{" not in token
    }


PARALLEL_VOCABULARY: frozenset[str] = (
    frozenset().union(*(_label_tokens(rule.label) for rule in PARALLEL_RULES))
    | frozenset(COLORS)
    | {"refractors", "prizms", "xfractor", "neon", "sky", "light", "dark", "superfractor"}
) - NAME_COLLISIONS


def type_working_text(title: str) -> str:
    """Normalized title with unambiguous franchise and city names removed."""
    text = CITY_PATTERN.sub(" ", normalize_title(title))
    return collapse_whitespace(strip_team_names(text))


def find_parallel_matches(working: str) -> list[ParallelMatch]:
    """Every rule match in the working text, in table order."""
    matches: list[ParallelMatch] = []
    for index, rule in enumerate(PARALLEL_RULES):
        for match in rule.pattern.finditer(working):
            matches.append(
                ParallelMatch(
                    start=match.start(),
                    end=match.end(),
                    tier=rule.tier,
                    label=rule.render(match),
                    rule_index=index,
                )
            )
    return matches


def select_matches(matches: list[ParallelMatch]) -> list[ParallelMatch]:
    """
    Reduce raw matches to the ones that make up the label, in title order.

    A tier-2 compound wins outright; otherwise non-overlapping matches are
    accepted highest tier and longest span first.
    """
    compounds = [m for m in matches if m.tier >= COMPOUND]
    if compounds:
        return [min(compounds, key=lambda m: (m.rule_index, m.start))]

    accepted: list[ParallelMatch] = []
    for candidate in sorted(matches, key=lambda m: (-m.tier, -m.length, m.start)):
        if not any(candidate.overlaps(kept) for kept in accepted):
            accepted.append(candidate)

    accepted.sort(key=lambda m: m.start)
    return accepted


def resolve_matches(matches: list[ParallelMatch]) -> str:
    """
    Reduce raw matches to a single label per the tier rules.

    Returns:
        The joined label, or "" when nothing matched
    """
    return " ".join(m.label for m in select_matches(matches))


def dedupe_words(text: str) -> str:
    """Drop repeated word pairs, then any word already seen."""
    words = text.split()

    # Repeated adjacent pairs: "red wave red wave" -> "red wave"
    index = 0
    while index + 3 < len(words):
        first, second = words[index : index + 2], words[index + 2 : index + 4]
        if [w.lower() for w in first] == [w.lower() for w in second]:
            del words[index + 2 : index + 4]
        else:
            index += 1

    seen: set[str] = set()
    result: list[str] = []
    for word in words:
        key = word.lower()
        if key in seen and key not in CONNECTORS:
            continue
        seen.add(key)
        result.append(word)
    return " ".join(result)


def title_case(text: str) -> str:
    """Capitalize each word and hyphen part; connectors stay lower-case."""
    words = []
    for word in text.split():
        if word.lower() in CONNECTORS:
            words.append(word.lower())
        else:
            words.append("-".join(part[:1].upper() + part[1:] for part in word.split("-")))
    return " ".join(words)


def apply_rewrites(label: str) -> str:
    for pattern, replacement in REWRITES:
        label = pattern.sub(replacement, label)
    return label


def suppress_set_tokens(label: str, card_set: str | None) -> str:
    """Remove every word of label that already appears in card_set."""
    if not card_set:
        return label
    set_tokens = {token.lower() for token in re.split(r"[\s/-]+", card_set) if token}
    kept = [
        word
        for word in label.split()
        if word.lower() in CONNECTORS or word.lower() not in set_tokens
    ]
    # A connector left dangling at either end carries nothing
    while kept and kept[0].lower() in CONNECTORS:
        kept.pop(0)
    while kept and kept[-1].lower() in CONNECTORS:
        kept.pop()
    return " ".join(kept)


def is_parallel_label(text: str) -> bool:
    """True when every word of text is covered by some parallel rule."""
    working = text.lower()
    for match in select_matches(find_parallel_matches(working)):
        working = working[: match.start] + " " * match.length + working[match.end :]
    return all(word in CONNECTORS for word in working.split())


def suppress_set_unit(unit: str, card_set: str | None) -> str:
    """
    Remove card-set words from one matched parallel label.

    A label that loses words keeps the rest only when the rest still reads
    as parallels; "Cracked Ice" under an "Ice" set is dropped rather than
    cut down to "Cracked".
    """
    kept = suppress_set_tokens(unit, card_set)
    if kept == unit or is_parallel_label(kept):
        return kept
    return ""


def extract_card_type(title: str, card_set: str | None = None) -> str:
    """
    Extract the parallel/variant label for a listing.

    Args:
        title: Raw listing title
        card_set: Label already produced by the set extractor

    Returns:
        Card-type label; "Base" when nothing survives
    """
    working = type_working_text(title)
    if not working:
        return BASE_CARD_TYPE

    units = [m.label for m in select_matches(find_parallel_matches(working))]
    label = " ".join(suppress_set_unit(unit, card_set) for unit in units)
    label = apply_rewrites(title_case(dedupe_words(label)))
    label = collapse_whitespace(suppress_set_tokens(label, card_set))

    if not label:
        logger.debug("No parallel in %r", title)
        return BASE_CARD_TYPE
    return label
