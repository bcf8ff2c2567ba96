"""
Set/brand extraction.

SET_RULES is an ordered table, most specific product first. The first
rule that matches the normalized title (with franchise names removed)
decides the label. Generic single-word rules ("prizm", "chrome") sit
after every product that could contain them, and carry explicit guards
where ordering alone is not enough.
"""

import logging
import re
from dataclasses import dataclass
from functools import cached_property

from scorecard.parsers.normalizer import collapse_whitespace, compile_rule, normalize_title
from scorecard.vocabulary.teams import strip_team_names

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SetRule:
    """
    One row of the set table.

    Attributes:
        expression: Pattern over the normalized title; spaces match any separator
        label: Canonical set label
        exclude: Pattern that disqualifies the rule when present anywhere
    """

    expression: str
    label: str
    exclude: str | None = None

    @cached_property
    def pattern(self) -> re.Pattern[str]:
        return compile_rule(self.expression)

    @cached_property
    def exclude_pattern(self) -> re.Pattern[str] | None:
        return compile_rule(self.exclude) if self.exclude else None

    def matches(self, working: str) -> bool:
        if not self.pattern.search(working):
            return False
        return self.exclude_pattern is None or not self.exclude_pattern.search(working)


SET_RULES: tuple[SetRule, ...] = (
    # ==========================================================================
    # Panini Prizm family
    # ==========================================================================
    SetRule(r"(?:panini )?prizm monopoly wnba", "Panini Prizm Monopoly WNBA"),
    SetRule(r"(?:panini )?prizm monopoly", "Panini Prizm Monopoly"),
    SetRule(r"(?:panini )?prizm draft picks", "Panini Prizm Draft Picks"),
    SetRule(r"(?:panini )?prizm wnba", "Panini Prizm WNBA"),
    SetRule(r"(?:panini )?prizm world cup", "Panini Prizm World Cup"),
    SetRule(r"(?:panini )?prizm premier league", "Panini Prizm Premier League"),
    SetRule(r"panini prizm", "Panini Prizm"),
    # ==========================================================================
    # Panini high end and named products
    # ==========================================================================
    SetRule(r"(?:panini )?national treasures", "Panini National Treasures"),
    SetRule(r"(?:panini )?flawless", "Panini Flawless"),
    SetRule(r"(?:panini )?immaculate(?: collection)?", "Panini Immaculate"),
    SetRule(r"(?:panini )?impeccable", "Panini Impeccable"),
    SetRule(r"(?:panini )?eminence", "Panini Eminence"),
    SetRule(r"(?:panini )?contenders optic", "Panini Contenders Optic"),
    SetRule(r"(?:panini )?contenders draft picks", "Panini Contenders Draft Picks"),
    SetRule(r"(?:panini )?contenders", "Panini Contenders"),
    SetRule(r"(?:panini )?donruss optic", "Donruss Optic"),
    SetRule(r"(?:panini )?donruss elite", "Donruss Elite"),
    SetRule(r"(?:panini )?select", "Panini Select"),
    SetRule(r"(?:panini )?mosaic", "Panini Mosaic"),
    SetRule(r"(?:panini )?spectra", "Panini Spectra"),
    SetRule(r"(?:panini )?obsidian", "Panini Obsidian"),
    SetRule(r"(?:panini )?chronicles", "Panini Chronicles"),
    SetRule(r"(?:panini )?crown royale", "Panini Crown Royale"),
    SetRule(r"(?:panini )?court kings", "Panini Court Kings"),
    SetRule(r"(?:panini )?certified", "Panini Certified", exclude=r"certified auto(?:graph)?"),
    SetRule(r"(?:panini )?absolute", "Panini Absolute"),
    SetRule(r"(?:panini )?illusions", "Panini Illusions"),
    SetRule(r"(?:panini )?prestige", "Panini Prestige"),
    SetRule(r"(?:panini )?revolution", "Panini Revolution"),
    SetRule(r"(?:panini )?origins", "Panini Origins"),
    SetRule(r"(?:panini )?luminance", "Panini Luminance"),
    SetRule(r"(?:panini )?zenith", "Panini Zenith"),
    SetRule(r"(?:panini )?(?:nba )?hoops", "Panini Hoops"),
    SetRule(r"panini phoenix", "Panini Phoenix"),
    SetRule(r"panini instant", "Panini Instant"),
    SetRule(r"panini black", "Panini Black"),
    SetRule(r"optic", "Donruss Optic"),
    SetRule(r"(?:panini )?donruss", "Donruss"),
    # Bare "prizm" only after every product whose parallels are named "... Prizm"
    SetRule(r"prizm", "Panini Prizm"),
    SetRule(r"(?:panini )?score", "Score"),
    SetRule(r"panini", "Panini"),
    # ==========================================================================
    # Bowman
    # ==========================================================================
    SetRule(r"bowman chrome draft|bowman draft chrome", "Bowman Chrome Draft"),
    SetRule(r"bowman chrome sapphire", "Bowman Chrome Sapphire"),
    SetRule(r"bowman chrome", "Bowman Chrome"),
    SetRule(r"bowmans best", "Bowman's Best"),
    SetRule(r"bowman sterling", "Bowman Sterling"),
    SetRule(r"bowman platinum", "Bowman Platinum"),
    SetRule(r"bowman university", "Bowman University"),
    SetRule(r"bowman draft", "Bowman Draft"),
    SetRule(r"bowman", "Bowman"),
    # ==========================================================================
    # Topps
    # ==========================================================================
    SetRule(
        r"(?:topps )?chrome uefa womens champions league",
        "Topps Chrome UEFA Women's Champions League",
    ),
    SetRule(r"(?:topps )?chrome uefa(?: champions league)?", "Topps Chrome UEFA"),
    SetRule(r"topps chrome update", "Topps Chrome Update"),
    SetRule(r"topps chrome sapphire", "Topps Chrome Sapphire"),
    SetRule(r"topps chrome black", "Topps Chrome Black"),
    SetRule(r"topps chrome", "Topps Chrome"),
    SetRule(r"(?:topps )?finest", "Topps Finest"),
    SetRule(r"(?:topps )?heritage", "Topps Heritage"),
    SetRule(r"(?:topps )?stadium club", "Topps Stadium Club"),
    SetRule(r"(?:topps )?allen (?:and )?ginter", "Topps Allen & Ginter"),
    SetRule(r"(?:topps )?gypsy queen", "Topps Gypsy Queen"),
    SetRule(r"(?:topps )?triple threads", "Topps Triple Threads"),
    SetRule(r"(?:topps )?museum collection", "Topps Museum Collection"),
    SetRule(r"(?:topps )?tier one", "Topps Tier One"),
    SetRule(r"(?:topps )?inception", "Topps Inception"),
    SetRule(r"(?:topps )?dynasty", "Topps Dynasty"),
    SetRule(r"topps tribute", "Topps Tribute"),
    SetRule(r"topps sterling", "Topps Sterling"),
    SetRule(r"topps archives", "Topps Archives"),
    SetRule(r"topps gold label", "Topps Gold Label"),
    SetRule(r"topps big league", "Topps Big League"),
    SetRule(r"topps opening day", "Topps Opening Day"),
    SetRule(r"topps fire", "Topps Fire"),
    SetRule(r"topps now", "Topps Now"),
    SetRule(r"topps update", "Topps Update"),
    SetRule(r"topps series (?:1|one)", "Topps Series 1"),
    SetRule(r"topps series (?:2|two)", "Topps Series 2"),
    # Bare "chrome" after every Bowman and Topps Chrome product
    SetRule(r"chrome", "Topps Chrome"),
    SetRule(r"topps", "Topps"),
    # ==========================================================================
    # Upper Deck, Fleer, Leaf and vintage brands
    # ==========================================================================
    SetRule(r"(?:upper deck )?sp authentic", "SP Authentic"),
    SetRule(r"(?:upper deck )?exquisite", "Upper Deck Exquisite"),
    SetRule(r"upper deck (?:the )?cup", "Upper Deck The Cup"),
    SetRule(r"upper deck ice", "Upper Deck Ice"),
    SetRule(r"upper deck artifacts", "Upper Deck Artifacts"),
    SetRule(r"o pee chee platinum|opc platinum", "O-Pee-Chee Platinum"),
    SetRule(r"o pee chee|opc", "O-Pee-Chee"),
    SetRule(r"upper deck|ud", "Upper Deck"),
    SetRule(r"(?:fleer )?ultra", "Fleer Ultra", exclude=r"ultra violet"),
    SetRule(r"(?:fleer )?metal universe", "Metal Universe"),
    SetRule(r"skybox", "Skybox"),
    SetRule(r"fleer", "Fleer"),
    SetRule(r"leaf metal", "Leaf Metal"),
    SetRule(r"leaf", "Leaf"),
    SetRule(r"pinnacle", "Pinnacle"),
)

# Bare product matches upgraded when "chrome" appears elsewhere in the title
CHROME_PROMOTIONS: dict[str, str] = {
    "Bowman": "Bowman Chrome",
    "Bowman Draft": "Bowman Chrome Draft",
}
CHROME_PATTERN = re.compile(r"(?<![\w'])chrome(?![\w'])")

# Label tokens that are also common names; they never mark a token as jargon
NAME_COLLISIONS: frozenset[str] = frozenset({"allen"})


def _label_tokens(label: str) -> set[str]:
    return {token for token in re.split(r"[\s&'-]+", label.lower()) if token}


SET_LABELS: frozenset[str] = frozenset(rule.label for rule in SET_RULES)

SET_VOCABULARY: frozenset[str] = (
    frozenset().union(*(_label_tokens(label) for label in SET_LABELS))
    | {"bowmans", "ud", "opc", "pee", "chee"}
) - NAME_COLLISIONS


def set_working_text(title: str) -> str:
    """Normalized title with unambiguous franchise names removed."""
    return collapse_whitespace(strip_team_names(normalize_title(title)))


def extract_card_set(title: str) -> str | None:
    """
    Extract the canonical set/brand label from a listing title.

    Args:
        title: Raw listing title

    Returns:
        Set label, or None if no rule matches
    """
    working = set_working_text(title)
    if not working:
        return None

    for rule in SET_RULES:
        if rule.matches(working):
            promoted = CHROME_PROMOTIONS.get(rule.label)
            if promoted and CHROME_PATTERN.search(working):
                return promoted
            return rule.label

    logger.debug("No card set in %r", title)
    return None
