"""
Franchise and city vocabulary.

Team nicknames collide with set, parallel and player tokens ("Red Sox" holds
a color, "Texans" trails a player name). Extractors strip these phrases from
a working copy of the title before matching.
"""

import re

FOOTBALL_TEAMS: frozenset[str] = frozenset(
    {
        "49ers",
        "bears",
        "bengals",
        "bills",
        "broncos",
        "browns",
        "buccaneers",
        "bucs",
        "cardinals",
        "chargers",
        "chiefs",
        "colts",
        "commanders",
        "cowboys",
        "dolphins",
        "eagles",
        "falcons",
        "giants",
        "jaguars",
        "jets",
        "lions",
        "packers",
        "panthers",
        "patriots",
        "raiders",
        "rams",
        "ravens",
        "redskins",
        "saints",
        "seahawks",
        "steelers",
        "texans",
        "titans",
        "vikings",
    }
)

BASKETBALL_TEAMS: frozenset[str] = frozenset(
    {
        "76ers",
        "sixers",
        "blazers",
        "bucks",
        "bulls",
        "cavaliers",
        "cavs",
        "celtics",
        "clippers",
        "grizzlies",
        "hawks",
        "heat",
        "hornets",
        "jazz",
        "kings",
        "knicks",
        "lakers",
        "magic",
        "mavericks",
        "mavs",
        "nets",
        "nuggets",
        "pacers",
        "pelicans",
        "pistons",
        "raptors",
        "rockets",
        "spurs",
        "suns",
        "supersonics",
        "thunder",
        "timberwolves",
        "trail blazers",
        "warriors",
        "wizards",
        # WNBA
        "aces",
        "dream",
        "fever",
        "liberty",
        "lynx",
        "mercury",
        "mystics",
        "sky",
        "sparks",
        "storm",
        "sun",
        "valkyries",
        "wings",
    }
)

BASEBALL_TEAMS: frozenset[str] = frozenset(
    {
        "angels",
        "astros",
        "athletics",
        "blue jays",
        "braves",
        "brewers",
        "cardinals",
        "cubs",
        "diamondbacks",
        "dbacks",
        "dodgers",
        "expos",
        "giants",
        "guardians",
        "indians",
        "mariners",
        "marlins",
        "mets",
        "nationals",
        "orioles",
        "padres",
        "phillies",
        "pirates",
        "rangers",
        "rays",
        "red sox",
        "reds",
        "rockies",
        "royals",
        "tigers",
        "twins",
        "white sox",
        "yankees",
    }
)

HOCKEY_TEAMS: frozenset[str] = frozenset(
    {
        "avalanche",
        "blackhawks",
        "blue jackets",
        "blues",
        "bruins",
        "canadiens",
        "canucks",
        "capitals",
        "coyotes",
        "devils",
        "ducks",
        "flames",
        "flyers",
        "golden knights",
        "hurricanes",
        "islanders",
        "kraken",
        "lightning",
        "maple leafs",
        "oilers",
        "penguins",
        "predators",
        "red wings",
        "sabres",
        "senators",
        "sharks",
        "stars",
        "wild",
    }
)

SOCCER_CLUBS: frozenset[str] = frozenset(
    {
        "arsenal",
        "barcelona",
        "bayern",
        "chelsea",
        "dortmund",
        "inter miami",
        "juventus",
        "liverpool",
        "manchester city",
        "manchester united",
        "psg",
        "real madrid",
    }
)

# Nicknames that double as set or parallel names ("Liberty" parallel,
# "Storm Chasers" insert, "Fire" set). They count as team names when
# filtering player tokens but are never stripped before set/parallel matching.
AMBIGUOUS_TEAM_NAMES: frozenset[str] = frozenset(
    {
        "fever",
        "fire",
        "heat",
        "liberty",
        "lightning",
        "magic",
        "sky",
        "sparks",
        "stars",
        "storm",
        "sun",
        "thunder",
        "wild",
        "wings",
    }
)

CITY_NAMES: frozenset[str] = frozenset(
    {
        "arizona",
        "atlanta",
        "baltimore",
        "boston",
        "brooklyn",
        "buffalo",
        "chicago",
        "cincinnati",
        "cleveland",
        "dallas",
        "denver",
        "detroit",
        "green bay",
        "houston",
        "indianapolis",
        "kansas city",
        "las vegas",
        "los angeles",
        "memphis",
        "miami",
        "milwaukee",
        "minnesota",
        "new england",
        "new orleans",
        "new york",
        "oakland",
        "oklahoma city",
        "orlando",
        "philadelphia",
        "pittsburgh",
        "sacramento",
        "san antonio",
        "san diego",
        "san francisco",
        "seattle",
        "tampa bay",
        "toronto",
    }
)

TEAMS_BY_SPORT: dict[str, frozenset[str]] = {
    "Football": FOOTBALL_TEAMS,
    "Basketball": BASKETBALL_TEAMS,
    "Baseball": BASEBALL_TEAMS,
    "Hockey": HOCKEY_TEAMS,
    "Soccer": SOCCER_CLUBS,
}

ALL_TEAM_NAMES: frozenset[str] = frozenset().union(*TEAMS_BY_SPORT.values())

STRIPPABLE_TEAM_NAMES: frozenset[str] = ALL_TEAM_NAMES - AMBIGUOUS_TEAM_NAMES


def phrase_pattern(phrases: frozenset[str] | set[str]) -> re.Pattern[str]:
    """
    Compile a case-insensitive whole-word alternation.

    Longer phrases are tried first so "red sox" wins over "reds".
    """
    ordered = sorted(phrases, key=lambda p: (-len(p), p))
    alternation = "|".join(re.escape(p).replace(r"\ ", r"\s+") for p in ordered)
    return re.compile(rf"(?<![\w'])(?:{alternation})(?![\w'])", re.IGNORECASE)


STRIPPABLE_TEAM_PATTERN = phrase_pattern(STRIPPABLE_TEAM_NAMES)
ALL_TEAM_PATTERN = phrase_pattern(ALL_TEAM_NAMES)
CITY_PATTERN = phrase_pattern(CITY_NAMES)


def strip_team_names(text: str, include_ambiguous: bool = False) -> str:
    """
    Remove franchise names from text, collapsing leftover whitespace.

    Args:
        text: Title or fragment to clean
        include_ambiguous: Also strip nicknames that double as card jargon

    Returns:
        Text with team names removed
    """
    pattern = ALL_TEAM_PATTERN if include_ambiguous else STRIPPABLE_TEAM_PATTERN
    return re.sub(r"\s+", " ", pattern.sub(" ", text)).strip()
