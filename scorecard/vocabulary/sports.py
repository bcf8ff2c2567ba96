"""
Sport indicator tables.

Each table lists the tokens that point at one sport: franchise names,
positions, well-known players and plain sport/league words. Tables are
checked in SPORT_INDICATORS order and the first table with any hit wins,
so ambiguous franchise names ("giants", "cardinals") resolve toward the
earlier sport.
"""

import re
from dataclasses import dataclass, field
from functools import cached_property

from scorecard.vocabulary.teams import (
    BASEBALL_TEAMS,
    BASKETBALL_TEAMS,
    FOOTBALL_TEAMS,
    HOCKEY_TEAMS,
    SOCCER_CLUBS,
    phrase_pattern,
)

# Words removed from set labels and summary titles ("Topps Football" -> "Topps")
SPORT_NAMES: frozenset[str] = frozenset(
    {
        "baseball",
        "basketball",
        "boxing",
        "football",
        "golf",
        "hockey",
        "mma",
        "soccer",
        "tennis",
        "wrestling",
    }
)


@dataclass(frozen=True)
class SportIndicators:
    """Keyword table for one sport."""

    sport: str
    teams: frozenset[str] = field(default_factory=frozenset)
    positions: frozenset[str] = field(default_factory=frozenset)
    players: frozenset[str] = field(default_factory=frozenset)
    terms: frozenset[str] = field(default_factory=frozenset)

    @cached_property
    def pattern(self) -> re.Pattern[str] | None:
        phrases = self.teams | self.positions | self.players | self.terms
        return phrase_pattern(phrases) if phrases else None

    def matches(self, normalized_title: str) -> bool:
        """True if any indicator occurs as a whole word or phrase."""
        return self.pattern is not None and self.pattern.search(normalized_title) is not None


WRESTLING = SportIndicators(
    sport="Wrestling",
    players=frozenset(
        {
            "cody rhodes",
            "hulk hogan",
            "john cena",
            "randy orton",
            "rhea ripley",
            "ric flair",
            "roman reigns",
            "stone cold",
            "the rock",
            "undertaker",
        }
    ),
    terms=frozenset({"aew", "wrestlemania", "wrestling", "wwe", "wwf"}),
)

POKEMON = SportIndicators(
    sport="Pokemon",
    players=frozenset(
        {
            "articuno",
            "blastoise",
            "charizard",
            "eevee",
            "gengar",
            "lugia",
            "mewtwo",
            "moltres",
            "pikachu",
            "rayquaza",
            "umbreon",
            "venusaur",
            "zapdos",
        }
    ),
    terms=frozenset({"pokemon", "pokémon", "vmax", "vstar", "gx"}),
)

RACING = SportIndicators(
    sport="Racing",
    teams=frozenset({"ferrari", "mclaren", "red bull racing", "mercedes amg"}),
    players=frozenset(
        {
            "charles leclerc",
            "dale earnhardt",
            "jeff gordon",
            "lando norris",
            "lewis hamilton",
            "max verstappen",
            "oscar piastri",
        }
    ),
    terms=frozenset({"f1", "formula 1", "grand prix", "indycar", "nascar", "racing"}),
)

FOOTBALL = SportIndicators(
    sport="Football",
    teams=FOOTBALL_TEAMS,
    positions=frozenset(
        {
            "cornerback",
            "linebacker",
            "qb",
            "quarterback",
            "running back",
            "tight end",
            "wide receiver",
        }
    ),
    players=frozenset(
        {
            "aaron rodgers",
            "bijan robinson",
            "bo nix",
            "brock bowers",
            "brock purdy",
            "bryce young",
            "caleb williams",
            "cj stroud",
            "christian mccaffrey",
            "cooper kupp",
            "dak prescott",
            "davante adams",
            "drake maye",
            "jalen hurts",
            "jamarr chase",
            "jayden daniels",
            "jj mccarthy",
            "joe burrow",
            "josh allen",
            "justin herbert",
            "justin jefferson",
            "lamar jackson",
            "marvin harrison",
            "michael penix",
            "myles garrett",
            "patrick mahomes",
            "rashee rice",
            "rome odunze",
            "saquon barkley",
            "tom brady",
            "trevor lawrence",
            "tyreek hill",
        }
    ),
    terms=frozenset({"football", "nfl", "ncaa football"}),
)

BASKETBALL = SportIndicators(
    sport="Basketball",
    teams=BASKETBALL_TEAMS,
    positions=frozenset({"point guard", "power forward", "shooting guard", "small forward"}),
    players=frozenset(
        {
            "anthony edwards",
            "cade cunningham",
            "caitlin clark",
            "chet holmgren",
            "giannis",
            "ja morant",
            "joel embiid",
            "kevin durant",
            "lamelo ball",
            "lebron james",
            "luka doncic",
            "michael jordan",
            "nikola jokic",
            "paolo banchero",
            "sabrina ionescu",
            "scoot henderson",
            "stephen curry",
            "stephon castle",
            "victor wembanyama",
            "zion williamson",
        }
    ),
    terms=frozenset({"basketball", "nba", "ncaa basketball", "wnba"}),
)

BASEBALL = SportIndicators(
    sport="Baseball",
    teams=BASEBALL_TEAMS,
    positions=frozenset(
        {
            "catcher",
            "first base",
            "infielder",
            "outfielder",
            "pitcher",
            "second base",
            "shortstop",
            "third base",
        }
    ),
    players=frozenset(
        {
            "aaron judge",
            "adley rutschman",
            "bo bichette",
            "bryce harper",
            "corbin carroll",
            "elly de la cruz",
            "fernando tatis",
            "gunnar henderson",
            "jackson holliday",
            "juan soto",
            "julio rodriguez",
            "junior caminero",
            "mike trout",
            "paul skenes",
            "ronald acuna",
            "shohei ohtani",
            "vladimir guerrero",
            "wyatt langford",
            "yordan alvarez",
        }
    ),
    terms=frozenset({"baseball", "mlb", "1st bowman", "first bowman"}),
)

HOCKEY = SportIndicators(
    sport="Hockey",
    teams=HOCKEY_TEAMS,
    positions=frozenset({"defenseman", "goalie", "goaltender"}),
    players=frozenset(
        {
            "alex ovechkin",
            "auston matthews",
            "connor bedard",
            "connor mcdavid",
            "leon draisaitl",
            "nathan mackinnon",
            "sidney crosby",
            "wayne gretzky",
        }
    ),
    terms=frozenset({"hockey", "nhl", "young guns", "o-pee-chee", "opc"}),
)

SOCCER = SportIndicators(
    sport="Soccer",
    teams=SOCCER_CLUBS,
    players=frozenset(
        {
            "cristiano ronaldo",
            "erling haaland",
            "jude bellingham",
            "kylian mbappe",
            "lamine yamal",
            "lionel messi",
            "vinicius jr",
        }
    ),
    terms=frozenset(
        {"champions league", "fifa", "mls", "premier league", "soccer", "uefa", "world cup"}
    ),
)

GOLF = SportIndicators(
    sport="Golf",
    players=frozenset(
        {
            "arnold palmer",
            "jack nicklaus",
            "rory mcilroy",
            "scottie scheffler",
            "tiger woods",
        }
    ),
    terms=frozenset({"golf", "lpga", "pga", "the masters"}),
)

YUGIOH = SportIndicators(sport="Yu-Gi-Oh", terms=frozenset({"yugioh", "yu-gi-oh"}))

MAGIC = SportIndicators(sport="Magic", terms=frozenset({"magic the gathering", "mtg"}))

# Priority order: the first table with any match decides the sport.
# Card games come before the team tables ("Magic the Gathering" vs "Magic").
SPORT_INDICATORS: tuple[SportIndicators, ...] = (
    WRESTLING,
    POKEMON,
    YUGIOH,
    MAGIC,
    RACING,
    FOOTBALL,
    BASKETBALL,
    BASEBALL,
    HOCKEY,
    SOCCER,
    GOLF,
)
