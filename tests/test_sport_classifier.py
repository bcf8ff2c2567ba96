"""Tests for the sport classification cascade."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest
from sqlalchemy.exc import OperationalError

from scorecard.config import settings
from scorecard.parsers.normalizer import normalize_title
from scorecard.services.sport_classifier import (
    SportClassifier,
    build_sport_classifier,
    classify_by_keywords,
)

STROUD_TITLE = "2023 Panini Prizm CJ Stroud Orange Lazer #339 RC Texans"


def make_lookup(**kwargs) -> MagicMock:
    lookup = MagicMock()
    lookup.lookup_sport = AsyncMock(**kwargs)
    return lookup


def make_reference(**kwargs) -> MagicMock:
    reference = MagicMock()
    reference.best_sport = AsyncMock(**kwargs)
    return reference


class TestKeywordTables:
    @pytest.mark.parametrize(
        ("title", "sport"),
        [
            ("2023 panini prizm cj stroud texans", "Football"),
            ("2023 topps chrome shohei ohtani", "Baseball"),
            ("2015 upper deck connor mcdavid", "Hockey"),
            ("wwe john cena topps", "Wrestling"),
            ("charizard holo base set", "Pokemon"),
            ("2024 topps f1 max verstappen", "Racing"),
            ("panini prizm world cup messi", "Soccer"),
        ],
    )
    def test_keyword_tables(self, title: str, sport: str) -> None:
        """Team, player and league words point at a sport."""
        assert classify_by_keywords(title) == sport

    def test_card_game_before_team_names(self) -> None:
        """'Magic the Gathering' is not the Orlando Magic."""
        title = normalize_title("Magic: The Gathering Black Lotus Alpha")

        assert classify_by_keywords(title) == "Magic"
        assert classify_by_keywords("1992 fleer orlando magic team") == "Basketball"

    def test_priority_order(self) -> None:
        """Wrestling is checked before the team sports."""
        assert classify_by_keywords("wwe nfl crossover") == "Wrestling"

    def test_no_signal(self) -> None:
        """Nothing recognizable is Unknown."""
        assert classify_by_keywords("graded card lot") == "Unknown"
        assert classify_by_keywords("") == "Unknown"


class TestSportClassifier:
    async def test_lookup_answers_first(self) -> None:
        """The external lookup wins and later stages are skipped."""
        lookup = make_lookup(return_value="Basketball")
        reference = make_reference(return_value="Football")
        classifier = SportClassifier(reference=reference, lookup=lookup)

        assert await classifier.classify(STROUD_TITLE, "CJ Stroud") == "Basketball"
        reference.best_sport.assert_not_awaited()

    async def test_lookup_skipped_without_player(self) -> None:
        """No player name, no external call."""
        lookup = make_lookup(return_value="Basketball")
        classifier = SportClassifier(lookup=lookup)

        assert await classifier.classify(STROUD_TITLE, None) == "Football"
        lookup.lookup_sport.assert_not_awaited()

    async def test_lookup_failure_falls_through(self) -> None:
        """A network failure is treated as no answer."""
        lookup = make_lookup(side_effect=httpx.ConnectError("down"))
        classifier = SportClassifier(lookup=lookup)

        assert await classifier.classify(STROUD_TITLE, "CJ Stroud") == "Football"

    async def test_reference_after_unknown_lookup(self) -> None:
        """An Unknown lookup hands over to the reference store."""
        lookup = make_lookup(return_value="Unknown")
        reference = make_reference(return_value="Hockey")
        classifier = SportClassifier(reference=reference, lookup=lookup)

        assert await classifier.classify("2015 Upper Deck Young Guns", "Some Player") == "Hockey"
        reference.best_sport.assert_awaited_once_with("2015 upper deck young guns")

    async def test_reference_failure_falls_through(self) -> None:
        """Reference store errors fall back to keywords."""
        reference = make_reference(side_effect=OperationalError("select", {}, Exception("gone")))
        classifier = SportClassifier(reference=reference)

        assert await classifier.classify(STROUD_TITLE, None) == "Football"

    async def test_all_stages_empty(self) -> None:
        """Every stage empty is Unknown, not an error."""
        classifier = SportClassifier(
            reference=make_reference(return_value="Unknown"),
            lookup=make_lookup(return_value="Unknown"),
        )

        assert await classifier.classify("PSA 10 Graded Card Lot", "Nobody") == "Unknown"

    async def test_no_collaborators(self) -> None:
        """A bare classifier uses keywords only."""
        assert await SportClassifier().classify(STROUD_TITLE, "CJ Stroud") == "Football"


class TestBuildSportClassifier:
    def test_lookup_disabled(self) -> None:
        """Disabling the lookup leaves only reference and keyword stages."""
        with patch.object(settings, "sport_lookup_enabled", False):
            classifier = build_sport_classifier(None)

        assert classifier.lookup is None
        assert classifier.reference is None

    def test_lookup_enabled(self) -> None:
        """An enabled lookup uses the shared client."""
        with patch.object(settings, "sport_lookup_enabled", True):
            classifier = build_sport_classifier(None)

        assert classifier.lookup is not None
