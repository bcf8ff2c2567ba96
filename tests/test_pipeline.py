"""Tests for the end-to-end extraction pipeline."""

import logging
from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from scorecard.models.card import CardIdentity, InvalidListingError, RawListing
from scorecard.services.pipeline import extract_card_fields, process_listing
from scorecard.services.sport_classifier import SportClassifier
from scorecard.services.summary_title import compose_summary_title

STROUD_TITLE = "2023 Panini Prizm CJ Stroud Orange Lazer PSA 10 Gem Mint #339 RC Rookie Texans"
DOMINGUEZ_TITLE = "2021 Bowman Chrome Prospects Jasson Dominguez Chrome Refractor"
DONCIC_TITLE = "2020 Topps Chrome Luka Doncic #17/99 Gold Refractor"

SAMPLE_TITLES = [
    STROUD_TITLE,
    DOMINGUEZ_TITLE,
    DONCIC_TITLE,
    "2019 Panini Mosaic Zion Williamson Choice Red Fusion",
    "2021 Topps Chrome Green/Yellow Refractor Wander Franco",
    "2020 Panini Prizm Red White and Blue Joe Burrow",
    "2023 Topps Chrome Update Elly De La Cruz Gold Wave /50",
    "2015 Upper Deck Young Guns Connor McDavid #201",
    "PSA 10 Graded Card Lot",
]


class TestScenarios:
    def test_graded_rookie(self) -> None:
        """Grading noise and the team name never leak into fields."""
        record = extract_card_fields(RawListing(title=STROUD_TITLE))

        assert record.year == 2023
        assert record.year_inferred is False
        assert record.card_set == "Panini Prizm"
        assert record.card_type == "Orange Lazer"
        assert record.card_number == "#339"
        assert record.print_run is None
        assert record.is_rookie is True
        assert record.is_autograph is False
        assert record.player_name == "CJ Stroud"
        assert record.sport == "Football"
        assert record.summary_title == "2023 Panini Prizm Orange Lazer CJ Stroud #339"

    def test_missing_year_is_inferred(self) -> None:
        """A title without a year gets this year, marked inferred."""
        record = extract_card_fields(RawListing(title="Topps Chrome Mike Trout Refractor"))

        assert record.year == date.today().year
        assert record.year_inferred is True

    def test_search_term_year(self) -> None:
        """The search term supplies a missing year."""
        listing = RawListing(title="Topps Chrome Mike Trout", search_term="2011 topps update")

        record = extract_card_fields(listing)

        assert record.year == 2011
        assert record.year_inferred is False

    def test_chrome_not_repeated(self) -> None:
        """Chrome belongs to the set, so the type is just Refractor."""
        record = extract_card_fields(RawListing(title=DOMINGUEZ_TITLE))

        assert record.card_set == "Bowman Chrome"
        assert record.card_type == "Refractor"
        assert record.player_name == "Jasson Dominguez"

    def test_number_and_print_run(self) -> None:
        """'#17/99' splits into number and print run."""
        record = extract_card_fields(RawListing(title=DONCIC_TITLE))

        assert record.card_number == "#17"
        assert record.print_run == "/99"
        assert record.summary_title == "2020 Topps Chrome Gold Refractor Luka Doncic #17 /99"

    def test_set_number_not_card_number(self) -> None:
        """The number of a numbered series stays out of the card identity."""
        record = extract_card_fields(RawListing(title="2023 Topps Series 1 Mike Trout 27"))

        assert record.card_set == "Topps Series 1"
        assert record.card_number == "#27"
        assert record.identity == CardIdentity("mike trout", "#27", 2023)

    def test_nothing_recognizable(self) -> None:
        """A bare grading title has no set, player or sport."""
        record = extract_card_fields(RawListing(title="PSA 10 Graded Card Lot"))

        assert record.card_set is None
        assert record.player_name is None
        assert record.card_type == "Base"
        assert record.sport == "Unknown"

    @pytest.mark.parametrize("title", ["", "   "])
    def test_invalid_listing(self, title: str) -> None:
        """Blank titles are rejected before extraction."""
        with pytest.raises(InvalidListingError):
            extract_card_fields(RawListing(title=title))


class TestProperties:
    @pytest.mark.parametrize("title", SAMPLE_TITLES)
    def test_idempotent(self, title: str) -> None:
        """Extracting the same title twice gives identical records."""
        listing = RawListing(title=title)

        assert extract_card_fields(listing) == extract_card_fields(listing)

    @pytest.mark.parametrize("title", SAMPLE_TITLES)
    def test_sentinels_and_formats(self, title: str) -> None:
        """Type and sport are never empty; numbers and runs carry their marks."""
        record = extract_card_fields(RawListing(title=title))

        assert record.card_type
        assert record.sport
        assert record.card_number is None or record.card_number.startswith("#")
        assert record.print_run is None or record.print_run.startswith("/")

    @pytest.mark.parametrize("title", SAMPLE_TITLES)
    def test_no_cross_contamination(self, title: str) -> None:
        """No card-set word reappears in the card type."""
        record = extract_card_fields(RawListing(title=title))
        if record.card_set is None or record.card_type == "Base":
            return

        set_words = {word.lower() for word in record.card_set.split()}
        type_words = {word.lower() for word in record.card_type.split()} - {"and", "&"}

        assert not set_words & type_words

    @pytest.mark.parametrize("title", SAMPLE_TITLES)
    def test_summary_is_recomposable(self, title: str) -> None:
        """The stored summary equals a fresh composition of the fields."""
        record = extract_card_fields(RawListing(title=title))

        assert compose_summary_title(record) == record.summary_title


class TestExtractorIsolation:
    def test_failing_extractor_is_contained(self, caplog: pytest.LogCaptureFixture) -> None:
        """One broken extractor leaves the others intact."""
        with (
            patch(
                "scorecard.services.pipeline.extract_card_set",
                side_effect=RuntimeError("boom"),
            ),
            caplog.at_level(logging.ERROR, logger="scorecard.services.pipeline"),
        ):
            record = extract_card_fields(RawListing(title=STROUD_TITLE))

        assert record.card_set is None
        assert record.card_number == "#339"
        assert record.player_name == "CJ Stroud"
        assert "card_set" in caplog.text

    def test_failing_year_is_contained(self) -> None:
        """A broken year extractor leaves the year empty."""
        with patch(
            "scorecard.services.pipeline.extract_year",
            side_effect=RuntimeError("boom"),
        ):
            record = extract_card_fields(RawListing(title=STROUD_TITLE))

        assert record.year is None
        assert record.summary_title == "Panini Prizm Orange Lazer CJ Stroud #339"


class TestProcessListing:
    async def test_keyword_classifier(self) -> None:
        """Without collaborators the async path matches the sync one."""
        listing = RawListing(title=STROUD_TITLE)

        record = await process_listing(listing, SportClassifier())

        assert record == extract_card_fields(listing)

    async def test_lookup_sport_used(self) -> None:
        """The external lookup result lands in the record."""
        lookup = MagicMock()
        lookup.lookup_sport = AsyncMock(return_value="Basketball")

        record = await process_listing(
            RawListing(title=DONCIC_TITLE), SportClassifier(lookup=lookup)
        )

        assert record.sport == "Basketball"
        lookup.lookup_sport.assert_awaited_once_with("Luka Doncic")

    async def test_no_lookup_without_player(self) -> None:
        """The external lookup is never called without a player name."""
        lookup = MagicMock()
        lookup.lookup_sport = AsyncMock(return_value="Basketball")

        record = await process_listing(
            RawListing(title="PSA 10 Graded Card Lot"), SportClassifier(lookup=lookup)
        )

        assert record.sport == "Unknown"
        lookup.lookup_sport.assert_not_awaited()

    async def test_reference_filters_name_tokens(self) -> None:
        """Reference jargon tokens are removed before the name is built."""
        reference = MagicMock()
        reference.filter_name_tokens = AsyncMock(side_effect=lambda tokens: tokens[1:])
        reference.best_sport = AsyncMock(return_value="Unknown")

        record = await process_listing(
            RawListing(title="2023 Topps Logo Mike Trout"),
            SportClassifier(reference=reference),
            reference,
        )

        assert record.player_name == "Mike Trout"

    async def test_reference_failure_keeps_tokens(self) -> None:
        """A failing reference filter is logged and ignored."""
        reference = MagicMock()
        reference.filter_name_tokens = AsyncMock(side_effect=RuntimeError("down"))

        record = await process_listing(RawListing(title=DONCIC_TITLE), SportClassifier(), reference)

        assert record.player_name == "Luka Doncic"

    async def test_classifier_failure_is_unknown(self) -> None:
        """An unexpected classifier error leaves the sport Unknown."""
        classifier = MagicMock()
        classifier.classify = AsyncMock(side_effect=RuntimeError("boom"))

        record = await process_listing(RawListing(title=STROUD_TITLE), classifier)

        assert record.sport == "Unknown"
        assert record.summary_title == "2023 Panini Prizm Orange Lazer CJ Stroud #339"

    async def test_invalid_listing(self) -> None:
        """Blank titles are rejected on the async path too."""
        with pytest.raises(InvalidListingError):
            await process_listing(RawListing(title=" "), SportClassifier())
