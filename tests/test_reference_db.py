"""Tests for the card-set reference store."""

import pytest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from scorecard.models.db import CardSetDB
from scorecard.services.reference_db import CardSetRow, ReferenceDatabase, rank_sports


@pytest.fixture
async def reference(session_factory) -> ReferenceDatabase:
    """Reference store seeded with a handful of sets."""
    async with session_factory() as session:
        session.add_all(
            [
                CardSetDB(
                    name="Prizm",
                    display_name="Panini Prizm",
                    search_text="panini prizm basketball",
                    sport="Basketball",
                ),
                CardSetDB(
                    name="Prizm",
                    display_name="Panini Prizm",
                    search_text="panini prizm football",
                    sport="Football",
                ),
                CardSetDB(
                    name="Prizm Draft Picks",
                    display_name="Panini Prizm Draft Picks",
                    search_text="college football",
                    sport="Football",
                ),
                CardSetDB(
                    name="Topps Chrome",
                    display_name="Topps Chrome",
                    search_text="topps chrome baseball",
                    sport="Baseball",
                ),
                CardSetDB(
                    name="Upper Deck",
                    display_name="Upper Deck",
                    search_text="upper deck hockey",
                    sport="Hockey",
                ),
                CardSetDB(name="UD", display_name="UD", search_text="", sport="Hockey"),
            ]
        )
        await session.commit()
    return ReferenceDatabase(session_factory)


@pytest.fixture
async def broken_reference() -> ReferenceDatabase:
    """Reference store whose tables were never created."""
    engine = create_async_engine("sqlite+aiosqlite:///:memory:")
    yield ReferenceDatabase(async_sessionmaker(engine, class_=AsyncSession))
    await engine.dispose()


class TestFindSets:
    async def test_substring_search(self, reference: ReferenceDatabase) -> None:
        """Rows match on name, display name or search text, any case."""
        rows = await reference.find_sets("CHROME")

        assert rows == [
            CardSetRow(
                name="Topps Chrome",
                display_name="Topps Chrome",
                search_text="topps chrome baseball",
                sport="Baseball",
            )
        ]

    async def test_limit(self, reference: ReferenceDatabase) -> None:
        """At most limit rows come back."""
        assert len(await reference.find_sets("prizm", limit=2)) == 2

    async def test_blank(self, reference: ReferenceDatabase) -> None:
        """A blank substring matches nothing."""
        assert await reference.find_sets("  ") == []


class TestSportCounts:
    async def test_counts_by_sport(self, reference: ReferenceDatabase) -> None:
        """Sets named in the title are counted per sport."""
        counts = await reference.sport_counts("2020 panini prizm draft picks joe burrow")

        assert counts == [("Football", 2), ("Basketball", 1)]

    async def test_tie_breaks_by_sport_name(self, reference: ReferenceDatabase) -> None:
        """Equal counts order alphabetically."""
        counts = await reference.sport_counts("2020 panini prizm joe burrow")

        assert counts == [("Basketball", 1), ("Football", 1)]
        assert await reference.best_sport("2020 panini prizm joe burrow") == "Basketball"

    async def test_short_names_ignored(self, reference: ReferenceDatabase) -> None:
        """Two-letter set names never match by accident."""
        assert await reference.sport_counts("2015 ud young guns connor mcdavid") == []

    async def test_no_match(self, reference: ReferenceDatabase) -> None:
        """Titles naming no known set are Unknown."""
        assert await reference.best_sport("michael jordan") == "Unknown"

    def test_rank_sports(self) -> None:
        """Higher counts first, then sport name."""
        assert rank_sports([("Hockey", 1), ("Baseball", 3), ("Basketball", 1)]) == [
            ("Baseball", 3),
            ("Basketball", 1),
            ("Hockey", 1),
        ]


class TestNameTokenFilter:
    async def test_is_set_jargon(self, reference: ReferenceDatabase) -> None:
        """Tokens found in set metadata with set terminology are jargon."""
        assert await reference.is_set_jargon("chrome") is True
        assert await reference.is_set_jargon("deck") is False
        assert await reference.is_set_jargon("burrow") is False

    async def test_filter_name_tokens(self, reference: ReferenceDatabase) -> None:
        """Jargon tokens are dropped; short tokens are never looked up."""
        tokens = await reference.filter_name_tokens(["CJ", "Joe", "Chrome", "Burrow"])

        assert tokens == ["CJ", "Joe", "Burrow"]

    async def test_filter_keeps_tokens_on_error(self, broken_reference: ReferenceDatabase) -> None:
        """An unavailable store filters nothing."""
        tokens = await broken_reference.filter_name_tokens(["Joe", "Chrome"])

        assert tokens == ["Joe", "Chrome"]

    async def test_lookup_errors_propagate(self, broken_reference: ReferenceDatabase) -> None:
        """Direct lookups raise so the caller can degrade."""
        with pytest.raises(SQLAlchemyError):
            await broken_reference.best_sport("panini prizm")
