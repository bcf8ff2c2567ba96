"""Tests for the external player-to-sport lookup client."""

import httpx
import pytest
import respx

from scorecard.services.sport_lookup import (
    SportLookupClient,
    league_to_sport,
    player_entries,
    select_athlete,
)

SEARCH_URL = "https://lookup.test/apis/search/v2"


def search_response(*athletes: dict) -> dict:
    return {
        "results": [
            {"type": "team", "contents": [{"displayName": "Los Angeles Angels"}]},
            {"type": "player", "contents": list(athletes)},
        ]
    }


@pytest.fixture
def client() -> SportLookupClient:
    return SportLookupClient(base_url=SEARCH_URL, timeout=2.0)


class TestLeagueToSport:
    @pytest.mark.parametrize(
        ("league", "sport"),
        [
            ("nfl", "Football"),
            ("college-football", "Football"),
            ("WNBA", "Basketball"),
            ("mlb", "Baseball"),
            ("nhl", "Hockey"),
            ("f1", "Racing"),
            ("eng.1", "Soccer"),
            ("ufc", "MMA"),
        ],
    )
    def test_known_leagues(self, league: str, sport: str) -> None:
        """League slugs map to sport labels, case-insensitively."""
        assert league_to_sport(league) == sport

    def test_unknown_league(self) -> None:
        """Unmapped or missing leagues are Unknown."""
        assert league_to_sport("cricket") == "Unknown"
        assert league_to_sport(None) == "Unknown"


class TestSelectAthlete:
    def test_exact_match_preferred(self) -> None:
        """An exact display-name match beats an earlier partial match."""
        athletes = [
            {"displayName": "Josh Allen Jr", "defaultLeagueSlug": "nba"},
            {"displayName": "Josh Allen", "defaultLeagueSlug": "nfl"},
        ]

        assert select_athlete(athletes, "josh allen") == athletes[1]

    def test_containing_match(self) -> None:
        """Without an exact match the first containing name is used."""
        athletes = [{"displayName": "Shohei Ohtani", "defaultLeagueSlug": "mlb"}]

        assert select_athlete(athletes, "Ohtani") == athletes[0]

    def test_no_match(self) -> None:
        """Unrelated athletes are never guessed."""
        assert select_athlete([{"displayName": "Mike Trout"}], "Joe Burrow") is None

    def test_player_entries_ignores_other_groups(self) -> None:
        """Only the player result group is read."""
        assert player_entries({"results": [{"type": "team", "contents": [{}]}]}) == []
        assert player_entries(None) == []


class TestLookupSport:
    @respx.mock
    async def test_lookup(self, client: SportLookupClient) -> None:
        """A matched athlete's league decides the sport."""
        respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(
                200,
                json=search_response(
                    {"displayName": "Shohei Ohtani", "defaultLeagueSlug": "mlb"},
                ),
            )
        )

        assert await client.lookup_sport("Shohei Ohtani") == "Baseball"

    @respx.mock
    async def test_sends_query(self, client: SportLookupClient) -> None:
        """The player name is sent as the search query."""
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=search_response())
        )

        await client.lookup_sport("Joe Burrow")

        assert route.calls.last.request.url.params["query"] == "Joe Burrow"

    @respx.mock
    async def test_answers_are_cached(self, client: SportLookupClient) -> None:
        """A repeated name is answered without a second request."""
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(
                200,
                json=search_response({"displayName": "Joe Burrow", "defaultLeagueSlug": "nfl"}),
            )
        )

        assert await client.lookup_sport("Joe Burrow") == "Football"
        assert await client.lookup_sport("joe burrow") == "Football"
        assert route.call_count == 1

    @respx.mock
    async def test_expired_cache_refetches(self) -> None:
        """An expired answer is fetched again."""
        client = SportLookupClient(base_url=SEARCH_URL, timeout=2.0, cache_ttl=-1.0)
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=search_response())
        )

        await client.lookup_sport("Joe Burrow")
        await client.lookup_sport("Joe Burrow")

        assert route.call_count == 2

    @respx.mock
    async def test_expired_answers_pruned_on_insert(self) -> None:
        """Storing a new answer drops every expired one."""
        client = SportLookupClient(base_url=SEARCH_URL, timeout=2.0, cache_ttl=-1.0)
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json=search_response()))

        for name in ("Joe Burrow", "Josh Allen", "Mike Trout"):
            await client.lookup_sport(name)

        assert list(client._cache) == ["mike trout"]

    @respx.mock
    async def test_cache_size_is_capped(self) -> None:
        """The oldest answer is evicted once the cache is full."""
        client = SportLookupClient(base_url=SEARCH_URL, timeout=2.0, max_cache_entries=2)
        route = respx.get(SEARCH_URL).mock(
            return_value=httpx.Response(200, json=search_response())
        )

        for name in ("Joe Burrow", "Josh Allen", "Mike Trout"):
            await client.lookup_sport(name)

        assert list(client._cache) == ["josh allen", "mike trout"]
        await client.lookup_sport("Joe Burrow")
        assert route.call_count == 4

    @respx.mock
    async def test_no_athlete(self, client: SportLookupClient) -> None:
        """An empty player group is Unknown, not an error."""
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json=search_response()))

        assert await client.lookup_sport("Nobody Special") == "Unknown"

    @respx.mock
    async def test_http_error_raises(self, client: SportLookupClient) -> None:
        """Server errors surface as httpx errors."""
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(503))

        with pytest.raises(httpx.HTTPError):
            await client.lookup_sport("Joe Burrow")

    @respx.mock
    async def test_timeout_raises(self, client: SportLookupClient) -> None:
        """Timeouts surface as httpx errors."""
        respx.get(SEARCH_URL).mock(side_effect=httpx.ReadTimeout("slow"))

        with pytest.raises(httpx.HTTPError):
            await client.lookup_sport("Joe Burrow")

    async def test_blank_name(self, client: SportLookupClient) -> None:
        """Blank names are Unknown without a request."""
        assert await client.lookup_sport("  ") == "Unknown"


class TestHealthCheck:
    @respx.mock
    async def test_healthy(self, client: SportLookupClient) -> None:
        """A 200 answer means reachable."""
        respx.get(SEARCH_URL).mock(return_value=httpx.Response(200, json={}))

        assert await client.health_check() is True

    @respx.mock
    async def test_unreachable(self, client: SportLookupClient) -> None:
        """Connection failures mean unreachable."""
        respx.get(SEARCH_URL).mock(side_effect=httpx.ConnectError("down"))

        assert await client.health_check() is False
