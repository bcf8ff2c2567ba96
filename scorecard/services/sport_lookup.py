"""
External player-to-sport lookup client.

Queries a public athlete search API (ESPN site search by default) and maps
the default league of the best matching athlete to a sport label. Answers
are cached per name for the life of the client.
"""

import logging
import time
from typing import Any

import httpx

from scorecard.config import settings
from scorecard.models.card import UNKNOWN_SPORT

logger = logging.getLogger(__name__)

LEAGUE_SPORTS: dict[str, str] = {
    # Football
    "nfl": "Football",
    "college-football": "Football",
    "xfl": "Football",
    "usfl": "Football",
    # Basketball
    "nba": "Basketball",
    "college-basketball": "Basketball",
    "wnba": "Basketball",
    "g-league": "Basketball",
    # Baseball
    "mlb": "Baseball",
    "minor-league-baseball": "Baseball",
    # Hockey
    "nhl": "Hockey",
    "ahl": "Hockey",
    # Racing
    "f1": "Racing",
    "nascar": "Racing",
    "indycar": "Racing",
    # Soccer
    "soccer": "Soccer",
    "mls": "Soccer",
    "premier-league": "Soccer",
    "eng.1": "Soccer",
    # Other
    "pga": "Golf",
    "tennis": "Tennis",
    "boxing": "Boxing",
    "mma": "MMA",
    "ufc": "MMA",
}

# The search endpoint rejects requests without a browser-like agent
DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (compatible; scorecard/0.1)",
    "Accept": "application/json",
    "Referer": "https://www.espn.com/",
}

CACHE_TTL_SECONDS = 3600.0
CACHE_MAX_ENTRIES = 10_000


def league_to_sport(league: str | None) -> str:
    """Map a league slug to a sport label, "Unknown" when unmapped."""
    if not league:
        return UNKNOWN_SPORT
    return LEAGUE_SPORTS.get(league.strip().lower(), UNKNOWN_SPORT)


def select_athlete(athletes: list[dict[str, Any]], player_name: str) -> dict[str, Any] | None:
    """
    Pick the athlete entry describing the player.

    An exact display-name match wins, then the first display name that
    contains the queried name. No match returns None rather than guessing.
    """
    wanted = player_name.strip().lower()

    def display_name(athlete: dict[str, Any]) -> str:
        return str(athlete.get("displayName") or "").lower()

    for athlete in athletes:
        if display_name(athlete) == wanted:
            return athlete
    for athlete in athletes:
        if wanted in display_name(athlete):
            return athlete
    return None


def player_entries(data: Any) -> list[dict[str, Any]]:
    """Athlete entries from a search response, empty when there are none."""
    if not isinstance(data, dict):
        return []
    for group in data.get("results") or []:
        if isinstance(group, dict) and group.get("type") == "player":
            return [c for c in group.get("contents") or [] if isinstance(c, dict)]
    return []


class SportLookupClient:
    """
    Client for the external athlete search API.

    The service is treated as unreliable: every call carries a timeout and
    failures surface as httpx.HTTPError for the caller to absorb.
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        cache_ttl: float = CACHE_TTL_SECONDS,
        max_cache_entries: int = CACHE_MAX_ENTRIES,
    ) -> None:
        """
        Initialize the lookup client.

        Args:
            base_url: Search endpoint. Defaults to settings.sport_lookup_url.
            timeout: Request timeout in seconds. Defaults to settings.sport_lookup_timeout.
            cache_ttl: Seconds a cached answer stays valid.
            max_cache_entries: Oldest answers are evicted beyond this many.
        """
        self.base_url = base_url or settings.sport_lookup_url
        self.timeout = timeout if timeout is not None else settings.sport_lookup_timeout
        self.cache_ttl = cache_ttl
        self.max_cache_entries = max_cache_entries
        # Insertion order is age order; entries are only ever appended
        self._cache: dict[str, tuple[str, float]] = {}

    def _cached(self, key: str) -> str | None:
        entry = self._cache.get(key)
        if entry is None:
            return None
        sport, stored_at = entry
        if time.monotonic() - stored_at > self.cache_ttl:
            del self._cache[key]
            return None
        return sport

    def _store(self, key: str, sport: str) -> None:
        now = time.monotonic()
        self._cache.pop(key, None)
        while self._cache:
            oldest_key, (_, stored_at) = next(iter(self._cache.items()))
            if now - stored_at <= self.cache_ttl and len(self._cache) < self.max_cache_entries:
                break
            del self._cache[oldest_key]
        self._cache[key] = (sport, now)

    async def lookup_sport(self, player_name: str) -> str:
        """
        Look up the sport a player competes in.

        Args:
            player_name: Proper-cased player name

        Returns:
            Sport label, or "Unknown" when no athlete or league matched

        Raises:
            httpx.HTTPError: If the request fails or times out
        """
        if not player_name or not player_name.strip():
            return UNKNOWN_SPORT

        key = player_name.strip().lower()
        cached = self._cached(key)
        if cached is not None:
            return cached

        async with httpx.AsyncClient(timeout=self.timeout, headers=DEFAULT_HEADERS) as client:
            response = await client.get(
                self.base_url,
                params={"query": player_name, "limit": 100},
            )
            response.raise_for_status()
            data = response.json()

        athlete = select_athlete(player_entries(data), player_name)
        if athlete is None:
            logger.debug("No athlete match for %r", player_name)
            sport = UNKNOWN_SPORT
        else:
            sport = league_to_sport(athlete.get("defaultLeagueSlug"))

        self._store(key, sport)
        return sport

    async def health_check(self) -> bool:
        """
        Check if the lookup API is reachable.

        Returns:
            True if the API answered, False otherwise
        """
        try:
            async with httpx.AsyncClient(timeout=5.0, headers=DEFAULT_HEADERS) as client:
                response = await client.get(self.base_url, params={"query": "test", "limit": 1})
                return response.status_code == 200
        except httpx.HTTPError:
            return False


# Default client instance
_client: SportLookupClient | None = None


def get_sport_lookup_client() -> SportLookupClient:
    """
    Get the default lookup client instance.

    Returns:
        Singleton SportLookupClient
    """
    global _client
    if _client is None:
        _client = SportLookupClient()
    return _client
