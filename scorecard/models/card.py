"""
Card listing domain models.

A RawListing is what a marketplace scrape hands us. A CardRecord is the
structured interpretation of its title, ready to be persisted.
"""

from dataclasses import dataclass, field

# Sentinels standing in for "not detected". They are values, not absences.
BASE_CARD_TYPE = "Base"
UNKNOWN_SPORT = "Unknown"


class InvalidListingError(ValueError):
    """
    Raised when a listing cannot enter the extraction pipeline.

    An empty or whitespace-only title is the only input the core rejects
    outright; the caller must not persist a record for it.
    """


@dataclass(frozen=True)
class RawListing:
    """
    A listing as supplied by a marketplace scraper.

    Attributes:
        title: Listing title exactly as scraped
        search_term: Query that surfaced the listing (secondary year source)
        price: Sale or asking price, if known
        image_url: Listing image
        ebay_item_id: Marketplace item identifier
        source: Which scraper produced the listing
    """

    title: str
    search_term: str | None = None
    price: float | None = None
    image_url: str | None = None
    ebay_item_id: str | None = None
    source: str | None = None

    def validate(self) -> None:
        """Reject listings that must not be processed."""
        if not self.title or not self.title.strip():
            raise InvalidListingError("Listing title is required")


@dataclass(frozen=True, slots=True)
class ExtractedYear:
    """
    A year pulled from a listing.

    inferred is True when no usable year was found in the title or search
    term and the current calendar year was substituted.
    """

    year: int
    inferred: bool = False


@dataclass(frozen=True, slots=True)
class CardIdentity:
    """Equivalence key used to detect duplicate listings."""

    player_name: str
    card_number: str
    year: int

    @classmethod
    def build(
        cls, player_name: str | None, card_number: str | None, year: int | None
    ) -> "CardIdentity | None":
        """Return the identity, or None if any component is missing."""
        if not player_name or not card_number or year is None:
            return None
        return cls(
            player_name=player_name.strip().lower(),
            card_number=card_number.strip().lower(),
            year=year,
        )


@dataclass
class CardRecord:
    """
    Structured interpretation of a listing title.

    Attributes:
        title: Original listing title, preserved verbatim
        summary_title: Canonical display label composed from the other fields
        player_name: Proper-cased player name, None when extraction failed
        year: Four-digit card year
        year_inferred: True when year was defaulted rather than read
        card_set: Canonical set/brand label
        card_type: Parallel/variant label, "Base" when none detected
        card_number: Card number, always "#"-prefixed
        print_run: Print run, always "/"-prefixed
        is_rookie: Rookie card indicator present
        is_autograph: Autograph indicator present
        sport: Sport label, "Unknown" when undetected
    """

    title: str
    summary_title: str = ""
    player_name: str | None = None
    year: int | None = None
    year_inferred: bool = False
    card_set: str | None = None
    card_type: str = BASE_CARD_TYPE
    card_number: str | None = None
    print_run: str | None = None
    is_rookie: bool = False
    is_autograph: bool = False
    sport: str = UNKNOWN_SPORT
    search_term: str | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not self.card_type:
            raise ValueError("card_type must be a label; use 'Base' when undetected")
        if not self.sport:
            raise ValueError("sport must be a label; use 'Unknown' when undetected")
        if self.card_number is not None and not self.card_number.startswith("#"):
            raise ValueError(f"card_number must start with '#': {self.card_number!r}")
        if self.print_run is not None and not self.print_run.startswith("/"):
            raise ValueError(f"print_run must start with '/': {self.print_run!r}")

    @property
    def identity(self) -> CardIdentity | None:
        """Duplicate-detection key, None when incomplete."""
        return CardIdentity.build(self.player_name, self.card_number, self.year)

    def derived_fields(self) -> dict[str, object]:
        """Every field the extractors own, for an all-at-once store update."""
        return {
            "summary_title": self.summary_title,
            "player_name": self.player_name,
            "year": self.year,
            "year_inferred": self.year_inferred,
            "card_set": self.card_set,
            "card_type": self.card_type,
            "card_number": self.card_number,
            "print_run": self.print_run,
            "is_rookie": self.is_rookie,
            "is_autograph": self.is_autograph,
            "sport": self.sport,
        }
