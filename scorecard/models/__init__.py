from scorecard.models.card import (
    BASE_CARD_TYPE,
    UNKNOWN_SPORT,
    CardIdentity,
    CardRecord,
    ExtractedYear,
    InvalidListingError,
    RawListing,
)

__all__ = [
    "BASE_CARD_TYPE",
    "CardIdentity",
    "CardRecord",
    "ExtractedYear",
    "InvalidListingError",
    "RawListing",
    "UNKNOWN_SPORT",
]
