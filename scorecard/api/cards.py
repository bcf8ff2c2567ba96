"""
Card API endpoints.

Extraction preview, persistence of extracted listings, lookup by id and
on-demand deduplication.
"""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from scorecard.db import card_to_model, get_card, insert_card
from scorecard.db.database import get_reference_database, get_session
from scorecard.models.card import CardRecord, InvalidListingError, RawListing
from scorecard.services.deduplicator import run_deduplication
from scorecard.services.pipeline import process_listing
from scorecard.services.reference_db import ReferenceDatabase
from scorecard.services.sport_classifier import SportClassifier, build_sport_classifier

router = APIRouter(prefix="/cards", tags=["cards"])


class ListingRequest(BaseModel):
    """A scraped listing to extract."""

    title: str = Field(
        ...,
        description="Listing title exactly as scraped",
        examples=["2023 Panini Prizm CJ Stroud Orange Lazer PSA 10 #339 RC Texans"],
    )
    search_term: str | None = Field(default=None, description="Query that surfaced the listing")
    price: float | None = None
    image_url: str | None = None
    ebay_item_id: str | None = None
    source: str | None = None

    def to_listing(self) -> RawListing:
        return RawListing(**self.model_dump())


class CardResponse(BaseModel):
    """An extracted card, persisted or not."""

    id: int | None = None
    title: str
    summary_title: str
    player_name: str | None = None
    year: int | None = None
    year_inferred: bool = False
    card_set: str | None = None
    card_type: str
    card_number: str | None = None
    print_run: str | None = None
    is_rookie: bool = False
    is_autograph: bool = False
    sport: str
    created_at: datetime | None = None

    @classmethod
    def from_record(
        cls,
        record: CardRecord,
        card_id: int | None = None,
        created_at: datetime | None = None,
    ) -> "CardResponse":
        return cls(id=card_id, title=record.title, created_at=created_at, **record.derived_fields())


class DeduplicationResponse(BaseModel):
    """Outcome of a deduplication pass."""

    dry_run: bool
    examined: int
    groups: int
    kept_ids: list[int] = Field(default_factory=list)
    removed_ids: list[int] = Field(default_factory=list)


def get_sport_classifier(
    reference: Annotated[ReferenceDatabase | None, Depends(get_reference_database)],
) -> SportClassifier:
    """Dependency that provides the configured sport classifier."""
    return build_sport_classifier(reference)


async def _extract(
    request: ListingRequest,
    classifier: SportClassifier,
    reference: ReferenceDatabase | None,
) -> tuple[RawListing, CardRecord]:
    listing = request.to_listing()
    try:
        record = await process_listing(listing, classifier, reference)
    except InvalidListingError as e:
        raise HTTPException(
            status_code=422,
            detail=str(e),
        ) from e
    return listing, record


@router.post("/extract", response_model=CardResponse)
async def extract_listing(
    request: ListingRequest,
    classifier: Annotated[SportClassifier, Depends(get_sport_classifier)],
    reference: Annotated[ReferenceDatabase | None, Depends(get_reference_database)],
) -> CardResponse:
    """
    Extract a listing without storing it.

    Returns 422 if the title is empty.
    """
    _, record = await _extract(request, classifier, reference)
    return CardResponse.from_record(record)


@router.post("", response_model=CardResponse, status_code=status.HTTP_201_CREATED)
async def create_card(
    request: ListingRequest,
    session: Annotated[AsyncSession, Depends(get_session)],
    classifier: Annotated[SportClassifier, Depends(get_sport_classifier)],
    reference: Annotated[ReferenceDatabase | None, Depends(get_reference_database)],
) -> CardResponse:
    """
    Extract a listing and store the result.

    Returns 422 if the title is empty; nothing is stored in that case.
    """
    listing, record = await _extract(request, classifier, reference)
    card = await insert_card(session, listing, record)
    return CardResponse.from_record(record, card_id=card.id, created_at=card.created_at)


@router.get("/{card_id}", response_model=CardResponse)
async def read_card(
    card_id: int,
    session: Annotated[AsyncSession, Depends(get_session)],
) -> CardResponse:
    """
    Get a stored card.

    Returns 404 if no card has this id.
    """
    card = await get_card(session, card_id)
    if card is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Card {card_id} not found",
        )
    return CardResponse.from_record(
        card_to_model(card), card_id=card.id, created_at=card.created_at
    )


@router.post("/deduplicate", response_model=DeduplicationResponse)
async def deduplicate_cards(
    session: Annotated[AsyncSession, Depends(get_session)],
    dry_run: Annotated[bool, Query(description="Report without deleting")] = False,
) -> DeduplicationResponse:
    """Remove duplicate cards, keeping the best-priced card of each identity."""
    report = await run_deduplication(session, dry_run=dry_run)
    return DeduplicationResponse(
        dry_run=report.dry_run,
        examined=report.examined,
        groups=report.groups,
        kept_ids=report.kept_ids,
        removed_ids=report.removed_ids,
    )
