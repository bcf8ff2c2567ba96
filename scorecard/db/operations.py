"""
Database CRUD operations.

Card-store verbs used by the API and the maintenance jobs. Functions
flush but never commit; the session owner decides when to commit.
"""

from typing import Any

from sqlalchemy import ColumnElement, select
from sqlalchemy.ext.asyncio import AsyncSession

from scorecard.models.card import BASE_CARD_TYPE, UNKNOWN_SPORT, CardRecord, RawListing
from scorecard.models.db import CardDB

# Columns the maintenance passes may never overwrite
IMMUTABLE_COLUMNS = frozenset({"id", "title", "created_at"})

# --- Card Operations ---


async def insert_card(session: AsyncSession, listing: RawListing, record: CardRecord) -> CardDB:
    """
    Persist a newly extracted listing.

    The listing price, when present, seeds raw_average_price.
    """
    card = CardDB(
        title=listing.title,
        search_term=listing.search_term,
        raw_average_price=listing.price,
        ebay_item_id=listing.ebay_item_id,
        image_url=listing.image_url,
        source=listing.source,
        **record.derived_fields(),
    )
    session.add(card)
    await session.flush()
    return card


async def get_card(session: AsyncSession, card_id: int) -> CardDB | None:
    """Get a card by id. Returns None if it does not exist."""
    result = await session.execute(select(CardDB).where(CardDB.id == card_id))
    return result.scalar_one_or_none()


async def list_cards(
    session: AsyncSession, *where: ColumnElement[bool], limit: int | None = None
) -> list[CardDB]:
    """
    List cards matching every given where-clause, ordered by id.

    Example:
        await list_cards(session, CardDB.player_name.is_(None))
    """
    query = select(CardDB).where(*where).order_by(CardDB.id)
    if limit is not None:
        query = query.limit(limit)
    result = await session.execute(query)
    return list(result.scalars().all())


async def update_card(session: AsyncSession, card_id: int, fields: dict[str, Any]) -> CardDB | None:
    """
    Overwrite the given columns of a card.

    Returns the updated card, or None if not found.

    Raises:
        ValueError: If fields names an unknown or immutable column
    """
    for name in fields:
        if name in IMMUTABLE_COLUMNS or name not in CardDB.__table__.columns:
            msg = f"Column '{name}' cannot be updated"
            raise ValueError(msg)

    card = await get_card(session, card_id)
    if card is None:
        return None

    for name, value in fields.items():
        setattr(card, name, value)
    await session.flush()
    return card


async def delete_card(session: AsyncSession, card_id: int) -> bool:
    """
    Delete a card.

    Returns True if deleted, False if not found.
    """
    card = await get_card(session, card_id)
    if card is None:
        return False

    await session.delete(card)
    await session.flush()
    return True


async def apply_record(session: AsyncSession, card: CardDB, record: CardRecord) -> CardDB:
    """Write every derived field of record onto card in one flush."""
    for name, value in record.derived_fields().items():
        setattr(card, name, value)
    await session.flush()
    return card


def card_to_model(card: CardDB) -> CardRecord:
    """Convert a stored card to a domain record."""
    return CardRecord(
        title=card.title,
        summary_title=card.summary_title or "",
        player_name=card.player_name,
        year=card.year,
        year_inferred=bool(card.year_inferred),
        card_set=card.card_set,
        card_type=card.card_type or BASE_CARD_TYPE,
        card_number=card.card_number,
        print_run=card.print_run,
        is_rookie=bool(card.is_rookie),
        is_autograph=bool(card.is_autograph),
        sport=card.sport or UNKNOWN_SPORT,
        search_term=card.search_term,
    )


def listing_from_card(card: CardDB) -> RawListing:
    """Rebuild the listing a stored card was extracted from."""
    return RawListing(
        title=card.title,
        search_term=card.search_term,
        image_url=card.image_url,
        ebay_item_id=card.ebay_item_id,
        source=card.source,
    )
