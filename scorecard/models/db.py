"""
SQLAlchemy ORM models for persistent storage.

CardDB holds extracted card records; CardSetDB is the read-only card-set
metadata consulted during sport classification and name filtering.
"""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    DateTime,
    Float,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# Columns scored by the deduplicator, in the order they are summed
PRICE_COLUMNS = (
    "raw_average_price",
    "psa9_average_price",
    "psa10_price",
    "psa10_average_price",
)


class Base(DeclarativeBase):
    """Base class for all ORM models."""

    pass


class CardDB(Base):
    """
    A card listing with its extracted fields and price data.

    title is immutable once inserted; every other extracted column may be
    overwritten by maintenance passes.
    """

    __tablename__ = "cards"
    __mapper_args__ = {"eager_defaults": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text)
    summary_title: Mapped[str | None] = mapped_column(Text, nullable=True, index=True)
    search_term: Mapped[str | None] = mapped_column(String(255), nullable=True)

    player_name: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    year_inferred: Mapped[bool] = mapped_column(Boolean, default=False)
    card_set: Mapped[str | None] = mapped_column(String(100), nullable=True)
    card_type: Mapped[str] = mapped_column(String(100), default="Base")
    card_number: Mapped[str | None] = mapped_column(String(50), nullable=True)
    print_run: Mapped[str | None] = mapped_column(String(20), nullable=True)
    is_rookie: Mapped[bool] = mapped_column(Boolean, default=False)
    is_autograph: Mapped[bool] = mapped_column(Boolean, default=False)
    sport: Mapped[str] = mapped_column(String(50), default="Unknown", index=True)

    raw_average_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    psa9_average_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    psa10_price: Mapped[float | None] = mapped_column(Float, nullable=True)
    psa10_average_price: Mapped[float | None] = mapped_column(Float, nullable=True)

    ebay_item_id: Mapped[str | None] = mapped_column(String(50), nullable=True)
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    source: Mapped[str | None] = mapped_column(String(50), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), index=True
    )
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def price_score(self) -> float:
        """Sum of populated price columns."""
        return sum(getattr(self, column) or 0.0 for column in PRICE_COLUMNS)

    def __repr__(self) -> str:
        return f"<CardDB(id={self.id}, summary={self.summary_title!r})>"


class CardSetDB(Base):
    """
    Known card-set metadata (one row per set/sport/year release).

    Populated by an external import; the extraction core only reads it.
    """

    __tablename__ = "card_sets"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), index=True)
    display_name: Mapped[str] = mapped_column(String(255))
    search_text: Mapped[str] = mapped_column(Text, default="")
    sport: Mapped[str] = mapped_column(String(50), index=True)
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    brand: Mapped[str | None] = mapped_column(String(100), nullable=True)

    def __repr__(self) -> str:
        return f"<CardSetDB(name={self.name!r}, sport={self.sport})>"
