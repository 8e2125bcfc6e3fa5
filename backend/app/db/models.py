"""SQLAlchemy ORM models for trips and cached visa documents."""

from datetime import datetime
from typing import Any

from sqlalchemy import JSON, DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func

# JSONB on Postgres, plain JSON elsewhere (SQLite in tests)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class Trip(Base):
    """Trip table - request attributes, processing results and lock columns."""

    __tablename__ = "trips"
    __table_args__ = (Index("idx_trips_voyage_uid", "voyage_uid"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    voyage_uid: Mapped[str | None] = mapped_column(String(64), nullable=True)

    # Request attributes
    passport: Mapped[str] = mapped_column(Text, nullable=False)
    residence: Mapped[str | None] = mapped_column(Text, nullable=True)
    origin: Mapped[str | None] = mapped_column(Text, nullable=True)
    destination: Mapped[str] = mapped_column(Text, nullable=False)
    dates: Mapped[str] = mapped_column(Text, nullable=False)
    currency: Mapped[str] = mapped_column(String(3), nullable=False, default="USD")
    budget: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    infants: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    group_size: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    travel_style: Mapped[str] = mapped_column(String(16), nullable=False, default="standard")

    # Owned by the background processor
    feasibility_status: Mapped[str] = mapped_column(String(16), nullable=False, default="pending")
    feasibility_report: Mapped[dict[str, Any] | None] = mapped_column(JSONDocument, nullable=True)
    feasibility_error: Mapped[str | None] = mapped_column(Text, nullable=True)
    itinerary: Mapped[dict[str, Any] | None] = mapped_column(JSONDocument, nullable=True)

    # Generation lock (naive UTC timestamps)
    itinerary_status: Mapped[str] = mapped_column(String(16), nullable=False, default="idle")
    itinerary_locked_at: Mapped[datetime | None] = mapped_column(DateTime, nullable=True)
    itinerary_lock_owner: Mapped[str | None] = mapped_column(String(64), nullable=True)

    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime, server_default=func.now(), onupdate=func.now(), nullable=False
    )


class VisaKnowledge(Base):
    """Visa requirement documents fetched from the paid API, cached per corridor."""

    __tablename__ = "visa_knowledge"
    __table_args__ = (
        UniqueConstraint("passport_code", "destination_code", name="uq_visa_corridor"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    passport_code: Mapped[str] = mapped_column(String(2), nullable=False)
    destination_code: Mapped[str] = mapped_column(String(2), nullable=False)
    content: Mapped[dict[str, Any]] = mapped_column(JSONDocument, nullable=False)
    fetched_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
