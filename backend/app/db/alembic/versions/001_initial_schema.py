"""Initial schema

Revision ID: 001
Revises:
Create Date: 2026-10-15

Creates:
- trips (request attributes, feasibility, itinerary, generation lock columns)
- visa_knowledge (cached visa API documents per corridor)
"""

from collections.abc import Sequence

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

JSON_DOCUMENT = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        "trips",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("voyage_uid", sa.String(64), nullable=True),
        sa.Column("passport", sa.Text(), nullable=False),
        sa.Column("residence", sa.Text(), nullable=True),
        sa.Column("origin", sa.Text(), nullable=True),
        sa.Column("destination", sa.Text(), nullable=False),
        sa.Column("dates", sa.Text(), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False, server_default="USD"),
        sa.Column("budget", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("adults", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("children", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("infants", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("group_size", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("travel_style", sa.String(16), nullable=False, server_default="standard"),
        sa.Column("feasibility_status", sa.String(16), nullable=False, server_default="pending"),
        sa.Column("feasibility_report", JSON_DOCUMENT, nullable=True),
        sa.Column("feasibility_error", sa.Text(), nullable=True),
        sa.Column("itinerary", JSON_DOCUMENT, nullable=True),
        sa.Column("itinerary_status", sa.String(16), nullable=False, server_default="idle"),
        sa.Column("itinerary_locked_at", sa.DateTime(), nullable=True),
        sa.Column("itinerary_lock_owner", sa.String(64), nullable=True),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("idx_trips_voyage_uid", "trips", ["voyage_uid"])

    op.create_table(
        "visa_knowledge",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("passport_code", sa.String(2), nullable=False),
        sa.Column("destination_code", sa.String(2), nullable=False),
        sa.Column("content", JSON_DOCUMENT, nullable=False),
        sa.Column("fetched_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("passport_code", "destination_code", name="uq_visa_corridor"),
    )


def downgrade() -> None:
    """Drop all tables."""
    op.drop_table("visa_knowledge")
    op.drop_index("idx_trips_voyage_uid", table_name="trips")
    op.drop_table("trips")
