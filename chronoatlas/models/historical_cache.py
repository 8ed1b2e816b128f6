"""
Cached payload of generated historic entities for one (year, continent) query.

Rows are written once, the first time a query is answered, and are never
updated or expired afterwards.
"""

from datetime import UTC, datetime

from sqlalchemy import JSON, Column, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB

from chronoatlas.config import settings
from chronoatlas.models.base import Base


def _utcnow() -> datetime:
    return datetime.now(UTC)


class HistoricalCacheEntry(Base):
    """Aggregate payload stored under its normalized cache key."""

    __tablename__ = settings.cache_table_name

    key = Column(
        String(255),
        primary_key=True,
        comment="Year and continent joined by '_', spaces replaced by '_'",
    )
    payload = Column(
        JSON().with_variant(JSONB(), "postgresql"),
        nullable=False,
        default=list,
        comment="Ordered list of entity records",
    )
    created_at = Column(
        DateTime(timezone=True),
        default=_utcnow,
        nullable=False,
        comment="Timestamp when the payload was generated",
    )

    def __repr__(self) -> str:
        return f"<HistoricalCacheEntry(key='{self.key}', entities={len(self.payload or [])})>"
