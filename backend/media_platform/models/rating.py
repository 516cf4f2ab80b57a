"""Rating ORM — presence of a row means "this user likes this content".

Invariants:
    - UNIQUE(user_id, content_id): at most one rating per pair, enforced by the store
    - value is always LIKE_VALUE (CHECK constraint)

Design Decisions:
    - value column kept for persisted-shape compatibility; the 1-5 scale is
      gone, only the like value is storable
    - The unique index is what makes toggle_like safe under concurrency
"""

from datetime import datetime, timezone

from sqlalchemy import (
    Integer, DateTime, ForeignKey, UniqueConstraint, CheckConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from media_platform.core.domain_types import LIKE_VALUE
from media_platform.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Rating(Base):
    """A single like from one user on one content item."""
    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("user_id", "content_id", name="uq_ratings_user_content"),
        CheckConstraint(f"value = {LIKE_VALUE}", name="ck_ratings_like_value"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=LIKE_VALUE)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    content_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
