"""Content ORM — the published item that comments and ratings point at.

Invariants:
    - Read-only for the invariant layer, except category detachment on category delete
    - category_id is nullable: deleting a category sets it to NULL

Design Decisions:
    - content_type / status as short strings, validated by the content service
      that owns writes (outside this layer)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from media_platform.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Content(Base):
    """Published content item."""
    __tablename__ = "contents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    content_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="article",
    )
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="draft")
    author_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False, index=True,
    )
    category_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True, index=True,
    )
    view_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
