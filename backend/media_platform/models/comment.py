"""Comment ORM — a root comment or a one-level reply on a content item.

Invariants:
    - body is non-nullable (≤1000 chars, validated by the service)
    - content_id always set; parent_id set only for replies
    - Deleting a comment deletes its replies (ON DELETE CASCADE + explicit delete)

Design Decisions:
    - content_id denormalized on replies: listing by content needs no join
    - Cascade declared in the schema and repeated in the repository, so SQLite
      test databases (foreign keys off) honour the same policy
"""

from datetime import datetime, timezone

from sqlalchemy import Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from media_platform.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Comment(Base):
    """Comment on a content item."""
    __tablename__ = "comments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    body: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    content_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("contents.id", ondelete="CASCADE"), nullable=False, index=True,
    )
    parent_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("comments.id", ondelete="CASCADE"), nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
