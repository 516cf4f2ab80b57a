"""Category ORM — a node in the category forest.

Invariants:
    - name is unique and non-nullable (≤100 chars)
    - parent_id is a nullable self-reference; the relation never forms a cycle
      (enforced by CategoryManager, not by the database)

Design Decisions:
    - UNIQUE(name) in the schema: closes the check-then-create race on names
    - No ORM relationship to children: the tree is only walked through
      parent links loaded in one query (core/category_tree.py)
"""

from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from media_platform.core.domain_types import CATEGORY_NAME_MAX_LENGTH
from media_platform.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Category(Base):
    """Category node — parent_id None means a root."""
    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(
        String(CATEGORY_NAME_MAX_LENGTH), nullable=False, unique=True,
    )
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    parent_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=True, index=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
