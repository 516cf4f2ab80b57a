"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Finders return None for a missing row; only genuine store failures raise

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions that USE these records are never async themselves
    - *Like record protocols: managers and pure checks read ORM rows through these,
      so core never couples to SQLAlchemy models
"""

from datetime import datetime
from typing import Protocol

from media_platform.core.domain_types import (
    CategoryId, CommentId, RatingId, ContentId, UserId,
)


# ─── Record shapes ───────────────────────────────────────────────

class CategoryLike(Protocol):
    id: int
    name: str
    description: str
    parent_id: int | None
    created_at: datetime
    updated_at: datetime


class CommentLike(Protocol):
    id: int
    body: str
    user_id: int
    content_id: int
    parent_id: int | None
    created_at: datetime
    updated_at: datetime


class RatingLike(Protocol):
    id: int
    value: int
    user_id: int
    content_id: int
    created_at: datetime
    updated_at: datetime


class ContentLike(Protocol):
    id: int
    title: str
    author_id: int
    category_id: int | None


class UserLike(Protocol):
    id: int
    username: str
    role: str


# ─── Stores ──────────────────────────────────────────────────────

class CategoryRepository(Protocol):
    """Contract for category persistence — implemented by shell."""
    async def get_by_id(self, category_id: CategoryId) -> CategoryLike | None: ...
    async def get_by_name(self, name: str) -> CategoryLike | None: ...
    async def list_all(self) -> list[CategoryLike]: ...
    async def list_children(self, parent_id: CategoryId) -> list[CategoryLike]: ...
    async def load_parent_links(
        self, *, for_update: bool = False,
    ) -> dict[int, int | None]: ...
    async def create(
        self, name: str, description: str, parent_id: CategoryId | None,
    ) -> CategoryLike: ...
    async def save(self, category: CategoryLike) -> CategoryLike: ...
    async def reparent_children(
        self, category_id: CategoryId, new_parent_id: CategoryId | None,
    ) -> int: ...
    async def delete(self, category: CategoryLike) -> None: ...


class CommentRepository(Protocol):
    """Contract for comment persistence — implemented by shell."""
    async def get_by_id(self, comment_id: CommentId) -> CommentLike | None: ...
    async def list_roots_by_content(
        self, content_id: ContentId, limit: int, offset: int,
    ) -> list[CommentLike]: ...
    async def count_roots_by_content(self, content_id: ContentId) -> int: ...
    async def count_by_content(self, content_id: ContentId) -> int: ...
    async def list_replies(
        self, parent_id: CommentId, limit: int, offset: int,
    ) -> list[CommentLike]: ...
    async def count_replies(self, parent_id: CommentId) -> int: ...
    async def list_by_user(
        self, user_id: UserId, limit: int, offset: int,
    ) -> list[CommentLike]: ...
    async def count_by_user(self, user_id: UserId) -> int: ...
    async def create(
        self,
        user_id: UserId,
        content_id: ContentId,
        body: str,
        parent_id: CommentId | None,
    ) -> CommentLike: ...
    async def save(self, comment: CommentLike) -> CommentLike: ...
    async def delete_with_replies(self, comment: CommentLike) -> int: ...


class RatingRepository(Protocol):
    """Contract for rating persistence — implemented by shell."""
    async def get_by_id(self, rating_id: RatingId) -> RatingLike | None: ...
    async def get_by_user_and_content(
        self, user_id: UserId, content_id: ContentId, *, for_update: bool = False,
    ) -> RatingLike | None: ...
    async def create(
        self, user_id: UserId, content_id: ContentId, value: int,
    ) -> RatingLike: ...
    async def delete(self, rating: RatingLike) -> None: ...
    async def count_by_content(self, content_id: ContentId) -> int: ...
    async def count_by_contents(
        self, content_ids: list[ContentId],
    ) -> dict[int, int]: ...
    async def list_by_content(
        self, content_id: ContentId, limit: int, offset: int,
    ) -> list[RatingLike]: ...
    async def list_content_ids_by_user(
        self, user_id: UserId, limit: int, offset: int,
    ) -> list[int]: ...
    async def top_content_ids_since(
        self, since: datetime, limit: int,
    ) -> list[int]: ...


class ContentRepository(Protocol):
    """Contract for content lookups and category detachment."""
    async def get_by_id(self, content_id: ContentId) -> ContentLike | None: ...
    async def detach_category(self, category_id: CategoryId) -> int: ...


class UserRepository(Protocol):
    """Contract for user lookups."""
    async def get_by_id(self, user_id: UserId) -> UserLike | None: ...
