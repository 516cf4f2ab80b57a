"""Rating Toggle Manager — owns the two-state like machine per (user, content).

Invariants:
    - At most one rating row per (user_id, content_id), enforced by UNIQUE in the store
    - toggle_like flips the state: Liked -> REMOVED, Unrated -> CREATED
    - Two concurrent toggles from Unrated end on Unrated, never on two rows
    - Content and user existence re-validated before any write
    - Stats count likes only; ids without likes report zero

Design Decisions:
    - Race recovery on IntegrityError: a concurrent toggle already inserted the like,
      so this toggle rolls back and deletes that row in a fresh transaction,
      reporting REMOVED (convert-to-delete). Full rollback over a savepoint:
      pysqlite savepoints are unreliable and the failed flush is the only work
    - Trending window cutoff computed here, not in SQL: portable across stores
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.domain_types import (
    ContentId, RatingId, UserId, ToggleOutcome, LIKE_VALUE,
    DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT, DEFAULT_TRENDING_WINDOW_DAYS,
)
from media_platform.core.enforce_ratings import (
    RatingStats, ToggleResult, can_delete_rating, decide_toggle, zero_filled_stats,
)
from media_platform.core.errors import PermissionDeniedError
from media_platform.core.pagination import PagedResult, normalize_pagination
from media_platform.core.repository_protocols import (
    ContentRepository, RatingLike, RatingRepository, UserRepository,
)
from media_platform.repositories.content_repository import (
    SqlContentRepository, SqlUserRepository,
)
from media_platform.repositories.rating_repository import SqlRatingRepository
from media_platform.services.deadline import with_deadline
from media_platform.services.existence_guard import (
    require_content, require_rating, require_user,
)

logger = logging.getLogger(__name__)


@dataclass
class RatingStatus:
    """Whether one user currently likes one content item."""
    user_id: int
    content_id: int
    has_liked: bool
    rating_id: int | None = None


class RatingManager:
    """Like toggle and rating reads. Stateless over one AsyncSession."""

    def __init__(
        self,
        db: AsyncSession,
        *,
        ratings: RatingRepository | None = None,
        contents: ContentRepository | None = None,
        users: UserRepository | None = None,
        default_timeout: float | None = None,
        default_page_limit: int = DEFAULT_PAGE_LIMIT,
        max_page_limit: int = MAX_PAGE_LIMIT,
        trending_window_days: int = DEFAULT_TRENDING_WINDOW_DAYS,
    ):
        self.db = db
        self.ratings = ratings or SqlRatingRepository(db)
        self.contents = contents or SqlContentRepository(db)
        self.users = users or SqlUserRepository(db)
        self.default_timeout = default_timeout
        self.default_page_limit = default_page_limit
        self.max_page_limit = max_page_limit
        self.trending_window_days = trending_window_days

    # ─── Toggle ─────────────────────────────────────────────────

    @with_deadline("toggle_like")
    async def toggle_like(self, user_id: UserId, content_id: ContentId) -> ToggleResult:
        await require_content(self.contents, content_id)
        await require_user(self.users, user_id)

        existing = await self.ratings.get_by_user_and_content(
            user_id, content_id, for_update=True,
        )
        if decide_toggle(existing) == ToggleOutcome.REMOVED:
            await self.ratings.delete(existing)
            await self.db.commit()
            self._log_toggle(ToggleOutcome.REMOVED, user_id, content_id)
            return ToggleResult(ToggleOutcome.REMOVED, content_id, user_id)

        try:
            rating = await self.ratings.create(user_id, content_id, LIKE_VALUE)
        except IntegrityError as e:
            return await self._recover_concurrent_like(user_id, content_id, e)
        await self.db.commit()

        self._log_toggle(ToggleOutcome.CREATED, user_id, content_id)
        return ToggleResult(ToggleOutcome.CREATED, content_id, user_id, rating)

    @with_deadline("delete_rating")
    async def delete_rating(
        self, rating_id: RatingId, caller_id: UserId, is_admin: bool = False,
    ) -> None:
        rating = await require_rating(self.ratings, rating_id)
        if not can_delete_rating(rating, caller_id, is_admin):
            raise PermissionDeniedError("delete", "Rating", rating_id)

        await self.ratings.delete(rating)
        await self.db.commit()

        logger.info(
            f"Rating deleted: {rating_id}",
            extra={
                "rating_id": rating_id, "user_id": caller_id,
                "operation": "delete_rating",
            },
        )

    # ─── Reads ──────────────────────────────────────────────────

    @with_deadline("get_rating_stats")
    async def get_stats_by_content_id(self, content_id: ContentId) -> RatingStats:
        await require_content(self.contents, content_id)
        return RatingStats(content_id, await self.ratings.count_by_content(content_id))

    @with_deadline("get_rating_stats_batch")
    async def get_stats_by_content_ids(
        self, content_ids: list[ContentId],
    ) -> dict[int, RatingStats]:
        unique_ids = list(dict.fromkeys(content_ids))
        counts = await self.ratings.count_by_contents(unique_ids)
        return zero_filled_stats(unique_ids, counts)

    @with_deadline("get_top_rated_content")
    async def get_top_rated_content_ids(
        self, limit: int | None = None, window_days: int | None = None,
    ) -> list[int]:
        page = normalize_pagination(limit, 0, self.default_page_limit, self.max_page_limit)
        if window_days is None or window_days <= 0:
            window_days = self.trending_window_days
        since = datetime.now(timezone.utc) - timedelta(days=window_days)
        return await self.ratings.top_content_ids_since(since, page.limit)

    @with_deadline("get_user_rating_status")
    async def get_user_rating_status(
        self, user_id: UserId, content_id: ContentId,
    ) -> RatingStatus:
        await require_content(self.contents, content_id)
        existing = await self.ratings.get_by_user_and_content(user_id, content_id)
        return RatingStatus(
            user_id=user_id,
            content_id=content_id,
            has_liked=existing is not None,
            rating_id=existing.id if existing is not None else None,
        )

    @with_deadline("list_content_ratings")
    async def list_by_content(
        self,
        content_id: ContentId,
        limit: int | None = None,
        offset: int | None = None,
    ) -> PagedResult:
        await require_content(self.contents, content_id)
        page = normalize_pagination(
            limit, offset, self.default_page_limit, self.max_page_limit,
        )
        ratings = await self.ratings.list_by_content(content_id, page.limit, page.offset)
        return PagedResult(
            items=ratings,
            total=await self.ratings.count_by_content(content_id),
            limit=page.limit,
            offset=page.offset,
        )

    @with_deadline("list_user_liked_content")
    async def get_user_liked_content_ids(
        self,
        user_id: UserId,
        limit: int | None = None,
        offset: int | None = None,
    ) -> list[int]:
        await require_user(self.users, user_id)
        page = normalize_pagination(
            limit, offset, self.default_page_limit, self.max_page_limit,
        )
        return await self.ratings.list_content_ids_by_user(
            user_id, page.limit, page.offset,
        )

    # ─── Helpers ────────────────────────────────────────────────

    async def _recover_concurrent_like(
        self, user_id: UserId, content_id: ContentId, error: IntegrityError,
    ) -> ToggleResult:
        """A concurrent toggle inserted the like first: flip it back off."""
        await self.db.rollback()
        winner: RatingLike | None = await self.ratings.get_by_user_and_content(
            user_id, content_id, for_update=True,
        )
        if winner is None:
            raise error
        await self.ratings.delete(winner)
        await self.db.commit()

        logger.warning(
            f"Concurrent like on content {content_id} by user {user_id}; "
            f"converted toggle to remove",
            extra={
                "content_id": content_id, "user_id": user_id,
                "error_code": "TOGGLE_RACE", "operation": "toggle_like",
            },
        )
        return ToggleResult(ToggleOutcome.REMOVED, content_id, user_id)

    def _log_toggle(
        self, outcome: ToggleOutcome, user_id: UserId, content_id: ContentId,
    ) -> None:
        logger.info(
            f"Like {outcome.value}: user {user_id} on content {content_id}",
            extra={
                "content_id": content_id, "user_id": user_id,
                "operation": "toggle_like",
            },
        )
