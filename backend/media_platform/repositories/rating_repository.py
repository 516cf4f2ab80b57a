"""Rating Repository — like rows, per-content counts, and trending queries.

Invariants:
    - get_by_user_and_content(for_update=True) row-locks the pair where supported
    - create flushes immediately so a UNIQUE(user_id, content_id) violation
      surfaces inside the manager, not at commit
    - top_content_ids_since orders by like count desc, then content id asc

Design Decisions:
    - Window cutoff computed by the caller in Python: portable across
      PostgreSQL and SQLite (no INTERVAL arithmetic in SQL)
"""

from datetime import datetime

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.domain_types import ContentId, RatingId, UserId
from media_platform.models.rating import Rating


class SqlRatingRepository:
    """Rating persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, rating_id: RatingId) -> Rating | None:
        return await self.db.get(Rating, rating_id)

    async def get_by_user_and_content(
        self, user_id: UserId, content_id: ContentId, *, for_update: bool = False,
    ) -> Rating | None:
        query = (
            select(Rating)
            .where(Rating.user_id == user_id)
            .where(Rating.content_id == content_id)
        )
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return result.scalar_one_or_none()

    async def create(
        self, user_id: UserId, content_id: ContentId, value: int,
    ) -> Rating:
        rating = Rating(user_id=user_id, content_id=content_id, value=value)
        self.db.add(rating)
        await self.db.flush()
        return rating

    async def delete(self, rating: Rating) -> None:
        await self.db.delete(rating)
        await self.db.flush()

    async def count_by_content(self, content_id: ContentId) -> int:
        result = await self.db.execute(
            select(func.count(Rating.id)).where(Rating.content_id == content_id),
        )
        return result.scalar_one()

    async def count_by_contents(
        self, content_ids: list[ContentId],
    ) -> dict[int, int]:
        if not content_ids:
            return {}
        result = await self.db.execute(
            select(Rating.content_id, func.count(Rating.id))
            .where(Rating.content_id.in_(content_ids))
            .group_by(Rating.content_id)
        )
        return {content_id: count for content_id, count in result.all()}

    async def list_by_content(
        self, content_id: ContentId, limit: int, offset: int,
    ) -> list[Rating]:
        result = await self.db.execute(
            select(Rating)
            .where(Rating.content_id == content_id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def list_content_ids_by_user(
        self, user_id: UserId, limit: int, offset: int,
    ) -> list[int]:
        result = await self.db.execute(
            select(Rating.content_id)
            .where(Rating.user_id == user_id)
            .order_by(Rating.created_at.desc(), Rating.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def top_content_ids_since(
        self, since: datetime, limit: int,
    ) -> list[int]:
        like_count = func.count(Rating.id).label("like_count")
        result = await self.db.execute(
            select(Rating.content_id, like_count)
            .where(Rating.created_at >= since)
            .group_by(Rating.content_id)
            .order_by(like_count.desc(), Rating.content_id.asc())
            .limit(limit)
        )
        return [row.content_id for row in result]
