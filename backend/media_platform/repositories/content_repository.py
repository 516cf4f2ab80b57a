"""Content and User Repositories — existence lookups for the guard pattern.

Invariants:
    - Lookups never create rows
    - detach_category is the only write: it clears category_id on delete
"""

from sqlalchemy import update
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.domain_types import CategoryId, ContentId, UserId
from media_platform.models.content import Content
from media_platform.models.user import User


class SqlContentRepository:
    """Content lookups over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, content_id: ContentId) -> Content | None:
        return await self.db.get(Content, content_id)

    async def detach_category(self, category_id: CategoryId) -> int:
        result = await self.db.execute(
            update(Content)
            .where(Content.category_id == category_id)
            .values(category_id=None)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0


class SqlUserRepository:
    """User lookups over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, user_id: UserId) -> User | None:
        return await self.db.get(User, user_id)
