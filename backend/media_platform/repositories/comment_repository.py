"""Comment Repository — comment rows, root/reply listings, and cascading delete.

Invariants:
    - list_roots_by_content returns root comments only, newest first
    - list_replies returns replies oldest first (reading order)
    - delete_with_replies removes the replies before the parent, in one flush

Design Decisions:
    - Explicit reply delete instead of relying on ON DELETE CASCADE alone:
      SQLite runs with foreign keys off unless told otherwise
"""

from sqlalchemy import select, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.domain_types import CommentId, ContentId, UserId
from media_platform.models.comment import Comment


class SqlCommentRepository:
    """Comment persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, comment_id: CommentId) -> Comment | None:
        return await self.db.get(Comment, comment_id)

    async def list_roots_by_content(
        self, content_id: ContentId, limit: int, offset: int,
    ) -> list[Comment]:
        result = await self.db.execute(
            select(Comment)
            .where(Comment.content_id == content_id)
            .where(Comment.parent_id.is_(None))
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def count_roots_by_content(self, content_id: ContentId) -> int:
        result = await self.db.execute(
            select(func.count(Comment.id))
            .where(Comment.content_id == content_id)
            .where(Comment.parent_id.is_(None))
        )
        return result.scalar_one()

    async def count_by_content(self, content_id: ContentId) -> int:
        result = await self.db.execute(
            select(func.count(Comment.id)).where(Comment.content_id == content_id),
        )
        return result.scalar_one()

    async def list_replies(
        self, parent_id: CommentId, limit: int, offset: int,
    ) -> list[Comment]:
        result = await self.db.execute(
            select(Comment)
            .where(Comment.parent_id == parent_id)
            .order_by(Comment.created_at.asc(), Comment.id.asc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def count_replies(self, parent_id: CommentId) -> int:
        result = await self.db.execute(
            select(func.count(Comment.id)).where(Comment.parent_id == parent_id),
        )
        return result.scalar_one()

    async def list_by_user(
        self, user_id: UserId, limit: int, offset: int,
    ) -> list[Comment]:
        result = await self.db.execute(
            select(Comment)
            .where(Comment.user_id == user_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    async def count_by_user(self, user_id: UserId) -> int:
        result = await self.db.execute(
            select(func.count(Comment.id)).where(Comment.user_id == user_id),
        )
        return result.scalar_one()

    async def create(
        self,
        user_id: UserId,
        content_id: ContentId,
        body: str,
        parent_id: CommentId | None,
    ) -> Comment:
        comment = Comment(
            user_id=user_id, content_id=content_id,
            body=body, parent_id=parent_id,
        )
        self.db.add(comment)
        await self.db.flush()
        return comment

    async def save(self, comment: Comment) -> Comment:
        await self.db.flush()
        return comment

    async def delete_with_replies(self, comment: Comment) -> int:
        result = await self.db.execute(
            delete(Comment)
            .where(Comment.parent_id == comment.id)
            .execution_options(synchronize_session="fetch")
        )
        await self.db.delete(comment)
        await self.db.flush()
        return result.rowcount or 0
