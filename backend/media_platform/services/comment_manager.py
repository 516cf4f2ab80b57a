"""Comment Thread Manager — validates and mutates one-level comment threads.

Invariants:
    - Every referenced entity (content, author, parent) is re-read before the write
    - A reply's parent is a root comment on the same content (threads are one level)
    - Authorization runs BEFORE body validation: a non-author gets
      PermissionDeniedError whatever the body looks like
    - update always bumps updated_at, even when the body is unchanged
    - Deleting a comment deletes its replies in the same transaction
    - Commit is the last step of every write

Design Decisions:
    - list_by_content pages over root comments and attaches the first
      REPLY_PREVIEW_LIMIT replies of each, so one call renders a thread view
    - total counts root comments (what the page is cut from); comment_count
      counts every comment on the content, replies included
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.domain_types import (
    CommentId, ContentId, UserId, DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT,
    REPLY_PREVIEW_LIMIT,
)
from media_platform.core.enforce_comments import (
    can_delete, can_edit, check_body, validate_new_comment,
)
from media_platform.core.errors import PermissionDeniedError
from media_platform.core.pagination import PagedResult, normalize_pagination
from media_platform.core.repository_protocols import (
    CommentLike, CommentRepository, ContentRepository, UserRepository,
)
from media_platform.repositories.comment_repository import SqlCommentRepository
from media_platform.repositories.content_repository import (
    SqlContentRepository, SqlUserRepository,
)
from media_platform.services.deadline import with_deadline
from media_platform.services.existence_guard import (
    require_comment, require_content, require_user,
)

logger = logging.getLogger(__name__)


@dataclass
class CommentThread:
    """A root comment with a preview of its replies."""
    comment: CommentLike
    replies: list[CommentLike] = field(default_factory=list)
    reply_count: int = 0


@dataclass
class ContentComments(PagedResult):
    comment_count: int = 0


class CommentManager:
    """Comment thread operations. Stateless over one AsyncSession."""

    def __init__(
        self,
        db: AsyncSession,
        *,
        comments: CommentRepository | None = None,
        contents: ContentRepository | None = None,
        users: UserRepository | None = None,
        default_timeout: float | None = None,
        default_page_limit: int = DEFAULT_PAGE_LIMIT,
        max_page_limit: int = MAX_PAGE_LIMIT,
    ):
        self.db = db
        self.comments = comments or SqlCommentRepository(db)
        self.contents = contents or SqlContentRepository(db)
        self.users = users or SqlUserRepository(db)
        self.default_timeout = default_timeout
        self.default_page_limit = default_page_limit
        self.max_page_limit = max_page_limit

    # ─── Reads ──────────────────────────────────────────────────

    @with_deadline("get_comment")
    async def get(self, comment_id: CommentId) -> CommentLike:
        return await require_comment(self.comments, comment_id)

    @with_deadline("list_content_comments")
    async def list_by_content(
        self,
        content_id: ContentId,
        limit: int | None = None,
        offset: int | None = None,
    ) -> ContentComments:
        await require_content(self.contents, content_id)
        page = self._page(limit, offset)

        roots = await self.comments.list_roots_by_content(
            content_id, page.limit, page.offset,
        )
        threads = []
        for root in roots:
            replies = await self.comments.list_replies(root.id, REPLY_PREVIEW_LIMIT, 0)
            reply_count = await self.comments.count_replies(root.id)
            threads.append(CommentThread(root, replies, reply_count))

        return ContentComments(
            items=threads,
            total=await self.comments.count_roots_by_content(content_id),
            limit=page.limit,
            offset=page.offset,
            comment_count=await self.comments.count_by_content(content_id),
        )

    @with_deadline("list_comment_replies")
    async def list_replies(
        self,
        parent_id: CommentId,
        limit: int | None = None,
        offset: int | None = None,
    ) -> PagedResult:
        await require_comment(self.comments, parent_id)
        page = self._page(limit, offset)
        replies = await self.comments.list_replies(parent_id, page.limit, page.offset)
        return PagedResult(
            items=replies,
            total=await self.comments.count_replies(parent_id),
            limit=page.limit,
            offset=page.offset,
        )

    @with_deadline("list_user_comments")
    async def list_by_user(
        self,
        user_id: UserId,
        limit: int | None = None,
        offset: int | None = None,
    ) -> PagedResult:
        await require_user(self.users, user_id)
        page = self._page(limit, offset)
        comments = await self.comments.list_by_user(user_id, page.limit, page.offset)
        return PagedResult(
            items=comments,
            total=await self.comments.count_by_user(user_id),
            limit=page.limit,
            offset=page.offset,
        )

    # ─── Writes ─────────────────────────────────────────────────

    @with_deadline("create_comment")
    async def create(
        self,
        author_id: UserId,
        content_id: ContentId,
        body: str | None,
        parent_id: CommentId | None = None,
    ) -> CommentLike:
        await require_content(self.contents, content_id)
        await require_user(self.users, author_id)
        parent = None
        if parent_id is not None:
            parent = await require_comment(self.comments, parent_id, "Parent comment")

        error = validate_new_comment(body, parent, content_id)
        if error:
            raise error

        comment = await self.comments.create(author_id, content_id, body, parent_id)
        await self.db.commit()

        logger.info(
            f"Comment created on content {content_id}"
            + (f" (reply to {parent_id})" if parent_id is not None else ""),
            extra={
                "comment_id": comment.id, "content_id": content_id,
                "user_id": author_id, "operation": "create_comment",
            },
        )
        return comment

    @with_deadline("update_comment")
    async def update(
        self,
        comment_id: CommentId,
        caller_id: UserId,
        caller_role: str,
        body: str | None,
    ) -> CommentLike:
        comment = await require_comment(self.comments, comment_id)
        if not can_edit(comment, caller_id, caller_role):
            raise PermissionDeniedError("edit", "Comment", comment_id)

        error = check_body(body)
        if error:
            raise error

        comment.body = body
        comment.updated_at = datetime.now(timezone.utc)
        await self.comments.save(comment)
        await self.db.commit()

        logger.info(
            f"Comment updated: {comment_id}",
            extra={
                "comment_id": comment_id, "user_id": caller_id,
                "operation": "update_comment",
            },
        )
        return comment

    @with_deadline("delete_comment")
    async def delete(
        self, comment_id: CommentId, caller_id: UserId, caller_role: str,
    ) -> None:
        comment = await require_comment(self.comments, comment_id)
        if not can_delete(comment, caller_id, caller_role):
            raise PermissionDeniedError("delete", "Comment", comment_id)

        replies = await self.comments.delete_with_replies(comment)
        await self.db.commit()

        logger.info(
            f"Comment deleted: {comment_id} ({replies} replies removed)",
            extra={
                "comment_id": comment_id, "user_id": caller_id,
                "operation": "delete_comment",
            },
        )

    def _page(self, limit: int | None, offset: int | None):
        return normalize_pagination(
            limit, offset, self.default_page_limit, self.max_page_limit,
        )
