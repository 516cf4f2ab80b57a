"""Comment Schemas — payloads accepting "content" or "body", thread responses.

Invariants:
    - CommentCreate/CommentUpdate expose one resolved text: "content" wins over "body"
    - CommentThreadResponse carries at most REPLY_PREVIEW_LIMIT replies
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from media_platform.core.enforce_comments import resolve_comment_body


class CommentCreate(BaseModel):
    content_id: int
    content: str | None = None
    body: str | None = None
    parent_id: int | None = None

    @property
    def text(self) -> str | None:
        return resolve_comment_body(self.content, self.body)


class CommentUpdate(BaseModel):
    content: str | None = None
    body: str | None = None

    @property
    def text(self) -> str | None:
        return resolve_comment_body(self.content, self.body)


class CommentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    body: str
    user_id: int
    content_id: int
    parent_id: int | None
    created_at: datetime
    updated_at: datetime


class CommentThreadResponse(CommentResponse):
    replies: list[CommentResponse] = []
    reply_count: int = 0


class CommentPage(BaseModel):
    items: list[CommentResponse]
    total: int
    limit: int
    offset: int
    has_more: bool


class ContentCommentsPage(BaseModel):
    """Root comments of one content item; total counts roots, comment_count all."""
    items: list[CommentThreadResponse]
    total: int
    comment_count: int
    limit: int
    offset: int
    has_more: bool
