"""Comment Routes — threads per content item, edits and deletes by author or admin.

Invariants:
    - Caller identity comes from get_caller, never from the payload
    - Request bodies may carry "content" or "body"; "content" wins
"""

from fastapi import APIRouter, Depends, Query, Response, status

from media_platform.api.dependencies import Caller, get_caller, get_comment_manager
from media_platform.core.pagination import PagedResult
from media_platform.schemas.comment import (
    CommentCreate, CommentUpdate, CommentResponse, CommentThreadResponse,
    CommentPage, ContentCommentsPage,
)
from media_platform.services.comment_manager import CommentManager, ContentComments

router = APIRouter(prefix="/api/v1/comments", tags=["comments"])


@router.post(
    "", response_model=CommentResponse, status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    payload: CommentCreate,
    caller: Caller = Depends(get_caller),
    manager: CommentManager = Depends(get_comment_manager),
):
    return await manager.create(
        caller.user_id, payload.content_id, payload.text, payload.parent_id,
    )


@router.get("/content/{content_id}", response_model=ContentCommentsPage)
async def list_content_comments(
    content_id: int,
    limit: int | None = Query(None),
    offset: int | None = Query(None),
    manager: CommentManager = Depends(get_comment_manager),
):
    result = await manager.list_by_content(content_id, limit, offset)
    return _content_page(result)


@router.get("/user/{user_id}", response_model=CommentPage)
async def list_user_comments(
    user_id: int,
    limit: int | None = Query(None),
    offset: int | None = Query(None),
    manager: CommentManager = Depends(get_comment_manager),
):
    return _comment_page(await manager.list_by_user(user_id, limit, offset))


@router.get("/{comment_id}", response_model=CommentResponse)
async def get_comment(
    comment_id: int,
    manager: CommentManager = Depends(get_comment_manager),
):
    return await manager.get(comment_id)


@router.get("/{comment_id}/replies", response_model=CommentPage)
async def list_comment_replies(
    comment_id: int,
    limit: int | None = Query(None),
    offset: int | None = Query(None),
    manager: CommentManager = Depends(get_comment_manager),
):
    return _comment_page(await manager.list_replies(comment_id, limit, offset))


@router.patch("/{comment_id}", response_model=CommentResponse)
async def update_comment(
    comment_id: int,
    payload: CommentUpdate,
    caller: Caller = Depends(get_caller),
    manager: CommentManager = Depends(get_comment_manager),
):
    return await manager.update(comment_id, caller.user_id, caller.role, payload.text)


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: int,
    caller: Caller = Depends(get_caller),
    manager: CommentManager = Depends(get_comment_manager),
):
    await manager.delete(comment_id, caller.user_id, caller.role)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ─── Response assembly ──────────────────────────────────────────

def _comment_page(result: PagedResult) -> CommentPage:
    return CommentPage(
        items=[CommentResponse.model_validate(c) for c in result.items],
        total=result.total,
        limit=result.limit,
        offset=result.offset,
        has_more=result.has_more,
    )


def _content_page(result: ContentComments) -> ContentCommentsPage:
    threads = [
        CommentThreadResponse(
            **CommentResponse.model_validate(thread.comment).model_dump(),
            replies=[CommentResponse.model_validate(r) for r in thread.replies],
            reply_count=thread.reply_count,
        )
        for thread in result.items
    ]
    return ContentCommentsPage(
        items=threads,
        total=result.total,
        comment_count=result.comment_count,
        limit=result.limit,
        offset=result.offset,
        has_more=result.has_more,
    )
