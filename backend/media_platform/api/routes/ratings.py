"""Rating Routes — like toggle, like stats, trending content.

Invariants:
    - Toggle is the only way to like or unlike: there is no "set" endpoint
    - Static paths (/top, /stats) never collide with /{rating_id} (DELETE only)
"""

from fastapi import APIRouter, Depends, Query, Response, status

from media_platform.api.dependencies import Caller, get_caller, get_rating_manager
from media_platform.schemas.rating import (
    RatingResponse, ToggleLikeResponse, RatingStatsResponse,
    RatingStatsBatchRequest, RatingStatusResponse, RatingPage, ContentIdList,
)
from media_platform.services.rating_manager import RatingManager

router = APIRouter(prefix="/api/v1/ratings", tags=["ratings"])


@router.post("/content/{content_id}/toggle", response_model=ToggleLikeResponse)
async def toggle_like(
    content_id: int,
    caller: Caller = Depends(get_caller),
    manager: RatingManager = Depends(get_rating_manager),
):
    result = await manager.toggle_like(caller.user_id, content_id)
    return ToggleLikeResponse(
        outcome=result.outcome,
        content_id=result.content_id,
        user_id=result.user_id,
        has_liked=result.has_liked,
        rating=(
            RatingResponse.model_validate(result.rating) if result.rating else None
        ),
    )


@router.get("/content/{content_id}/stats", response_model=RatingStatsResponse)
async def get_content_stats(
    content_id: int,
    manager: RatingManager = Depends(get_rating_manager),
):
    stats = await manager.get_stats_by_content_id(content_id)
    return _stats_response(stats)


@router.post("/stats", response_model=dict[int, RatingStatsResponse])
async def get_stats_batch(
    payload: RatingStatsBatchRequest,
    manager: RatingManager = Depends(get_rating_manager),
):
    stats = await manager.get_stats_by_content_ids(payload.content_ids)
    return {content_id: _stats_response(s) for content_id, s in stats.items()}


@router.get("/content/{content_id}/status", response_model=RatingStatusResponse)
async def get_rating_status(
    content_id: int,
    caller: Caller = Depends(get_caller),
    manager: RatingManager = Depends(get_rating_manager),
):
    status_ = await manager.get_user_rating_status(caller.user_id, content_id)
    return RatingStatusResponse(
        user_id=status_.user_id,
        content_id=status_.content_id,
        has_liked=status_.has_liked,
        rating_id=status_.rating_id,
    )


@router.get("/content/{content_id}", response_model=RatingPage)
async def list_content_ratings(
    content_id: int,
    limit: int | None = Query(None),
    offset: int | None = Query(None),
    manager: RatingManager = Depends(get_rating_manager),
):
    result = await manager.list_by_content(content_id, limit, offset)
    return RatingPage(
        items=[RatingResponse.model_validate(r) for r in result.items],
        total=result.total,
        limit=result.limit,
        offset=result.offset,
        has_more=result.has_more,
    )


@router.get("/top", response_model=ContentIdList)
async def get_top_rated(
    limit: int | None = Query(None),
    window_days: int | None = Query(None),
    manager: RatingManager = Depends(get_rating_manager),
):
    """Content ids ordered by likes received within the trending window."""
    ids = await manager.get_top_rated_content_ids(limit, window_days)
    return ContentIdList(content_ids=ids)


@router.get("/user/{user_id}/liked", response_model=ContentIdList)
async def get_user_liked_content(
    user_id: int,
    limit: int | None = Query(None),
    offset: int | None = Query(None),
    manager: RatingManager = Depends(get_rating_manager),
):
    ids = await manager.get_user_liked_content_ids(user_id, limit, offset)
    return ContentIdList(content_ids=ids)


@router.delete("/{rating_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_rating(
    rating_id: int,
    caller: Caller = Depends(get_caller),
    manager: RatingManager = Depends(get_rating_manager),
):
    await manager.delete_rating(rating_id, caller.user_id, caller.is_admin)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _stats_response(stats) -> RatingStatsResponse:
    return RatingStatsResponse(
        content_id=stats.content_id, like_count=stats.like_count, count=stats.count,
    )
