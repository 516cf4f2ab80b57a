"""Rating Schemas — toggle outcome, like stats, and trending responses."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from media_platform.core.domain_types import ToggleOutcome


class RatingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    value: int
    user_id: int
    content_id: int
    created_at: datetime
    updated_at: datetime


class ToggleLikeResponse(BaseModel):
    outcome: ToggleOutcome
    content_id: int
    user_id: int
    has_liked: bool
    rating: RatingResponse | None = None


class RatingStatsResponse(BaseModel):
    content_id: int
    like_count: int
    count: int


class RatingStatsBatchRequest(BaseModel):
    content_ids: list[int]


class RatingStatusResponse(BaseModel):
    user_id: int
    content_id: int
    has_liked: bool
    rating_id: int | None = None


class RatingPage(BaseModel):
    items: list[RatingResponse]
    total: int
    limit: int
    offset: int
    has_more: bool


class ContentIdList(BaseModel):
    content_ids: list[int]
