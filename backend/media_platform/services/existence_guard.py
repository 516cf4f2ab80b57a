"""Existence Guard — re-validates referenced entities before any mutation.

Invariants:
    - Each require_* returns the row or raises ResourceNotFoundError
    - Store failures propagate; a missing row is the only thing mapped here

Design Decisions:
    - Plain functions over a guard object: every manager repeats the pattern
      with its own repositories, no shared state needed
"""

from media_platform.core.domain_types import (
    CategoryId, CommentId, ContentId, RatingId, UserId,
)
from media_platform.core.errors import ResourceNotFoundError
from media_platform.core.repository_protocols import (
    CategoryLike, CategoryRepository,
    CommentLike, CommentRepository,
    ContentLike, ContentRepository,
    RatingLike, RatingRepository,
    UserLike, UserRepository,
)


async def require_category(
    categories: CategoryRepository, category_id: CategoryId, label: str = "Category",
) -> CategoryLike:
    category = await categories.get_by_id(category_id)
    if category is None:
        raise ResourceNotFoundError(label, category_id)
    return category


async def require_comment(
    comments: CommentRepository, comment_id: CommentId, label: str = "Comment",
) -> CommentLike:
    comment = await comments.get_by_id(comment_id)
    if comment is None:
        raise ResourceNotFoundError(label, comment_id)
    return comment


async def require_content(
    contents: ContentRepository, content_id: ContentId,
) -> ContentLike:
    content = await contents.get_by_id(content_id)
    if content is None:
        raise ResourceNotFoundError("Content", content_id)
    return content


async def require_user(users: UserRepository, user_id: UserId) -> UserLike:
    user = await users.get_by_id(user_id)
    if user is None:
        raise ResourceNotFoundError("User", user_id)
    return user


async def require_rating(
    ratings: RatingRepository, rating_id: RatingId,
) -> RatingLike:
    rating = await ratings.get_by_id(rating_id)
    if rating is None:
        raise ResourceNotFoundError("Rating", rating_id)
    return rating
