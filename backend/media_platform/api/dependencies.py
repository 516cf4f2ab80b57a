"""API Dependencies — caller identity and per-request managers.

Invariants:
    - Authentication happens upstream; this service trusts X-User-Id / X-User-Role
    - A missing or non-integer X-User-Id fails request validation (400)
    - Managers are built per request over the request's session, with the
      configured operation deadline

Design Decisions:
    - Role defaults to "user": only an explicit "admin" bypasses ownership checks
    - Category writes are admin-only (require_admin); reads are public
"""

from dataclasses import dataclass

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.config import get_settings
from media_platform.core.domain_types import UserRole
from media_platform.core.errors import PermissionDeniedError
from media_platform.infrastructure.database import get_db
from media_platform.services.category_manager import CategoryManager
from media_platform.services.comment_manager import CommentManager
from media_platform.services.rating_manager import RatingManager


@dataclass
class Caller:
    user_id: int
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN


async def get_caller(
    x_user_id: int = Header(...),
    x_user_role: str = Header(UserRole.USER.value),
) -> Caller:
    return Caller(user_id=x_user_id, role=x_user_role.strip().lower())


def require_admin(action: str, resource_type: str):
    """Dependency factory: the caller must hold the admin role."""

    async def dependency(caller: Caller = Depends(get_caller)) -> Caller:
        if not caller.is_admin:
            raise PermissionDeniedError(action, resource_type, "*")
        return caller

    return dependency


async def get_category_manager(
    db: AsyncSession = Depends(get_db),
) -> CategoryManager:
    settings = get_settings()
    return CategoryManager(db, default_timeout=settings.operation_timeout_seconds)


async def get_comment_manager(
    db: AsyncSession = Depends(get_db),
) -> CommentManager:
    settings = get_settings()
    return CommentManager(
        db,
        default_timeout=settings.operation_timeout_seconds,
        default_page_limit=settings.default_page_limit,
        max_page_limit=settings.max_page_limit,
    )


async def get_rating_manager(
    db: AsyncSession = Depends(get_db),
) -> RatingManager:
    settings = get_settings()
    return RatingManager(
        db,
        default_timeout=settings.operation_timeout_seconds,
        default_page_limit=settings.default_page_limit,
        max_page_limit=settings.max_page_limit,
        trending_window_days=settings.trending_window_days,
    )
