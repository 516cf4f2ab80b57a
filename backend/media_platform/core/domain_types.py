"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CategoryId, CommentId, RatingId, ContentId, UserId wrap int — never mix them up
    - LIKE_VALUE is the only rating value the platform stores
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

CategoryId = NewType("CategoryId", int)
CommentId = NewType("CommentId", int)
RatingId = NewType("RatingId", int)
ContentId = NewType("ContentId", int)
UserId = NewType("UserId", int)


# ─── Limits ──────────────────────────────────────────────────────

CATEGORY_NAME_MAX_LENGTH: int = 100
COMMENT_BODY_MAX_LENGTH: int = 1000

# Threads are exactly one level deep: root comment -> replies
MAX_COMMENT_DEPTH: int = 1

LIKE_VALUE: int = 1

DEFAULT_PAGE_LIMIT: int = 10
MAX_PAGE_LIMIT: int = 100
DEFAULT_TRENDING_WINDOW_DAYS: int = 7

# Replies shown under each root comment in a content listing
REPLY_PREVIEW_LIMIT: int = 5


# ─── Enums ───────────────────────────────────────────────────────

class UserRole(str, Enum):
    """Caller roles — admin bypasses ownership checks."""
    USER = "user"
    ADMIN = "admin"


class ToggleOutcome(str, Enum):
    """Result of a like toggle — the transition that was applied."""
    CREATED = "created"   # Unrated -> Liked
    REMOVED = "removed"   # Liked -> Unrated


class _Unset(Enum):
    """Sentinel type for 'field not supplied' in partial updates."""
    UNSET = "UNSET"

    def __repr__(self) -> str:
        return "UNSET"


UNSET = _Unset.UNSET
Unset = _Unset
