"""Rating Rule Enforcement — the two-state like toggle and its guards.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Exactly two states per (user, content): UNRATED and LIKED
    - One symmetric transition: toggle flips the state, whichever it is
    - LIKE_VALUE is the only storable rating value

Design Decisions:
    - decide_toggle returns the outcome to apply; the shell performs the write
    - No "set to liked" entry point: callers can only flip (ADR: toggle semantics)
"""

from dataclasses import dataclass
from enum import Enum

from media_platform.core.domain_types import ToggleOutcome
from media_platform.core.repository_protocols import RatingLike


class RatingState(str, Enum):
    UNRATED = "unrated"
    LIKED = "liked"


@dataclass
class ToggleResult:
    """Outcome of toggle_like — the new rating only exists for CREATED."""
    outcome: ToggleOutcome
    content_id: int
    user_id: int
    rating: RatingLike | None = None

    @property
    def has_liked(self) -> bool:
        return self.outcome == ToggleOutcome.CREATED


@dataclass
class RatingStats:
    """Like counts for one content item (count mirrors like_count: likes only)."""
    content_id: int
    like_count: int

    @property
    def count(self) -> int:
        return self.like_count

    @property
    def has_likes(self) -> bool:
        return self.like_count > 0


def state_of(existing: RatingLike | None) -> RatingState:
    return RatingState.LIKED if existing is not None else RatingState.UNRATED


def decide_toggle(existing: RatingLike | None) -> ToggleOutcome:
    """Liked -> REMOVED, Unrated -> CREATED."""
    if state_of(existing) == RatingState.LIKED:
        return ToggleOutcome.REMOVED
    return ToggleOutcome.CREATED


def can_delete_rating(rating: RatingLike, caller_id: int, is_admin: bool) -> bool:
    return rating.user_id == caller_id or is_admin


def zero_filled_stats(
    content_ids: list[int], counts: dict[int, int],
) -> dict[int, RatingStats]:
    """Stats for every requested id, 0 likes where the store had no rows."""
    return {
        content_id: RatingStats(content_id, counts.get(content_id, 0))
        for content_id in content_ids
    }
