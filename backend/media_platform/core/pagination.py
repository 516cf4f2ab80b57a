"""Pagination — clamps caller-supplied limit/offset to safe values.

Invariants:
    - limit <= 0 falls back to the default; limit is capped at the maximum
    - offset is never negative
"""

from dataclasses import dataclass

from media_platform.core.domain_types import DEFAULT_PAGE_LIMIT, MAX_PAGE_LIMIT


@dataclass(frozen=True)
class Page:
    limit: int
    offset: int


def normalize_pagination(
    limit: int | None,
    offset: int | None,
    default_limit: int = DEFAULT_PAGE_LIMIT,
    max_limit: int = MAX_PAGE_LIMIT,
) -> Page:
    if limit is None or limit <= 0:
        limit = default_limit
    limit = min(limit, max_limit)
    if offset is None or offset < 0:
        offset = 0
    return Page(limit=limit, offset=offset)


@dataclass
class PagedResult:
    """One page of rows plus the total the page was cut from."""
    items: list
    total: int
    limit: int
    offset: int

    @property
    def has_more(self) -> bool:
        return self.offset + len(self.items) < self.total
