"""Category Rule Enforcement — validates category names and hierarchy changes.

Invariants:
    - All functions are PURE: no IO, no async, no DB, no side effects
    - Return an error instance on violation, None on success (the shell raises it)
    - A category can never be its own parent, directly or through ancestors

Design Decisions:
    - Errors returned, not raised: the manager decides when each check runs
    - Name length counted in characters, not bytes
"""

from collections.abc import Mapping

from media_platform.core.category_tree import has_circular_reference
from media_platform.core.domain_types import CATEGORY_NAME_MAX_LENGTH
from media_platform.core.errors import (
    DomainValidationError, ResourceConflictError,
)
from media_platform.core.repository_protocols import CategoryLike


def check_name(name: str | None) -> DomainValidationError | None:
    """Name is required and at most CATEGORY_NAME_MAX_LENGTH characters."""
    if name is None or not name.strip():
        return DomainValidationError("Category name is required", "name")
    if len(name) > CATEGORY_NAME_MAX_LENGTH:
        return DomainValidationError(
            f"Category name must be at most {CATEGORY_NAME_MAX_LENGTH} characters",
            "name",
        )
    return None


def check_name_available(
    name: str, existing: CategoryLike | None, exclude_id: int | None = None,
) -> ResourceConflictError | None:
    """Exact, case-sensitive uniqueness; the record being renamed does not collide with itself."""
    if existing is not None and existing.id != exclude_id:
        return ResourceConflictError(
            f"Category name '{name}' is already in use", "name",
        )
    return None


def check_not_self_parent(
    category_id: int, parent_id: int | None,
) -> DomainValidationError | None:
    if parent_id is not None and parent_id == category_id:
        return DomainValidationError(
            "A category cannot be its own parent", "parent_id",
        )
    return None


def check_no_cycle(
    category_id: int,
    parent_id: int | None,
    parent_links: Mapping[int, int | None],
) -> DomainValidationError | None:
    if has_circular_reference(category_id, parent_id, parent_links):
        return DomainValidationError(
            f"Moving category {category_id} under {parent_id} "
            "would create a circular reference",
            "parent_id",
        )
    return None
