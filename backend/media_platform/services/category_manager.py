"""Category Hierarchy Manager — validates and mutates the category forest.

Invariants:
    - Every check runs before any attribute is touched: a rejected update writes nothing
    - update(id, parent_id=id) always fails validation, even on corrupted data
    - Cycle detection reads the parent links row-locked in the same transaction
      as the write (closes the check-then-update window)
    - Duplicate names surface as ResourceConflictError, whether caught by the
      pre-check or by the UNIQUE(name) constraint at flush
    - A parent deleted between its check and the flush surfaces as
      ResourceNotFoundError("Parent category"), never as a name conflict
    - delete lifts children to the deleted node's parent and clears
      contents.category_id, all in one transaction

Design Decisions:
    - Omitted update fields are UNSET, not None: parent_id=None means "move to root"
    - check_circular_reference is public: the same bounded walk the update uses
    - Corrupted ancestry (pre-existing cycle) is logged, never looped on
"""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.category_tree import (
    trace_ancestors, find_cyclic_nodes, has_circular_reference,
)
from media_platform.core.domain_types import CategoryId, UNSET, Unset
from media_platform.core.enforce_categories import (
    check_name, check_name_available, check_not_self_parent, check_no_cycle,
)
from media_platform.core.errors import ResourceNotFoundError
from media_platform.core.repository_protocols import (
    CategoryLike, CategoryRepository, ContentRepository,
)
from media_platform.repositories.category_repository import SqlCategoryRepository
from media_platform.repositories.content_repository import SqlContentRepository
from media_platform.services.deadline import with_deadline
from media_platform.services.existence_guard import require_category

logger = logging.getLogger(__name__)


class CategoryManager:
    """Category tree operations. Stateless over one AsyncSession."""

    def __init__(
        self,
        db: AsyncSession,
        *,
        categories: CategoryRepository | None = None,
        contents: ContentRepository | None = None,
        default_timeout: float | None = None,
    ):
        self.db = db
        self.categories = categories or SqlCategoryRepository(db)
        self.contents = contents or SqlContentRepository(db)
        self.default_timeout = default_timeout

    # ─── Reads ──────────────────────────────────────────────────

    @with_deadline("get_category")
    async def get(self, category_id: CategoryId) -> CategoryLike:
        return await require_category(self.categories, category_id)

    @with_deadline("list_categories")
    async def list_all(self) -> list[CategoryLike]:
        return await self.categories.list_all()

    @with_deadline("list_child_categories")
    async def list_children(self, parent_id: CategoryId) -> list[CategoryLike]:
        await require_category(self.categories, parent_id)
        return await self.categories.list_children(parent_id)

    @with_deadline("check_circular_reference")
    async def check_circular_reference(
        self, category_id: CategoryId, candidate_parent_id: CategoryId | None,
    ) -> bool:
        """True iff category_id appears in candidate_parent_id's ancestor chain."""
        links = await self.categories.load_parent_links()
        return self._walk_finds(category_id, candidate_parent_id, links)

    @with_deadline("audit_category_hierarchy")
    async def find_corrupted_categories(self) -> list[int]:
        """Ids whose parent chain never reaches a root (should always be empty)."""
        links = await self.categories.load_parent_links()
        return sorted(find_cyclic_nodes(links))

    # ─── Writes ─────────────────────────────────────────────────

    @with_deadline("create_category")
    async def create(
        self,
        name: str,
        description: str = "",
        parent_id: CategoryId | None = None,
    ) -> CategoryLike:
        error = check_name(name)
        if error:
            raise error
        conflict = check_name_available(name, await self.categories.get_by_name(name))
        if conflict:
            raise conflict
        if parent_id is not None:
            await require_category(self.categories, parent_id, "Parent category")

        try:
            category = await self.categories.create(name, description or "", parent_id)
        except IntegrityError as e:
            await self._raise_write_conflict(e, name, parent_id=parent_id)
        await self.db.commit()

        logger.info(
            f"Category created: {category.name}",
            extra={"category_id": category.id, "operation": "create_category"},
        )
        return category

    @with_deadline("update_category")
    async def update(
        self,
        category_id: CategoryId,
        name: str | None | Unset = UNSET,
        description: str | None | Unset = UNSET,
        parent_id: CategoryId | None | Unset = UNSET,
    ) -> CategoryLike:
        category = await require_category(self.categories, category_id)

        rename = name is not UNSET and name != category.name
        if rename:
            error = check_name(name)
            if error:
                raise error
            conflict = check_name_available(
                name, await self.categories.get_by_name(name), exclude_id=category_id,
            )
            if conflict:
                raise conflict

        if parent_id is not UNSET:
            error = check_not_self_parent(category_id, parent_id)
            if error:
                raise error
        reparent = parent_id is not UNSET and parent_id != category.parent_id
        if reparent and parent_id is not None:
            await require_category(self.categories, parent_id, "Parent category")
            links = await self.categories.load_parent_links(for_update=True)
            self._log_if_corrupted(parent_id, links)
            error = check_no_cycle(category_id, parent_id, links)
            if error:
                raise error

        # All checks passed, mutate
        if rename:
            category.name = name
        if description is not UNSET:
            category.description = description or ""
        if reparent:
            category.parent_id = parent_id

        try:
            await self.categories.save(category)
        except IntegrityError as e:
            await self._raise_write_conflict(
                e,
                name if rename else None,
                category_id=category_id,
                parent_id=parent_id if reparent else None,
            )
        await self.db.commit()

        logger.info(
            f"Category updated: {category.id}",
            extra={"category_id": category.id, "operation": "update_category"},
        )
        return category

    @with_deadline("delete_category")
    async def delete(self, category_id: CategoryId) -> None:
        category = await require_category(self.categories, category_id)

        lifted = await self.categories.reparent_children(
            category_id, category.parent_id,
        )
        detached = await self.contents.detach_category(category_id)
        await self.categories.delete(category)
        await self.db.commit()

        logger.info(
            f"Category deleted: {category_id} "
            f"({lifted} children lifted, {detached} contents detached)",
            extra={"category_id": category_id, "operation": "delete_category"},
        )

    # ─── Helpers ────────────────────────────────────────────────

    def _walk_finds(
        self,
        category_id: int,
        candidate_parent_id: int | None,
        links: dict[int, int | None],
    ) -> bool:
        if candidate_parent_id is None:
            return False
        self._log_if_corrupted(candidate_parent_id, links)
        return has_circular_reference(category_id, candidate_parent_id, links)

    def _log_if_corrupted(self, start_id: int, links: dict[int, int | None]) -> None:
        trace = trace_ancestors(start_id, links)
        if trace.corrupted:
            logger.warning(
                f"Corrupted category ancestry: chain from {start_id} "
                f"revisits {trace.revisited}",
                extra={"category_id": start_id, "error_code": "CORRUPTED_HIERARCHY"},
            )

    async def _raise_write_conflict(
        self,
        error: IntegrityError,
        name: str | None,
        *,
        category_id: CategoryId | None = None,
        parent_id: CategoryId | None = None,
    ):
        """Map a constraint violation at flush to the most specific domain error.

        A name conflict needs another row holding the requested name; a missing
        parent row means the parent was deleted after it was checked. Anything
        else propagates unchanged.
        """
        await self.db.rollback()
        if name is not None:
            conflict = check_name_available(
                name, await self.categories.get_by_name(name), exclude_id=category_id,
            )
            if conflict:
                logger.warning(
                    f"Concurrent write won the category name '{name}'",
                    extra={"error_code": "RESOURCE_CONFLICT", "operation": "category_name"},
                )
                raise conflict from error
        if parent_id is not None:
            links = await self.categories.load_parent_links()
            if parent_id not in links:
                logger.warning(
                    f"Parent category {parent_id} vanished before the write",
                    extra={"category_id": category_id, "error_code": "RESOURCE_NOT_FOUND"},
                )
                raise ResourceNotFoundError("Parent category", parent_id) from error
        raise error
