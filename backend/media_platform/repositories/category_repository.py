"""Category Repository — category rows and the parent-link snapshot used for cycle checks.

Invariants:
    - load_parent_links(for_update=True) reads every (id, parent_id) pair FOR UPDATE, inside the
      caller's transaction, so the snapshot stays valid until commit
    - reparent_children and delete are flushed in the same transaction

Design Decisions:
    - Whole-table snapshot over a recursive CTE: the walk itself lives in pure core
      code and is bounded by a visited set, which a CTE over corrupted data is not
    - FOR UPDATE is a no-op on SQLite (tests); PostgreSQL takes row locks
"""

import logging

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from media_platform.core.domain_types import CategoryId
from media_platform.models.category import Category

logger = logging.getLogger(__name__)


class SqlCategoryRepository:
    """Category persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_id(self, category_id: CategoryId) -> Category | None:
        return await self.db.get(Category, category_id)

    async def get_by_name(self, name: str) -> Category | None:
        result = await self.db.execute(
            select(Category).where(Category.name == name),
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> list[Category]:
        result = await self.db.execute(select(Category).order_by(Category.name))
        return list(result.scalars().all())

    async def list_children(self, parent_id: CategoryId) -> list[Category]:
        result = await self.db.execute(
            select(Category)
            .where(Category.parent_id == parent_id)
            .order_by(Category.name)
        )
        return list(result.scalars().all())

    async def load_parent_links(
        self, *, for_update: bool = False,
    ) -> dict[int, int | None]:
        query = select(Category.id, Category.parent_id)
        if for_update:
            query = query.with_for_update()
        result = await self.db.execute(query)
        return {row.id: row.parent_id for row in result}

    async def create(
        self, name: str, description: str, parent_id: CategoryId | None,
    ) -> Category:
        category = Category(
            name=name, description=description, parent_id=parent_id,
        )
        self.db.add(category)
        await self.db.flush()
        return category

    async def save(self, category: Category) -> Category:
        await self.db.flush()
        return category

    async def reparent_children(
        self, category_id: CategoryId, new_parent_id: CategoryId | None,
    ) -> int:
        result = await self.db.execute(
            update(Category)
            .where(Category.parent_id == category_id)
            .values(parent_id=new_parent_id)
            .execution_options(synchronize_session="fetch")
        )
        return result.rowcount or 0

    async def delete(self, category: Category) -> None:
        await self.db.delete(category)
        await self.db.flush()
