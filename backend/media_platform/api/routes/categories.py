"""Category Routes — CRUD over the category forest plus hierarchy checks.

Invariants:
    - PATCH forwards only the keys the client sent (absent != null)
    - Static paths (/audit) are declared before /{category_id}
    - Writes require the admin role; reads are open to any caller
"""

from fastapi import APIRouter, Depends, Query, Response, status

from media_platform.api.dependencies import get_category_manager, require_admin
from media_platform.schemas.category import (
    CategoryCreate, CategoryUpdate, CategoryResponse,
    CircularReferenceCheck, HierarchyAudit,
)
from media_platform.services.category_manager import CategoryManager

router = APIRouter(prefix="/api/v1/categories", tags=["categories"])


@router.post(
    "", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin("create", "Category"))],
)
async def create_category(
    payload: CategoryCreate,
    manager: CategoryManager = Depends(get_category_manager),
):
    return await manager.create(payload.name, payload.description, payload.parent_id)


@router.get("", response_model=list[CategoryResponse])
async def list_categories(
    manager: CategoryManager = Depends(get_category_manager),
):
    return await manager.list_all()


@router.get("/audit", response_model=HierarchyAudit)
async def audit_hierarchy(
    manager: CategoryManager = Depends(get_category_manager),
):
    """Report categories caught in a parent cycle (empty on healthy data)."""
    return HierarchyAudit(corrupted_ids=await manager.find_corrupted_categories())


@router.get("/{category_id}", response_model=CategoryResponse)
async def get_category(
    category_id: int,
    manager: CategoryManager = Depends(get_category_manager),
):
    return await manager.get(category_id)


@router.get("/{category_id}/children", response_model=list[CategoryResponse])
async def list_child_categories(
    category_id: int,
    manager: CategoryManager = Depends(get_category_manager),
):
    return await manager.list_children(category_id)


@router.get("/{category_id}/circular-check", response_model=CircularReferenceCheck)
async def check_circular_reference(
    category_id: int,
    parent_id: int | None = Query(None),
    manager: CategoryManager = Depends(get_category_manager),
):
    """Would making parent_id the parent of category_id close a cycle?"""
    circular = await manager.check_circular_reference(category_id, parent_id)
    return CircularReferenceCheck(
        category_id=category_id, parent_id=parent_id, circular=circular,
    )


@router.patch(
    "/{category_id}", response_model=CategoryResponse,
    dependencies=[Depends(require_admin("update", "Category"))],
)
async def update_category(
    category_id: int,
    payload: CategoryUpdate,
    manager: CategoryManager = Depends(get_category_manager),
):
    return await manager.update(category_id, **payload.supplied_fields())


@router.delete(
    "/{category_id}", status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_admin("delete", "Category"))],
)
async def delete_category(
    category_id: int,
    manager: CategoryManager = Depends(get_category_manager),
):
    await manager.delete(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
