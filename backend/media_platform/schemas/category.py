"""Category Schemas — create/update payloads and the category response.

Invariants:
    - CategoryUpdate distinguishes "absent" from "null": only fields present in
      the payload reach the manager, so {"parent_id": null} moves to root

Design Decisions:
    - model_fields_set over Optional sentinels in the payload: pydantic already
      tracks which keys the client sent
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CategoryCreate(BaseModel):
    name: str
    description: str = ""
    parent_id: int | None = None


class CategoryUpdate(BaseModel):
    """Partial update — omitted keys are left untouched."""
    name: str | None = None
    description: str | None = None
    parent_id: int | None = None

    def supplied_fields(self) -> dict:
        return {key: getattr(self, key) for key in self.model_fields_set}


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str
    parent_id: int | None
    created_at: datetime
    updated_at: datetime


class CircularReferenceCheck(BaseModel):
    category_id: int
    parent_id: int | None
    circular: bool


class HierarchyAudit(BaseModel):
    """Ids whose ancestry never reaches a root; empty on healthy data."""
    corrupted_ids: list[int]
