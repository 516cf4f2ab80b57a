"""Pydantic Schemas — request/response validation for API endpoints.

Invariants:
    - Schemas validate shape at the system boundary; domain rules stay in core/
    - Response schemas read ORM rows directly (from_attributes)

Design Decisions:
    - Separate from models: schemas are API contracts, models are persistence
    - Length and blank checks are NOT duplicated here: core/ checks own them,
      so the HTTP adapter and direct manager callers see the same messages
"""
