"""Services Layer — category, comment, and rating managers.

Invariants:
    - One manager per aggregate; no manager calls another manager
    - Managers are stateless over one AsyncSession and own its commit

Design Decisions:
    - Pure checks from core/ wrapped by async store calls (ADR: imperative shell)
"""
