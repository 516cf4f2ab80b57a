"""Repositories — SQLAlchemy implementations of core/repository_protocols.py.

Invariants:
    - Repositories flush, never commit: the manager owns the transaction
    - Finders return None for missing rows; store failures propagate

Design Decisions:
    - One repository per table, all sharing the caller's AsyncSession
"""
