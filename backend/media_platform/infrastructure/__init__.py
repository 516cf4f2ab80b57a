"""Infrastructure Layer — database session management and observability.

Invariants:
    - Everything here is process-wide setup, initialized once in the lifespan

Design Decisions:
    - Kept apart from repositories/: connection concerns vs. query concerns
"""
