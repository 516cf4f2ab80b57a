"""API Layer — thin FastAPI adapter over the services layer.

Invariants:
    - Routes never enforce domain rules themselves; they call a manager
    - Caller identity arrives already authenticated (see api/dependencies.py)
"""
