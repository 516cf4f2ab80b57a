"""ORM Models — SQLAlchemy declarative models for all domain entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Integer primary keys, server-assigned; timestamps always UTC

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from media_platform.models.user import User  # noqa: F401
from media_platform.models.category import Category  # noqa: F401
from media_platform.models.content import Content  # noqa: F401
from media_platform.models.comment import Comment  # noqa: F401
from media_platform.models.rating import Rating  # noqa: F401
