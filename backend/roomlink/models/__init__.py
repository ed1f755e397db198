"""ORM Models — SQLAlchemy declarative models for users and rooms.

Invariants:
    - All models inherit from Base (db/base.py)
    - User is never deleted; Room rows are deleted on leave

Design Decisions:
    - One file per entity
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from roomlink.models.user import User  # noqa: F401
from roomlink.models.room import Room  # noqa: F401
