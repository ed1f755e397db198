"""User Store — persistence for User rows.

Invariants:
    - get() is a plain read (no lock)
    - get_for_update() holds an exclusive lock on the user's row until the
      enclosing transaction ends; every membership change for a user runs
      under it
    - add() flushes so the primary-key constraint fires inside the caller's transaction
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from roomlink.core.domain_types import UserId
from roomlink.models.user import User


class UserStore:
    """Implements UserRepository over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UserId) -> User | None:
        result = await self.db.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_for_update(self, user_id: UserId) -> User | None:
        """SELECT ... FOR UPDATE on the user row; serializes create/join/leave per user."""
        result = await self.db.execute(
            select(User)
            .where(User.id == user_id)
            .with_for_update()
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def add(self, user: User) -> None:
        self.db.add(user)
        await self.db.flush()
