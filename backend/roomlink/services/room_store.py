"""Room Store — persistence for Room rows, including the exclusive join lock.

Invariants:
    - find_by_code / find_by_participant are plain reads (no lock)
    - find_by_code_for_update holds an exclusive row lock until the enclosing
      transaction commits or rolls back
    - add() flushes so code/participant unique constraints fire inside the
      caller's transaction, not at some later commit

Design Decisions:
    - Uniqueness of code and host is enforced by the schema; code_exists() only
      keeps collisions rare, it is not the guard
"""

from sqlalchemy import exists, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from roomlink.core.domain_types import RoomCode, UserId
from roomlink.models.room import Room


class RoomStore:
    """Implements RoomRepository over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_code(self, code: RoomCode) -> Room | None:
        result = await self.db.execute(select(Room).where(Room.code == code))
        return result.scalar_one_or_none()

    async def find_by_code_for_update(self, code: RoomCode) -> Room | None:
        """SELECT ... FOR UPDATE on the room row; serializes joins per code."""
        result = await self.db.execute(
            select(Room)
            .where(Room.code == code)
            .with_for_update()
            .execution_options(populate_existing=True),
        )
        return result.scalar_one_or_none()

    async def find_by_participant(self, user_id: UserId) -> Room | None:
        result = await self.db.execute(
            select(Room).where(
                or_(
                    Room.participant_a_id == user_id,
                    Room.participant_b_id == user_id,
                ),
            ),
        )
        return result.scalars().first()

    async def code_exists(self, code: str) -> bool:
        result = await self.db.execute(
            select(exists().where(Room.code == code)),
        )
        return bool(result.scalar())

    async def add(self, room: Room) -> None:
        self.db.add(room)
        await self.db.flush()

    async def delete(self, room: Room) -> None:
        await self.db.delete(room)
        await self.db.flush()
