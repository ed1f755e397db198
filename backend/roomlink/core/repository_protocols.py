"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell (services/room_store.py, services/user_store.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - find_by_code_for_update / get_for_update are separate methods, not flags: callers must
      opt in to the exclusive lock explicitly
"""

from datetime import datetime
from typing import Protocol

from roomlink.core.domain_types import Occupancy, Paired, RoomCode, RoomId, UserId


class RoomLike(Protocol):
    """Structural contract for Room objects handed to core rules and the projector."""
    id: RoomId
    code: str
    participant_a_id: str
    participant_b_id: str | None
    locked: bool
    created_at: datetime

    @property
    def occupancy(self) -> Occupancy: ...

    def seat_guest(self, user_id: UserId) -> Paired: ...

    def has_participant(self, user_id: str) -> bool: ...


class UserLike(Protocol):
    """Structural contract for User objects."""
    id: str
    display_name: str
    email: str | None
    current_room_id: RoomId | None


class RoomRepository(Protocol):
    """Contract for room persistence — implemented by shell."""
    async def find_by_code(self, code: RoomCode) -> RoomLike | None: ...
    async def find_by_code_for_update(self, code: RoomCode) -> RoomLike | None: ...
    async def find_by_participant(self, user_id: UserId) -> RoomLike | None: ...
    async def code_exists(self, code: str) -> bool: ...
    async def add(self, room: RoomLike) -> None: ...
    async def delete(self, room: RoomLike) -> None: ...


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def get(self, user_id: UserId) -> UserLike | None: ...
    async def get_for_update(self, user_id: UserId) -> UserLike | None: ...
    async def add(self, user: UserLike) -> None: ...
