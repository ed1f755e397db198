"""Pairing Engine — the create / join / status / leave state machine.

Invariants:
    - Per user: NO_ROOM → WAITING (create) → PAIRED (partner joins) → NO_ROOM (leave)
    - A room goes WAITING → PAIRED exactly once; the join that does it holds the
      room row FOR UPDATE from validation through commit
    - create and join lock the acting user's row before checking membership,
      so one user never ends up host of one room and guest of another
    - Lock order is user rows (sorted by id) before the room row, in every
      operation that takes both
    - users.current_room_id and room membership change in the same transaction
    - Every failed mutation rolls back before the error leaves the engine
    - status() never writes and never provisions

Design Decisions:
    - The unique host constraint still backs create(): an insert conflict
      rolls back and the loop re-checks membership under a fresh user lock
    - A unique-code violation on insert (no room for the user) is a code
      collision and is retried with a fresh code
    - leave() re-reads the room FOR UPDATE so a join committed after the first
      read is seen and both pointers are cleared
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomlink.core.domain_types import UserId, UserProfile, Waiting
from roomlink.core.errors import (
    AlreadyInRoomError, ConcurrencyError, ErrorContext, ProvisioningError,
    RoomCodeRequiredError, RoomLinkError,
)
from roomlink.core.pairing_rules import DEFAULT_ROOM_TTL, check_joinable
from roomlink.core.repository_protocols import (
    RoomLike, RoomRepository, UserRepository,
)
from roomlink.core.room_codes import normalize_code
from roomlink.core.session_projection import (
    partner_of, project_create, project_join, project_status,
)
from roomlink.models.room import Room
from roomlink.services.code_generator import generate_unique_code
from roomlink.services.room_store import RoomStore
from roomlink.services.user_store import UserStore

logger = logging.getLogger(__name__)

LEFT_ROOM_MESSAGE = "Left room successfully"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PairingEngine:
    """Room pairing transitions over one request-scoped AsyncSession."""

    MAX_CREATE_ATTEMPTS = 5

    def __init__(
        self,
        db: AsyncSession,
        rooms: RoomRepository | None = None,
        users: UserRepository | None = None,
        room_ttl: timedelta = DEFAULT_ROOM_TTL,
        code_warn_every: int = 10,
        now: Callable[[], datetime] = _utcnow,
    ):
        self.db = db
        self.rooms = rooms or RoomStore(db)
        self.users = users or UserStore(db)
        self.room_ttl = room_ttl
        self.code_warn_every = code_warn_every
        self.now = now

    # ─── create ─────────────────────────────────────────────────

    async def create(self, user_id: str) -> dict:
        """Create a WAITING room for the user, or return the one they have."""
        uid = UserId(user_id)
        for attempt in range(1, self.MAX_CREATE_ATTEMPTS + 1):
            user = await self.users.get_for_update(uid)
            if user is None:
                raise ProvisioningError(uid)
            existing = await self.rooms.find_by_participant(uid)
            if existing is not None:
                return await self._project_create(existing, uid)

            code = await generate_unique_code(
                self.rooms.code_exists, warn_every=self.code_warn_every,
            )
            room = Room(
                code=code, participant_a_id=uid, locked=False,
                created_at=self.now(),
            )
            try:
                await self.rooms.add(room)
                user.current_room_id = room.id
                await self.db.commit()
            except IntegrityError:
                await self.db.rollback()
                logger.warning(
                    f"Room insert for code {code} conflicted, retrying",
                    extra={"user_id": uid, "room_code": code, "attempt": attempt},
                )
                continue
            logger.info(
                "Room created", extra={"user_id": uid, "room_code": code},
            )
            return project_create(code, Waiting(host=uid))

        raise ConcurrencyError(
            "Could not allocate a room code",
            ErrorContext(user_id=uid),
        )

    # ─── join ───────────────────────────────────────────────────

    async def join(self, user_id: str, raw_code: str | None) -> dict:
        """Pair the user into the WAITING room identified by code."""
        uid = UserId(user_id)
        code = normalize_code(raw_code)
        if not code:
            raise RoomCodeRequiredError(ErrorContext(user_id=uid))

        try:
            joiner = await self.users.get_for_update(uid)
            if joiner is None:
                raise ProvisioningError(uid)
            if await self.rooms.find_by_participant(uid) is not None:
                raise AlreadyInRoomError(ErrorContext(user_id=uid, room_code=code))

            room = await self.rooms.find_by_code_for_update(code)
            check_joinable(room, code, uid, self.now(), self.room_ttl)

            room.seat_guest(uid)
            joiner.current_room_id = room.id

            host = await self._profile(UserId(room.participant_a_id))
            guest = UserProfile(
                user_id=uid, display_name=joiner.display_name,
                email=joiner.email,
            )
            await self.db.commit()
        except RoomLinkError:
            await self.db.rollback()
            raise
        except IntegrityError as e:
            await self.db.rollback()
            raise AlreadyInRoomError(
                ErrorContext(user_id=uid, room_code=code),
            ) from e

        logger.info("Room paired", extra={"user_id": uid, "room_code": code})
        return project_join(code, host, guest)

    # ─── status ─────────────────────────────────────────────────

    async def status(self, user_id: str) -> dict:
        """Current pairing status; pure read."""
        uid = UserId(user_id)
        room = await self.rooms.find_by_participant(uid)
        if room is None:
            return project_status(None, None)
        occupancy = room.occupancy
        partner = await self._profile(partner_of(occupancy, uid))
        return project_status(room.code, occupancy, partner)

    # ─── leave ──────────────────────────────────────────────────

    async def leave(self, user_id: str) -> dict:
        """Delete the user's room and clear both participants. Idempotent."""
        uid = UserId(user_id)
        room = await self.rooms.find_by_participant(uid)
        if room is not None:
            for participant_id in sorted(room.occupancy.participants):
                await self.users.get_for_update(participant_id)
            room = await self.rooms.find_by_code_for_update(room.code)
        if room is not None and room.has_participant(uid):
            for participant_id in room.occupancy.participants:
                participant = await self.users.get(participant_id)
                if participant is not None:
                    participant.current_room_id = None
            logger.info(
                "Room closed", extra={"user_id": uid, "room_code": room.code},
            )
            await self.rooms.delete(room)

        requester = await self.users.get(uid)
        if requester is not None:
            requester.current_room_id = None
        await self.db.commit()
        return {"message": LEFT_ROOM_MESSAGE}

    # ─── helpers ────────────────────────────────────────────────

    async def _profile(self, user_id: UserId | None) -> UserProfile | None:
        if user_id is None:
            return None
        user = await self.users.get(user_id)
        if user is None:
            return None
        return UserProfile(
            user_id=user_id, display_name=user.display_name, email=user.email,
        )

    async def _project_create(self, room: RoomLike, viewer: UserId) -> dict:
        occupancy = room.occupancy
        partner = await self._profile(partner_of(occupancy, viewer))
        return project_create(room.code, occupancy, partner)
