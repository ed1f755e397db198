"""Pairing Rules — pure validation for the room state machine.

Invariants:
    - Join validation order is fixed: exists → not full → not self → not expired
    - A room is expired strictly after created_at + ttl (age == ttl is still joinable)
    - Naive timestamps (SQLite drops tzinfo) are interpreted as UTC

Design Decisions:
    - Rules raise typed errors instead of returning codes: the shell rolls the
      transaction back on any RoomLinkError, releasing the row lock
    - Expiry is only evaluated here, at join time; nothing sweeps stale rooms
"""

from datetime import datetime, timedelta, timezone

from roomlink.core.domain_types import Paired, UserId
from roomlink.core.errors import (
    CodeExpiredError, ErrorContext, InvalidCodeError, RoomFullError,
    SelfJoinError,
)
from roomlink.core.repository_protocols import RoomLike

DEFAULT_ROOM_TTL = timedelta(minutes=10)


def as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def is_expired(
    created_at: datetime, now: datetime, ttl: timedelta = DEFAULT_ROOM_TTL,
) -> bool:
    """True once the room is older than ttl."""
    return as_utc(created_at) + ttl < as_utc(now)


def check_joinable(
    room: RoomLike | None,
    code: str,
    joiner: UserId,
    now: datetime,
    ttl: timedelta = DEFAULT_ROOM_TTL,
) -> RoomLike:
    """Validate a join attempt against a (locked-for-update) room row.

    Returns the room when the join may proceed, raises otherwise.
    """
    ctx = ErrorContext(user_id=joiner, room_code=code)
    if room is None:
        raise InvalidCodeError(code, ctx)
    if room.locked or isinstance(room.occupancy, Paired):
        raise RoomFullError(ctx)
    if room.participant_a_id == joiner:
        raise SelfJoinError(ctx)
    if is_expired(room.created_at, now, ttl):
        raise CodeExpiredError(ctx)
    return room
