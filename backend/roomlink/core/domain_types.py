"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - UserId wraps the external identity string; RoomId wraps the room UUID
    - RoomCode is always normalized (uppercase, stripped) once it enters the domain
    - Room occupancy is Waiting(host) or Paired(host, guest) — a paired room
      without a guest is unrepresentable
    - host != guest in every Paired value

Design Decisions:
    - NewType over dataclass wrappers for identifiers: zero runtime cost
    - Occupancy as a tagged union of frozen dataclasses instead of a nullable
      guest column plus a boolean lock flag
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
RoomId = NewType("RoomId", UUID)
RoomCode = NewType("RoomCode", str)


# ─── Enums ───────────────────────────────────────────────────────

class PairingStatus(str, Enum):
    """Pairing state of a single user, as reported to clients."""
    NO_ROOM = "NO_ROOM"
    WAITING = "WAITING"
    PAIRED = "PAIRED"


# ─── Occupancy ───────────────────────────────────────────────────

@dataclass(frozen=True)
class Waiting:
    """Room created, host alone, still joinable until it expires."""
    host: UserId

    @property
    def participants(self) -> tuple[UserId, ...]:
        return (self.host,)


@dataclass(frozen=True)
class Paired:
    """Room locked with exactly two distinct participants."""
    host: UserId
    guest: UserId

    def __post_init__(self):
        if self.host == self.guest:
            raise ValueError("a room cannot pair a user with themselves")

    @property
    def participants(self) -> tuple[UserId, ...]:
        return (self.host, self.guest)


Occupancy = Waiting | Paired


def occupancy_status(occupancy: Occupancy | None) -> PairingStatus:
    """Map an occupancy (or the absence of a room) to its pairing status."""
    if occupancy is None:
        return PairingStatus.NO_ROOM
    if isinstance(occupancy, Paired):
        return PairingStatus.PAIRED
    return PairingStatus.WAITING


# ─── Profiles ────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserProfile:
    """Read-only view of a user as seen by a partner."""
    user_id: UserId
    display_name: str
    email: str | None = None
