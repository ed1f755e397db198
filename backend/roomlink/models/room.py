"""Room ORM — a pairing session identified by a short code.

Invariants:
    - code is unique among existing rows (storage constraint)
    - participant_a_id is unique: a user hosts at most one room at a time
    - participant_b_id is unique when set: a user is guest in at most one room
    - locked iff participant_b_id is set (CHECK constraint)
    - participant_a_id != participant_b_id (CHECK constraint)

Design Decisions:
    - Occupancy exposed as a Waiting/Paired value; seat_guest() is the only
      writer of participant_b_id and locked, and sets them together
    - Uuid type (not postgresql.UUID) so the same model runs on SQLite
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Boolean, CheckConstraint, DateTime, ForeignKey, String, Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column

from roomlink.core.domain_types import Occupancy, Paired, UserId, Waiting
from roomlink.db.base import Base


class Room(Base):
    """Room entity — holds up to two participants."""
    __tablename__ = "rooms"
    __table_args__ = (
        CheckConstraint(
            "(locked AND participant_b_id IS NOT NULL) "
            "OR (NOT locked AND participant_b_id IS NULL)",
            name="ck_rooms_locked_iff_guest",
        ),
        CheckConstraint(
            "participant_b_id IS NULL OR participant_a_id <> participant_b_id",
            name="ck_rooms_distinct_participants",
        ),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    code: Mapped[str] = mapped_column(
        String(6), unique=True, nullable=False,
    )
    participant_a_id: Mapped[str] = mapped_column(
        String(255), ForeignKey("users.id"), unique=True, nullable=False,
    )
    participant_b_id: Mapped[str | None] = mapped_column(
        String(255), ForeignKey("users.id"), unique=True, nullable=True,
    )
    locked: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    @property
    def occupancy(self) -> Occupancy:
        if self.participant_b_id is None:
            return Waiting(host=UserId(self.participant_a_id))
        return Paired(
            host=UserId(self.participant_a_id),
            guest=UserId(self.participant_b_id),
        )

    def seat_guest(self, user_id: UserId) -> Paired:
        """Transition WAITING → PAIRED. Raises if already paired."""
        if self.locked or self.participant_b_id is not None:
            raise ValueError(f"room {self.code} is already paired")
        occupancy = Paired(host=UserId(self.participant_a_id), guest=user_id)
        self.participant_b_id = user_id
        self.locked = True
        return occupancy

    def has_participant(self, user_id: str) -> bool:
        return user_id in (self.participant_a_id, self.participant_b_id)
