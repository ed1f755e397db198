"""User ORM — one row per externally verified identity.

Invariants:
    - id is the external identity string (primary key, so creation is unique per identity)
    - current_room_id is mutated only by the pairing engine
    - Rows are never deleted

Design Decisions:
    - current_room_id carries no foreign key: rooms already reference users, and
      the pairing engine keeps both sides consistent inside one transaction
"""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from roomlink.db.base import Base


class User(Base):
    """Participant identity and their current room pointer."""
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(255), primary_key=True)
    display_name: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    current_room_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid, nullable=True,
    )
