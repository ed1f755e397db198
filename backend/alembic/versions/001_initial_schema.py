"""Initial schema — users and rooms.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(255), primary_key=True),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("current_room_id", sa.Uuid, nullable=True),
    )

    op.create_table(
        "rooms",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("code", sa.String(6), nullable=False, unique=True),
        sa.Column(
            "participant_a_id", sa.String(255), sa.ForeignKey("users.id"),
            nullable=False, unique=True,
        ),
        sa.Column(
            "participant_b_id", sa.String(255), sa.ForeignKey("users.id"),
            nullable=True, unique=True,
        ),
        sa.Column("locked", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint(
            "(locked AND participant_b_id IS NOT NULL) "
            "OR (NOT locked AND participant_b_id IS NULL)",
            name="ck_rooms_locked_iff_guest",
        ),
        sa.CheckConstraint(
            "participant_b_id IS NULL OR participant_a_id <> participant_b_id",
            name="ck_rooms_distinct_participants",
        ),
    )


def downgrade() -> None:
    op.drop_table("rooms")
    op.drop_table("users")
