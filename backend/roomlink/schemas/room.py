"""Room Schemas — pairing request/response contracts.

Invariants:
    - JoinRoomRequest.code is stripped and uppercased; blank codes never reach the engine
    - Optional response fields are omitted when None (routes use response_model_exclude_none)
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from roomlink.core.domain_types import PairingStatus


class JoinRoomRequest(BaseModel):
    """Join request — the only client-supplied pairing input."""
    code: str = Field(max_length=64)

    @field_validator("code")
    @classmethod
    def normalize_code(cls, v: str) -> str:
        v = v.strip().upper()
        if not v:
            raise ValueError("Room code is required")
        return v


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CreateRoomResponse(_WireModel):
    code: str
    status: PairingStatus
    partner: str | None = None


class JoinRoomResponse(_WireModel):
    status: PairingStatus
    room_code: str = Field(serialization_alias="roomCode")
    user1: str
    user2: str
    partner: str
    partner_email: str = Field(serialization_alias="partnerEmail")


class RoomStatusResponse(_WireModel):
    status: PairingStatus
    code: str | None = None
    partner: str | None = None
    partner_email: str | None = Field(None, serialization_alias="partnerEmail")


class LeaveRoomResponse(_WireModel):
    message: str
