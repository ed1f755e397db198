"""User Schemas — the authenticated caller's own profile."""

from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class UserProfileResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    id: str
    display_name: str = Field(serialization_alias="displayName")
    email: str | None = None
    current_room_id: UUID | None = Field(None, serialization_alias="currentRoomId")
