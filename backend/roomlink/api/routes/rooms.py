"""Room Routes — create, join, status and leave.

Invariants:
    - create and join provision the caller's user record first
    - status and leave never provision a user record
    - All failures surface as RoomLinkError and are rendered by the global handlers
"""

import logging

from fastapi import APIRouter, Depends

from roomlink.api.deps import (
    VerifiedIdentity, get_identity_provisioner, get_pairing_engine,
    get_verified_identity,
)
from roomlink.schemas.room import (
    CreateRoomResponse, JoinRoomRequest, JoinRoomResponse,
    LeaveRoomResponse, RoomStatusResponse,
)
from roomlink.services.identity_provisioner import IdentityProvisioner
from roomlink.services.pairing_engine import PairingEngine

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/room", tags=["room"])


@router.post(
    "/create", response_model=CreateRoomResponse,
    response_model_exclude_none=True,
)
async def create_room(
    identity: VerifiedIdentity = Depends(get_verified_identity),
    provisioner: IdentityProvisioner = Depends(get_identity_provisioner),
    engine: PairingEngine = Depends(get_pairing_engine),
):
    """Create a room for the caller, or return the one they already have."""
    await provisioner.ensure_user(
        identity.user_id, identity.name_hint, identity.email_hint,
    )
    return CreateRoomResponse(**await engine.create(identity.user_id))


@router.post(
    "/join", response_model=JoinRoomResponse,
    response_model_exclude_none=True,
)
async def join_room(
    body: JoinRoomRequest,
    identity: VerifiedIdentity = Depends(get_verified_identity),
    provisioner: IdentityProvisioner = Depends(get_identity_provisioner),
    engine: PairingEngine = Depends(get_pairing_engine),
):
    """Join a waiting room by code."""
    await provisioner.ensure_user(
        identity.user_id, identity.name_hint, identity.email_hint,
    )
    return JoinRoomResponse(**await engine.join(identity.user_id, body.code))


@router.get(
    "/status", response_model=RoomStatusResponse,
    response_model_exclude_none=True,
)
async def room_status(
    identity: VerifiedIdentity = Depends(get_verified_identity),
    engine: PairingEngine = Depends(get_pairing_engine),
):
    return RoomStatusResponse(**await engine.status(identity.user_id))


@router.post("/leave", response_model=LeaveRoomResponse)
async def leave_room(
    identity: VerifiedIdentity = Depends(get_verified_identity),
    engine: PairingEngine = Depends(get_pairing_engine),
):
    return LeaveRoomResponse(**await engine.leave(identity.user_id))
