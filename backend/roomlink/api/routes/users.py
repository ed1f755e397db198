"""User Routes — the authenticated caller's own profile."""

from fastapi import APIRouter, Depends

from roomlink.api.deps import (
    VerifiedIdentity, get_identity_provisioner, get_verified_identity,
)
from roomlink.schemas.user import UserProfileResponse
from roomlink.services.identity_provisioner import IdentityProvisioner

router = APIRouter(prefix="/api/v1/users", tags=["users"])


@router.get("/me", response_model=UserProfileResponse)
async def get_me(
    identity: VerifiedIdentity = Depends(get_verified_identity),
    provisioner: IdentityProvisioner = Depends(get_identity_provisioner),
):
    """Provision (if needed) and return the caller's user record."""
    user = await provisioner.ensure_user(
        identity.user_id, identity.name_hint, identity.email_hint,
    )
    return UserProfileResponse.model_validate(user)
