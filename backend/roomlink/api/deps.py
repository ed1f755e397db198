"""Request Dependencies — verified identity and request-scoped services.

Invariants:
    - Identity verification happens upstream; this layer only reads the
      verified subject and optional profile hints from gateway headers
    - A missing or blank X-User-Id is rejected before any storage access
    - Provisioner and engine share the request's single AsyncSession

Design Decisions:
    - Headers over token parsing: token verification and claim extraction
      belong to the gateway in front of this service
"""

from dataclasses import dataclass
from datetime import timedelta

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from roomlink.config import get_settings
from roomlink.core.errors import AuthenticationRequiredError
from roomlink.infrastructure.database import get_db
from roomlink.services.identity_provisioner import IdentityProvisioner
from roomlink.services.pairing_engine import PairingEngine


@dataclass(frozen=True)
class VerifiedIdentity:
    """Subject and profile hints handed over by the authenticating gateway."""
    user_id: str
    name_hint: str | None = None
    email_hint: str | None = None


async def get_verified_identity(
    x_user_id: str | None = Header(None),
    x_user_name: str | None = Header(None),
    x_user_email: str | None = Header(None),
) -> VerifiedIdentity:
    if not x_user_id or not x_user_id.strip():
        raise AuthenticationRequiredError()
    return VerifiedIdentity(
        user_id=x_user_id.strip(),
        name_hint=x_user_name,
        email_hint=x_user_email,
    )


def get_identity_provisioner(
    db: AsyncSession = Depends(get_db),
) -> IdentityProvisioner:
    settings = get_settings()
    return IdentityProvisioner(
        db, retry_delay_s=settings.provisioning_retry_delay_ms / 1000,
    )


def get_pairing_engine(db: AsyncSession = Depends(get_db)) -> PairingEngine:
    settings = get_settings()
    return PairingEngine(
        db,
        room_ttl=timedelta(minutes=settings.room_code_ttl_minutes),
        code_warn_every=settings.code_generation_warn_every,
    )
