"""Identity Provisioner — returns the internal User for a verified identity, creating it once.

Invariants:
    - At most one users row per external identity, under any concurrency
    - The common path (user exists) takes no lock
    - The creation guard is process-wide and held only across check → insert → commit
    - No database transaction is held open while waiting for the guard
    - A lost unique-identity race is recovered by backoff + re-read; only a row
      that still cannot be found surfaces ProvisioningError

Design Decisions:
    - Single asyncio.Lock for all identities: creation is rare and brief
    - The primary key on users.id is the real source of truth; the guard only
      keeps same-process racers from hitting it
"""

import asyncio
import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from roomlink.core.display_names import clean_email, derive_display_name
from roomlink.core.domain_types import UserId
from roomlink.core.errors import ProvisioningError
from roomlink.core.repository_protocols import UserRepository
from roomlink.models.user import User
from roomlink.services.user_store import UserStore

logger = logging.getLogger(__name__)

_user_creation_lock = asyncio.Lock()


class IdentityProvisioner:
    """Ensures a User row exists for an already verified identity."""

    def __init__(
        self,
        db: AsyncSession,
        users: UserRepository | None = None,
        retry_delay_s: float = 0.05,
    ):
        self.db = db
        self.users = users or UserStore(db)
        self.retry_delay_s = retry_delay_s

    async def ensure_user(
        self,
        external_id: str,
        name_hint: str | None = None,
        email_hint: str | None = None,
    ) -> User:
        user_id = UserId(external_id)
        existing = await self.users.get(user_id)
        if existing is not None:
            return existing

        # Release the read transaction before queueing on the guard.
        await self.db.rollback()
        async with _user_creation_lock:
            existing = await self.users.get(user_id)
            if existing is not None:
                return existing
            return await self._create(user_id, name_hint, email_hint)

    async def _create(
        self, user_id: UserId, name_hint: str | None, email_hint: str | None,
    ) -> User:
        user = User(
            id=user_id,
            display_name=derive_display_name(name_hint, email_hint),
            email=clean_email(email_hint),
        )
        try:
            await self.users.add(user)
            await self.db.commit()
        except IntegrityError as e:
            await self.db.rollback()
            logger.info(
                "Concurrent provisioning detected, re-reading user",
                extra={"user_id": user_id},
            )
            await asyncio.sleep(self.retry_delay_s)
            existing = await self.users.get(user_id)
            if existing is not None:
                return existing
            logger.error(
                f"User {user_id} missing after lost creation race",
                extra={"user_id": user_id, "error_code": "PROVISIONING_ERROR"},
            )
            raise ProvisioningError(user_id) from e
        logger.info("User provisioned", extra={"user_id": user_id})
        return user
