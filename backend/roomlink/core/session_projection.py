"""Session Projector — renders the externally visible pairing payloads.

Invariants:
    - partner is always the participant that is not the viewer
    - A missing partner record projects UNKNOWN_PARTNER_NAME and an empty email,
      never an error
    - NO_ROOM payloads carry no code; WAITING payloads carry no partner

Design Decisions:
    - Payloads are plain dicts with snake_case keys; the API schemas own the
      camelCase wire aliases
    - Partner lookup is done by the shell and passed in, keeping this module pure
"""

from roomlink.core.domain_types import (
    Occupancy, Paired, PairingStatus, UserId, UserProfile, occupancy_status,
)

UNKNOWN_PARTNER_NAME = "Unknown"


def partner_of(occupancy: Occupancy, viewer: UserId) -> UserId | None:
    """Return the other participant of a paired room, None while waiting."""
    if not isinstance(occupancy, Paired):
        return None
    return occupancy.guest if occupancy.host == viewer else occupancy.host


def partner_name(profile: UserProfile | None) -> str:
    return profile.display_name if profile else UNKNOWN_PARTNER_NAME


def partner_email(profile: UserProfile | None) -> str:
    return (profile.email or "") if profile else ""


def project_status(
    code: str | None,
    occupancy: Occupancy | None,
    partner: UserProfile | None = None,
) -> dict:
    """Status payload for the viewer of a room (or of no room)."""
    status = occupancy_status(occupancy)
    if status is PairingStatus.NO_ROOM:
        return {"status": status.value}
    payload = {"status": status.value, "code": code}
    if status is PairingStatus.PAIRED:
        payload["partner"] = partner_name(partner)
        payload["partner_email"] = partner_email(partner)
    return payload


def project_create(
    code: str,
    occupancy: Occupancy,
    partner: UserProfile | None = None,
) -> dict:
    """Create payload: code and status, plus partner name once paired."""
    status = occupancy_status(occupancy)
    payload = {"code": code, "status": status.value}
    if status is PairingStatus.PAIRED:
        payload["partner"] = partner_name(partner)
    return payload


def project_join(
    code: str, host: UserProfile | None, guest: UserProfile | None,
) -> dict:
    """Join payload from the joiner's (guest's) perspective."""
    host_name = partner_name(host)
    return {
        "status": PairingStatus.PAIRED.value,
        "room_code": code,
        "user1": host_name,
        "user2": partner_name(guest),
        "partner": host_name,
        "partner_email": partner_email(host),
    }
