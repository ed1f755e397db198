"""Error Hierarchy — codes, statuses, severities and the client envelope."""

import pytest

from roomlink.core.errors import (
    AlreadyInRoomError, AuthenticationRequiredError, CodeExpiredError,
    ErrorSeverity, InvalidCodeError, ProvisioningError, RoomCodeRequiredError,
    RoomFullError, RoomLinkError, SelfJoinError,
)


@pytest.mark.parametrize("error, code, status", [
    (RoomCodeRequiredError(), "ROOM_CODE_REQUIRED", 400),
    (AlreadyInRoomError(), "ALREADY_IN_ROOM", 409),
    (SelfJoinError(), "SELF_JOIN", 400),
    (InvalidCodeError("AB23CD"), "INVALID_CODE", 404),
    (RoomFullError(), "ROOM_FULL", 409),
    (CodeExpiredError(), "CODE_EXPIRED", 410),
    (AuthenticationRequiredError(), "AUTHENTICATION_REQUIRED", 401),
    (ProvisioningError("alice"), "PROVISIONING_ERROR", 500),
])
def test_error_codes_and_statuses(error, code, status):
    assert isinstance(error, RoomLinkError)
    assert error.code == code
    assert error.http_status == status


def test_contention_errors_are_warnings_not_faults():
    assert RoomFullError().severity is ErrorSeverity.WARNING
    assert CodeExpiredError().severity is ErrorSeverity.WARNING


def test_provisioning_error_is_critical():
    err = ProvisioningError("alice")
    assert err.severity is ErrorSeverity.CRITICAL
    assert err.context.user_id == "alice"


def test_response_envelope_puts_message_under_error():
    body = RoomFullError().to_response()
    assert body["error"] == "Room is already full"
    assert body["code"] == "ROOM_FULL"
    assert body["category"] == "contention"
