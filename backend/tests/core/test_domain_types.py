"""Domain Types — occupancy variants and status mapping.

Tests:
    - Waiting/Paired expose their participants in host-first order
    - Paired refuses a user paired with themselves
    - occupancy_status covers NO_ROOM / WAITING / PAIRED
    - PairingStatus serializes to its wire string
"""

import pytest

from roomlink.core.domain_types import (
    Paired, PairingStatus, UserId, Waiting, occupancy_status,
)


def test_waiting_has_only_the_host():
    assert Waiting(UserId("a")).participants == ("a",)


def test_paired_lists_host_then_guest():
    assert Paired(UserId("a"), UserId("b")).participants == ("a", "b")


def test_paired_rejects_same_user_twice():
    with pytest.raises(ValueError):
        Paired(UserId("a"), UserId("a"))


def test_occupancy_status_mapping():
    assert occupancy_status(None) is PairingStatus.NO_ROOM
    assert occupancy_status(Waiting(UserId("a"))) is PairingStatus.WAITING
    assert occupancy_status(Paired(UserId("a"), UserId("b"))) is PairingStatus.PAIRED


def test_pairing_status_values_are_wire_strings():
    assert PairingStatus.NO_ROOM.value == "NO_ROOM"
    assert PairingStatus.WAITING.value == "WAITING"
    assert PairingStatus.PAIRED.value == "PAIRED"
