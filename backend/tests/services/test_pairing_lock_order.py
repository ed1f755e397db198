"""Pairing Engine lock discipline — which rows are locked, and in what order.

Invariants:
    - create and join lock the acting user's row before the membership check,
      so a concurrent create and join by one user cannot both succeed
    - join locks the user row before the room row
    - leave locks every participant row (sorted) before re-reading the room
      FOR UPDATE, matching join's user → room order
"""

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from roomlink.core.errors import AlreadyInRoomError, InvalidCodeError
from roomlink.models.room import Room
from roomlink.services.pairing_engine import PairingEngine


class _Session:
    def __init__(self):
        self.commits = 0
        self.rollbacks = 0

    async def commit(self):
        self.commits += 1

    async def rollback(self):
        self.rollbacks += 1


class _Users:
    def __init__(self, calls):
        self.calls = calls

    def _user(self, user_id):
        return SimpleNamespace(
            id=user_id, display_name=user_id.title(), email=None,
            current_room_id=None,
        )

    async def get(self, user_id):
        self.calls.append(("users.get", user_id))
        return self._user(user_id)

    async def get_for_update(self, user_id):
        self.calls.append(("users.get_for_update", user_id))
        return self._user(user_id)

    async def add(self, user):
        self.calls.append(("users.add", user.id))


class _Rooms:
    def __init__(self, calls, member_of=None, by_code=None):
        self.calls = calls
        self.member_of = member_of
        self.by_code = by_code

    async def find_by_code(self, code):
        self.calls.append(("rooms.find_by_code", code))
        return self.by_code

    async def find_by_code_for_update(self, code):
        self.calls.append(("rooms.find_by_code_for_update", code))
        return self.by_code

    async def find_by_participant(self, user_id):
        self.calls.append(("rooms.find_by_participant", user_id))
        return self.member_of

    async def code_exists(self, code):
        return False

    async def add(self, room):
        self.calls.append(("rooms.add", room.code))

    async def delete(self, room):
        self.calls.append(("rooms.delete", room.code))


def _paired_room():
    return Room(
        code="AB3K9X", participant_a_id="bob", participant_b_id="alice",
        locked=True, created_at=datetime.now(timezone.utc),
    )


def _engine(calls, **rooms_kwargs):
    return PairingEngine(
        _Session(), rooms=_Rooms(calls, **rooms_kwargs), users=_Users(calls),
    )


async def test_join_locks_user_before_membership_and_room():
    calls = []
    with pytest.raises(InvalidCodeError):
        await _engine(calls).join("alice", "ZZZZZZ")

    assert calls == [
        ("users.get_for_update", "alice"),
        ("rooms.find_by_participant", "alice"),
        ("rooms.find_by_code_for_update", "ZZZZZZ"),
    ]


async def test_join_membership_seen_under_user_lock():
    calls = []
    with pytest.raises(AlreadyInRoomError):
        await _engine(calls, member_of=_paired_room()).join("alice", "AB3K9X")

    assert calls[0] == ("users.get_for_update", "alice")
    assert ("rooms.find_by_code_for_update", "AB3K9X") not in calls


async def test_create_locks_user_before_membership_check():
    calls = []
    result = await _engine(calls, member_of=_paired_room()).create("alice")

    assert result["status"] == "PAIRED"
    assert calls[:2] == [
        ("users.get_for_update", "alice"),
        ("rooms.find_by_participant", "alice"),
    ]


async def test_create_inserts_under_user_lock():
    calls = []
    result = await _engine(calls).create("alice")

    assert result["status"] == "WAITING"
    assert calls[0] == ("users.get_for_update", "alice")
    assert calls[-1][0] == "rooms.add"


async def test_leave_locks_participants_then_room():
    calls = []
    room = _paired_room()
    await _engine(calls, member_of=room, by_code=room).leave("bob")

    assert calls[:4] == [
        ("rooms.find_by_participant", "bob"),
        ("users.get_for_update", "alice"),
        ("users.get_for_update", "bob"),
        ("rooms.find_by_code_for_update", "AB3K9X"),
    ]
    assert ("rooms.delete", "AB3K9X") in calls
