"""Root conftest — shared test configuration."""

import asyncio
import os

import pytest

os.environ.setdefault(
    "DATABASE_URL",
    "sqlite+aiosqlite:///test.db",
)


@pytest.fixture(autouse=True)
def fresh_creation_guard(monkeypatch):
    """Give each test's event loop its own provisioning guard."""
    from roomlink.services import identity_provisioner

    monkeypatch.setattr(
        identity_provisioner, "_user_creation_lock", asyncio.Lock(),
    )
