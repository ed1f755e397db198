"""Service test fixtures — file-backed SQLite per test + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - The real DatabaseSessionManager is used, so SQLite runs with the same
      BEGIN IMMEDIATE locking the service uses outside tests
    - Each PairingClient call runs in its own session, like one HTTP request

Design Decisions:
    - File database rather than :memory:, which shares one connection across
      sessions and so cannot exercise transaction isolation
    - db_manager patched on the module: get_db reads it at request time
"""

import pytest
from httpx import ASGITransport, AsyncClient

import roomlink.infrastructure.database as db_module
from roomlink.db.base import Base
from roomlink.infrastructure.database import DatabaseSessionManager
from roomlink.main import app
from roomlink.services.identity_provisioner import IdentityProvisioner
from roomlink.services.pairing_engine import PairingEngine


@pytest.fixture
async def test_db_manager(tmp_path):
    manager = DatabaseSessionManager(
        f"sqlite+aiosqlite:///{tmp_path / 'roomlink.db'}",
    )
    async with manager.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield manager
    await manager.dispose()


@pytest.fixture
def session_factory(test_db_manager):
    return test_db_manager.session_factory


@pytest.fixture
async def client(test_db_manager):
    """FastAPI test client bound to the per-test database."""
    original_manager = db_module.db_manager
    db_module.db_manager = test_db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    db_module.db_manager = original_manager


class PairingClient:
    """Runs each provisioning/pairing call in a fresh session."""

    def __init__(self, session_factory, **engine_kwargs):
        self._factory = session_factory
        self._engine_kwargs = engine_kwargs

    async def provision(self, user_id, name=None, email=None):
        async with self._factory() as db:
            return await IdentityProvisioner(db, retry_delay_s=0).ensure_user(
                user_id, name, email,
            )

    async def create(self, user_id):
        async with self._factory() as db:
            return await PairingEngine(db, **self._engine_kwargs).create(user_id)

    async def join(self, user_id, code):
        async with self._factory() as db:
            return await PairingEngine(db, **self._engine_kwargs).join(user_id, code)

    async def status(self, user_id):
        async with self._factory() as db:
            return await PairingEngine(db, **self._engine_kwargs).status(user_id)

    async def leave(self, user_id):
        async with self._factory() as db:
            return await PairingEngine(db, **self._engine_kwargs).leave(user_id)


@pytest.fixture
def pairing(session_factory):
    return PairingClient(session_factory)


@pytest.fixture
async def alice_and_bob(pairing):
    """Two provisioned users with distinct names and emails."""
    await pairing.provision("alice", "Alice", "alice@example.com")
    await pairing.provision("bob", "Bob", "bob@example.com")
    return "alice", "bob"
