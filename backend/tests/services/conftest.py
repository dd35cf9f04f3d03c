"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - The app's storage handle is swapped on app.state, the lifespan never runs
    - seeded_users mirrors five users created before each route test

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for CRUD route tests
    - Real DatabaseSessionManager against SQLite: connect/create_schema/disconnect
      exercised the same way the lifespan does it
"""

import pytest
from httpx import ASGITransport, AsyncClient

from user_service.core.domain_types import UserFields
from user_service.infrastructure.database import DatabaseSessionManager
from user_service.main import app
from user_service.services.user_repository import SqlUserRepository

SEED_USERS = [
    UserFields(name="Ada Lovelace", email="ada@analytical.org"),
    UserFields(name="Alan Turing", email="alan.turing@bletchley.co.uk"),
    UserFields(name="Grace Hopper", email="grace@navy.mil"),
    UserFields(name="Edsger Dijkstra", email="ewd@tue.nl"),
    UserFields(name="Barbara Liskov", email="liskov@mit.edu"),
]


@pytest.fixture
async def db_manager():
    manager = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    manager.connect()
    await manager.create_schema()
    yield manager
    await manager.disconnect()


@pytest.fixture
async def test_db(db_manager):
    async with db_manager.session() as session:
        yield session


@pytest.fixture
async def repository(test_db):
    return SqlUserRepository(test_db)


@pytest.fixture
async def seeded_users(repository):
    """Insert SEED_USERS through the repository, in order."""
    await repository.delete_all()
    return [await repository.create(fields) for fields in SEED_USERS]


@pytest.fixture
async def client(db_manager):
    """FastAPI test client wired to the per-test database."""
    original_manager = getattr(app.state, "db_manager", None)
    app.state.db_manager = db_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.state.db_manager = original_manager
