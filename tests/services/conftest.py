"""Service test fixtures — async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so the readiness probe sees the test engine
    - Two activities seeded: one owned by OWNER_ID, one by OTHER_ID

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (row locks and native UUIDs are PostgreSQL-only and not exercised here)
    - StaticPool: every session shares the one in-memory connection
"""

from uuid import UUID

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool
from httpx import ASGITransport, AsyncClient

from pomodify.db.base import Base
from pomodify.infrastructure.database import get_db, DatabaseSessionManager
from pomodify.models.activity import Activity
import pomodify.infrastructure.database as db_module
from pomodify.main import app

OWNER_ID = UUID("a1111111-1111-1111-1111-111111111111")
OTHER_ID = UUID("b2222222-2222-2222-2222-222222222222")


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False, poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def activity(test_db):
    """Activity owned by OWNER_ID."""
    row = Activity(user_id=OWNER_ID, title="Write thesis chapter")
    test_db.add(row)
    await test_db.commit()
    return row


@pytest.fixture
async def foreign_activity(test_db):
    """Activity owned by someone else."""
    row = Activity(user_id=OTHER_ID, title="Not yours")
    test_db.add(row)
    await test_db.commit()
    return row


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers={"X-User-Id": str(OWNER_ID)},
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
