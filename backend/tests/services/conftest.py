"""Service test fixtures — async DB, seeded users/content, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database built from Base.metadata
    - get_db dependency overridden to use the test DB session factory
    - Seed rows use fixed ids so scenarios read like the domain examples
      (user 7 likes content 42)

Design Decisions:
    - SQLite in-memory: fast, no external dependency; FOR UPDATE is a no-op there,
      so races are reproduced with stale-read repositories instead of two connections
    - db_manager patched so the readiness check sees the test engine
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from media_platform.db.base import Base
from media_platform.infrastructure.database import get_db, DatabaseSessionManager
from media_platform.models import User, Content
import media_platform.infrastructure.database as db_module
from media_platform.main import app

ALICE_ID = 1
BOB_ID = 2
ADMIN_ID = 3
USER_7_ID = 7
ARTICLE_ID = 41
CONTENT_42_ID = 42


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
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
async def seed(test_db):
    """Users alice, bob, an admin, user 7; contents 41 and 42 authored by alice."""
    test_db.add_all([
        User(id=ALICE_ID, username="alice", email="alice@example.com"),
        User(id=BOB_ID, username="bob", email="bob@example.com"),
        User(id=ADMIN_ID, username="root", email="root@example.com", role="admin"),
        User(id=USER_7_ID, username="seven", email="seven@example.com"),
    ])
    await test_db.flush()
    test_db.add_all([
        Content(id=ARTICLE_ID, title="Intro", author_id=ALICE_ID),
        Content(id=CONTENT_42_ID, title="The Answer", author_id=ALICE_ID),
    ])
    await test_db.commit()


@pytest.fixture
async def client(test_engine, test_session_factory, seed):
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
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
