"""Service test fixtures: async DB + FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use test DB session
    - db_manager patched so readiness checks hit the test engine
    - `client` sends the valid bearer token; `anon_client` sends nothing

Design Decisions:
    - StaticPool: one shared connection, so every session sees the same :memory: DB
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.pool import StaticPool

import app.infrastructure.database as db_module
from app.db.base import Base
from app.infrastructure.database import get_db, DatabaseSessionManager
from app.main import app
from app.models.mahasiswa import Mahasiswa


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
async def fetch_mahasiswa(test_session_factory):
    """Read a row through a fresh session (bypasses any identity map)."""
    async def _fetch(mahasiswa_id: int) -> Mahasiswa | None:
        async with test_session_factory() as session:
            return await session.get(Mahasiswa, mahasiswa_id)
    return _fetch


@pytest.fixture
async def test_app(test_engine, test_session_factory):
    """The app with get_db and db_manager pointed at the test engine."""
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory

    async def override_get_db():
        async with fake_manager.session() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    original_manager = db_module.db_manager
    db_module.db_manager = fake_manager
    yield app
    app.dependency_overrides.clear()
    db_module.db_manager = original_manager


@pytest.fixture
async def client(test_app, auth_headers):
    """Client that sends the configured bearer token."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app),
        base_url="http://test",
        headers=auth_headers,
    ) as c:
        yield c


@pytest.fixture
async def anon_client(test_app):
    """Client without an Authorization header."""
    async with AsyncClient(
        transport=ASGITransport(app=test_app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
async def seed_mahasiswa(test_session_factory):
    """Insert one record directly into the test DB."""
    async with test_session_factory() as session:
        mahasiswa = Mahasiswa(
            nim="12345678", nama_mahasiswa="Rizal",
            fakultas="Teknik", jurusan="Informatika",
        )
        session.add(mahasiswa)
        await session.commit()
        await session.refresh(mahasiswa)
    return mahasiswa
