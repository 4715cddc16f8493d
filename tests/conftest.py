"""Shared test fixtures for the studio integration service."""

from collections.abc import AsyncIterator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from studio.api.deps import get_env_store
from studio.core.app import create_app
from studio.db.base import BaseEntity
from studio.db.engine import get_session
from studio.envfile.store import EnvStore, InMemoryEnvStore


@pytest.fixture(autouse=True)
def _set_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate settings from the developer's environment."""
    monkeypatch.delenv("STUDIO_INTERNAL_TOKEN", raising=False)
    monkeypatch.setenv("STUDIO_SYNC_PROCESS_ENV", "false")


@pytest.fixture
async def db_session() -> AsyncIterator[AsyncSession]:
    """Create an in-memory SQLite async session for tests."""
    engine = create_async_engine("sqlite+aiosqlite://", echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(BaseEntity.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        yield session

    await engine.dispose()


@pytest.fixture
def env_store() -> InMemoryEnvStore:
    return InMemoryEnvStore(
        {
            "FRAMEIO_ACCESS_TOKEN": "abc",
            "FRAMEIO_REFRESH_TOKEN": "def",
            "FRAMEIO_ACCOUNT_ID": "123",
        }
    )


@pytest.fixture
async def client(
    db_session: AsyncSession, env_store: InMemoryEnvStore
) -> AsyncIterator[AsyncClient]:
    """Create an httpx test client with DB session and env store overrides."""
    app = create_app()

    async def _override_session() -> AsyncIterator[AsyncSession]:
        try:
            yield db_session
            await db_session.commit()
        except Exception:
            await db_session.rollback()
            raise

    def _override_store() -> EnvStore:
        return env_store

    app.dependency_overrides[get_session] = _override_session
    app.dependency_overrides[get_env_store] = _override_store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
