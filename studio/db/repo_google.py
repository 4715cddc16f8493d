"""Repository for the Google credential singleton row."""

from datetime import UTC, datetime

from pydantic import BaseModel
from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from studio.core.errors import StoreUnavailableError
from studio.db.models_google import GOOGLE_AUTH_SINGLETON_ID, GoogleAuthEntity

STORE_NAME = "google_auth"


class GoogleTokenData(BaseModel):
    """Tokens handed over by the Google authorization callback."""

    refresh_token: str
    access_token: str | None = None
    expires_at: int | None = None


async def get_google_auth(session: AsyncSession) -> GoogleAuthEntity | None:
    """Return the singleton credential row, if any."""
    stmt = select(GoogleAuthEntity).where(
        GoogleAuthEntity.id == GOOGLE_AUTH_SINGLETON_ID
    )
    try:
        result = await session.execute(stmt)
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StoreUnavailableError(STORE_NAME, "lookup failed") from exc
    return result.scalar_one_or_none()


async def is_google_connected(session: AsyncSession) -> bool:
    """True when a row exists and holds a refresh token."""
    row = await get_google_auth(session)
    return row is not None and bool(row.refresh_token)


async def upsert_google_auth(
    session: AsyncSession, data: GoogleTokenData
) -> GoogleAuthEntity:
    """Create the singleton row or overwrite its tokens."""
    existing = await get_google_auth(session)
    if existing is not None:
        existing.access_token = data.access_token
        existing.refresh_token = data.refresh_token
        existing.expires_at = data.expires_at
        existing.updated_at = datetime.now(UTC)
        await session.flush()
        return existing

    entity = GoogleAuthEntity(
        id=GOOGLE_AUTH_SINGLETON_ID,
        access_token=data.access_token,
        refresh_token=data.refresh_token,
        expires_at=data.expires_at,
    )
    session.add(entity)
    await session.flush()
    return entity


async def delete_google_auth(session: AsyncSession) -> int:
    """Delete the singleton row in one statement; returns rows removed (0 or 1).

    Commits before returning so a failed commit is reported, not acknowledged.
    """
    stmt = delete(GoogleAuthEntity).where(
        GoogleAuthEntity.id == GOOGLE_AUTH_SINGLETON_ID
    )
    try:
        result = await session.execute(stmt)
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        raise StoreUnavailableError(STORE_NAME, "delete failed") from exc
    return result.rowcount or 0
