"""Revocation of stored third-party credentials.

Frame.io credentials are soft revoked: the three env keys stay in the file
with empty values. Google credentials are hard revoked: the singleton row is
deleted. Both operations are idempotent.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from studio.core.errors import StoreError
from studio.db.repo_google import delete_google_auth, is_google_connected
from studio.envfile.store import EnvStore
from studio.integrations.types import (
    FRAMEIO_ACCESS_TOKEN,
    FRAMEIO_CREDENTIAL_KEYS,
    SERVICE_FRAMEIO,
    SERVICE_GOOGLE,
    ConnectionStatus,
    RevocationResult,
)

logger = logging.getLogger(__name__)


async def revoke_env_credentials(store: EnvStore) -> RevocationResult:
    """Blank the Frame.io access token, refresh token and account id."""
    updates = {key: "" for key in FRAMEIO_CREDENTIAL_KEYS}
    try:
        await run_in_threadpool(store.update, updates)
    except StoreError as exc:
        logger.error("Frame.io revocation failed: %s", exc)
        return RevocationResult(service=SERVICE_FRAMEIO, ok=False, error=exc.code)

    logger.info("Frame.io credentials revoked")
    return RevocationResult(
        service=SERVICE_FRAMEIO, ok=True, changed=len(FRAMEIO_CREDENTIAL_KEYS)
    )


async def revoke_stored_record(session: AsyncSession) -> RevocationResult:
    """Delete the Google credential row if it exists."""
    try:
        deleted = await delete_google_auth(session)
    except StoreError as exc:
        logger.error("Google revocation failed: %s", exc)
        return RevocationResult(service=SERVICE_GOOGLE, ok=False, error=exc.code)

    if deleted:
        logger.info("Google credentials revoked")
    else:
        logger.info("Google credentials already absent")
    return RevocationResult(service=SERVICE_GOOGLE, ok=True, changed=deleted)


async def frameio_status(store: EnvStore) -> ConnectionStatus:
    """Frame.io is connected while its access token is non-empty."""
    values = await run_in_threadpool(store.read)
    return ConnectionStatus(
        service=SERVICE_FRAMEIO,
        connected=bool(values.get(FRAMEIO_ACCESS_TOKEN)),
    )


async def google_status(session: AsyncSession) -> ConnectionStatus:
    return ConnectionStatus(
        service=SERVICE_GOOGLE,
        connected=await is_google_connected(session),
    )
