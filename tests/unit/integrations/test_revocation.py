"""Tests for the credential revocation operations."""

from unittest.mock import AsyncMock

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from studio.db.repo_google import GoogleTokenData, get_google_auth, upsert_google_auth
from studio.envfile.store import InMemoryEnvStore
from studio.integrations.revocation import (
    frameio_status,
    google_status,
    revoke_env_credentials,
    revoke_stored_record,
)
from studio.integrations.types import FRAMEIO_CREDENTIAL_KEYS

EMPTY_FRAMEIO = {key: "" for key in FRAMEIO_CREDENTIAL_KEYS}


class TestRevokeEnvCredentials:
    """Tests for revoke_env_credentials."""

    async def test_blanks_all_three_keys(self, env_store: InMemoryEnvStore) -> None:
        result = await revoke_env_credentials(env_store)
        assert result.ok is True
        assert result.changed == 3
        assert env_store.read() == EMPTY_FRAMEIO

    async def test_keys_remain_present(self) -> None:
        store = InMemoryEnvStore()
        await revoke_env_credentials(store)
        assert set(store.read()) == set(FRAMEIO_CREDENTIAL_KEYS)

    async def test_idempotent(self, env_store: InMemoryEnvStore) -> None:
        await revoke_env_credentials(env_store)
        result = await revoke_env_credentials(env_store)
        assert result.ok is True
        assert env_store.read() == EMPTY_FRAMEIO

    async def test_leaves_other_keys(self) -> None:
        store = InMemoryEnvStore({"GOOGLE_CLIENT_ID": "gid", "FRAMEIO_ACCESS_TOKEN": "abc"})
        await revoke_env_credentials(store)
        assert store.read()["GOOGLE_CLIENT_ID"] == "gid"

    async def test_store_failure_reported(self, env_store: InMemoryEnvStore) -> None:
        env_store.fail_writes = True
        result = await revoke_env_credentials(env_store)
        assert result.ok is False
        assert result.error == "store_unavailable"
        assert env_store.read()["FRAMEIO_ACCESS_TOKEN"] == "abc"


class TestRevokeStoredRecord:
    """Tests for revoke_stored_record."""

    async def test_deletes_singleton(self, db_session: AsyncSession) -> None:
        await upsert_google_auth(db_session, GoogleTokenData(refresh_token="1//r"))
        result = await revoke_stored_record(db_session)
        assert result.ok is True
        assert result.changed == 1
        assert await get_google_auth(db_session) is None

    async def test_absent_record_is_success(self, db_session: AsyncSession) -> None:
        result = await revoke_stored_record(db_session)
        assert result.ok is True
        assert result.changed == 0

    async def test_idempotent(self, db_session: AsyncSession) -> None:
        await upsert_google_auth(db_session, GoogleTokenData(refresh_token="1//r"))
        await revoke_stored_record(db_session)
        result = await revoke_stored_record(db_session)
        assert result.ok is True
        assert await get_google_auth(db_session) is None

    async def test_store_failure_reported(self) -> None:
        session = AsyncMock(spec=AsyncSession)
        session.execute.side_effect = OperationalError("DELETE", {}, Exception("gone"))
        result = await revoke_stored_record(session)
        assert result.ok is False
        assert result.error == "store_unavailable"


class TestIsolation:
    """Revoking one integration leaves the other intact."""

    async def test_frameio_revoke_keeps_google_row(
        self, db_session: AsyncSession, env_store: InMemoryEnvStore
    ) -> None:
        await upsert_google_auth(db_session, GoogleTokenData(refresh_token="1//r"))
        await revoke_env_credentials(env_store)
        assert await get_google_auth(db_session) is not None

    async def test_google_revoke_keeps_frameio_keys(
        self, db_session: AsyncSession, env_store: InMemoryEnvStore
    ) -> None:
        before = env_store.read()
        await revoke_stored_record(db_session)
        assert env_store.read() == before


class TestStatus:
    """Tests for frameio_status and google_status."""

    async def test_frameio_connected_then_disconnected(
        self, env_store: InMemoryEnvStore
    ) -> None:
        assert (await frameio_status(env_store)).connected is True
        await revoke_env_credentials(env_store)
        assert (await frameio_status(env_store)).connected is False

    async def test_google_status(self, db_session: AsyncSession) -> None:
        assert (await google_status(db_session)).connected is False
        await upsert_google_auth(db_session, GoogleTokenData(refresh_token="1//r"))
        assert (await google_status(db_session)).connected is True
