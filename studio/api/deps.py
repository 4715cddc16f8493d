"""FastAPI dependencies shared by the integration routes."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from studio.core.settings import IntegrationSettings
from studio.envfile.store import EnvFileStore, EnvStore

_security = HTTPBearer(auto_error=False)


class _StoreHolder:
    """One EnvFileStore per path so concurrent writers share its lock."""

    stores: dict[str, EnvFileStore] = {}


_holder = _StoreHolder()


def load_settings() -> IntegrationSettings:
    return IntegrationSettings()


def get_env_store(
    settings: Annotated[IntegrationSettings, Depends(load_settings)],
) -> EnvStore:
    """Return the env-file store configured by STUDIO_ENV_FILE."""
    store = _holder.stores.get(settings.env_file)
    if store is None:
        store = EnvFileStore(
            settings.env_file, sync_process_env=settings.sync_process_env
        )
        _holder.stores[settings.env_file] = store
    return store


async def require_internal_token(
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(_security)
    ],
    settings: Annotated[IntegrationSettings, Depends(load_settings)],
) -> None:
    """Check the Bearer token against STUDIO_INTERNAL_TOKEN when one is set.

    With no token configured the routes are trusted internal-only.
    """
    expected = settings.internal_token
    if not expected:
        return
    if credentials is None or credentials.credentials != expected:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED)
