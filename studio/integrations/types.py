"""Type definitions for integration credential operations."""

from pydantic import BaseModel

FRAMEIO_ACCESS_TOKEN = "FRAMEIO_ACCESS_TOKEN"
FRAMEIO_REFRESH_TOKEN = "FRAMEIO_REFRESH_TOKEN"
FRAMEIO_ACCOUNT_ID = "FRAMEIO_ACCOUNT_ID"

FRAMEIO_CREDENTIAL_KEYS = (
    FRAMEIO_ACCESS_TOKEN,
    FRAMEIO_REFRESH_TOKEN,
    FRAMEIO_ACCOUNT_ID,
)

SERVICE_FRAMEIO = "frameio"
SERVICE_GOOGLE = "google"


class RevocationResult(BaseModel):
    """Outcome of a revoke call.

    ``ok`` is False only when the backing store failed; revoking credentials
    that are already gone is a success.
    """

    service: str
    ok: bool
    changed: int = 0
    error: str | None = None


class ConnectionStatus(BaseModel):
    """Whether an integration currently holds usable credentials."""

    service: str
    connected: bool
