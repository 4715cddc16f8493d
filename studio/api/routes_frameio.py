"""Frame.io credential endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from starlette.responses import JSONResponse

from studio.api.deps import get_env_store, require_internal_token
from studio.api.responses import revocation_response
from studio.api.schemas import StatusResponse
from studio.envfile.store import EnvStore
from studio.integrations.revocation import frameio_status, revoke_env_credentials

router = APIRouter(
    prefix="/api/frameio",
    tags=["frameio"],
    dependencies=[Depends(require_internal_token)],
)

Store = Annotated[EnvStore, Depends(get_env_store)]


@router.post("/disconnect")
async def disconnect(store: Store) -> JSONResponse:
    """POST /api/frameio/disconnect -- blank the Frame.io env credentials."""
    result = await revoke_env_credentials(store)
    return revocation_response(result)


@router.get("/status")
async def status(store: Store) -> StatusResponse:
    """GET /api/frameio/status -- report whether Frame.io is connected."""
    current = await frameio_status(store)
    return StatusResponse(connected=current.connected)
