"""Gmail (Google) credential endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import JSONResponse

from studio.api.deps import require_internal_token
from studio.api.responses import revocation_response
from studio.api.schemas import StatusResponse
from studio.db.engine import get_session
from studio.integrations.revocation import google_status, revoke_stored_record

router = APIRouter(
    prefix="/api/gmail",
    tags=["gmail"],
    dependencies=[Depends(require_internal_token)],
)

DbSession = Annotated[AsyncSession, Depends(get_session)]


@router.post("/disconnect")
async def disconnect(db: DbSession) -> JSONResponse:
    """POST /api/gmail/disconnect -- delete the stored Google credentials."""
    result = await revoke_stored_record(db)
    return revocation_response(result)


@router.get("/status")
async def status(db: DbSession) -> StatusResponse:
    """GET /api/gmail/status -- report whether Google is connected."""
    current = await google_status(db)
    return StatusResponse(connected=current.connected)
