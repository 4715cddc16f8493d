"""Helpers that turn service results into HTTP responses."""

from fastapi import status
from starlette.responses import JSONResponse

from studio.api.schemas import AckResponse, ErrorResponse
from studio.integrations.types import RevocationResult


def revocation_response(result: RevocationResult) -> JSONResponse:
    """200 ``{"ok": true}`` on success, 503 with the error code otherwise."""
    if result.ok:
        return JSONResponse(AckResponse().model_dump(), status_code=status.HTTP_200_OK)
    return JSONResponse(
        ErrorResponse(error=result.error or "store_error").model_dump(),
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
    )
