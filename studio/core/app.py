"""FastAPI application factory for the studio integration service."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.responses import JSONResponse

from studio.api.routes_frameio import router as frameio_router
from studio.api.routes_gmail import router as gmail_router
from studio.api.schemas import ErrorResponse
from studio.core.errors import StoreError
from studio.core.settings import IntegrationSettings

logger = logging.getLogger(__name__)

HTTP_SERVICE_UNAVAILABLE = 503


async def _store_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Report store failures that escape a route as 503."""
    code = exc.code if isinstance(exc, StoreError) else "store_error"
    logger.error("Store failure: %s", exc)
    return JSONResponse(
        ErrorResponse(error=code).model_dump(),
        status_code=HTTP_SERVICE_UNAVAILABLE,
    )


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    settings = IntegrationSettings()
    logging.getLogger("studio").setLevel(settings.log_level.upper())

    @asynccontextmanager
    async def lifespan(_app: FastAPI) -> AsyncIterator[None]:
        logger.info("Using env file %s", settings.env_file)
        yield

    app = FastAPI(
        title="Studio Integrations",
        version="0.1.0",
        lifespan=lifespan,
    )

    origins = settings.get_cors_origin_list()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["Authorization", "Content-Type"],
        )

    app.add_exception_handler(StoreError, _store_error_handler)

    app.include_router(frameio_router)
    app.include_router(gmail_router)

    return app
