"""Pydantic response schemas for the integration routes."""

from pydantic import BaseModel


class AckResponse(BaseModel):
    """Fixed acknowledgement returned by successful revocations."""

    ok: bool = True


class ErrorResponse(BaseModel):
    ok: bool = False
    error: str


class StatusResponse(BaseModel):
    connected: bool
