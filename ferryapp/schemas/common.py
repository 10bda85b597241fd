"""
Common schema types used across the API.
"""

from pydantic import BaseModel


class SuccessResponse(BaseModel):
    """Standard success response."""

    mensaje: str


class StatusChangeResponse(BaseModel):
    """Response for activar / desactivar actions."""

    mensaje: str
    rif_cedula: str
    estado: bool
    accion: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
