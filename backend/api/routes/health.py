"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings
from shared.database import is_database_configured

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    signing_secret: str
    database: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether the configuration needed to serve auth requests is
    present. It does not open a database connection.
    """
    secret_ok = bool(get_settings().jwt_secret)
    database_ok = is_database_configured()
    return ReadinessResponse(
        status="ready" if secret_ok and database_ok else "not_ready",
        signing_secret="configured" if secret_ok else "missing",
        database="configured" if database_ok else "missing",
    )
