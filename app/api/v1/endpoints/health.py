"""Liveness and readiness probes."""

from typing import Literal

from fastapi import APIRouter
from pydantic import BaseModel

from app.config import settings
from app.database import check_database_connection

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Service status."""

    status: Literal["healthy", "degraded"]
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Service status with the database check."""

    database: Literal["healthy", "unhealthy"]


@router.get("/health", response_model=HealthResponse, summary="Liveness")
async def health_check() -> HealthResponse:
    """Answer as long as the process is serving requests."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get("/health/detailed", response_model=DetailedHealthResponse, summary="Readiness")
async def detailed_health_check() -> DetailedHealthResponse:
    """Report whether the user store's database answers; signup and login need it."""
    db_healthy = await check_database_connection()

    return DetailedHealthResponse(
        status="healthy" if db_healthy else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        database="healthy" if db_healthy else "unhealthy",
    )


@router.get("/ping", summary="Ping")
async def ping() -> dict[str, str]:
    """Pong."""
    return {"message": "pong"}
