"""Health check endpoints.

Provides endpoints for monitoring service health and readiness.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from provisioner.infrastructure.config import settings
from provisioner.infrastructure.database import get_session

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    service: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Check service health.

    Returns:
        Health status with service name and version.
    """
    return HealthResponse(
        status="healthy",
        service="product-provisioner",
        version=settings.api_version,
    )


@router.get("/ready")
async def readiness_check(session: AsyncSession = Depends(get_session)) -> JSONResponse:
    """Check that the location cache database is reachable.

    Returns:
        Readiness status.
    """
    try:
        await session.execute(text("SELECT 1"))
    except Exception as e:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "error": type(e).__name__},
        )
    return JSONResponse(content={"status": "ready"})
