"""Health and readiness endpoints."""

from typing import Literal

from fastapi import APIRouter, Request, status
from pydantic import BaseModel

from discovery.core.config import settings
from discovery.core.errors import get_request_id
from discovery.search.es_client import ping

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: Literal["ok"] = "ok"


class ReadinessCheck(BaseModel):
    """Individual readiness check result."""

    status: Literal["ok", "degraded", "down"]
    message: str | None = None


class ReadinessResponse(BaseModel):
    """Readiness check response."""

    status: Literal["ok", "degraded", "down"]
    checks: dict[str, ReadinessCheck]
    request_id: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    summary="Health check",
    description="Simple health check endpoint. Returns 200 if the API is running.",
)
async def health_check() -> HealthResponse:
    """Health check endpoint - just checks if the process is alive."""
    return HealthResponse(status="ok")


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    status_code=status.HTTP_200_OK,
    summary="Readiness check",
    description="Readiness check endpoint. Verifies the search engine is reachable.",
)
def readiness_check(request: Request) -> ReadinessResponse:
    """Search is the only hard dependency: without it the catalog cannot answer."""
    request_id = get_request_id(request)
    checks: dict[str, ReadinessCheck] = {}

    if not settings.ELASTICSEARCH_ENABLED:
        checks["elasticsearch"] = ReadinessCheck(status="down", message="Not enabled")
    elif ping():
        checks["elasticsearch"] = ReadinessCheck(status="ok")
    else:
        checks["elasticsearch"] = ReadinessCheck(status="down", message="Elasticsearch unreachable")

    overall_status: Literal["ok", "degraded", "down"] = (
        "ok" if all(check.status == "ok" for check in checks.values()) else "down"
    )

    return ReadinessResponse(
        status=overall_status,
        checks=checks,
        request_id=request_id,
    )
