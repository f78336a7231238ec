"""
Health check endpoint.

Routes: GET /health

Reports whether the optional D2 CLI is installed; without it PNG downloads
fall back to browser screenshots.

Dependencies: fastapi, assistant.configs
System role: Liveness and render capability probe
"""

import shutil

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from assistant.api.deps import get_settings_dependency
from assistant.configs import Settings


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str
    d2_available: bool = Field(description="D2 executable found on PATH")


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check(settings: Settings = Depends(get_settings_dependency)) -> HealthResponse:
    """Basic health check with render capability."""
    d2_available = shutil.which(settings.diagram.d2_binary) is not None
    message = "Server Healthy" if d2_available else "Server Healthy, D2 CLI not found"
    return HealthResponse(status="healthy", message=message, d2_available=d2_available)
