"""
Health check endpoints.
Simple endpoints for monitoring application health and status.
"""
import time
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from explain_relay.api.dependencies import get_app_settings
from explain_relay.api.models import HealthStatus
from explain_relay.config.settings import Settings

router = APIRouter(tags=["health"])


def build_health_status(request: Request, settings: Settings) -> HealthStatus:
    return HealthStatus(
        timestamp=datetime.now(timezone.utc),
        has_api_key=settings.has_api_key,
        uptime_seconds=round(time.monotonic() - request.app.state.started_at, 3),
    )


@router.get("/health", response_model=HealthStatus)
async def health_check(request: Request, settings: Settings = Depends(get_app_settings)):
    """Basic health check endpoint."""
    return build_health_status(request, settings)
