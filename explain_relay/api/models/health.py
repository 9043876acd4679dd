"""
Health check response model.
"""
from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class HealthStatus(BaseModel):
    """Liveness report; serialized with camelCase keys."""

    model_config = ConfigDict(populate_by_name=True)

    status: Literal["healthy"] = "healthy"
    timestamp: datetime
    has_api_key: bool = Field(..., alias="hasApiKey")
    uptime_seconds: float = Field(..., alias="uptimeSeconds")
