from fastapi import APIRouter

from .endpoints import explain
from .endpoints import health

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, prefix="", tags=["health"])
api_router.include_router(explain.router, prefix="", tags=["explain"])
