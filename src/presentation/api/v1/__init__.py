"""API v1 routers.

Resources:
    /api/v1/rules              - Rate limit rule administration
    /api/v1/dashboard/stats    - Rule counters
"""

from fastapi import APIRouter

from src.core.config import settings
from src.presentation.api.v1.dashboard import router as dashboard_router
from src.presentation.api.v1.rules import router as rules_router

v1_router = APIRouter(prefix=settings.api_v1_prefix)

v1_router.include_router(rules_router)
v1_router.include_router(dashboard_router)

__all__ = [
    "v1_router",
    "rules_router",
    "dashboard_router",
]
