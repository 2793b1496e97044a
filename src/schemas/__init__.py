"""Request/response schemas for API endpoints.

All Pydantic models for HTTP request validation and response serialization.
Schemas are kept separate from domain entities (HTTP-layer concerns only).

Usage:
    from src.schemas import RuleCreateRequest, RuleResponse
"""

from src.schemas.dashboard_schemas import DashboardStatsResponse
from src.schemas.rule_schemas import (
    RateBandRequest,
    RateBandResponse,
    RuleCreateRequest,
    RuleListResponse,
    RuleResponse,
    RuleSetDeleteResponse,
    RuleUpdateRequest,
)

__all__ = [
    "DashboardStatsResponse",
    "RateBandRequest",
    "RateBandResponse",
    "RuleCreateRequest",
    "RuleListResponse",
    "RuleResponse",
    "RuleSetDeleteResponse",
    "RuleUpdateRequest",
]
