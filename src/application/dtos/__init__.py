"""Data Transfer Objects (DTOs) for application layer.

DTOs carry data between the presentation layer and application services.

Usage:
    from src.application.dtos import RuleSpec, RateBandSpec, RuleMutation

Note:
    DTOs are NOT the same as:
    - Domain entities (RateLimitRule is built from a RuleSpec)
    - API schemas (Pydantic models in src/schemas)
"""

from src.application.dtos.rule_dtos import (
    DashboardStats,
    RateBandSpec,
    RuleMutation,
    RuleSpec,
)

__all__ = [
    "DashboardStats",
    "RateBandSpec",
    "RuleMutation",
    "RuleSpec",
]
