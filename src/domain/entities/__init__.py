"""Domain entities for business logic.

Pure business logic entities with no framework dependencies.
"""

from src.domain.entities.rate_limit_rule import (
    RateLimitRule,
    RateLimitRuleBuilder,
    is_valid_rule_id,
)

__all__ = [
    "RateLimitRule",
    "RateLimitRuleBuilder",
    "is_valid_rule_id",
]
