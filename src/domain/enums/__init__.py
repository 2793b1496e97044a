"""Domain enums for rate limit rules.

Enums are centralized here for discoverability.

Available Enums:
    - LimitScope: Traffic partitioning dimension of a rule
    - OnLimitExceedPolicy: Behavior when a band is exhausted
"""

from src.domain.enums.limit_scope import LimitScope
from src.domain.enums.on_limit_exceed_policy import OnLimitExceedPolicy

__all__ = [
    "LimitScope",
    "OnLimitExceedPolicy",
]
