"""Repository implementations (adapters for hexagonal architecture).

Concrete implementations of the RuleRepository protocol defined in the
domain layer.
"""

from src.infrastructure.persistence.repositories.in_memory_rule_repository import (
    InMemoryRuleRepository,
)
from src.infrastructure.persistence.repositories.rate_limit_rule_repository import (
    RateLimitRuleRepository,
)

__all__ = [
    "InMemoryRuleRepository",
    "RateLimitRuleRepository",
]
