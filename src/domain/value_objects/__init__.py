"""Domain value objects with validation.

Immutable value objects that enforce business constraints.
"""

from src.domain.value_objects.propagation_scope import (
    FullReload,
    PropagationScope,
    RuleSetScoped,
)
from src.domain.value_objects.rate_limit_band import RateLimitBand

__all__ = [
    "FullReload",
    "PropagationScope",
    "RateLimitBand",
    "RuleSetScoped",
]
