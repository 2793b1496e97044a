"""Domain errors package.

Usage:
    from src.domain.errors import RuleNotFoundError, RuleStorageError
"""

from src.domain.errors.rule_error import (
    RuleAlreadyExistsError,
    RuleError,
    RuleNotFoundError,
    RuleStorageError,
    RuleValidationError,
)

__all__ = [
    "RuleAlreadyExistsError",
    "RuleError",
    "RuleNotFoundError",
    "RuleStorageError",
    "RuleValidationError",
]
