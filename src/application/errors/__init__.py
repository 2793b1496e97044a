"""Application layer errors.

Exports:
    ApplicationError: Application layer error dataclass
    ApplicationErrorCode: Application-level error code enum
    to_application_error: Map a RuleError to an ApplicationError
"""

from src.application.errors.application_error import (
    ApplicationError,
    ApplicationErrorCode,
    to_application_error,
)

__all__ = [
    "ApplicationError",
    "ApplicationErrorCode",
    "to_application_error",
]
