"""Application layer error types.

Wraps rule domain errors with an application-level category the
presentation layer maps to HTTP status codes.

Exports:
    ApplicationErrorCode: Application-level error code enum
    ApplicationError: Application layer error dataclass
    to_application_error: Map a RuleError to an ApplicationError
"""

from dataclasses import dataclass
from enum import Enum

from src.core.errors.domain_error import DomainError
from src.domain.errors.rule_error import (
    RuleAlreadyExistsError,
    RuleError,
    RuleNotFoundError,
    RuleStorageError,
    RuleValidationError,
)


class ApplicationErrorCode(Enum):
    """Application-level error codes.

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.NOT_FOUND,
        ...     message="Rule not found: login-per-ip",
        ... )
    """

    COMMAND_VALIDATION_FAILED = "command_validation_failed"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    SERVICE_UNAVAILABLE = "service_unavailable"


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Application layer error.

    Attributes:
        code: Application error code (from ApplicationErrorCode enum)
        message: Human-readable error message
        domain_error: Original domain error (if error originated from domain layer)
        details: Additional context as key-value pairs
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None

    @property
    def retryable(self) -> bool:
        """Whether the client may re-issue the request unchanged."""
        return self.domain_error is not None and self.domain_error.retryable


def to_application_error(error: RuleError) -> ApplicationError:
    """Categorize a rule error for the presentation layer.

    Args:
        error: Failure returned by a rule service.

    Returns:
        ApplicationError carrying the original error.
    """
    match error:
        case RuleValidationError(field=field_name):
            return ApplicationError(
                code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
                message=error.message,
                domain_error=error,
                details={field_name: error.reason} if field_name else None,
            )
        case RuleNotFoundError():
            return ApplicationError(
                code=ApplicationErrorCode.NOT_FOUND,
                message=error.message,
                domain_error=error,
            )
        case RuleAlreadyExistsError():
            return ApplicationError(
                code=ApplicationErrorCode.CONFLICT,
                message=error.message,
                domain_error=error,
            )
        case RuleStorageError():
            return ApplicationError(
                code=ApplicationErrorCode.SERVICE_UNAVAILABLE,
                message=error.message,
                domain_error=error,
                details={"operation": error.operation},
            )
