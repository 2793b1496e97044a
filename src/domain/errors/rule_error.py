"""Rate limit rule error types.

Error taxonomy for rule administration:

    RuleNotFoundError       - no rule with the id (not retryable)
    RuleAlreadyExistsError  - create with an id already taken (not retryable)
    RuleValidationError     - spec rejected before touching storage (not retryable)
    RuleStorageError        - repository fault or timeout (retryable)

Usage:
    from src.domain.errors import RuleNotFoundError
    from src.core.result import Failure

    return Failure(error=RuleNotFoundError.for_rule("login-per-ip"))
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode
from src.core.errors import (
    ConflictError,
    NotFoundError,
    StorageError,
    ValidationError,
)

RULE_RESOURCE_TYPE = "RateLimitRule"


@dataclass(frozen=True, slots=True, kw_only=True)
class RuleNotFoundError(NotFoundError):
    """No rule exists with the requested id."""

    @classmethod
    def for_rule(cls, rule_id: str) -> "RuleNotFoundError":
        """Build the error for a missing rule.

        Args:
            rule_id: Identifier that was looked up.

        Returns:
            RuleNotFoundError: Error with RULE_NOT_FOUND code.
        """
        return cls(
            code=ErrorCode.RULE_NOT_FOUND,
            message=f"Rule not found: {rule_id}",
            resource_type=RULE_RESOURCE_TYPE,
            resource_id=rule_id,
        )

    @property
    def rule_id(self) -> str:
        """Identifier of the missing rule."""
        return self.resource_id


@dataclass(frozen=True, slots=True, kw_only=True)
class RuleAlreadyExistsError(ConflictError):
    """A rule with the requested id already exists.

    Attributes:
        rule_id: Identifier that is already taken.
    """

    rule_id: str

    @classmethod
    def for_rule(cls, rule_id: str) -> "RuleAlreadyExistsError":
        """Build the error for a duplicate create.

        Args:
            rule_id: Identifier that is already taken.

        Returns:
            RuleAlreadyExistsError: Error with RULE_ALREADY_EXISTS code.
        """
        return cls(
            code=ErrorCode.RULE_ALREADY_EXISTS,
            message=f"Rule already exists: {rule_id}",
            resource_type=RULE_RESOURCE_TYPE,
            conflicting_field="id",
            rule_id=rule_id,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class RuleValidationError(ValidationError):
    """Rule spec failed validation.

    Attributes:
        field: Offending field (``bands``, ``bands[1].capacity``, ``scope``...).
        reason: Why the value was rejected.
    """

    reason: str

    @classmethod
    def invalid(
        cls,
        field: str,
        reason: str,
        code: ErrorCode = ErrorCode.INVALID_RULE_FIELD,
    ) -> "RuleValidationError":
        """Build a validation error for one field.

        Args:
            field: Offending field.
            reason: Why the value was rejected.
            code: Error code (defaults to INVALID_RULE_FIELD).

        Returns:
            RuleValidationError: Error describing the field.
        """
        return cls(
            code=code,
            message=f"Invalid field '{field}': {reason}",
            field=field,
            reason=reason,
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class RuleStorageError(StorageError):
    """Repository fault while administering rules.

    Always retryable. The original exception type and text are kept in
    ``details`` for diagnostics; the exception object itself is not carried
    so the error stays a plain, comparable value.
    """

    @classmethod
    def from_exception(cls, operation: str, exc: BaseException) -> "RuleStorageError":
        """Wrap a repository exception.

        Args:
            operation: Logical operation that failed (create, findAll, ...).
            exc: Exception raised by the repository (or TimeoutError).

        Returns:
            RuleStorageError: Retryable storage error.
        """
        if isinstance(exc, TimeoutError):
            code = ErrorCode.STORAGE_TIMEOUT
            cause = "operation timed out"
        else:
            code = ErrorCode.STORAGE_OPERATION_FAILED
            cause = str(exc) or type(exc).__name__

        return cls(
            code=code,
            message=f"Storage operation '{operation}' failed: {cause}",
            operation=operation,
            details={"cause_type": type(exc).__name__, "cause": cause},
        )


type RuleError = (
    RuleNotFoundError | RuleAlreadyExistsError | RuleValidationError | RuleStorageError
)
