"""Base domain error class for Railway-Oriented Programming.

DomainError is the base class for every error that flows through the
service as data. Errors are returned inside ``Failure`` and never raised.

Architecture:
- Base class for core and domain error types
- Does NOT inherit from Exception (returned in Result, not raised)
- Dataclass inheritance (NOT Protocol/ABC)

Usage:
    from src.core.errors import DomainError

    @dataclass(frozen=True, slots=True, kw_only=True)
    class MyError(DomainError):
        pass  # Inherits code, message, details, retryable
"""

from dataclasses import dataclass

from src.core.enums import ErrorCode


@dataclass(frozen=True, slots=True, kw_only=True)
class DomainError:
    """Base domain error (does NOT inherit from Exception).

    Attributes:
        code: Machine-readable error code (enum).
        message: Human-readable error message.
        details: Optional context for debugging.
        retryable: Whether the caller may safely retry the failed operation.
            Business rule violations are never retryable; operational
            failures (storage outages, timeouts) are.
    """

    code: ErrorCode
    message: str
    details: dict[str, str] | None = None
    retryable: bool = False

    def __str__(self) -> str:
        """String representation of error."""
        return f"{self.code.value}: {self.message}"
