"""Common error categories shared by all domains.

Error Hierarchy:
    DomainError (base - does NOT inherit from Exception)
    ├── ValidationError (input validation failures)
    ├── NotFoundError (resource not found)
    ├── ConflictError (duplicate resource, state conflict)
    └── StorageError (persistence backend failure, retryable)
"""

from dataclasses import dataclass

from src.core.errors.domain_error import DomainError


@dataclass(frozen=True, slots=True, kw_only=True)
class ValidationError(DomainError):
    """Input validation failure.

    Attributes:
        field: Field name that failed validation.
    """

    field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NotFoundError(DomainError):
    """Resource not found.

    Attributes:
        resource_type: Type of resource (RateLimitRule, ...).
        resource_id: ID of the resource that was not found.
    """

    resource_type: str
    resource_id: str


@dataclass(frozen=True, slots=True, kw_only=True)
class ConflictError(DomainError):
    """Resource conflict (duplicate identifier, state conflict).

    Attributes:
        resource_type: Type of resource in conflict.
        conflicting_field: Field that has conflict (id, ...).
    """

    resource_type: str
    conflicting_field: str | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class StorageError(DomainError):
    """Persistence backend failure.

    Raised by nothing; returned when a repository call fails or times out.
    Always retryable: the operation can be re-issued once storage recovers.

    Attributes:
        operation: Logical operation that failed (create, findAll, ...).
    """

    operation: str
    retryable: bool = True
