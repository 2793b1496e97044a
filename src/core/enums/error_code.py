"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention.
Used with Result types for railway-oriented programming.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_EXISTS)
- Storage errors (STORAGE_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable).

    Error codes follow ENTITY_ACTION_REASON naming convention.
    """

    # Validation errors
    VALIDATION_FAILED = "validation_failed"
    INVALID_RULE_ID = "invalid_rule_id"
    INVALID_RULE_FIELD = "invalid_rule_field"
    INVALID_RATE_BAND = "invalid_rate_band"

    # Resource errors
    RULE_NOT_FOUND = "rule_not_found"
    RESOURCE_NOT_FOUND = "resource_not_found"

    # Conflict errors
    RULE_ALREADY_EXISTS = "rule_already_exists"
    RESOURCE_CONFLICT = "resource_conflict"

    # Storage errors
    STORAGE_OPERATION_FAILED = "storage_operation_failed"
    STORAGE_TIMEOUT = "storage_timeout"
