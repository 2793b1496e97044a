"""Limit scope enumeration.

Defines the traffic-partitioning dimension a rate limit rule applies to.
Enforcement nodes derive the partition key from the scope together with the
rule's key strategy.

Usage:
    from src.domain.enums import LimitScope

    scope = LimitScope("PER_IP")
"""

from enum import Enum


class LimitScope(str, Enum):
    """Traffic partitioning dimension for rate limit rules.

    String Enum:
        Values equal the member names so the literal accepted over the API,
        stored in the database and published to enforcement nodes is the same
        string everywhere.
    """

    GLOBAL = "GLOBAL"
    """One shared budget for all traffic matching the rule.

    Warning:
        One client can exhaust the limit for everyone. Prefer a keyed scope
        unless the rule protects a shared downstream resource.
    """

    PER_API_KEY = "PER_API_KEY"
    """Separate budget per API key presented by the caller."""

    PER_USER = "PER_USER"
    """Separate budget per authenticated user."""

    PER_IP = "PER_IP"
    """Separate budget per client IP address.

    Typical for unauthenticated endpoints (login, registration).
    """

    CUSTOM = "CUSTOM"
    """Partition key fully defined by the rule's key strategy."""
