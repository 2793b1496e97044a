"""Rule administration DTOs (Data Transfer Objects).

Input specs and result dataclasses for the rule services. These carry data
between the presentation layer and the application services.

DTOs:
    - RateBandSpec: One band as submitted by an operator
    - RuleSpec: Complete field set for create/update (full replace)
    - RuleMutation: Mutation result plus the propagation scope to broadcast
    - DashboardStats: Summary counters for the admin dashboard
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from src.domain.enums.limit_scope import LimitScope
from src.domain.enums.on_limit_exceed_policy import OnLimitExceedPolicy
from src.domain.value_objects.propagation_scope import PropagationScope


@dataclass(frozen=True, kw_only=True)
class RateBandSpec:
    """Band as submitted (validated when the rule is built).

    Attributes:
        window_seconds: Window length in seconds (>= 1).
        capacity: Requests per window (>= 1).
        label: Optional display label.
    """

    window_seconds: int
    capacity: int
    label: str | None = None


@dataclass(frozen=True, kw_only=True)
class RuleSpec:
    """Complete description of a rule for create or update.

    Update is a full replace: fields left at their defaults here are stored
    as those defaults, not merged with the previous rule.

    Enum fields accept members or their literal names ("PER_IP"), so raw
    request values can be passed through and rejected as validation
    failures.

    Attributes:
        id: Rule identifier, ``[a-zA-Z0-9-_]+``.
        name: Display name.
        scope: LimitScope member or literal.
        key_strategy_id: Partition key strategy (opaque).
        on_limit_exceed_policy: OnLimitExceedPolicy member or literal.
        bands: Ordered bands; must not be empty.
        enabled: Whether enforcement applies the rule.
        rule_set_id: Optional grouping key.
        tags: Labels for admin filtering.
        attributes: Free-form metadata.

    Example:
        >>> spec = RuleSpec(
        ...     id="login-per-ip",
        ...     name="Login attempts per IP",
        ...     scope="PER_IP",
        ...     key_strategy_id="client-ip",
        ...     on_limit_exceed_policy="REJECT_REQUEST",
        ...     bands=[RateBandSpec(window_seconds=60, capacity=5)],
        ...     rule_set_id="auth",
        ... )
    """

    id: str
    name: str
    scope: LimitScope | str
    key_strategy_id: str
    on_limit_exceed_policy: OnLimitExceedPolicy | str = OnLimitExceedPolicy.REJECT_REQUEST
    bands: list[RateBandSpec] = field(default_factory=list)
    enabled: bool = True
    rule_set_id: str | None = None
    tags: list[str] = field(default_factory=list)
    attributes: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True, kw_only=True)
class RuleMutation[T]:
    """Outcome of a successful rule mutation.

    Attributes:
        value: Mutation result (rule, deleted count, or None).
        scope: What enforcement nodes must reload once the write is committed.
    """

    value: T
    scope: PropagationScope


@dataclass(frozen=True, kw_only=True)
class DashboardStats:
    """Rule counters for the admin dashboard.

    Attributes:
        total_rules: Number of stored rules.
        active_rules: Rules with enabled=True.
        disabled_rules: Rules with enabled=False.
        total_rule_sets: Distinct non-empty rule_set_id values.
        last_updated: When the counters were computed (not a storage timestamp).
    """

    total_rules: int
    active_rules: int
    disabled_rules: int
    total_rule_sets: int
    last_updated: datetime
