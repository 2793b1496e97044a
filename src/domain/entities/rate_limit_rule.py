"""Rate limit rule entity and its builder.

A rule is immutable once built. Enforcement nodes may hold references to a
rule while the control plane replaces it, so no code path ever mutates a rule
in place: every change (including flipping ``enabled``) seeds a new
``RateLimitRuleBuilder`` from the current rule, applies the change, and
builds a new instance.

Usage:
    from src.domain.entities import RateLimitRuleBuilder
    from src.domain.enums import LimitScope

    result = (
        RateLimitRuleBuilder("login-per-ip")
        .name("Login attempts per IP")
        .scope(LimitScope.PER_IP)
        .key_strategy_id("client-ip")
        .band(window_seconds=60, capacity=5)
        .build()
    )

    # Flip enabled without touching any other field
    toggled = RateLimitRuleBuilder.from_rule(rule).enabled(not rule.enabled).build()
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Self

from src.core.constants import (
    RULE_ID_MAX_LENGTH,
    RULE_ID_PATTERN,
    TAGS_ATTRIBUTE_KEY,
)
from src.core.enums import ErrorCode
from src.core.result import Failure, Result, Success
from src.domain.enums.limit_scope import LimitScope
from src.domain.enums.on_limit_exceed_policy import OnLimitExceedPolicy
from src.domain.errors.rule_error import RuleValidationError
from src.domain.value_objects.rate_limit_band import RateLimitBand


def is_valid_rule_id(rule_id: str) -> bool:
    """Check a rule identifier against the allowed format.

    Args:
        rule_id: Candidate identifier.

    Returns:
        bool: True if non-empty, within length, and only [a-zA-Z0-9-_].
    """
    return (
        0 < len(rule_id) <= RULE_ID_MAX_LENGTH
        and RULE_ID_PATTERN.fullmatch(rule_id) is not None
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitRule:
    """Rate limit rule (immutable entity).

    Identity is ``id``; every other field is replaced wholesale by building a
    new instance.

    Attributes:
        id: Unique identifier, ``[a-zA-Z0-9-_]+``, never changes.
        name: Display name, non-empty.
        scope: Traffic partitioning dimension.
        key_strategy_id: How enforcement derives the partition key (opaque here).
        on_limit_exceed_policy: Behavior when a band is exhausted.
        bands: Ordered, non-empty bands; all apply simultaneously.
        enabled: Whether enforcement nodes apply the rule.
        rule_set_id: Optional grouping key for bulk operations.
        tags: Free-form labels for filtering in the admin UI.
        attributes: Read-only free-form metadata (top level is read-only).

    Raises:
        ValueError: If constructed directly with an invalid id, empty name or
            key strategy, or no bands. Use RateLimitRuleBuilder to get a
            RuleValidationError instead of an exception.
    """

    id: str
    name: str
    scope: LimitScope
    key_strategy_id: str
    on_limit_exceed_policy: OnLimitExceedPolicy
    bands: tuple[RateLimitBand, ...]
    enabled: bool = True
    rule_set_id: str | None = None
    tags: tuple[str, ...] = ()
    attributes: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    def __post_init__(self) -> None:
        """Enforce rule invariants and freeze collection fields.

        Raises:
            ValueError: If an invariant is violated.
        """
        if not is_valid_rule_id(self.id):
            raise ValueError(f"Invalid rule id: {self.id!r}")
        if not self.name:
            raise ValueError("Rule name cannot be empty")
        if not self.key_strategy_id:
            raise ValueError("Rule key_strategy_id cannot be empty")
        if not self.bands:
            raise ValueError("Rule must have at least one band")

        # Callers may pass lists/dicts; store immutable views only
        object.__setattr__(self, "bands", tuple(self.bands))
        object.__setattr__(self, "tags", tuple(self.tags))
        object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))

    def __repr__(self) -> str:
        """String representation for debugging.

        Returns:
            str: Compact representation of the rule.
        """
        return (
            f"<RateLimitRule(id={self.id!r}, enabled={self.enabled}, "
            f"scope={self.scope.value}, bands={len(self.bands)}, "
            f"rule_set_id={self.rule_set_id!r})>"
        )


class RateLimitRuleBuilder:
    """Validating builder for RateLimitRule.

    Setters return the builder so calls chain. Nothing is validated until
    ``build()``, which reports the first invalid field as a
    ``RuleValidationError`` instead of raising.

    Validation order:
        id, name, key_strategy_id, scope, on_limit_exceed_policy, bands
        (non-empty, then each band), attributes.tags.

    Tags:
        ``tags`` is a typed field. A legacy ``attributes["tags"]`` list is
        lifted into ``tags`` and removed from ``attributes``; explicitly set,
        non-empty tags take precedence over the legacy key.
    """

    def __init__(self, rule_id: str) -> None:
        """Start a builder for the given rule id.

        Args:
            rule_id: Identifier of the rule being built.
        """
        self._id = rule_id
        self._name = ""
        self._enabled = True
        self._scope: LimitScope | str | None = None
        self._key_strategy_id = ""
        self._policy: OnLimitExceedPolicy | str = OnLimitExceedPolicy.REJECT_REQUEST
        self._bands: list[RateLimitBand | tuple[int, int, str | None]] = []
        self._rule_set_id: str | None = None
        self._tags: tuple[str, ...] = ()
        self._attributes: dict[str, Any] = {}

    @classmethod
    def from_rule(cls, rule: RateLimitRule) -> Self:
        """Seed a builder with every field of an existing rule.

        Args:
            rule: Rule to copy.

        Returns:
            RateLimitRuleBuilder: Builder that builds an equal rule unless a
            setter is called.
        """
        builder = cls(rule.id)
        builder._name = rule.name
        builder._enabled = rule.enabled
        builder._scope = rule.scope
        builder._key_strategy_id = rule.key_strategy_id
        builder._policy = rule.on_limit_exceed_policy
        builder._bands = list(rule.bands)
        builder._rule_set_id = rule.rule_set_id
        builder._tags = rule.tags
        builder._attributes = dict(rule.attributes)
        return builder

    def name(self, name: str) -> Self:
        self._name = name
        return self

    def enabled(self, enabled: bool) -> Self:
        self._enabled = enabled
        return self

    def scope(self, scope: LimitScope | str) -> Self:
        """Set the scope from an enum member or its literal name."""
        self._scope = scope
        return self

    def key_strategy_id(self, key_strategy_id: str) -> Self:
        self._key_strategy_id = key_strategy_id
        return self

    def on_limit_exceed_policy(self, policy: OnLimitExceedPolicy | str) -> Self:
        """Set the policy from an enum member or its literal name."""
        self._policy = policy
        return self

    def add_band(self, band: RateLimitBand) -> Self:
        self._bands.append(band)
        return self

    def band(
        self, *, window_seconds: int, capacity: int, label: str | None = None
    ) -> Self:
        """Append a band from raw values (validated at build time)."""
        self._bands.append((window_seconds, capacity, label))
        return self

    def rule_set_id(self, rule_set_id: str | None) -> Self:
        """Set the rule set. An empty string means ungrouped."""
        self._rule_set_id = rule_set_id or None
        return self

    def tags(self, tags: Iterable[str] | None) -> Self:
        self._tags = tuple(tags or ())
        return self

    def attributes(self, attributes: Mapping[str, Any] | None) -> Self:
        self._attributes = dict(attributes or {})
        return self

    def build(self) -> Result[RateLimitRule, RuleValidationError]:
        """Validate collected fields and build the rule.

        Returns:
            Success(RateLimitRule) if every field is valid.
            Failure(RuleValidationError) naming the first invalid field.
        """
        if not is_valid_rule_id(self._id):
            return Failure(
                error=RuleValidationError.invalid(
                    "id",
                    "must be 1-"
                    f"{RULE_ID_MAX_LENGTH} characters of letters, digits, '-' or '_'",
                    code=ErrorCode.INVALID_RULE_ID,
                )
            )
        if not self._name or not self._name.strip():
            return Failure(error=RuleValidationError.invalid("name", "must not be blank"))
        if not self._key_strategy_id or not self._key_strategy_id.strip():
            return Failure(
                error=RuleValidationError.invalid("key_strategy_id", "must not be blank")
            )

        scope = _parse_enum(LimitScope, self._scope)
        if scope is None:
            return Failure(
                error=RuleValidationError.invalid(
                    "scope", f"must be one of: {_literals(LimitScope)}"
                )
            )

        policy = _parse_enum(OnLimitExceedPolicy, self._policy)
        if policy is None:
            return Failure(
                error=RuleValidationError.invalid(
                    "on_limit_exceed_policy",
                    f"must be one of: {_literals(OnLimitExceedPolicy)}",
                )
            )

        if not self._bands:
            return Failure(
                error=RuleValidationError.invalid(
                    "bands", "must not be empty", code=ErrorCode.INVALID_RATE_BAND
                )
            )

        bands: list[RateLimitBand] = []
        for index, raw in enumerate(self._bands):
            if isinstance(raw, RateLimitBand):
                bands.append(raw)
                continue
            window_seconds, capacity, label = raw
            try:
                bands.append(
                    RateLimitBand.of_seconds(window_seconds, capacity, label=label)
                )
            except (ValueError, OverflowError) as e:
                return Failure(
                    error=RuleValidationError.invalid(
                        f"bands[{index}]", str(e), code=ErrorCode.INVALID_RATE_BAND
                    )
                )

        attributes = dict(self._attributes)
        legacy_tags = attributes.pop(TAGS_ATTRIBUTE_KEY, None)
        tags = self._tags
        if not tags and legacy_tags is not None:
            if not isinstance(legacy_tags, (list, tuple)) or not all(
                isinstance(tag, str) for tag in legacy_tags
            ):
                return Failure(
                    error=RuleValidationError.invalid(
                        f"attributes.{TAGS_ATTRIBUTE_KEY}", "must be a list of strings"
                    )
                )
            tags = tuple(legacy_tags)

        return Success(
            value=RateLimitRule(
                id=self._id,
                name=self._name,
                enabled=self._enabled,
                scope=scope,
                key_strategy_id=self._key_strategy_id,
                on_limit_exceed_policy=policy,
                bands=tuple(bands),
                rule_set_id=self._rule_set_id,
                tags=tags,
                attributes=attributes,
            )
        )


def _parse_enum[E: (LimitScope, OnLimitExceedPolicy)](
    enum_type: type[E], value: E | str | None
) -> E | None:
    """Resolve an enum member from a member or its literal name."""
    if value is None:
        return None
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        return None


def _literals(enum_type: type[LimitScope] | type[OnLimitExceedPolicy]) -> str:
    return ", ".join(member.value for member in enum_type)
