"""Rule request and response schemas.

Pydantic schemas for rule API endpoints. Includes:
- Request schemas (client → API) with conversion to RuleSpec
- Response schemas (API → client) with conversion from RateLimitRule

Requests carry raw values (enum literals as strings, unconstrained band
numbers) so that domain validation reports them as 400 Validation Failed
with the offending field.
"""

from typing import Any

from pydantic import BaseModel, Field

from src.application.dtos.rule_dtos import RateBandSpec, RuleSpec
from src.domain.entities.rate_limit_rule import RateLimitRule
from src.domain.value_objects.rate_limit_band import RateLimitBand


# =============================================================================
# Request Schemas
# =============================================================================


class RateBandRequest(BaseModel):
    """One rate band: at most ``capacity`` requests per ``window_seconds``."""

    window_seconds: int = Field(..., description="Window length in seconds (>= 1)", examples=[60])
    capacity: int = Field(..., description="Requests per window (>= 1)", examples=[100])
    label: str | None = Field(None, description="Optional display label", examples=["per-minute"])

    def to_spec(self) -> RateBandSpec:
        return RateBandSpec(
            window_seconds=self.window_seconds,
            capacity=self.capacity,
            label=self.label,
        )


class RuleFieldsRequest(BaseModel):
    """Fields shared by create and update (update is a full replace)."""

    name: str = Field(..., description="Display name", examples=["Login attempts per IP"])
    enabled: bool = Field(True, description="Whether enforcement applies the rule")
    scope: str = Field(
        ...,
        description="GLOBAL, PER_API_KEY, PER_USER, PER_IP or CUSTOM",
        examples=["PER_IP"],
    )
    key_strategy_id: str = Field(
        ..., description="Partition key strategy", examples=["client-ip"]
    )
    on_limit_exceed_policy: str = Field(
        "REJECT_REQUEST",
        description="REJECT_REQUEST or WAIT_FOR_REFILL",
    )
    bands: list[RateBandRequest] = Field(
        default_factory=list, description="Ordered rate bands (at least one)"
    )
    rule_set_id: str | None = Field(
        None, description="Grouping key for bulk operations", examples=["auth"]
    )
    tags: list[str] = Field(default_factory=list, description="Labels for filtering")
    attributes: dict[str, Any] = Field(
        default_factory=dict, description="Free-form metadata"
    )

    def to_spec(self, rule_id: str) -> RuleSpec:
        """Convert to the application-layer spec for the given rule id."""
        return RuleSpec(
            id=rule_id,
            name=self.name,
            enabled=self.enabled,
            scope=self.scope,
            key_strategy_id=self.key_strategy_id,
            on_limit_exceed_policy=self.on_limit_exceed_policy,
            bands=[band.to_spec() for band in self.bands],
            rule_set_id=self.rule_set_id,
            tags=list(self.tags),
            attributes=dict(self.attributes),
        )


class RuleCreateRequest(RuleFieldsRequest):
    """Request body for POST /rules."""

    id: str = Field(
        ...,
        description="Rule identifier ([a-zA-Z0-9-_]+)",
        examples=["login-per-ip"],
    )


class RuleUpdateRequest(RuleFieldsRequest):
    """Request body for PUT /rules/{id}. The id comes from the path."""


# =============================================================================
# Response Schemas
# =============================================================================


class RateBandResponse(BaseModel):
    window_seconds: int = Field(..., description="Window length in seconds")
    capacity: int = Field(..., description="Requests per window")
    label: str | None = Field(None, description="Display label")

    @classmethod
    def from_band(cls, band: RateLimitBand) -> "RateBandResponse":
        return cls(
            window_seconds=band.window_seconds,
            capacity=band.capacity,
            label=band.label,
        )


class RuleResponse(BaseModel):
    """Single rule response.

    Attributes:
        id: Rule identifier.
        name: Display name.
        enabled: Whether enforcement applies the rule.
        scope: LimitScope literal.
        key_strategy_id: Partition key strategy.
        on_limit_exceed_policy: OnLimitExceedPolicy literal.
        bands: Ordered rate bands.
        rule_set_id: Grouping key (null when ungrouped).
        tags: Labels.
        attributes: Free-form metadata.
    """

    id: str
    name: str
    enabled: bool
    scope: str
    key_strategy_id: str
    on_limit_exceed_policy: str
    bands: list[RateBandResponse]
    rule_set_id: str | None = None
    tags: list[str] = Field(default_factory=list)
    attributes: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_entity(cls, rule: RateLimitRule) -> "RuleResponse":
        """Convert domain entity to response schema.

        Args:
            rule: Rule entity.

        Returns:
            RuleResponse for API response.
        """
        return cls(
            id=rule.id,
            name=rule.name,
            enabled=rule.enabled,
            scope=rule.scope.value,
            key_strategy_id=rule.key_strategy_id,
            on_limit_exceed_policy=rule.on_limit_exceed_policy.value,
            bands=[RateBandResponse.from_band(band) for band in rule.bands],
            rule_set_id=rule.rule_set_id,
            tags=list(rule.tags),
            attributes=dict(rule.attributes),
        )


class RuleListResponse(BaseModel):
    """Rule list response."""

    rules: list[RuleResponse] = Field(..., description="Rules")
    total_count: int = Field(..., description="Number of rules returned")

    @classmethod
    def from_entities(cls, rules: list[RateLimitRule]) -> "RuleListResponse":
        return cls(
            rules=[RuleResponse.from_entity(rule) for rule in rules],
            total_count=len(rules),
        )


class RuleSetDeleteResponse(BaseModel):
    """Response for DELETE /rules?rule_set_id=..."""

    rule_set_id: str = Field(..., description="Deleted rule set")
    deleted_count: int = Field(..., description="Number of rules deleted (may be 0)")
    message: str = Field(..., description="Human-readable summary")
