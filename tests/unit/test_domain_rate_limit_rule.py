"""Unit tests for RateLimitRule entity and RateLimitRuleBuilder.

Tests cover:
- Entity invariants on direct construction
- Immutability of the rule and its collections
- Builder validation order and error fields
- Enum parsing from literals
- Legacy attributes["tags"] lifting
- from_rule() round trip
"""

from dataclasses import FrozenInstanceError

import pytest

from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.entities.rate_limit_rule import (
    RateLimitRule,
    RateLimitRuleBuilder,
    is_valid_rule_id,
)
from src.domain.enums import LimitScope, OnLimitExceedPolicy
from src.domain.errors import RuleValidationError
from src.domain.value_objects.rate_limit_band import RateLimitBand
from tests.conftest import create_rule


def valid_builder(rule_id: str = "login-per-ip") -> RateLimitRuleBuilder:
    return (
        RateLimitRuleBuilder(rule_id)
        .name("Login attempts per IP")
        .scope(LimitScope.PER_IP)
        .key_strategy_id("client-ip")
        .band(window_seconds=60, capacity=5)
    )


def build_error(builder: RateLimitRuleBuilder) -> RuleValidationError:
    result = builder.build()
    assert isinstance(result, Failure)
    assert isinstance(result.error, RuleValidationError)
    return result.error


# ============================================================================
# Entity
# ============================================================================


@pytest.mark.unit
class TestRateLimitRuleEntity:
    def test_direct_construction_with_valid_fields(self):
        rule = create_rule("r1", rule_set_id="checkout", tags=("public",))

        assert rule.id == "r1"
        assert rule.enabled is True
        assert rule.rule_set_id == "checkout"
        assert rule.tags == ("public",)
        assert len(rule.bands) == 1

    def test_empty_bands_rejected(self):
        with pytest.raises(ValueError, match="at least one band"):
            RateLimitRule(
                id="r1",
                name="r1",
                scope=LimitScope.GLOBAL,
                key_strategy_id="global",
                on_limit_exceed_policy=OnLimitExceedPolicy.REJECT_REQUEST,
                bands=(),
            )

    @pytest.mark.parametrize("rule_id", ["", "has space", "slash/id", "dot.id"])
    def test_invalid_id_rejected(self, rule_id: str):
        with pytest.raises(ValueError, match="Invalid rule id"):
            create_rule(rule_id)

    def test_rule_is_frozen(self):
        rule = create_rule()

        with pytest.raises(FrozenInstanceError):
            rule.enabled = False  # type: ignore[misc]

    def test_collections_are_copied_and_read_only(self):
        attributes = {"owner": "payments"}
        bands = [RateLimitBand.of_seconds(1, 10)]
        rule = RateLimitRule(
            id="r1",
            name="r1",
            scope=LimitScope.GLOBAL,
            key_strategy_id="global",
            on_limit_exceed_policy=OnLimitExceedPolicy.REJECT_REQUEST,
            bands=bands,  # type: ignore[arg-type]
            attributes=attributes,
        )

        attributes["owner"] = "someone-else"
        bands.append(RateLimitBand.of_seconds(60, 100))

        assert rule.attributes["owner"] == "payments"
        assert isinstance(rule.bands, tuple)
        assert len(rule.bands) == 1
        with pytest.raises(TypeError):
            rule.attributes["owner"] = "x"  # type: ignore[index]

    def test_rules_with_same_fields_are_equal(self):
        assert create_rule("r1", attributes={"a": 1}) == create_rule(
            "r1", attributes={"a": 1}
        )

    def test_is_valid_rule_id(self):
        assert is_valid_rule_id("abc-DEF_123")
        assert not is_valid_rule_id("")
        assert not is_valid_rule_id("x" * 129)


# ============================================================================
# Builder - Success Cases
# ============================================================================


@pytest.mark.unit
class TestRateLimitRuleBuilderSuccess:
    def test_build_with_required_fields(self):
        result = valid_builder().build()

        assert isinstance(result, Success)
        rule = result.value
        assert rule.id == "login-per-ip"
        assert rule.scope is LimitScope.PER_IP
        assert rule.on_limit_exceed_policy is OnLimitExceedPolicy.REJECT_REQUEST
        assert rule.enabled is True
        assert rule.rule_set_id is None
        assert rule.bands == (RateLimitBand.of_seconds(60, 5),)

    def test_enum_literals_are_parsed(self):
        result = (
            valid_builder()
            .scope("CUSTOM")
            .on_limit_exceed_policy("WAIT_FOR_REFILL")
            .build()
        )

        assert isinstance(result, Success)
        assert result.value.scope is LimitScope.CUSTOM
        assert result.value.on_limit_exceed_policy is OnLimitExceedPolicy.WAIT_FOR_REFILL

    def test_bands_keep_order(self):
        result = (
            valid_builder()
            .add_band(RateLimitBand.of_seconds(3600, 1000, label="hourly"))
            .band(window_seconds=1, capacity=10, label="burst")
            .build()
        )

        assert isinstance(result, Success)
        assert [b.window_seconds for b in result.value.bands] == [60, 3600, 1]

    def test_empty_rule_set_id_means_ungrouped(self):
        result = valid_builder().rule_set_id("").build()

        assert isinstance(result, Success)
        assert result.value.rule_set_id is None

    def test_legacy_tags_attribute_is_lifted(self):
        result = (
            valid_builder()
            .attributes({"tags": ["public", "beta"], "owner": "auth-team"})
            .build()
        )

        assert isinstance(result, Success)
        assert result.value.tags == ("public", "beta")
        assert "tags" not in result.value.attributes
        assert result.value.attributes["owner"] == "auth-team"

    def test_explicit_tags_win_over_legacy_attribute(self):
        result = (
            valid_builder()
            .tags(["explicit"])
            .attributes({"tags": ["legacy"]})
            .build()
        )

        assert isinstance(result, Success)
        assert result.value.tags == ("explicit",)
        assert "tags" not in result.value.attributes

    def test_from_rule_rebuilds_equal_rule(self):
        original = create_rule(
            "r1",
            enabled=False,
            rule_set_id="checkout",
            tags=("a", "b"),
            attributes={"owner": "payments"},
            bands=(
                RateLimitBand.of_seconds(1, 10, label="burst"),
                RateLimitBand.of_seconds(3600, 1000),
            ),
        )

        result = RateLimitRuleBuilder.from_rule(original).build()

        assert isinstance(result, Success)
        assert result.value == original
        assert result.value is not original

    def test_from_rule_changes_only_the_touched_field(self):
        original = create_rule("r1", rule_set_id="checkout", tags=("a",))

        result = RateLimitRuleBuilder.from_rule(original).enabled(False).build()

        assert isinstance(result, Success)
        toggled = result.value
        assert toggled.enabled is False
        assert original.enabled is True
        assert toggled.rule_set_id == original.rule_set_id
        assert toggled.tags == original.tags
        assert toggled.bands == original.bands


# ============================================================================
# Builder - Validation Failures
# ============================================================================


@pytest.mark.unit
class TestRateLimitRuleBuilderValidation:
    def test_invalid_id(self):
        error = build_error(valid_builder("bad id!"))

        assert error.field == "id"
        assert error.code == ErrorCode.INVALID_RULE_ID
        assert error.retryable is False

    def test_blank_name(self):
        error = build_error(valid_builder().name("   "))

        assert error.field == "name"

    def test_blank_key_strategy(self):
        error = build_error(valid_builder().key_strategy_id(""))

        assert error.field == "key_strategy_id"

    def test_missing_scope(self):
        builder = (
            RateLimitRuleBuilder("r1")
            .name("r1")
            .key_strategy_id("k")
            .band(window_seconds=1, capacity=1)
        )

        error = build_error(builder)

        assert error.field == "scope"

    def test_unknown_scope_literal(self):
        error = build_error(valid_builder().scope("PER_PLANET"))

        assert error.field == "scope"
        assert "PER_IP" in error.reason

    def test_unknown_policy_literal(self):
        error = build_error(valid_builder().on_limit_exceed_policy("DROP"))

        assert error.field == "on_limit_exceed_policy"

    def test_empty_bands(self):
        builder = (
            RateLimitRuleBuilder("r1").name("r1").scope("GLOBAL").key_strategy_id("k")
        )

        error = build_error(builder)

        assert error.field == "bands"
        assert error.code == ErrorCode.INVALID_RATE_BAND

    def test_invalid_band_reports_index(self):
        error = build_error(valid_builder().band(window_seconds=60, capacity=0))

        assert error.field == "bands[1]"
        assert "capacity" in error.reason

    def test_zero_window_band(self):
        error = build_error(valid_builder().band(window_seconds=0, capacity=10))

        assert error.field == "bands[1]"
        assert "window" in error.reason

    def test_window_beyond_timedelta_range_is_a_validation_failure(self):
        builder = (
            RateLimitRuleBuilder("r1")
            .name("r1")
            .scope("GLOBAL")
            .key_strategy_id("k")
            .band(window_seconds=10**14, capacity=1)
        )

        error = build_error(builder)

        assert error.field == "bands[0]"
        assert error.code == ErrorCode.INVALID_RATE_BAND
        assert "window" in error.reason

    def test_first_failing_field_is_reported(self):
        builder = RateLimitRuleBuilder("r1").name("").scope("NOPE")

        error = build_error(builder)

        assert error.field == "name"

    def test_legacy_tags_must_be_strings(self):
        error = build_error(valid_builder().attributes({"tags": "not-a-list"}))

        assert error.field == "attributes.tags"
