"""Pytest configuration and shared fixtures.

Settings are read at import time, so the environment is pinned here before
any ``src`` module is imported: testing environment, in-memory storage and
log-only notifications. No test needs PostgreSQL or Redis.
"""

import inspect
import os

os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("RULE_STORAGE_BACKEND", "memory")
os.environ.setdefault("RULE_NOTIFIER_BACKEND", "log")

from collections.abc import Callable  # noqa: E402
from typing import Any  # noqa: E402
from unittest.mock import MagicMock  # noqa: E402

import pytest  # noqa: E402

from src.application.dtos.rule_dtos import RateBandSpec, RuleSpec  # noqa: E402
from src.domain.entities.rate_limit_rule import RateLimitRule  # noqa: E402
from src.domain.enums import LimitScope, OnLimitExceedPolicy  # noqa: E402
from src.domain.protocols.logger_protocol import LoggerProtocol  # noqa: E402
from src.domain.value_objects.rate_limit_band import RateLimitBand  # noqa: E402


# =============================================================================
# Test Helpers
# =============================================================================


def create_rule(
    rule_id: str = "api-default",
    *,
    name: str = "API default",
    enabled: bool = True,
    scope: LimitScope = LimitScope.PER_API_KEY,
    key_strategy_id: str = "api-key",
    policy: OnLimitExceedPolicy = OnLimitExceedPolicy.REJECT_REQUEST,
    bands: tuple[RateLimitBand, ...] | None = None,
    rule_set_id: str | None = None,
    tags: tuple[str, ...] = (),
    attributes: dict[str, Any] | None = None,
) -> RateLimitRule:
    """Create a RateLimitRule with default values."""
    return RateLimitRule(
        id=rule_id,
        name=name,
        enabled=enabled,
        scope=scope,
        key_strategy_id=key_strategy_id,
        on_limit_exceed_policy=policy,
        bands=bands or (RateLimitBand.of_seconds(60, 100),),
        rule_set_id=rule_set_id,
        tags=tags,
        attributes=attributes or {},
    )


def create_spec(rule_id: str = "api-default", **overrides: Any) -> RuleSpec:
    """Create a valid RuleSpec; keyword overrides replace single fields."""
    fields: dict[str, Any] = {
        "id": rule_id,
        "name": "API default",
        "scope": "PER_API_KEY",
        "key_strategy_id": "api-key",
        "on_limit_exceed_policy": "REJECT_REQUEST",
        "bands": [RateBandSpec(window_seconds=60, capacity=100)],
        "enabled": True,
        "rule_set_id": None,
        "tags": [],
        "attributes": {},
    }
    fields.update(overrides)
    return RuleSpec(**fields)


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_logger() -> MagicMock:
    """Mock LoggerProtocol (records calls, renders nothing)."""
    return MagicMock(spec=LoggerProtocol)


@pytest.fixture
def rule_factory() -> Callable[..., RateLimitRule]:
    return create_rule


@pytest.fixture
def spec_factory() -> Callable[..., RuleSpec]:
    return create_spec


# Pytest markers for different test types
def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests with mocked dependencies")
    config.addinivalue_line(
        "markers", "integration: Integration tests with real adapters"
    )
    config.addinivalue_line("markers", "api: API endpoint tests")


def pytest_collection_modifyitems(config, items):
    """Automatically add asyncio marker to async test functions."""
    for item in items:
        if inspect.iscoroutinefunction(item.function):
            item.add_marker(pytest.mark.asyncio)
