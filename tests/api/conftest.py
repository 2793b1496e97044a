"""API test fixtures.

The rule publisher and dashboard service are overridden with instances built
on a fresh InMemoryRuleRepository per test, so requests exercise the real
services and error mapping without shared state.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from src.application.services import (
    DashboardService,
    RuleChangePublisher,
    RuleService,
)
from src.core.container import get_dashboard_service, get_rule_change_publisher
from src.domain.protocols.rule_repository import RuleRepository
from src.domain.value_objects.propagation_scope import PropagationScope
from src.infrastructure.persistence.repositories import InMemoryRuleRepository
from src.main import app


class RecordingNotifier:
    def __init__(self) -> None:
        self.scopes: list[PropagationScope] = []

    async def notify(self, scope: PropagationScope) -> None:
        self.scopes.append(scope)


@pytest.fixture
def repository() -> InMemoryRuleRepository:
    return InMemoryRuleRepository()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


def _override_services(repository, notifier, logger) -> None:
    service = RuleService(repository=repository, logger=logger)
    publisher = RuleChangePublisher(service=service, notifier=notifier, logger=logger)
    app.dependency_overrides[get_rule_change_publisher] = lambda: publisher
    app.dependency_overrides[get_dashboard_service] = lambda: DashboardService(service)


@pytest.fixture
def client(repository, notifier, mock_logger):
    _override_services(repository, notifier, mock_logger)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client(notifier, mock_logger):
    """Client whose repository raises on every call."""
    repository = AsyncMock(spec=RuleRepository)
    for method in (
        "find_all",
        "find_by_id",
        "find_by_rule_set_id",
        "exists_by_id",
        "save",
        "delete_by_id",
        "delete_by_rule_set_id",
    ):
        getattr(repository, method).side_effect = ConnectionError("database down")
    _override_services(repository, notifier, mock_logger)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def rule_payload() -> dict:
    return {
        "id": "login-per-ip",
        "name": "Login attempts per IP",
        "scope": "PER_IP",
        "key_strategy_id": "client-ip",
        "on_limit_exceed_policy": "REJECT_REQUEST",
        "bands": [
            {"window_seconds": 1, "capacity": 5, "label": "burst"},
            {"window_seconds": 3600, "capacity": 100},
        ],
        "rule_set_id": "auth",
        "tags": ["public"],
        "attributes": {"owner": "auth-team"},
    }
