"""Unit tests for RuleService.

Tests cover:
- Queries (list, list by rule set, get by id)
- create/update/toggle/delete/delete_by_rule_set success paths and scopes
- Validation before any repository call
- NotFound / AlreadyExists outcomes
- Storage exceptions and timeouts mapped to retryable RuleStorageError
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.application.dtos.rule_dtos import RateBandSpec
from src.application.services.rule_service import RuleService
from src.core.enums import ErrorCode
from src.core.result import Failure, Success
from src.domain.errors import (
    RuleAlreadyExistsError,
    RuleNotFoundError,
    RuleStorageError,
    RuleValidationError,
)
from src.domain.protocols.rule_repository import RuleRepository
from src.domain.value_objects.propagation_scope import FullReload, RuleSetScoped
from tests.conftest import create_rule, create_spec


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def mock_repository() -> AsyncMock:
    repository = AsyncMock(spec=RuleRepository)
    repository.find_all.return_value = []
    repository.find_by_id.return_value = None
    repository.find_by_rule_set_id.return_value = []
    repository.exists_by_id.return_value = False
    repository.save.return_value = None
    repository.delete_by_id.return_value = True
    repository.delete_by_rule_set_id.return_value = 0
    return repository


@pytest.fixture
def service(mock_repository: AsyncMock, mock_logger: MagicMock) -> RuleService:
    return RuleService(
        repository=mock_repository,
        logger=mock_logger,
        storage_timeout_seconds=0.05,
    )


def storage_error(result) -> RuleStorageError:
    assert isinstance(result, Failure)
    assert isinstance(result.error, RuleStorageError)
    return result.error


# =============================================================================
# Queries
# =============================================================================


@pytest.mark.unit
class TestRuleServiceQueries:
    async def test_list_all_returns_repository_rules(self, service, mock_repository):
        rules = [create_rule("a"), create_rule("b")]
        mock_repository.find_all.return_value = rules

        result = await service.list_all()

        assert isinstance(result, Success)
        assert result.value == rules

    async def test_list_by_rule_set(self, service, mock_repository):
        rules = [create_rule("a", rule_set_id="checkout")]
        mock_repository.find_by_rule_set_id.return_value = rules

        result = await service.list_by_rule_set("checkout")

        assert isinstance(result, Success)
        assert result.value == rules
        mock_repository.find_by_rule_set_id.assert_awaited_once_with("checkout")

    async def test_get_by_id_found(self, service, mock_repository):
        rule = create_rule("r1")
        mock_repository.find_by_id.return_value = rule

        result = await service.get_by_id("r1")

        assert isinstance(result, Success)
        assert result.value is rule

    async def test_get_by_id_missing(self, service):
        result = await service.get_by_id("missing")

        assert isinstance(result, Failure)
        assert isinstance(result.error, RuleNotFoundError)
        assert result.error.rule_id == "missing"
        assert result.error.retryable is False

    async def test_list_all_storage_failure(self, service, mock_repository):
        mock_repository.find_all.side_effect = ConnectionError("db down")

        error = storage_error(await service.list_all())

        assert error.operation == "findAll"
        assert error.code == ErrorCode.STORAGE_OPERATION_FAILED
        assert error.retryable is True
        assert error.details == {"cause_type": "ConnectionError", "cause": "db down"}


# =============================================================================
# Create
# =============================================================================


@pytest.mark.unit
class TestRuleServiceCreate:
    async def test_create_saves_and_reports_rule_set_scope(
        self, service, mock_repository, mock_logger
    ):
        spec = create_spec("r1", rule_set_id="checkout")

        result = await service.create(spec)

        assert isinstance(result, Success)
        mutation = result.value
        assert mutation.value.id == "r1"
        assert mutation.value.rule_set_id == "checkout"
        assert mutation.scope == RuleSetScoped(rule_set_id="checkout")
        mock_repository.exists_by_id.assert_awaited_once_with("r1")
        mock_repository.save.assert_awaited_once_with(mutation.value)
        mock_logger.info.assert_called_once()
        assert mock_logger.info.call_args.args[0] == "rule_created"

    async def test_create_ungrouped_rule_scope(self, service):
        result = await service.create(create_spec("r1"))

        assert isinstance(result, Success)
        assert result.value.scope == RuleSetScoped(rule_set_id=None)

    async def test_create_invalid_spec_touches_no_storage(
        self, service, mock_repository
    ):
        spec = create_spec("r1", bands=[])

        result = await service.create(spec)

        assert isinstance(result, Failure)
        assert isinstance(result.error, RuleValidationError)
        assert result.error.field == "bands"
        mock_repository.exists_by_id.assert_not_awaited()
        mock_repository.save.assert_not_awaited()

    async def test_create_invalid_id(self, service, mock_repository):
        result = await service.create(create_spec("not valid!"))

        assert isinstance(result, Failure)
        assert result.error.field == "id"
        mock_repository.exists_by_id.assert_not_awaited()

    async def test_create_invalid_band_capacity(self, service):
        spec = create_spec(
            "r1",
            bands=[
                RateBandSpec(window_seconds=1, capacity=10),
                RateBandSpec(window_seconds=60, capacity=0),
            ],
        )

        result = await service.create(spec)

        assert isinstance(result, Failure)
        assert result.error.field == "bands[1]"

    async def test_create_existing_id(self, service, mock_repository):
        mock_repository.exists_by_id.return_value = True

        result = await service.create(create_spec("r1"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, RuleAlreadyExistsError)
        assert result.error.rule_id == "r1"
        mock_repository.save.assert_not_awaited()

    async def test_create_save_failure(self, service, mock_repository, mock_logger):
        mock_repository.save.side_effect = RuntimeError("disk full")

        error = storage_error(await service.create(create_spec("r1")))

        assert error.operation == "create"
        assert error.details["cause"] == "disk full"
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args[0] == "rule_storage_failed"

    async def test_create_timeout(self, service, mock_repository):
        async def slow_exists(rule_id: str) -> bool:
            await asyncio.sleep(1)
            return False

        mock_repository.exists_by_id.side_effect = slow_exists

        error = storage_error(await service.create(create_spec("r1")))

        assert error.operation == "create"
        assert error.code == ErrorCode.STORAGE_TIMEOUT
        assert error.retryable is True
        mock_repository.save.assert_not_awaited()


# =============================================================================
# Update
# =============================================================================


@pytest.mark.unit
class TestRuleServiceUpdate:
    async def test_update_replaces_rule(self, service, mock_repository):
        mock_repository.exists_by_id.return_value = True
        spec = create_spec("r1", name="Renamed", rule_set_id="search", enabled=False)

        result = await service.update("r1", spec)

        assert isinstance(result, Success)
        rule = result.value.value
        assert rule.name == "Renamed"
        assert rule.enabled is False
        assert result.value.scope == RuleSetScoped(rule_set_id="search")
        mock_repository.save.assert_awaited_once_with(rule)

    async def test_update_missing_rule(self, service, mock_repository):
        result = await service.update("r1", create_spec("r1"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, RuleNotFoundError)
        mock_repository.save.assert_not_awaited()

    async def test_update_id_mismatch(self, service, mock_repository):
        result = await service.update("r1", create_spec("r2"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, RuleValidationError)
        assert result.error.field == "id"
        mock_repository.exists_by_id.assert_not_awaited()

    async def test_update_invalid_scope(self, service, mock_repository):
        result = await service.update("r1", create_spec("r1", scope="PER_PLANET"))

        assert isinstance(result, Failure)
        assert result.error.field == "scope"
        mock_repository.exists_by_id.assert_not_awaited()

    async def test_update_storage_failure(self, service, mock_repository):
        mock_repository.exists_by_id.side_effect = OSError("connection reset")

        error = storage_error(await service.update("r1", create_spec("r1")))

        assert error.operation == "update"


# =============================================================================
# Toggle
# =============================================================================


@pytest.mark.unit
class TestRuleServiceToggle:
    async def test_toggle_flips_enabled_only(self, service, mock_repository):
        current = create_rule(
            "r1", rule_set_id="checkout", tags=("a",), attributes={"owner": "x"}
        )
        mock_repository.find_by_id.return_value = current

        result = await service.toggle_enabled("r1")

        assert isinstance(result, Success)
        toggled = result.value.value
        assert toggled.enabled is False
        assert toggled.name == current.name
        assert toggled.bands == current.bands
        assert toggled.tags == current.tags
        assert toggled.attributes == current.attributes
        assert result.value.scope == RuleSetScoped(rule_set_id="checkout")
        assert current.enabled is True
        mock_repository.save.assert_awaited_once_with(toggled)

    async def test_toggle_missing_rule(self, service, mock_repository):
        result = await service.toggle_enabled("missing")

        assert isinstance(result, Failure)
        assert isinstance(result.error, RuleNotFoundError)
        mock_repository.save.assert_not_awaited()

    async def test_toggle_read_failure(self, service, mock_repository):
        mock_repository.find_by_id.side_effect = ConnectionError("db down")

        error = storage_error(await service.toggle_enabled("r1"))

        assert error.operation == "toggle"


# =============================================================================
# Delete
# =============================================================================


@pytest.mark.unit
class TestRuleServiceDelete:
    async def test_delete_reports_full_reload(self, service, mock_repository):
        result = await service.delete("r1")

        assert isinstance(result, Success)
        assert result.value.value is None
        assert result.value.scope == FullReload()
        mock_repository.delete_by_id.assert_awaited_once_with("r1")

    async def test_delete_missing_rule(self, service, mock_repository):
        mock_repository.delete_by_id.return_value = False

        result = await service.delete("r1")

        assert isinstance(result, Failure)
        assert isinstance(result.error, RuleNotFoundError)

    async def test_delete_by_rule_set_returns_count(self, service, mock_repository):
        mock_repository.delete_by_rule_set_id.return_value = 3

        result = await service.delete_by_rule_set("checkout")

        assert isinstance(result, Success)
        assert result.value.value == 3
        assert result.value.scope == RuleSetScoped(rule_set_id="checkout")

    async def test_delete_empty_rule_set_is_not_an_error(self, service):
        result = await service.delete_by_rule_set("nothing-here")

        assert isinstance(result, Success)
        assert result.value.value == 0

    async def test_delete_by_rule_set_failure(self, service, mock_repository):
        mock_repository.delete_by_rule_set_id.side_effect = RuntimeError("boom")

        error = storage_error(await service.delete_by_rule_set("checkout"))

        assert error.operation == "deleteByRuleSetId"
