"""Unit tests for RuleCache and RedisRuleChangeSubscriber.handle_payload.

Uses InMemoryRuleRepository as the node's rule source.
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.domain.value_objects.propagation_scope import FullReload, RuleSetScoped
from src.infrastructure.notifications import (
    RedisRuleChangeSubscriber,
    RuleCache,
    RuleChangeMessage,
)
from src.infrastructure.persistence.repositories import InMemoryRuleRepository
from tests.conftest import create_rule


@pytest.fixture
async def repository() -> InMemoryRuleRepository:
    repository = InMemoryRuleRepository()
    await repository.save(create_rule("a", rule_set_id="s1"))
    await repository.save(create_rule("b", rule_set_id="s1", enabled=False))
    await repository.save(create_rule("c", rule_set_id="s2"))
    await repository.save(create_rule("d"))
    return repository


@pytest.fixture
def cache(repository, mock_logger) -> RuleCache:
    return RuleCache(repository, mock_logger)


# =============================================================================
# RuleCache
# =============================================================================


@pytest.mark.unit
class TestRuleCache:
    async def test_starts_empty(self, cache):
        assert cache.generation.number == 0
        assert cache.get("a") is None

    async def test_full_reload_loads_everything(self, cache):
        generation = await cache.full_reload()

        assert generation.number == 1
        assert set(generation.rules) == {"a", "b", "c", "d"}
        assert [rule.id for rule in cache.enabled_rules()] == ["a", "c", "d"]

    async def test_generation_is_read_only(self, cache):
        generation = await cache.full_reload()

        with pytest.raises(TypeError):
            generation.rules["x"] = create_rule("x")  # type: ignore[index]

    async def test_reload_rule_set_replaces_only_members(self, cache, repository):
        await cache.full_reload()
        before = cache.generation
        await repository.delete_by_id("b")
        await repository.save(create_rule("a", rule_set_id="s1", name="Changed"))
        await repository.save(create_rule("c", rule_set_id="s2", name="Not reloaded"))

        after = await cache.apply(RuleSetScoped(rule_set_id="s1"))

        assert after.number == 2
        assert after.rules["a"].name == "Changed"
        assert "b" not in after.rules
        assert after.rules["c"].name == "API default"
        # the previous snapshot is untouched
        assert "b" in before.rules
        assert before.rules["a"].name == "API default"

    async def test_rule_moved_into_set_is_picked_up(self, cache, repository):
        await cache.full_reload()
        await repository.save(create_rule("d", rule_set_id="s2"))

        generation = await cache.apply(RuleSetScoped(rule_set_id="s2"))

        assert generation.rules["d"].rule_set_id == "s2"

    async def test_ungrouped_scope_triggers_full_reload(self, cache, repository):
        await cache.full_reload()
        await repository.save(create_rule("e"))

        generation = await cache.apply(RuleSetScoped(rule_set_id=None))

        assert "e" in generation.rules

    async def test_full_reload_scope_drops_deleted_rules(self, cache, repository):
        await cache.full_reload()
        await repository.delete_by_id("d")

        generation = await cache.apply(FullReload())

        assert "d" not in generation.rules

    async def test_failed_reload_keeps_current_generation(self, mock_logger):
        repository = AsyncMock()
        repository.find_all.return_value = [create_rule("a")]
        cache = RuleCache(repository, mock_logger)
        loaded = await cache.full_reload()
        repository.find_all.side_effect = ConnectionError("db down")

        with pytest.raises(ConnectionError):
            await cache.full_reload()

        assert cache.generation is loaded

    async def test_periodic_resync_survives_failures(self, mock_logger):
        calls = 0

        async def flaky_find_all():
            nonlocal calls
            calls += 1
            if calls == 1:
                raise ConnectionError("db down")
            return []

        repository = AsyncMock()
        repository.find_all.side_effect = flaky_find_all
        cache = RuleCache(repository, mock_logger)

        task = asyncio.create_task(cache.run_periodic_resync(0.01))
        for _ in range(100):
            if cache.generation.number:
                break
            await asyncio.sleep(0.01)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert cache.generation.number >= 1
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args.args[0] == "rule_cache_resync_failed"

    async def test_slow_full_reload_does_not_overwrite_newer_scoped_reload(
        self, cache, repository
    ):
        snapshot_taken = asyncio.Event()
        release = asyncio.Event()
        read_all = repository.find_all

        async def gated_find_all():
            rules = await read_all()
            snapshot_taken.set()
            await release.wait()
            return rules

        repository.find_all = gated_find_all

        # Full reload reads "a" as enabled, then stalls before installing
        full = asyncio.create_task(cache.full_reload())
        await snapshot_taken.wait()

        await repository.save(create_rule("a", rule_set_id="s1", enabled=False))
        scoped = asyncio.create_task(cache.apply(RuleSetScoped(rule_set_id="s1")))
        await asyncio.sleep(0)

        release.set()
        await full
        latest = await scoped

        assert cache.generation is latest
        assert cache.get("a").enabled is False
        assert latest.number == 2


# =============================================================================
# RedisRuleChangeSubscriber.handle_payload
# =============================================================================


@pytest.mark.unit
class TestRuleChangeSubscriberPayloads:
    @pytest.fixture
    def subscriber(self, cache, mock_logger) -> RedisRuleChangeSubscriber:
        return RedisRuleChangeSubscriber(MagicMock(), cache, "ratelimit", mock_logger)

    async def test_valid_message_reloads_cache(self, subscriber, cache):
        payload = RuleChangeMessage.from_scope(RuleSetScoped(rule_set_id="s1"))

        applied = await subscriber.handle_payload(payload.to_json().encode())

        assert applied is True
        assert set(cache.generation.rules) == {"a", "b"}

    async def test_full_reload_message(self, subscriber, cache):
        payload = RuleChangeMessage.from_scope(FullReload()).to_json()

        assert await subscriber.handle_payload(payload) is True
        assert len(cache.generation.rules) == 4

    async def test_garbage_payload_is_skipped(self, subscriber, cache, mock_logger):
        applied = await subscriber.handle_payload(b"not json")

        assert applied is False
        assert cache.generation.number == 0
        assert mock_logger.warning.call_args.args[0] == "rule_change_message_unparseable"

    async def test_invalid_message_is_skipped(self, subscriber, mock_logger):
        applied = await subscriber.handle_payload('{"type": "full_reload"}')

        assert applied is False
        assert mock_logger.warning.call_args.args[0] == "rule_change_message_invalid"

    async def test_reload_failure_is_logged(self, mock_logger):
        repository = AsyncMock()
        repository.find_all.side_effect = ConnectionError("db down")
        subscriber = RedisRuleChangeSubscriber(
            MagicMock(), RuleCache(repository, mock_logger), "ratelimit", mock_logger
        )

        applied = await subscriber.handle_payload(
            RuleChangeMessage.from_scope(FullReload()).to_json()
        )

        assert applied is False
        assert mock_logger.error.call_args.args[0] == "rule_change_apply_failed"
