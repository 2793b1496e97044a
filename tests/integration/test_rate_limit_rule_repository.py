"""Integration tests for RateLimitRuleRepository.

Runs the SQL repository against a file-backed SQLite database (aiosqlite),
created fresh for every test with ``Database.create_all()``.
"""

import pytest

from src.domain.enums import LimitScope, OnLimitExceedPolicy
from src.domain.value_objects.rate_limit_band import RateLimitBand
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.repositories import RateLimitRuleRepository
from tests.conftest import create_rule


@pytest.fixture
async def database(tmp_path):
    database = Database(f"sqlite+aiosqlite:///{tmp_path}/rules.db")
    await database.create_all()
    yield database
    await database.close()


@pytest.fixture
def repository(database) -> RateLimitRuleRepository:
    return RateLimitRuleRepository(database)


@pytest.mark.integration
class TestRateLimitRuleRepository:
    async def test_save_and_find_by_id_round_trip(self, repository):
        rule = create_rule(
            "login-per-ip",
            scope=LimitScope.PER_IP,
            policy=OnLimitExceedPolicy.WAIT_FOR_REFILL,
            bands=(
                RateLimitBand.of_seconds(1, 10, label="burst"),
                RateLimitBand.of_seconds(3600, 1000),
            ),
            rule_set_id="auth",
            tags=("public", "login"),
            attributes={"owner": "auth-team", "limits": {"soft": True}},
        )

        await repository.save(rule)
        found = await repository.find_by_id("login-per-ip")

        assert found == rule

    async def test_find_by_id_missing(self, repository):
        assert await repository.find_by_id("missing") is None

    async def test_save_replaces_existing_rule(self, repository):
        await repository.save(create_rule("r1", name="Before", rule_set_id="s1"))

        await repository.save(create_rule("r1", name="After", enabled=False))

        rules = await repository.find_all()
        assert len(rules) == 1
        assert rules[0].name == "After"
        assert rules[0].enabled is False
        assert rules[0].rule_set_id is None

    async def test_exists_by_id(self, repository):
        await repository.save(create_rule("r1"))

        assert await repository.exists_by_id("r1") is True
        assert await repository.exists_by_id("r2") is False

    async def test_find_by_rule_set_id(self, repository):
        await repository.save(create_rule("a", rule_set_id="s1"))
        await repository.save(create_rule("b", rule_set_id="s1"))
        await repository.save(create_rule("c", rule_set_id="s2"))
        await repository.save(create_rule("d"))

        members = await repository.find_by_rule_set_id("s1")

        assert {rule.id for rule in members} == {"a", "b"}
        assert await repository.find_by_rule_set_id("unknown") == []

    async def test_delete_by_id(self, repository):
        await repository.save(create_rule("r1"))

        assert await repository.delete_by_id("r1") is True
        assert await repository.delete_by_id("r1") is False
        assert await repository.find_by_id("r1") is None

    async def test_delete_by_rule_set_id_returns_count(self, repository):
        await repository.save(create_rule("a", rule_set_id="s1"))
        await repository.save(create_rule("b", rule_set_id="s1"))
        await repository.save(create_rule("c", rule_set_id="s2"))

        assert await repository.delete_by_rule_set_id("s1") == 2
        assert await repository.delete_by_rule_set_id("s1") == 0
        assert [rule.id for rule in await repository.find_all()] == ["c"]
