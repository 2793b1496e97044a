"""Rate limit rule repository implementation.

SQL implementation of the RuleRepository protocol. Maps between the
RateLimitRule domain entity and RateLimitRuleModel.

Each method runs in its own session from ``Database.get_session()``, so a
write is committed when the awaited call returns.
"""

from typing import Any

from sqlalchemy import delete, select

from src.domain.entities.rate_limit_rule import RateLimitRule
from src.domain.enums.limit_scope import LimitScope
from src.domain.enums.on_limit_exceed_policy import OnLimitExceedPolicy
from src.domain.value_objects.rate_limit_band import RateLimitBand
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.models.rate_limit_rule import RateLimitRuleModel


class RateLimitRuleRepository:
    """SQL implementation of RuleRepository protocol.

    **Implementation Notes**:
    - Uses select()/delete() statements (SQLAlchemy 2.0 style)
    - ``save`` looks the row up by rule_id and updates it in place, or inserts
    - Results are ordered by creation time, then rule_id
    """

    def __init__(self, database: Database) -> None:
        """Initialize repository with database.

        Args:
            database: Database providing transactional sessions.
        """
        self._database = database

    async def find_all(self) -> list[RateLimitRule]:
        stmt = select(RateLimitRuleModel).order_by(
            RateLimitRuleModel.created_at, RateLimitRuleModel.rule_id
        )
        async with self._database.get_session() as session:
            result = await session.execute(stmt)
            models = result.scalars().all()

        return [self._to_entity(m) for m in models]

    async def find_by_id(self, rule_id: str) -> RateLimitRule | None:
        stmt = select(RateLimitRuleModel).where(RateLimitRuleModel.rule_id == rule_id)
        async with self._database.get_session() as session:
            result = await session.execute(stmt)
            model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._to_entity(model)

    async def find_by_rule_set_id(self, rule_set_id: str) -> list[RateLimitRule]:
        stmt = (
            select(RateLimitRuleModel)
            .where(RateLimitRuleModel.rule_set_id == rule_set_id)
            .order_by(RateLimitRuleModel.created_at, RateLimitRuleModel.rule_id)
        )
        async with self._database.get_session() as session:
            result = await session.execute(stmt)
            models = result.scalars().all()

        return [self._to_entity(m) for m in models]

    async def exists_by_id(self, rule_id: str) -> bool:
        stmt = select(RateLimitRuleModel.id).where(
            RateLimitRuleModel.rule_id == rule_id
        )
        async with self._database.get_session() as session:
            result = await session.execute(stmt)
            return result.scalar_one_or_none() is not None

    async def save(self, rule: RateLimitRule) -> None:
        """Insert or replace the rule with the same rule_id.

        Args:
            rule: Rule entity to store.
        """
        stmt = select(RateLimitRuleModel).where(RateLimitRuleModel.rule_id == rule.id)
        async with self._database.get_session() as session:
            result = await session.execute(stmt)
            existing = result.scalar_one_or_none()

            if existing is None:
                session.add(self._to_model(rule))
            else:
                existing.name = rule.name
                existing.enabled = rule.enabled
                existing.scope = rule.scope.value
                existing.key_strategy_id = rule.key_strategy_id
                existing.on_limit_exceed_policy = rule.on_limit_exceed_policy.value
                existing.rule_set_id = rule.rule_set_id
                existing.bands = _bands_to_json(rule)
                existing.tags = list(rule.tags)
                existing.attributes = dict(rule.attributes)

            await session.flush()

    async def delete_by_id(self, rule_id: str) -> bool:
        stmt = delete(RateLimitRuleModel).where(RateLimitRuleModel.rule_id == rule_id)
        async with self._database.get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount > 0

    async def delete_by_rule_set_id(self, rule_set_id: str) -> int:
        stmt = delete(RateLimitRuleModel).where(
            RateLimitRuleModel.rule_set_id == rule_set_id
        )
        async with self._database.get_session() as session:
            result = await session.execute(stmt)
            return result.rowcount

    def _to_entity(self, model: RateLimitRuleModel) -> RateLimitRule:
        """Map database model to domain entity.

        Args:
            model: Database model.

        Returns:
            Domain entity.
        """
        return RateLimitRule(
            id=model.rule_id,
            name=model.name,
            enabled=model.enabled,
            scope=LimitScope(model.scope),
            key_strategy_id=model.key_strategy_id,
            on_limit_exceed_policy=OnLimitExceedPolicy(model.on_limit_exceed_policy),
            bands=tuple(
                RateLimitBand.of_seconds(
                    band["window_seconds"], band["capacity"], label=band.get("label")
                )
                for band in model.bands
            ),
            rule_set_id=model.rule_set_id,
            tags=tuple(model.tags or ()),
            attributes=model.attributes or {},
        )

    def _to_model(self, entity: RateLimitRule) -> RateLimitRuleModel:
        """Map domain entity to database model.

        Args:
            entity: Domain entity.

        Returns:
            Database model.
        """
        return RateLimitRuleModel(
            rule_id=entity.id,
            name=entity.name,
            enabled=entity.enabled,
            scope=entity.scope.value,
            key_strategy_id=entity.key_strategy_id,
            on_limit_exceed_policy=entity.on_limit_exceed_policy.value,
            rule_set_id=entity.rule_set_id,
            bands=_bands_to_json(entity),
            tags=list(entity.tags),
            attributes=dict(entity.attributes),
        )


def _bands_to_json(rule: RateLimitRule) -> list[dict[str, Any]]:
    return [
        {
            "window_seconds": band.window_seconds,
            "capacity": band.capacity,
            "label": band.label,
        }
        for band in rule.bands
    ]
