"""In-memory rule repository.

Dict-backed implementation of the RuleRepository protocol for local
development (``RULE_STORAGE_BACKEND=memory``) and tests. Rules are immutable,
so stored instances are shared without copying.
"""

import asyncio

from src.domain.entities.rate_limit_rule import RateLimitRule


class InMemoryRuleRepository:
    """Process-local RuleRepository.

    Insertion order is preserved; replacing a rule keeps its position.
    A lock serializes writes so bulk deletes are atomic with respect to
    concurrent saves.
    """

    def __init__(self) -> None:
        self._rules: dict[str, RateLimitRule] = {}
        self._lock = asyncio.Lock()

    async def find_all(self) -> list[RateLimitRule]:
        return list(self._rules.values())

    async def find_by_id(self, rule_id: str) -> RateLimitRule | None:
        return self._rules.get(rule_id)

    async def find_by_rule_set_id(self, rule_set_id: str) -> list[RateLimitRule]:
        return [r for r in self._rules.values() if r.rule_set_id == rule_set_id]

    async def exists_by_id(self, rule_id: str) -> bool:
        return rule_id in self._rules

    async def save(self, rule: RateLimitRule) -> None:
        async with self._lock:
            self._rules[rule.id] = rule

    async def delete_by_id(self, rule_id: str) -> bool:
        async with self._lock:
            return self._rules.pop(rule_id, None) is not None

    async def delete_by_rule_set_id(self, rule_set_id: str) -> int:
        async with self._lock:
            doomed = [
                rule_id
                for rule_id, rule in self._rules.items()
                if rule.rule_set_id == rule_set_id
            ]
            for rule_id in doomed:
                del self._rules[rule_id]
            return len(doomed)
