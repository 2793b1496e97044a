"""Enforcement-side rule cache.

Holds the rules an enforcement node applies and reacts to change
notifications. The cache never mutates a published snapshot: each reload
builds a complete ``RuleCacheGeneration`` and swaps the reference, so a
reader sees either the old generation or the new one, never a mix.

Reloads are serialized: each one reads the repository and installs its
generation while holding the reload lock. A reload therefore always reads
after the previous install, and a full reload that started before a write
cannot replace the generation of a scoped reload that saw the write.

Reload semantics:
    FullReload                  - replace everything with ``find_all()``
    RuleSetScoped(id)           - replace members of ``id`` with
                                  ``find_by_rule_set_id(id)``; rules of other
                                  sets are kept
    RuleSetScoped(None)         - ungrouped rules cannot be fetched as a set,
                                  so a full reload is performed

Usage:
    cache = RuleCache(repository, logger)
    await cache.full_reload()
    rule = cache.get("login-per-ip")

    # Background convergence for lost notifications
    task = asyncio.create_task(cache.run_periodic_resync(300.0))
"""

import asyncio
import itertools
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from src.domain.entities.rate_limit_rule import RateLimitRule
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.rule_repository import RuleRepository
from src.domain.value_objects.propagation_scope import (
    FullReload,
    PropagationScope,
    RuleSetScoped,
)


@dataclass(frozen=True, slots=True)
class RuleCacheGeneration:
    """Immutable snapshot of cached rules.

    Attributes:
        number: Monotonic generation counter (0 = never loaded).
        rules: Read-only mapping rule id -> rule.
    """

    number: int
    rules: Mapping[str, RateLimitRule] = field(
        default_factory=lambda: MappingProxyType({})
    )


class RuleCache:
    """Copy-on-write cache of rules for one enforcement node."""

    def __init__(self, repository: RuleRepository, logger: LoggerProtocol) -> None:
        self._repository = repository
        self._logger = logger
        self._counter = itertools.count(1)
        self._generation = RuleCacheGeneration(number=0)
        self._reload_lock = asyncio.Lock()

    @property
    def generation(self) -> RuleCacheGeneration:
        """Current snapshot. Hold on to it for a consistent multi-rule read."""
        return self._generation

    def get(self, rule_id: str) -> RateLimitRule | None:
        return self._generation.rules.get(rule_id)

    def enabled_rules(self) -> list[RateLimitRule]:
        """Rules enforcement should apply (enabled only)."""
        return [rule for rule in self._generation.rules.values() if rule.enabled]

    async def apply(self, scope: PropagationScope) -> RuleCacheGeneration:
        """React to a change notification.

        Args:
            scope: Propagation scope from the control plane.

        Returns:
            RuleCacheGeneration: Generation installed by the reload.
        """
        match scope:
            case RuleSetScoped(rule_set_id=rule_set_id) if rule_set_id:
                return await self.reload_rule_set(rule_set_id)
            case RuleSetScoped() | FullReload():
                return await self.full_reload()

    async def full_reload(self) -> RuleCacheGeneration:
        """Replace the cache with every stored rule.

        Waits for any reload in progress, so the snapshot it installs is
        never older than the generation it replaces.

        Raises:
            Exception: Whatever the repository raises; the current
                generation stays installed.
        """
        async with self._reload_lock:
            rules = await self._repository.find_all()
            return self._install(
                {rule.id: rule for rule in rules}, reason="full_reload"
            )

    async def reload_rule_set(self, rule_set_id: str) -> RuleCacheGeneration:
        """Replace members of one rule set, keeping every other rule.

        Args:
            rule_set_id: Rule set to refetch.
        """
        async with self._reload_lock:
            members = await self._repository.find_by_rule_set_id(rule_set_id)
            rules = {
                rule_id: rule
                for rule_id, rule in self._generation.rules.items()
                if rule.rule_set_id != rule_set_id
            }
            rules.update((rule.id, rule) for rule in members)
            return self._install(rules, reason="rule_set", rule_set_id=rule_set_id)

    async def run_periodic_resync(self, interval_seconds: float) -> None:
        """Full reload every ``interval_seconds`` until cancelled.

        Reload failures are logged and retried at the next tick.
        """
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                await self.full_reload()
            except Exception as e:
                self._logger.error("rule_cache_resync_failed", error=e)

    def _install(
        self,
        rules: dict[str, RateLimitRule],
        *,
        reason: str,
        rule_set_id: str | None = None,
    ) -> RuleCacheGeneration:
        generation = RuleCacheGeneration(
            number=next(self._counter), rules=MappingProxyType(rules)
        )
        self._generation = generation
        self._logger.info(
            "rule_cache_reloaded",
            reason=reason,
            rule_set_id=rule_set_id,
            generation=generation.number,
            rule_count=len(rules),
        )
        return generation
