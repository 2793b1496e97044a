"""Propagation scope of a rule change.

Every successful mutation produces exactly one scope, which tells live
enforcement nodes how much of their rule cache to rebuild:

- ``RuleSetScoped(rule_set_id)``: rebuild only the members of one rule set.
  ``rule_set_id=None`` addresses the ungrouped rules.
- ``FullReload()``: discard the cache and resynchronize everything.

Scoped notifications are a latency optimization. Nodes still converge
through periodic full resyncs when a scoped notification is lost.

Usage:
    from src.domain.value_objects import FullReload, RuleSetScoped

    match scope:
        case RuleSetScoped(rule_set_id=rule_set_id):
            await cache.reload_rule_set(rule_set_id)
        case FullReload():
            await cache.full_reload()
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, kw_only=True)
class RuleSetScoped:
    """Change confined to a single rule set.

    Attributes:
        rule_set_id: Affected rule set, or None for ungrouped rules.
    """

    rule_set_id: str | None = None


@dataclass(frozen=True, slots=True)
class FullReload:
    """Change that requires every node to rebuild its whole rule cache."""


type PropagationScope = RuleSetScoped | FullReload
