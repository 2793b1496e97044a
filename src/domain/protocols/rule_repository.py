"""Rate limit rule repository protocol.

Defines the storage port the rule administration service writes through.
"""

from typing import Protocol

from src.domain.entities.rate_limit_rule import RateLimitRule


class RuleRepository(Protocol):
    """Protocol for rule persistence operations.

    Infrastructure provides concrete implementations (PostgreSQL, in-memory).

    **Design Principles**:
    - Methods return domain entities (RateLimitRule), never database models
    - ``save`` is an upsert keyed by rule id
    - Implementations raise on storage faults; the service wraps them into
      ``RuleStorageError`` and bounds every call with a timeout

    **Implementation Notes**:
    - A write is committed when the awaited call returns
    - Ordering of ``find_*`` results is insertion order where the backend
      can provide it
    """

    async def find_all(self) -> list[RateLimitRule]:
        """Return every stored rule.

        Returns:
            List of all rules (possibly empty).
        """
        ...

    async def find_by_id(self, rule_id: str) -> RateLimitRule | None:
        """Find rule by id.

        Args:
            rule_id: Rule identifier.

        Returns:
            RateLimitRule if found, None otherwise.

        Example:
            >>> rule = await repo.find_by_id("login-per-ip")
            >>> if rule:
            ...     print(rule.name)
        """
        ...

    async def find_by_rule_set_id(self, rule_set_id: str) -> list[RateLimitRule]:
        """Return rules whose ``rule_set_id`` equals the given id.

        Args:
            rule_set_id: Rule set grouping key.

        Returns:
            Members of the set (possibly empty).
        """
        ...

    async def exists_by_id(self, rule_id: str) -> bool:
        """Check whether a rule with the id is stored.

        Args:
            rule_id: Rule identifier.

        Returns:
            True if a rule exists.
        """
        ...

    async def save(self, rule: RateLimitRule) -> None:
        """Insert or replace the rule with the same id.

        Args:
            rule: Rule to store.
        """
        ...

    async def delete_by_id(self, rule_id: str) -> bool:
        """Delete rule by id.

        Args:
            rule_id: Rule identifier.

        Returns:
            True if a rule was deleted, False if none existed.
        """
        ...

    async def delete_by_rule_set_id(self, rule_set_id: str) -> int:
        """Delete every member of a rule set.

        Args:
            rule_set_id: Rule set grouping key.

        Returns:
            Number of rules deleted (0 when the set is empty or unknown).
        """
        ...
