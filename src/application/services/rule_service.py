"""Rule mutation service.

Invariant-preserving CRUD over immutable rate limit rules.

Every operation returns a Result. Mutations return
``RuleMutation(value, scope)`` so the caller knows which propagation scope to
broadcast once the write is committed; this service never notifies on its
own (see RuleChangePublisher).

Guarantees:
    - Specs are validated before any repository call.
    - Every repository call is bounded by ``storage_timeout_seconds``;
      timeouts and repository exceptions become a retryable
      ``RuleStorageError`` naming the operation. Nothing is retried here.
    - Rules are never mutated: updates and toggles build a new instance.
    - ``delete`` reports ``FullReload`` because the deleted rule's set is not
      known without an extra read; every other mutation reports
      ``RuleSetScoped`` for the affected set (None for ungrouped rules).

Concurrency:
    ``create`` checks existence and then saves. Two concurrent creates with
    the same id can both pass the check. The SQL unique constraint on rule_id
    turns the losing insert into a RuleStorageError; the in-memory backend
    keeps the last write. Concurrent toggles are last-writer-wins.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import cast

from src.application.dtos.rule_dtos import RuleMutation, RuleSpec
from src.core.result import Failure, Result, Success
from src.domain.entities.rate_limit_rule import RateLimitRule, RateLimitRuleBuilder
from src.domain.errors.rule_error import (
    RuleAlreadyExistsError,
    RuleError,
    RuleNotFoundError,
    RuleStorageError,
    RuleValidationError,
)
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.rule_repository import RuleRepository
from src.domain.value_objects.propagation_scope import FullReload, RuleSetScoped


class RuleService:
    """Rule administration use cases.

    Stateless apart from injected collaborators; safe to share between
    concurrent requests.

    Dependencies (injected via constructor):
        - RuleRepository: Rule storage
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        repository: RuleRepository,
        logger: LoggerProtocol,
        storage_timeout_seconds: float = 5.0,
    ) -> None:
        """Initialize service with dependencies.

        Args:
            repository: Rule repository.
            logger: Logger for mutation and storage events.
            storage_timeout_seconds: Upper bound for each repository call.
        """
        self._repository = repository
        self._logger = logger
        self._timeout = storage_timeout_seconds

    # =========================================================================
    # Queries
    # =========================================================================

    async def list_all(self) -> Result[list[RateLimitRule], RuleError]:
        """Return every rule."""
        return await self._storage("findAll", self._repository.find_all)

    async def list_by_rule_set(
        self, rule_set_id: str
    ) -> Result[list[RateLimitRule], RuleError]:
        """Return members of a rule set (empty list if none)."""
        return await self._storage(
            "findByRuleSetId",
            lambda: self._repository.find_by_rule_set_id(rule_set_id),
        )

    async def get_by_id(self, rule_id: str) -> Result[RateLimitRule, RuleError]:
        """Return one rule.

        Args:
            rule_id: Rule identifier.

        Returns:
            Success(RateLimitRule): Rule found.
            Failure(RuleNotFoundError): No rule with the id.
            Failure(RuleStorageError): Repository fault or timeout.
        """
        found = await self._storage(
            "findById", lambda: self._repository.find_by_id(rule_id)
        )
        if isinstance(found, Failure):
            return found
        if found.value is None:
            return Failure(error=RuleNotFoundError.for_rule(rule_id))
        return Success(value=found.value)

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create(
        self, spec: RuleSpec
    ) -> Result[RuleMutation[RateLimitRule], RuleError]:
        """Create a new rule.

        Args:
            spec: Complete rule description.

        Returns:
            Success(RuleMutation): Created rule, scope RuleSetScoped(spec.rule_set_id).
            Failure(RuleValidationError): Spec rejected (storage untouched).
            Failure(RuleAlreadyExistsError): Id already taken.
            Failure(RuleStorageError): Repository fault or timeout.
        """
        built = _build_rule(spec.id, spec)
        if isinstance(built, Failure):
            return built
        rule = built.value

        exists = await self._storage(
            "create", lambda: self._repository.exists_by_id(rule.id)
        )
        if isinstance(exists, Failure):
            return exists
        if exists.value:
            return Failure(error=RuleAlreadyExistsError.for_rule(rule.id))

        saved = await self._storage("create", lambda: self._repository.save(rule))
        if isinstance(saved, Failure):
            return saved

        self._logger.info(
            "rule_created", rule_id=rule.id, rule_set_id=rule.rule_set_id
        )
        return Success(
            value=RuleMutation(
                value=rule, scope=RuleSetScoped(rule_set_id=rule.rule_set_id)
            )
        )

    async def update(
        self, rule_id: str, spec: RuleSpec
    ) -> Result[RuleMutation[RateLimitRule], RuleError]:
        """Replace every field of an existing rule.

        The rule keeps its id; ``spec.id`` must equal ``rule_id``. Fields
        omitted from the spec take the spec defaults, nothing is merged.

        Args:
            rule_id: Identifier of the rule to replace.
            spec: Complete new description.

        Returns:
            Success(RuleMutation): New rule, scope RuleSetScoped(spec.rule_set_id).
            Failure(RuleValidationError): Spec rejected (storage untouched).
            Failure(RuleNotFoundError): No rule with the id.
            Failure(RuleStorageError): Repository fault or timeout.
        """
        if spec.id != rule_id:
            return Failure(
                error=RuleValidationError.invalid(
                    "id", f"does not match rule being updated ({rule_id})"
                )
            )
        built = _build_rule(rule_id, spec)
        if isinstance(built, Failure):
            return built
        rule = built.value

        exists = await self._storage(
            "update", lambda: self._repository.exists_by_id(rule_id)
        )
        if isinstance(exists, Failure):
            return exists
        if not exists.value:
            return Failure(error=RuleNotFoundError.for_rule(rule_id))

        saved = await self._storage("update", lambda: self._repository.save(rule))
        if isinstance(saved, Failure):
            return saved

        self._logger.info(
            "rule_updated", rule_id=rule.id, rule_set_id=rule.rule_set_id
        )
        return Success(
            value=RuleMutation(
                value=rule, scope=RuleSetScoped(rule_set_id=rule.rule_set_id)
            )
        )

    async def toggle_enabled(
        self, rule_id: str
    ) -> Result[RuleMutation[RateLimitRule], RuleError]:
        """Flip ``enabled`` on a rule, preserving every other field.

        Args:
            rule_id: Rule identifier.

        Returns:
            Success(RuleMutation): Toggled rule, scope RuleSetScoped(rule.rule_set_id).
            Failure(RuleNotFoundError): No rule with the id.
            Failure(RuleStorageError): Repository fault or timeout.
        """
        found = await self._storage(
            "toggle", lambda: self._repository.find_by_id(rule_id)
        )
        if isinstance(found, Failure):
            return found
        current = found.value
        if current is None:
            return Failure(error=RuleNotFoundError.for_rule(rule_id))

        built = (
            RateLimitRuleBuilder.from_rule(current)
            .enabled(not current.enabled)
            .build()
        )
        if isinstance(built, Failure):
            # A stored rule always rebuilds; a failure means storage returned
            # a rule that bypassed validation.
            return built
        toggled = built.value

        saved = await self._storage("toggle", lambda: self._repository.save(toggled))
        if isinstance(saved, Failure):
            return saved

        self._logger.info(
            "rule_toggled",
            rule_id=toggled.id,
            enabled=toggled.enabled,
            rule_set_id=toggled.rule_set_id,
        )
        return Success(
            value=RuleMutation(
                value=toggled, scope=RuleSetScoped(rule_set_id=toggled.rule_set_id)
            )
        )

    async def delete(self, rule_id: str) -> Result[RuleMutation[None], RuleError]:
        """Delete one rule.

        Args:
            rule_id: Rule identifier.

        Returns:
            Success(RuleMutation): Deleted, scope FullReload.
            Failure(RuleNotFoundError): No rule with the id.
            Failure(RuleStorageError): Repository fault or timeout.
        """
        deleted = await self._storage(
            "delete", lambda: self._repository.delete_by_id(rule_id)
        )
        if isinstance(deleted, Failure):
            return deleted
        if not deleted.value:
            return Failure(error=RuleNotFoundError.for_rule(rule_id))

        self._logger.info("rule_deleted", rule_id=rule_id)
        return Success(value=RuleMutation(value=None, scope=FullReload()))

    async def delete_by_rule_set(
        self, rule_set_id: str
    ) -> Result[RuleMutation[int], RuleError]:
        """Delete every member of a rule set.

        An empty or unknown set is not an error: the count is 0.

        Args:
            rule_set_id: Rule set grouping key.

        Returns:
            Success(RuleMutation): Deleted count, scope RuleSetScoped(rule_set_id).
            Failure(RuleStorageError): Repository fault or timeout.
        """
        deleted = await self._storage(
            "deleteByRuleSetId",
            lambda: self._repository.delete_by_rule_set_id(rule_set_id),
        )
        if isinstance(deleted, Failure):
            return deleted

        self._logger.info(
            "rule_set_deleted", rule_set_id=rule_set_id, deleted_count=deleted.value
        )
        return Success(
            value=RuleMutation(
                value=deleted.value, scope=RuleSetScoped(rule_set_id=rule_set_id)
            )
        )

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _storage[T](
        self, operation: str, call: Callable[[], Awaitable[T]]
    ) -> Result[T, RuleStorageError]:
        """Run one repository call under the storage timeout.

        Args:
            operation: Logical operation name reported on failure.
            call: Zero-argument coroutine factory for the repository call.

        Returns:
            Success(value) or Failure(RuleStorageError).
        """
        try:
            async with asyncio.timeout(self._timeout):
                value = await call()
        except Exception as e:
            self._logger.error(
                "rule_storage_failed",
                error=e,
                operation=operation,
                timed_out=isinstance(e, TimeoutError),
            )
            return cast(
                Result[T, RuleStorageError],
                Failure(error=RuleStorageError.from_exception(operation, e)),
            )
        return Success(value=value)


def _build_rule(
    rule_id: str, spec: RuleSpec
) -> Result[RateLimitRule, RuleValidationError]:
    """Build a rule from a spec under the given id."""
    builder = (
        RateLimitRuleBuilder(rule_id)
        .name(spec.name)
        .enabled(spec.enabled)
        .scope(spec.scope)
        .key_strategy_id(spec.key_strategy_id)
        .on_limit_exceed_policy(spec.on_limit_exceed_policy)
        .rule_set_id(spec.rule_set_id)
        .tags(spec.tags)
        .attributes(spec.attributes)
    )
    for band in spec.bands:
        builder.band(
            window_seconds=band.window_seconds,
            capacity=band.capacity,
            label=band.label,
        )
    return builder.build()
