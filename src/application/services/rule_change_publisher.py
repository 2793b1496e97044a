"""Notify-after-commit wrapper around RuleService.

Exposes the same operations as RuleService but returns plain values. When a
mutation succeeds (its write is committed) the publisher broadcasts the
mutation's propagation scope through the change notifier. Failed mutations
never notify.

The repository write is the commit point: a notifier failure is logged and
the mutation still succeeds. Enforcement nodes converge through their
periodic full resync.
"""

from src.application.dtos.rule_dtos import RuleMutation, RuleSpec
from src.application.services.rule_service import RuleService
from src.core.result import Failure, Result, Success
from src.domain.entities.rate_limit_rule import RateLimitRule
from src.domain.errors.rule_error import RuleError
from src.domain.protocols.change_notifier_protocol import ChangeNotifierProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects.propagation_scope import FullReload, PropagationScope


class RuleChangePublisher:
    """Rule administration entry point used by the HTTP layer.

    Dependencies (injected via constructor):
        - RuleService: Mutations and queries
        - ChangeNotifierProtocol: Broadcast to enforcement nodes
        - LoggerProtocol: Structured logging
    """

    def __init__(
        self,
        service: RuleService,
        notifier: ChangeNotifierProtocol,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize publisher with dependencies.

        Args:
            service: Rule service performing the storage work.
            notifier: Broadcasts propagation scopes after each committed write.
            logger: Logger for notifier failures.
        """
        self._service = service
        self._notifier = notifier
        self._logger = logger

    # =========================================================================
    # Queries (never notify)
    # =========================================================================

    async def list_all(self) -> Result[list[RateLimitRule], RuleError]:
        """Return every rule."""
        return await self._service.list_all()

    async def list_by_rule_set(
        self, rule_set_id: str
    ) -> Result[list[RateLimitRule], RuleError]:
        """Return members of a rule set (empty list if none)."""
        return await self._service.list_by_rule_set(rule_set_id)

    async def get_by_id(self, rule_id: str) -> Result[RateLimitRule, RuleError]:
        """Return one rule, or Failure(RuleNotFoundError)."""
        return await self._service.get_by_id(rule_id)

    # =========================================================================
    # Mutations (notify on success)
    # =========================================================================

    async def create(self, spec: RuleSpec) -> Result[RateLimitRule, RuleError]:
        """Create a rule and broadcast its rule set.

        Args:
            spec: Complete rule description.

        Returns:
            Success(RateLimitRule): Created rule; RuleSetScoped was broadcast.
            Failure(RuleError): Validation, conflict or storage failure.
                Nothing was broadcast.
        """
        return await self._publish(await self._service.create(spec))

    async def update(
        self, rule_id: str, spec: RuleSpec
    ) -> Result[RateLimitRule, RuleError]:
        """Replace a rule and broadcast its new rule set.

        Args:
            rule_id: Identifier of the rule to replace.
            spec: Complete new description; ``spec.id`` must equal ``rule_id``.

        Returns:
            Success(RateLimitRule) or Failure(RuleError), as RuleService.update.
        """
        return await self._publish(await self._service.update(rule_id, spec))

    async def toggle_enabled(self, rule_id: str) -> Result[RateLimitRule, RuleError]:
        """Flip ``enabled`` and broadcast the rule's set."""
        return await self._publish(await self._service.toggle_enabled(rule_id))

    async def delete(self, rule_id: str) -> Result[None, RuleError]:
        """Delete one rule and broadcast a full reload.

        Args:
            rule_id: Rule identifier.

        Returns:
            Success(None): Deleted; FullReload was broadcast.
            Failure(RuleNotFoundError | RuleStorageError): Nothing broadcast.
        """
        return await self._publish(await self._service.delete(rule_id))

    async def delete_by_rule_set(self, rule_set_id: str) -> Result[int, RuleError]:
        """Delete every member of a rule set.

        The set is broadcast even when the count is 0.
        """
        return await self._publish(await self._service.delete_by_rule_set(rule_set_id))

    async def _publish[T](
        self, result: Result[RuleMutation[T], RuleError]
    ) -> Result[T, RuleError]:
        """Notify for a successful mutation and unwrap its value.

        Args:
            result: Mutation result from RuleService.

        Returns:
            Success(value) after notifying, or the original Failure.
        """
        match result:
            case Failure(error=error):
                return Failure(error=error)
            case Success(value=mutation):
                await self._notify(mutation.scope)
                return Success(value=mutation.value)

    async def _notify(self, scope: PropagationScope) -> None:
        try:
            await self._notifier.notify(scope)
        except Exception as e:
            self._logger.warning(
                "rule_change_notify_failed",
                scope="full_reload" if isinstance(scope, FullReload) else "rule_set",
                rule_set_id=getattr(scope, "rule_set_id", None),
                error_type=type(e).__name__,
                error_message=str(e),
            )
