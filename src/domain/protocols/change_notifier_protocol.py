"""Rule change notifier protocol.

Enforcement nodes cache rules. After every committed mutation the control
plane tells them what to refetch:

    RuleSetScoped(rule_set_id)  - reload members of one set (None = ungrouped)
    FullReload()                - discard the cache and reload everything

Architecture:
    - Protocol-based (structural typing, no inheritance)
    - Fire-and-forget: delivery is not acknowledged and not retried here
    - Nodes run a periodic full resync so a lost message still converges
"""

from typing import Protocol

from src.domain.value_objects.propagation_scope import PropagationScope


class ChangeNotifierProtocol(Protocol):
    """Protocol for broadcasting rule changes to enforcement nodes.

    Adapters (Redis pub/sub, logging) implement this protocol without
    inheritance. Adapters may raise on transport failure; callers decide
    whether that fails the operation (the change publisher logs and
    continues).

    Example:
        >>> notifier: ChangeNotifierProtocol = get_change_notifier()
        >>> await notifier.notify(RuleSetScoped(rule_set_id="checkout"))
        >>> await notifier.notify(FullReload())
    """

    async def notify(self, scope: PropagationScope) -> None:
        """Broadcast a change of the given scope.

        Args:
            scope: Which cached rules enforcement nodes must refetch.
        """
        ...
