"""Change notifier that only logs.

Used when no enforcement nodes are attached (``RULE_NOTIFIER_BACKEND=log``),
typically local development.
"""

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects.propagation_scope import FullReload, PropagationScope


class LoggingChangeNotifier:
    """ChangeNotifierProtocol implementation that writes a log event."""

    def __init__(self, logger: LoggerProtocol) -> None:
        self._logger = logger

    async def notify(self, scope: PropagationScope) -> None:
        if isinstance(scope, FullReload):
            self._logger.info("rule_change_notified", change_type="full_reload")
        else:
            self._logger.info(
                "rule_change_notified",
                change_type="rule_set_changed",
                rule_set_id=scope.rule_set_id,
            )
