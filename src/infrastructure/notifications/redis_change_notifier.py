"""Redis change notifier implementing ChangeNotifierProtocol.

Publishes rule change messages on a single pub/sub channel that every
enforcement node subscribes to.

Architecture:
    - Implements ChangeNotifierProtocol without inheritance (structural typing)
    - Fire-and-forget: pub/sub has no delivery guarantee; nodes also resync
      periodically
    - Redis errors propagate; RuleChangePublisher logs them without failing
      the mutation
"""

from redis.asyncio import Redis

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.value_objects.propagation_scope import PropagationScope
from src.infrastructure.notifications.channel_keys import RuleChannelKeys
from src.infrastructure.notifications.rule_change_message import RuleChangeMessage


class RedisChangeNotifier:
    """Redis implementation of ChangeNotifierProtocol.

    Attributes:
        _redis: Async Redis client instance.
        _channel: Channel the messages are published to.
        _logger: Structured logger.
    """

    def __init__(
        self,
        redis_client: "Redis[bytes]",  # type: ignore[type-arg]
        channel_prefix: str,
        logger: LoggerProtocol,
    ) -> None:
        """Initialize Redis change notifier.

        Args:
            redis_client: Async Redis client instance.
            channel_prefix: Deployment-wide channel prefix.
            logger: Structured logger.
        """
        self._redis = redis_client
        self._channel = RuleChannelKeys.changes_channel(channel_prefix)
        self._logger = logger

    async def notify(self, scope: PropagationScope) -> None:
        """Publish the change message for a scope.

        Args:
            scope: Which cached rules enforcement nodes must refetch.

        Raises:
            RedisError: If the publish fails.
        """
        message = RuleChangeMessage.from_scope(scope)
        receivers = await self._redis.publish(self._channel, message.to_json())

        self._logger.info(
            "rule_change_published",
            channel=self._channel,
            change_type=message.type,
            rule_set_id=message.rule_set_id,
            message_id=message.message_id,
            receivers=receivers,
        )
