"""Redis subscriber applying rule change messages to a RuleCache.

Runs on enforcement nodes. Each message on the rule change channel is decoded
and applied to the local cache. Malformed messages are logged and skipped;
a failed reload is logged and left to the periodic resync.
"""

import asyncio
import json

from redis.asyncio import Redis
from redis.asyncio.client import PubSub
from redis.exceptions import RedisError

from src.domain.protocols.logger_protocol import LoggerProtocol
from src.infrastructure.notifications.channel_keys import RuleChannelKeys
from src.infrastructure.notifications.rule_cache import RuleCache
from src.infrastructure.notifications.rule_change_message import RuleChangeMessage


class RedisRuleChangeSubscriber:
    """Subscribes to rule change broadcasts and keeps a RuleCache current.

    Attributes:
        _redis: Async Redis client instance.
        _cache: Cache updated from messages.
        _channel: Channel subscribed to.
        _logger: Structured logger.
    """

    def __init__(
        self,
        redis_client: "Redis[bytes]",  # type: ignore[type-arg]
        cache: RuleCache,
        channel_prefix: str,
        logger: LoggerProtocol,
    ) -> None:
        self._redis = redis_client
        self._cache = cache
        self._channel = RuleChannelKeys.changes_channel(channel_prefix)
        self._logger = logger

    async def listen(self) -> None:
        """Apply messages until cancelled or the connection fails."""
        pubsub: PubSub = self._redis.pubsub()

        try:
            await pubsub.subscribe(self._channel)
            self._logger.info("rule_change_subscribed", channel=self._channel)

            async for message in pubsub.listen():
                if message["type"] != "message":
                    continue
                await self.handle_payload(message["data"])

        except RedisError as e:
            self._logger.error(
                "rule_change_subscription_failed", error=e, channel=self._channel
            )
        except asyncio.CancelledError:
            self._logger.debug("rule_change_subscription_cancelled")
            raise
        finally:
            try:
                await pubsub.unsubscribe(self._channel)
                await pubsub.aclose()  # type: ignore[no-untyped-call]
            except Exception as e:
                self._logger.warning(
                    "rule_change_subscription_cleanup_failed",
                    error_type=type(e).__name__,
                    error_message=str(e),
                )

    async def handle_payload(self, payload: str | bytes) -> bool:
        """Decode one payload and apply it to the cache.

        Args:
            payload: Raw pub/sub message data.

        Returns:
            bool: True if the cache was reloaded.
        """
        try:
            message = RuleChangeMessage.from_json(payload)
        except json.JSONDecodeError as e:
            self._logger.warning("rule_change_message_unparseable", error_message=str(e))
            return False
        except (KeyError, ValueError, TypeError) as e:
            self._logger.warning(
                "rule_change_message_invalid",
                error_type=type(e).__name__,
                error_message=str(e),
            )
            return False

        try:
            await self._cache.apply(message.to_scope())
        except Exception as e:
            self._logger.error(
                "rule_change_apply_failed",
                error=e,
                message_id=message.message_id,
                change_type=message.type,
                rule_set_id=message.rule_set_id,
            )
            return False
        return True
