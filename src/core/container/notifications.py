"""Change notifier dependency factories."""

from functools import lru_cache

from src.core.config import settings
from src.core.container.infrastructure import get_logger, get_redis
from src.domain.protocols.change_notifier_protocol import ChangeNotifierProtocol


@lru_cache()
def get_change_notifier() -> ChangeNotifierProtocol:
    """Get change notifier singleton selected by RULE_NOTIFIER_BACKEND.

    - 'redis': RedisChangeNotifier (pub/sub to enforcement nodes)
    - 'log': LoggingChangeNotifier (no nodes attached)

    Returns:
        Notifier implementing ChangeNotifierProtocol.
    """
    if settings.rule_notifier_backend == "log":
        from src.infrastructure.notifications import LoggingChangeNotifier

        return LoggingChangeNotifier(get_logger())

    from src.infrastructure.notifications import RedisChangeNotifier

    return RedisChangeNotifier(
        redis_client=get_redis(),
        channel_prefix=settings.rule_change_channel_prefix,
        logger=get_logger(),
    )
