"""Rule change propagation infrastructure.

Control plane side:
    - RedisChangeNotifier: publish change messages over Redis pub/sub
    - LoggingChangeNotifier: log-only notifier for local development

Enforcement node side:
    - RuleCache: copy-on-write rule cache with scoped and full reloads
    - RedisRuleChangeSubscriber: apply change messages to a RuleCache
"""

from src.infrastructure.notifications.channel_keys import RuleChannelKeys
from src.infrastructure.notifications.logging_change_notifier import (
    LoggingChangeNotifier,
)
from src.infrastructure.notifications.redis_change_notifier import RedisChangeNotifier
from src.infrastructure.notifications.redis_rule_change_subscriber import (
    RedisRuleChangeSubscriber,
)
from src.infrastructure.notifications.rule_cache import RuleCache, RuleCacheGeneration
from src.infrastructure.notifications.rule_change_message import RuleChangeMessage

__all__ = [
    "LoggingChangeNotifier",
    "RedisChangeNotifier",
    "RedisRuleChangeSubscriber",
    "RuleCache",
    "RuleCacheGeneration",
    "RuleChangeMessage",
    "RuleChannelKeys",
]
