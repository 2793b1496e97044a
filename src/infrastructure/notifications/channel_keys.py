"""Redis channel naming for rule change notifications.

Channel Patterns:
    {prefix}:rule-changes    - Rule change broadcasts (pub/sub)
"""

from src.core.constants import RULE_CHANGE_CHANNEL_SUFFIX


class RuleChannelKeys:
    """Centralized Redis channel key generation for rule changes.

    Example:
        >>> RuleChannelKeys.changes_channel("ratelimit")
        'ratelimit:rule-changes'
    """

    @staticmethod
    def changes_channel(prefix: str) -> str:
        """Get Redis pub/sub channel for rule change broadcasts.

        Args:
            prefix: Deployment-wide channel prefix.

        Returns:
            Channel name shared by the control plane and enforcement nodes.
        """
        return f"{prefix}:{RULE_CHANGE_CHANNEL_SUFFIX}"
