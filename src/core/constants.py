"""Centralized constants for internal implementation details.

This module contains constants that are internal implementation details,
NOT environment-specific configuration. For environment-specific settings,
use `src/core/config.py` instead.

Categories:
- Rule identity: Identifier format and length
- Rate bands: Minimum window and capacity
- Attributes: Reserved attribute keys
- Channels: Pub/sub naming

Example:
    >>> from src.core.constants import RULE_ID_PATTERN
    >>> RULE_ID_PATTERN.fullmatch("login-per-ip") is not None
    True
"""

import re

# =============================================================================
# Rule Identity
# =============================================================================

RULE_ID_PATTERN: re.Pattern[str] = re.compile(r"[a-zA-Z0-9\-_]+")
"""Allowed rule identifier characters (alphanumerics, hyphen, underscore)."""

RULE_ID_MAX_LENGTH: int = 128
"""Maximum rule identifier length (matches the rule_id column size)."""


# =============================================================================
# Rate Bands
# =============================================================================

MIN_BAND_WINDOW_SECONDS: int = 1
"""Smallest window a rate band may use."""

MIN_BAND_CAPACITY: int = 1
"""Smallest number of permits a rate band may grant per window."""


# =============================================================================
# Attributes
# =============================================================================

TAGS_ATTRIBUTE_KEY: str = "tags"
"""Legacy attribute key that carried tags before they became a typed field."""


# =============================================================================
# Channels
# =============================================================================

RULE_CHANGE_CHANNEL_SUFFIX: str = "rule-changes"
"""Suffix of the pub/sub channel enforcement nodes listen on."""
