"""Policy applied when a rate band is exhausted."""

from enum import Enum


class OnLimitExceedPolicy(str, Enum):
    """Behavior of an enforcement node once a band has no permits left."""

    REJECT_REQUEST = "REJECT_REQUEST"
    """Reject immediately (HTTP 429 on HTTP gateways)."""

    WAIT_FOR_REFILL = "WAIT_FOR_REFILL"
    """Hold the request until the band refills enough permits."""
