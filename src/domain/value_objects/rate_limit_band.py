"""Rate limit band value object.

A band is one throughput ceiling: at most ``capacity`` requests per
``window``. A rule carries an ordered, non-empty sequence of bands and all of
them apply at the same time (e.g. 10/second AND 1000/hour).

Usage:
    from datetime import timedelta
    from src.domain.value_objects import RateLimitBand

    burst = RateLimitBand(window=timedelta(seconds=1), capacity=10, label="burst")
    sustained = RateLimitBand.of_seconds(3600, 1000)
"""

from dataclasses import dataclass
from datetime import timedelta

from src.core.constants import MIN_BAND_CAPACITY, MIN_BAND_WINDOW_SECONDS


@dataclass(frozen=True, slots=True, kw_only=True)
class RateLimitBand:
    """Single (window, capacity) throughput ceiling (value object).

    Attributes:
        window: Length of the window. At least one second.
        capacity: Requests allowed per window. At least one.
        label: Optional human-readable label shown in the admin UI.

    Raises:
        ValueError: If window is shorter than one second or capacity < 1.
    """

    window: timedelta
    """Length of the accounting window.

    Whole seconds are the unit exchanged with the API and the database;
    sub-second windows are rejected.
    """

    capacity: int
    """Maximum number of requests admitted per window."""

    label: str | None = None
    """Optional display label (e.g. "burst", "per-minute")."""

    def __post_init__(self) -> None:
        """Validate band after initialization.

        Raises:
            ValueError: If any field is out of range.
        """
        if self.window < timedelta(seconds=MIN_BAND_WINDOW_SECONDS):
            raise ValueError(
                f"window must be at least {MIN_BAND_WINDOW_SECONDS}s, got {self.window}"
            )
        if self.capacity < MIN_BAND_CAPACITY:
            raise ValueError(
                f"capacity must be at least {MIN_BAND_CAPACITY}, got {self.capacity}"
            )

    @classmethod
    def of_seconds(
        cls, window_seconds: int, capacity: int, label: str | None = None
    ) -> "RateLimitBand":
        """Build a band from a window expressed in seconds.

        Args:
            window_seconds: Window length in seconds.
            capacity: Requests allowed per window.
            label: Optional display label.

        Returns:
            RateLimitBand: New band.

        Raises:
            ValueError: If window or capacity is out of range.
        """
        try:
            window = timedelta(seconds=window_seconds)
        except OverflowError as e:
            raise ValueError(
                f"window must be at most {timedelta.max.days} days, "
                f"got {window_seconds}s"
            ) from e
        return cls(window=window, capacity=capacity, label=label)

    @property
    def window_seconds(self) -> int:
        """Window length in whole seconds."""
        return int(self.window.total_seconds())
