"""LoggerProtocol definition for structured logging.

Backend-agnostic structured logging port. Every call is a snake_case event
name plus key-value context; implementations render it (console in
development, JSON elsewhere).

Levels:
    - DEBUG: Diagnostic detail (dev only)
    - INFO: Rule mutations, notifications sent, cache reloads
    - WARNING: Degraded behavior (malformed change message, notify failure)
    - ERROR: Operation failed (storage fault or timeout)
    - CRITICAL: Service cannot continue

Usage:
    from src.core.container import get_logger

    logger = get_logger()
    logger.info("rule_created", rule_id="login-per-ip", rule_set_id="auth")

    # Component-scoped logging
    cache_logger = logger.bind(component="rule_cache")
    cache_logger.info("rule_cache_reloaded", generation=4)
"""

from __future__ import annotations

from typing import Any, Protocol


class LoggerProtocol(Protocol):
    """Protocol for structured logging adapters.

    Implementations may enrich logs with timestamp, level and trace id.
    """

    def debug(self, message: str, /, **context: Any) -> None:
        """Log a debug-level event."""
        ...

    def info(self, message: str, /, **context: Any) -> None:
        """Log an info-level event."""
        ...

    def warning(self, message: str, /, **context: Any) -> None:
        """Log a warning-level event."""
        ...

    def error(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log an error-level event with optional exception details.

        Args:
            message: Event name (avoid f-strings; use context).
            error: Optional exception; implementations add error_type and
                error_message fields.
            **context: Structured key-value context fields.
        """
        ...

    def critical(
        self, message: str, /, *, error: Exception | None = None, **context: Any
    ) -> None:
        """Log a critical-level event. Same arguments as ``error``."""
        ...

    def bind(self, **context: Any) -> "LoggerProtocol":
        """Return new logger with permanently bound context.

        The original logger is unchanged.

        Args:
            **context: Context included in all subsequent log calls.

        Returns:
            New logger instance with bound context.
        """
        ...

    def with_context(self, **context: Any) -> "LoggerProtocol":
        """Alias for bind()."""
        ...
