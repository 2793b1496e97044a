"""Domain protocols (ports) package.

This package contains protocol definitions that the domain layer needs.
Infrastructure adapters implement these protocols without inheritance.

IMPORTANT: Re-exports are ONLY for protocols defined in this package.
Do NOT re-export from other domain subpackages (entities, value objects) to
avoid circular import risks.

Usage:
    from src.domain.protocols import ChangeNotifierProtocol, RuleRepository
"""

from src.domain.protocols.change_notifier_protocol import ChangeNotifierProtocol
from src.domain.protocols.logger_protocol import LoggerProtocol
from src.domain.protocols.rule_repository import RuleRepository

__all__ = [
    "ChangeNotifierProtocol",
    "LoggerProtocol",
    "RuleRepository",
]
