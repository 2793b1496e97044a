"""Container module - Centralized dependency injection.

Re-exports all factory functions from submodules:

    from src.core.container import get_logger, get_rule_change_publisher

Organization:
- infrastructure: Database, Redis, logging
- repositories: Rule repository (backend selected by settings)
- notifications: Change notifier (backend selected by settings)
- services: Rule, change publisher and dashboard services
"""

from src.core.container.infrastructure import get_database, get_logger, get_redis
from src.core.container.notifications import get_change_notifier
from src.core.container.repositories import get_rule_repository
from src.core.container.services import (
    get_dashboard_service,
    get_rule_change_publisher,
    get_rule_service,
)

__all__ = [
    # Infrastructure
    "get_database",
    "get_logger",
    "get_redis",
    # Repositories
    "get_rule_repository",
    # Notifications
    "get_change_notifier",
    # Services
    "get_dashboard_service",
    "get_rule_change_publisher",
    "get_rule_service",
]
