"""Application service factories.

Services hold no per-request state, so they are application-scoped.

Usage:
    # Presentation Layer (FastAPI Depends)
    from fastapi import Depends
    from src.core.container import get_rule_change_publisher

    @router.post("/rules")
    async def create_rule(
        publisher: RuleChangePublisher = Depends(get_rule_change_publisher),
    ): ...
"""

from functools import lru_cache

from src.application.services import (
    DashboardService,
    RuleChangePublisher,
    RuleService,
)
from src.core.config import settings
from src.core.container.infrastructure import get_logger
from src.core.container.notifications import get_change_notifier
from src.core.container.repositories import get_rule_repository


@lru_cache()
def get_rule_service() -> RuleService:
    return RuleService(
        repository=get_rule_repository(),
        logger=get_logger(),
        storage_timeout_seconds=settings.rule_storage_timeout_seconds,
    )


@lru_cache()
def get_rule_change_publisher() -> RuleChangePublisher:
    """Rule administration entry point (mutations notify after commit)."""
    return RuleChangePublisher(
        service=get_rule_service(),
        notifier=get_change_notifier(),
        logger=get_logger(),
    )


@lru_cache()
def get_dashboard_service() -> DashboardService:
    return DashboardService(service=get_rule_service())
