"""Application services for rule administration."""

from src.application.services.dashboard_service import DashboardService
from src.application.services.rule_change_publisher import RuleChangePublisher
from src.application.services.rule_service import RuleService

__all__ = [
    "DashboardService",
    "RuleChangePublisher",
    "RuleService",
]
