"""Dashboard aggregator.

Computes rule counters for the admin dashboard from a single ``find_all``
read. ``last_updated`` is the computation time, not a storage timestamp.
"""

from datetime import UTC, datetime

from src.application.dtos.rule_dtos import DashboardStats
from src.application.services.rule_service import RuleService
from src.core.result import Failure, Result, Success
from src.domain.errors.rule_error import RuleError


class DashboardService:
    """Summary counters over all stored rules."""

    def __init__(self, service: RuleService) -> None:
        """Initialize with the rule service whose reads are timeout-bounded."""
        self._service = service

    async def get_stats(self) -> Result[DashboardStats, RuleError]:
        """Compute dashboard counters.

        Returns:
            Success(DashboardStats): Counters at computation time.
            Failure(RuleStorageError): Repository fault or timeout.
        """
        listed = await self._service.list_all()
        if isinstance(listed, Failure):
            return listed
        rules = listed.value

        active = sum(1 for rule in rules if rule.enabled)
        rule_sets = {rule.rule_set_id for rule in rules if rule.rule_set_id}

        return Success(
            value=DashboardStats(
                total_rules=len(rules),
                active_rules=active,
                disabled_rules=len(rules) - active,
                total_rule_sets=len(rule_sets),
                last_updated=datetime.now(UTC),
            )
        )
