"""Dashboard response schemas."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.application.dtos.rule_dtos import DashboardStats


class DashboardStatsResponse(BaseModel):
    """Rule counters for the admin dashboard."""

    total_rules: int = Field(..., description="Number of stored rules")
    active_rules: int = Field(..., description="Rules with enabled=true")
    disabled_rules: int = Field(..., description="Rules with enabled=false")
    total_rule_sets: int = Field(..., description="Distinct non-empty rule_set_id values")
    last_updated: datetime = Field(..., description="When the counters were computed")

    @classmethod
    def from_dto(cls, dto: DashboardStats) -> "DashboardStatsResponse":
        return cls(
            total_rules=dto.total_rules,
            active_rules=dto.active_rules,
            disabled_rules=dto.disabled_rules,
            total_rule_sets=dto.total_rule_sets,
            last_updated=dto.last_updated,
        )
