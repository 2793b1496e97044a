"""Rate limit rule database model.

One row per rule. Bands, tags and attributes are stored as JSON documents
because they are always read and written together with the rule.
"""

from typing import Any

from sqlalchemy import JSON, Boolean, String
from sqlalchemy.orm import Mapped, mapped_column

from src.infrastructure.persistence.base import BaseMutableModel


class RateLimitRuleModel(BaseMutableModel):
    """Rate limit rule row.

    Fields:
        id: UUID surrogate key (from BaseMutableModel)
        created_at / updated_at: Row timestamps (from BaseMutableModel)
        rule_id: Rule identifier exposed by the API (unique)
        name: Display name
        enabled: Whether enforcement applies the rule
        scope: LimitScope literal (e.g. "PER_IP")
        key_strategy_id: Partition key strategy
        on_limit_exceed_policy: OnLimitExceedPolicy literal
        rule_set_id: Optional grouping key
        bands: JSON list of {"window_seconds", "capacity", "label"}
        tags: JSON list of strings
        attributes: JSON object of free-form metadata

    Indexes:
        - rule_id UNIQUE - primary lookup key
        - rule_set_id - bulk delete and scoped reload
    """

    __tablename__ = "rate_limit_rules"

    rule_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        unique=True,
        index=True,
        comment="Rule identifier ([a-zA-Z0-9-_]+)",
    )

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="Display name",
    )

    enabled: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        comment="Whether enforcement nodes apply the rule",
    )

    scope: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="GLOBAL, PER_API_KEY, PER_USER, PER_IP or CUSTOM",
    )

    key_strategy_id: Mapped[str] = mapped_column(
        String(128),
        nullable=False,
        comment="Partition key strategy used by enforcement",
    )

    on_limit_exceed_policy: Mapped[str] = mapped_column(
        String(32),
        nullable=False,
        comment="REJECT_REQUEST or WAIT_FOR_REFILL",
    )

    rule_set_id: Mapped[str | None] = mapped_column(
        String(128),
        nullable=True,
        index=True,
        comment="Optional grouping key for bulk operations",
    )

    bands: Mapped[list[dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        comment="Ordered rate bands",
    )

    tags: Mapped[list[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
        comment="Labels for admin filtering",
    )

    attributes: Mapped[dict[str, Any]] = mapped_column(
        JSON,
        nullable=False,
        default=dict,
        comment="Free-form metadata",
    )

    def __repr__(self) -> str:
        return (
            f"<RateLimitRuleModel(rule_id={self.rule_id!r}, "
            f"enabled={self.enabled}, rule_set_id={self.rule_set_id!r})>"
        )
