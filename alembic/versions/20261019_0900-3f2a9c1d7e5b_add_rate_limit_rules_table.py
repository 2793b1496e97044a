"""add_rate_limit_rules_table

Revision ID: 3f2a9c1d7e5b
Revises:
Create Date: 2026-10-19 09:00:00.000000+00:00

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f2a9c1d7e5b"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create rate_limit_rules table."""
    op.create_table(
        "rate_limit_rules",
        # Primary key and timestamps from BaseMutableModel
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        # Rule identity
        sa.Column(
            "rule_id",
            sa.String(length=128),
            nullable=False,
            comment="Rule identifier ([a-zA-Z0-9-_]+)",
        ),
        sa.Column(
            "name",
            sa.String(length=255),
            nullable=False,
            comment="Display name",
        ),
        sa.Column(
            "enabled",
            sa.Boolean(),
            nullable=False,
            comment="Whether enforcement nodes apply the rule",
        ),
        # Enforcement behavior
        sa.Column(
            "scope",
            sa.String(length=32),
            nullable=False,
            comment="GLOBAL, PER_API_KEY, PER_USER, PER_IP or CUSTOM",
        ),
        sa.Column(
            "key_strategy_id",
            sa.String(length=128),
            nullable=False,
            comment="Partition key strategy used by enforcement",
        ),
        sa.Column(
            "on_limit_exceed_policy",
            sa.String(length=32),
            nullable=False,
            comment="REJECT_REQUEST or WAIT_FOR_REFILL",
        ),
        # Grouping and metadata
        sa.Column(
            "rule_set_id",
            sa.String(length=128),
            nullable=True,
            comment="Optional grouping key for bulk operations",
        ),
        sa.Column("bands", sa.JSON(), nullable=False, comment="Ordered rate bands"),
        sa.Column(
            "tags", sa.JSON(), nullable=False, comment="Labels for admin filtering"
        ),
        sa.Column(
            "attributes", sa.JSON(), nullable=False, comment="Free-form metadata"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_rate_limit_rules_rule_id"),
        "rate_limit_rules",
        ["rule_id"],
        unique=True,
    )
    op.create_index(
        op.f("ix_rate_limit_rules_rule_set_id"),
        "rate_limit_rules",
        ["rule_set_id"],
        unique=False,
    )


def downgrade() -> None:
    """Drop rate_limit_rules table."""
    op.drop_index(
        op.f("ix_rate_limit_rules_rule_set_id"), table_name="rate_limit_rules"
    )
    op.drop_index(op.f("ix_rate_limit_rules_rule_id"), table_name="rate_limit_rules")
    op.drop_table("rate_limit_rules")
