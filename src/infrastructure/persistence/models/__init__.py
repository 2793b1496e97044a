"""Database models for persistence layer.

SQLAlchemy models mapping to database tables. Infrastructure concern only;
the domain layer never imports these.

Note:
    Domain entities live in src/domain/entities/ and are mapped to these
    models by the repositories.
"""

from src.infrastructure.persistence.models.rate_limit_rule import RateLimitRuleModel

__all__ = [
    "RateLimitRuleModel",
]
