"""Repository dependency factories.

The rule repository is application-scoped: the SQL implementation opens its
own transactional session per call, so no request-scoped session is needed.
"""

from functools import lru_cache

from src.core.config import settings
from src.core.container.infrastructure import get_database
from src.domain.protocols.rule_repository import RuleRepository


@lru_cache()
def get_rule_repository() -> RuleRepository:
    """Get rule repository singleton selected by RULE_STORAGE_BACKEND.

    - 'postgres': RateLimitRuleRepository (SQLAlchemy)
    - 'memory': InMemoryRuleRepository (process-local, development only)

    Returns:
        Repository implementing RuleRepository.
    """
    if settings.rule_storage_backend == "memory":
        from src.infrastructure.persistence.repositories import InMemoryRuleRepository

        return InMemoryRuleRepository()

    from src.infrastructure.persistence.repositories import RateLimitRuleRepository

    return RateLimitRuleRepository(get_database())
