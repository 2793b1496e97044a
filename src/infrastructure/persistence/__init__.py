"""Database persistence infrastructure.

- Base model for database models
- Database connection and session management
- Rule repository implementations (SQL and in-memory)
"""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.database import Database

__all__ = [
    "BaseModel",
    "Database",
]
