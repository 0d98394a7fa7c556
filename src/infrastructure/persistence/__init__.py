"""Database persistence infrastructure.

This module provides:
- Base model for all database entities
- Database engine and session management
- Unit of work over SQLAlchemy async sessions
"""

from src.infrastructure.persistence.base import BaseModel
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    "BaseModel",
    "Database",
    "SQLAlchemyUnitOfWork",
]
