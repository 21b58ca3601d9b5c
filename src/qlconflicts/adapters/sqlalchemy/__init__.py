"""SQLAlchemy adapter package for qlconflicts."""

from __future__ import annotations

from .mappings import create_all_tables, mapper_registry, start_mappers
from .repositories import SqlAlchemyConflictRepository, SqlAlchemyProductRepository
from .store import SqlAlchemyConflictStore
from .unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyConflictRepository",
    "SqlAlchemyConflictStore",
    "SqlAlchemyProductRepository",
    "SqlAlchemyUnitOfWork",
    "StartupError",
    "configured_engine",
    "create_all_tables",
    "is_started",
    "mapper_registry",
    "shutdown",
    "startup",
]
