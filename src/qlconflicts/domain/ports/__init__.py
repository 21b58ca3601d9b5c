"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import ConflictRepository, ProductRepository, Repository
from .store import ConflictStore
from .unit_of_work import (
    ConflictRepositories,
    ConflictUnitOfWork,
    RepositoryCollection,
    UnitOfWork,
)

__all__ = [
    "ConflictRepositories",
    "ConflictRepository",
    "ConflictStore",
    "ConflictUnitOfWork",
    "ProductRepository",
    "Repository",
    "RepositoryCollection",
    "UnitOfWork",
]
