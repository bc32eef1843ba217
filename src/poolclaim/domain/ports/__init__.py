"""Domain port definitions for adapters."""

from __future__ import annotations

from .persistence import ClaimFromPoolRepository, RecordRepository, StatefulListRepository
from .unit_of_work import RepositoryCollection, StateRepositories, StateUnitOfWork, UnitOfWork

__all__ = [
    "ClaimFromPoolRepository",
    "RecordRepository",
    "RepositoryCollection",
    "StateRepositories",
    "StateUnitOfWork",
    "UnitOfWork",
]
