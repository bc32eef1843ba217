"""SQLAlchemy adapter package for the poolclaim state store."""

from __future__ import annotations

from .mappings import (
    TABLE_BY_RECORD_CLASS,
    create_all_tables,
    mapper_registry,
    start_mappers,
)
from .repositories import (
    SqlAlchemyClaimFromPoolRepository,
    SqlAlchemyRecordRepository,
    SqlAlchemyStatefulListRepository,
)
from .unit_of_work import (
    SqlAlchemyStateUnitOfWork,
    shutdown,
    startup,
)

__all__ = [
    "TABLE_BY_RECORD_CLASS",
    "SqlAlchemyClaimFromPoolRepository",
    "SqlAlchemyRecordRepository",
    "SqlAlchemyStateUnitOfWork",
    "SqlAlchemyStatefulListRepository",
    "create_all_tables",
    "mapper_registry",
    "shutdown",
    "start_mappers",
    "startup",
]
