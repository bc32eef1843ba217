"""SQLAlchemy mapping metadata for the reconciliation records."""

from __future__ import annotations

import json
import logging
from functools import cache
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import Column, Dialect, String, Table, Text, TypeDecorator, orm
from sqlalchemy.orm import configure_mappers

from poolclaim.domain.model import ClaimFromPoolRecord, StatefulListRecord

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

log = logging.getLogger(__name__)


class StringTupleType(TypeDecorator[tuple[str, ...]]):
    """Ordered string collection stored as a JSON array."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: tuple[str, ...] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(list(value))

    def process_result_value(self, value: str | None, dialect: Dialect) -> tuple[str, ...]:
        _ = dialect
        if value is None:
            return ()
        loaded = json.loads(value)
        if not isinstance(loaded, list):
            raise TypeError(f"Expected a JSON array of strings, got {value!r}")
        items = cast(list[Any], loaded)
        if not all(isinstance(item, str) for item in items):
            raise TypeError(f"Expected a JSON array of strings, got {value!r}")
        return tuple(cast(list[str], items))


class StringMapType(TypeDecorator[dict[str, str]]):
    """String-to-string mapping stored as a JSON object, key order preserved."""

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: dict[str, str] | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        return json.dumps(value)

    def process_result_value(self, value: str | None, dialect: Dialect) -> dict[str, str]:
        _ = dialect
        if value is None:
            return {}
        loaded = json.loads(value)
        if not isinstance(loaded, dict):
            raise TypeError(f"Expected a JSON object of strings, got {value!r}")
        items = cast(dict[Any, Any], loaded)
        if not all(isinstance(item, str) for item in items.values()):
            raise TypeError(f"Expected a JSON object of strings, got {value!r}")
        return cast(dict[str, str], items)


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

claim_from_pool_table = Table(
    "claim_from_pool",
    mapper_registry.metadata,
    Column("name", String, primary_key=True),
    Column("id", String, nullable=False, unique=True),
    Column("pool", StringTupleType, nullable=False),
    Column("claimers", StringTupleType, nullable=False),
    Column("assignment", StringMapType, nullable=False),
)

stateful_list_table = Table(
    "stateful_list",
    mapper_registry.metadata,
    Column("name", String, primary_key=True),
    Column("id", String, nullable=False, unique=True),
    Column("input", StringTupleType, nullable=False),
    Column("output", StringTupleType, nullable=False),
)

TABLE_BY_RECORD_CLASS: dict[type[object], Table] = {
    ClaimFromPoolRecord: claim_from_pool_table,
    StatefulListRecord: stateful_list_table,
}


@cache
def start_mappers() -> orm.registry:
    """Configure SQLAlchemy mappers for the record classes."""

    log.info("Starting SQLAlchemy mappers")

    mapper_registry.map_imperatively(ClaimFromPoolRecord, claim_from_pool_table)
    mapper_registry.map_imperatively(StatefulListRecord, stateful_list_table)

    configure_mappers()
    return mapper_registry


def create_all_tables(engine: Engine) -> None:
    """Create database tables for the mapped metadata."""

    log.info("Creating all tables")
    mapper_registry.metadata.create_all(engine)
