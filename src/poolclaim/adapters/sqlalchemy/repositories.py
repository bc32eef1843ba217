"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from sqlalchemy import select

from poolclaim.adapters.sqlalchemy.mappings import TABLE_BY_RECORD_CLASS
from poolclaim.domain.model import ClaimFromPoolRecord, Record, StatefulListRecord

if TYPE_CHECKING:
    from collections.abc import Sequence

    from sqlalchemy.orm import Session


class SqlAlchemyRecordRepository[TRecord: Record]:
    """Shared helpers for repositories addressing records by name and by id."""

    def __init__(self, session: Session, record_cls: type[TRecord]) -> None:
        self.session = session
        self._record_cls = record_cls
        self._table = TABLE_BY_RECORD_CLASS[record_cls]

    def get(self, name: str) -> TRecord | None:
        return self.session.get(self._record_cls, name)

    def get_by_id(self, record_id: str) -> TRecord | None:
        stmt = select(self._record_cls).where(self._table.c.id == record_id).limit(1)
        return self.session.execute(stmt).scalar_one_or_none()

    def add(self, record: TRecord) -> None:
        self.session.add(record)

    def remove(self, record: TRecord) -> None:
        self.session.delete(record)

    def list(self) -> Sequence[TRecord]:
        stmt = select(self._record_cls).order_by(self._table.c.name)
        return self.session.execute(stmt).scalars().all()


class SqlAlchemyClaimFromPoolRepository(SqlAlchemyRecordRepository[ClaimFromPoolRecord]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, ClaimFromPoolRecord)


class SqlAlchemyStatefulListRepository(SqlAlchemyRecordRepository[StatefulListRecord]):
    def __init__(self, session: Session) -> None:
        super().__init__(session, StatefulListRecord)


if TYPE_CHECKING:
    from poolclaim.domain.ports.persistence import (
        ClaimFromPoolRepository,
        StatefulListRepository,
    )

    _session_stub = cast("Session", object())
    _claims_check: ClaimFromPoolRepository = SqlAlchemyClaimFromPoolRepository(_session_stub)
    _lists_check: StatefulListRepository = SqlAlchemyStatefulListRepository(_session_stub)
