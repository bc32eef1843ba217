"""Reusable fakes and builders for reconciliation tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING, Literal

from poolclaim.domain.model import (
    CheckConfig,
    ClaimFromPoolConfig,
    ClaimFromPoolRecord,
    Record,
    StatefulListConfig,
    StatefulListRecord,
)
from poolclaim.domain.ports.unit_of_work import StateRepositories
from poolclaim.domain.reconciliation import Severity
from poolclaim.domain.values import Deferred, Tokens

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence
    from types import TracebackType

    from poolclaim.domain.identifiers import Clock


def claim(
    name: str = "hosts",
    *,
    pool: Deferred[Tokens] = ("a", "b", "c"),
    claimers: Deferred[Tokens] = ("x", "y"),
) -> ClaimFromPoolConfig:
    return ClaimFromPoolConfig(name=name, pool=pool, claimers=claimers)


def stateful_list(
    name: str = "seen",
    *,
    values: Deferred[Tokens] = ("p", "q"),
) -> StatefulListConfig:
    return StatefulListConfig(name=name, input=values)


def check(
    condition: Deferred[bool],
    summary: str = "check failed",
    *,
    severity: Severity = Severity.BLOCKING,
    detail: str | None = None,
) -> CheckConfig:
    return CheckConfig(condition=condition, summary=summary, detail=detail, severity=severity)


class SequentialIdSource:
    """Deterministic id source issuing ``id-1``, ``id-2``, ..."""

    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self.issued: list[str] = []

    def __call__(self) -> str:
        record_id = f"{self.prefix}-{len(self.issued) + 1}"
        self.issued.append(record_id)
        return record_id


def make_clock(*moments: datetime) -> Clock:
    """Return a clock replaying ``moments``, repeating the last one forever."""

    remaining = list(moments) or [datetime(2025, 1, 1, tzinfo=UTC)]

    def _clock() -> datetime:
        if len(remaining) > 1:
            return remaining.pop(0)
        return remaining[0]

    return _clock


def ticking_clock(start: datetime, step: timedelta = timedelta(seconds=1)) -> Clock:
    current = [start]

    def _clock() -> datetime:
        moment = current[0]
        current[0] = moment + step
        return moment

    return _clock


class FakeRecordRepository[TRecord: Record]:
    """In-memory implementation of the record repository port."""

    def __init__(self, records: Iterable[TRecord] = ()) -> None:
        self.records: dict[str, TRecord] = {record.name: record for record in records}
        self.removed: list[TRecord] = []

    def get(self, name: str) -> TRecord | None:
        return self.records.get(name)

    def get_by_id(self, record_id: str) -> TRecord | None:
        for record in self.records.values():
            if record.id == record_id:
                return record
        return None

    def add(self, record: TRecord) -> None:
        self.records[record.name] = record

    def remove(self, record: TRecord) -> None:
        self.records.pop(record.name, None)
        self.removed.append(record)

    def list(self) -> Sequence[TRecord]:
        return sorted(self.records.values(), key=lambda record: record.name)


class FakeStateUnitOfWork:
    """Unit of work over in-memory repositories that records commits."""

    def __init__(
        self,
        claims: Iterable[ClaimFromPoolRecord] = (),
        lists: Iterable[StatefulListRecord] = (),
    ) -> None:
        self.claims = FakeRecordRepository[ClaimFromPoolRecord](claims)
        self.lists = FakeRecordRepository[StatefulListRecord](lists)
        self.repositories = StateRepositories(claims=self.claims, lists=self.lists)
        self.entered = 0
        self.commits = 0
        self.rolled_back = False

    @property
    def committed(self) -> bool:
        return self.commits > 0

    def __enter__(self) -> FakeStateUnitOfWork:
        self.entered += 1
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rolled_back = True
