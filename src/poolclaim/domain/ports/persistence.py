"""Ports for persisting reconciliation records."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from poolclaim.domain.model import ClaimFromPoolRecord, StatefulListRecord


@runtime_checkable
class RecordRepository[TRecord](Protocol):
    """Store of records of one kind, addressed by name and by record id."""

    def get(self, name: str) -> TRecord | None: ...

    def get_by_id(self, record_id: str) -> TRecord | None: ...

    def add(self, record: TRecord) -> None: ...

    def remove(self, record: TRecord) -> None: ...

    def list(self) -> Sequence[TRecord]: ...


@runtime_checkable
class ClaimFromPoolRepository(RecordRepository[ClaimFromPoolRecord], Protocol):
    """Repository contract for claim-from-pool records."""


@runtime_checkable
class StatefulListRepository(RecordRepository[StatefulListRecord], Protocol):
    """Repository contract for stateful-list records."""
