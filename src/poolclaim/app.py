"""Application orchestration entry points."""

from __future__ import annotations

from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from poolclaim.adapters.document import load_document
from poolclaim.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyStateUnitOfWork,
    is_started,
    startup,
)
from poolclaim.domain.identifiers import TimestampIdSource
from poolclaim.domain.ports.unit_of_work import StateUnitOfWork
from poolclaim.domain.state_sync import (
    ApplyResult,
    PlanResult,
    apply_document,
    find_record,
    import_record,
    list_records,
    plan_document,
)

if TYPE_CHECKING:
    from pathlib import Path

    from poolclaim.domain.identifiers import RecordIdSource
    from poolclaim.domain.model import Record, RecordKind

UnitOfWorkFactory = Callable[[], StateUnitOfWork]


log = getLogger(__name__)


def _resolve_unit_of_work(factory: UnitOfWorkFactory | None) -> UnitOfWorkFactory:
    if factory is not None:
        return factory
    if not is_started():
        startup()
    return SqlAlchemyStateUnitOfWork


def plan_file(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> PlanResult:
    """Preview the changes the document at ``path`` would make."""

    desired = load_document(path)
    log.info(
        "Planning %s: %s claim_from_pool, %s stateful_list, %s checks",
        path,
        len(desired.claims),
        len(desired.lists),
        len(desired.checks),
    )
    return plan_document(desired, unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory))


def apply_file(
    path: Path,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    id_source: RecordIdSource | None = None,
) -> ApplyResult:
    """Commit the document at ``path`` to the state store."""

    desired = load_document(path)
    log.info("Applying %s", path)
    return apply_document(
        desired,
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
        id_source=id_source or TimestampIdSource(),
    )


def import_state(
    kind: RecordKind,
    name: str,
    record_id: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> Record:
    """Bring an existing record id under management as ``kind.name``."""

    return import_record(
        kind,
        name,
        record_id,
        unit_of_work_factory=_resolve_unit_of_work(unit_of_work_factory),
    )


def show_state(
    *,
    record_id: str | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> list[Record]:
    """Return stored records, or only the record with ``record_id``."""

    factory = _resolve_unit_of_work(unit_of_work_factory)
    if record_id is not None:
        return [find_record(record_id, unit_of_work_factory=factory)]
    return list_records(unit_of_work_factory=factory)
