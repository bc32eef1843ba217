"""Application services reconciling a desired-state document against the store.

``plan_document`` and ``apply_document`` are the preview and commit call points.
Both run the same preflight checks and the same per-record planning functions;
apply additionally persists the result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from poolclaim.domain.errors import (
    CapacityExceededError,
    RecordExistsError,
    RecordNotFoundError,
    UnresolvedValueError,
)
from poolclaim.domain.lifecycle import (
    classify_change,
    commit_claim_from_pool,
    commit_stateful_list,
    import_claim_from_pool,
    import_stateful_list,
    plan_claim_from_pool,
    plan_stateful_list,
)
from poolclaim.domain.model import Change, ChangeAction, RecordKind
from poolclaim.domain.reconciliation import Diagnostics, evaluate_check, validate_capacity
from poolclaim.domain.values import is_known

if TYPE_CHECKING:
    from collections.abc import Callable

    from poolclaim.domain.identifiers import RecordIdSource
    from poolclaim.domain.model import DesiredState, Record
    from poolclaim.domain.ports.unit_of_work import StateRepositories, StateUnitOfWork

    UnitOfWorkFactory = Callable[[], StateUnitOfWork]


log = getLogger(__name__)


@dataclass(slots=True)
class PlanResult:
    """Outcome of previewing a desired-state document."""

    changes: list[Change] = field(default_factory=list["Change"])
    diagnostics: Diagnostics = field(default_factory=Diagnostics)

    def count(self, action: ChangeAction) -> int:
        return sum(1 for change in self.changes if change.action is action)

    @property
    def has_changes(self) -> bool:
        return any(change.action is not ChangeAction.NOOP for change in self.changes)


@dataclass(slots=True)
class ApplyResult:
    """Outcome of committing a desired-state document."""

    changes: list[Change] = field(default_factory=list["Change"])
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    created: int = 0
    updated: int = 0
    deleted: int = 0
    unchanged: int = 0

    def record(self, change: Change) -> None:
        self.changes.append(change)
        match change.action:
            case ChangeAction.CREATE:
                self.created += 1
            case ChangeAction.UPDATE:
                self.updated += 1
            case ChangeAction.DELETE:
                self.deleted += 1
            case ChangeAction.NOOP:
                self.unchanged += 1


def check_desired_state(desired: DesiredState) -> Diagnostics:
    """Evaluate user checks and capacity validation without touching state."""

    diagnostics = Diagnostics()
    for check in desired.checks:
        diagnostics.append(
            evaluate_check(check.condition, check.summary, check.detail, severity=check.severity)
        )
    for claim in desired.claims:
        try:
            validate_capacity(claim.pool, claim.claimers)
        except CapacityExceededError as exc:
            diagnostics.add_error(
                f"{RecordKind.CLAIM_FROM_POOL}.{claim.name}: Number of claimers shouldn't be "
                "higher than number of items in the pool",
                f"{exc.claimers} claimers requested, {exc.pool} pool items available",
            )
    return diagnostics


def _preflight(desired: DesiredState) -> Diagnostics:
    diagnostics = check_desired_state(desired)
    for warning in diagnostics.warnings:
        log.warning("%s", warning)
    diagnostics.raise_for_blocking()
    return diagnostics


def _require_resolved(desired: DesiredState) -> None:
    for index, check in enumerate(desired.checks):
        if not is_known(check.condition):
            raise UnresolvedValueError(f"check[{index}]", "condition")
    for claim in desired.claims:
        address = f"{RecordKind.CLAIM_FROM_POOL}.{claim.name}"
        if not is_known(claim.pool):
            raise UnresolvedValueError(address, "pool")
        if not is_known(claim.claimers):
            raise UnresolvedValueError(address, "claimers")
    for stateful_list in desired.lists:
        if not is_known(stateful_list.input):
            raise UnresolvedValueError(f"{RecordKind.STATEFUL_LIST}.{stateful_list.name}", "input")


def _plan_changes(desired: DesiredState, repositories: StateRepositories) -> list[Change]:
    changes: list[Change] = []

    for claim in desired.claims:
        prior = repositories.claims.get(claim.name)
        before = prior.snapshot() if prior is not None else None
        after = plan_claim_from_pool(before, claim)
        changes.append(
            Change(
                kind=RecordKind.CLAIM_FROM_POOL,
                name=claim.name,
                action=classify_change(before, after),
                before=before,
                after=after,
            )
        )

    for stateful_list in desired.lists:
        prior = repositories.lists.get(stateful_list.name)
        before = prior.snapshot() if prior is not None else None
        after = plan_stateful_list(before, stateful_list)
        changes.append(
            Change(
                kind=RecordKind.STATEFUL_LIST,
                name=stateful_list.name,
                action=classify_change(before, after),
                before=before,
                after=after,
            )
        )

    changes.extend(_orphan_changes(desired, repositories))
    return changes


def _orphan_changes(desired: DesiredState, repositories: StateRepositories) -> list[Change]:
    wanted_claims = {claim.name for claim in desired.claims}
    wanted_lists = {stateful_list.name for stateful_list in desired.lists}
    orphans: list[Change] = [
        Change(
            kind=RecordKind.CLAIM_FROM_POOL,
            name=record.name,
            action=ChangeAction.DELETE,
            before=record.snapshot(),
        )
        for record in repositories.claims.list()
        if record.name not in wanted_claims
    ]
    orphans.extend(
        Change(
            kind=RecordKind.STATEFUL_LIST,
            name=record.name,
            action=ChangeAction.DELETE,
            before=record.snapshot(),
        )
        for record in repositories.lists.list()
        if record.name not in wanted_lists
    )
    return orphans


def plan_document(
    desired: DesiredState,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
) -> PlanResult:
    """Preview the changes ``desired`` would make without persisting anything."""

    diagnostics = _preflight(desired)
    with unit_of_work_factory() as uow:
        changes = _plan_changes(desired, uow.repositories)

    result = PlanResult(changes=changes, diagnostics=diagnostics)
    log.info(
        "Plan: %s to create, %s to update, %s to delete, %s unchanged",
        result.count(ChangeAction.CREATE),
        result.count(ChangeAction.UPDATE),
        result.count(ChangeAction.DELETE),
        result.count(ChangeAction.NOOP),
    )
    return result


def apply_document(
    desired: DesiredState,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
    id_source: RecordIdSource,
) -> ApplyResult:
    """Reconcile every record against ``desired`` and persist the outcome."""

    diagnostics = _preflight(desired)
    _require_resolved(desired)
    result = ApplyResult(diagnostics=diagnostics)

    with unit_of_work_factory() as uow:
        repositories = uow.repositories

        for claim in desired.claims:
            prior = repositories.claims.get(claim.name)
            before = prior.snapshot() if prior is not None else None
            record = commit_claim_from_pool(prior, claim, id_source=id_source)
            if prior is None:
                repositories.claims.add(record)
            after = record.snapshot()
            result.record(
                Change(
                    kind=RecordKind.CLAIM_FROM_POOL,
                    name=claim.name,
                    action=classify_change(before, after),
                    before=before,
                    after=after,
                )
            )

        for stateful_list in desired.lists:
            prior = repositories.lists.get(stateful_list.name)
            before = prior.snapshot() if prior is not None else None
            record = commit_stateful_list(prior, stateful_list, id_source=id_source)
            if prior is None:
                repositories.lists.add(record)
            after = record.snapshot()
            result.record(
                Change(
                    kind=RecordKind.STATEFUL_LIST,
                    name=stateful_list.name,
                    action=classify_change(before, after),
                    before=before,
                    after=after,
                )
            )

        for change in _orphan_changes(desired, repositories):
            _remove(repositories, change.kind, change.name)
            log.info("Deleted %s", change.address)
            result.record(change)

        uow.commit()

    log.info(
        "Apply complete: %s created, %s updated, %s deleted, %s unchanged",
        result.created,
        result.updated,
        result.deleted,
        result.unchanged,
    )
    return result


def _remove(repositories: StateRepositories, kind: RecordKind, name: str) -> None:
    if kind is RecordKind.CLAIM_FROM_POOL:
        claim = repositories.claims.get(name)
        if claim is not None:
            repositories.claims.remove(claim)
        return
    stateful_list = repositories.lists.get(name)
    if stateful_list is not None:
        repositories.lists.remove(stateful_list)


def import_record(
    kind: RecordKind,
    name: str,
    record_id: str,
    *,
    unit_of_work_factory: UnitOfWorkFactory,
) -> Record:
    """Re-hydrate the record identified by ``record_id`` under ``name``."""

    if not record_id.strip():
        raise ValueError("Record id must not be blank")

    with unit_of_work_factory() as uow:
        repositories = uow.repositories
        owner: Record | None = repositories.claims.get_by_id(record_id)
        if owner is None:
            owner = repositories.lists.get_by_id(record_id)
        if kind is RecordKind.CLAIM_FROM_POOL:
            _ensure_free_address(repositories.claims.get(name), owner, kind, name, record_id)
            record: Record = import_claim_from_pool(name, record_id)
            repositories.claims.add(record)
        else:
            _ensure_free_address(repositories.lists.get(name), owner, kind, name, record_id)
            record = import_stateful_list(name, record_id)
            repositories.lists.add(record)
        uow.commit()

    log.info("Imported %s.%s with id %s", kind, name, record_id)
    return record


def _ensure_free_address(
    by_name: Record | None,
    owner: Record | None,
    kind: RecordKind,
    name: str,
    record_id: str,
) -> None:
    if by_name is not None:
        raise RecordExistsError(f"{kind}.{name} already exists in the state store")
    if owner is not None:
        raise RecordExistsError(
            f"Record id {record_id} already belongs to {owner.KIND}.{owner.name}"
        )


def list_records(*, unit_of_work_factory: UnitOfWorkFactory) -> list[Record]:
    """Return every stored record, claim-from-pool records first."""

    with unit_of_work_factory() as uow:
        records: list[Record] = list(uow.repositories.claims.list())
        records.extend(uow.repositories.lists.list())
    return records


def find_record(record_id: str, *, unit_of_work_factory: UnitOfWorkFactory) -> Record:
    """Look a record up by its id across all record kinds."""

    with unit_of_work_factory() as uow:
        record: Record | None = uow.repositories.claims.get_by_id(record_id)
        if record is None:
            record = uow.repositories.lists.get_by_id(record_id)
    if record is None:
        raise RecordNotFoundError(f"No record with id {record_id}")
    return record
