"""Per-record lifecycle shared by the plan and apply call points.

``plan_*`` is the single pure reconciliation step for a record kind. ``commit_*``
calls the same function and only adds what committing needs: every value must
be known, and a new record draws its id from the injected source.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from poolclaim.domain.errors import UnresolvedValueError
from poolclaim.domain.model import (
    ChangeAction,
    ClaimFromPoolRecord,
    ClaimFromPoolState,
    RecordKind,
    StatefulListRecord,
    StatefulListState,
)
from poolclaim.domain.reconciliation import (
    accumulate,
    reconcile_assignment,
    unique,
    validate_capacity,
)
from poolclaim.domain.values import UNKNOWN, Deferred, Tokens, known_tokens

if TYPE_CHECKING:
    from poolclaim.domain.identifiers import RecordIdSource
    from poolclaim.domain.model import (
        ClaimFromPoolConfig,
        RecordState,
        StatefulListConfig,
    )


def _collapse(values: Deferred[Tokens]) -> Deferred[Tokens]:
    resolved = known_tokens(values)
    return values if resolved is None else unique(resolved)


def _require_tokens(values: Deferred[Tokens], *, address: str, attribute: str) -> tuple[str, ...]:
    resolved = known_tokens(values)
    if resolved is None:
        raise UnresolvedValueError(address, attribute)
    return resolved


def classify_change(before: RecordState | None, after: RecordState) -> ChangeAction:
    if before is None:
        return ChangeAction.CREATE
    return ChangeAction.NOOP if before == after else ChangeAction.UPDATE


# claim_from_pool -------------------------------------------------------------


def plan_claim_from_pool(
    prior: ClaimFromPoolState | None,
    config: ClaimFromPoolConfig,
) -> ClaimFromPoolState:
    """Compute the next claim-from-pool state from ``prior`` and ``config``."""

    validate_capacity(config.pool, config.claimers)

    record_id = prior.id if prior is not None else UNKNOWN
    pool = known_tokens(config.pool)
    claimers = known_tokens(config.claimers)
    if pool is None or claimers is None:
        return ClaimFromPoolState(
            id=record_id,
            pool=_collapse(config.pool),
            claimers=_collapse(config.claimers),
            assignment=UNKNOWN,
        )

    previous = None
    if prior is not None and prior.assignment is not UNKNOWN:
        previous = prior.assignment
    return ClaimFromPoolState(
        id=record_id,
        pool=unique(pool),
        claimers=unique(claimers),
        assignment=reconcile_assignment(previous, pool, claimers),
    )


def commit_claim_from_pool(
    prior: ClaimFromPoolRecord | None,
    config: ClaimFromPoolConfig,
    *,
    id_source: RecordIdSource,
) -> ClaimFromPoolRecord:
    """Apply the planned state to ``prior`` or to a freshly identified record."""

    planned = plan_claim_from_pool(prior.snapshot() if prior is not None else None, config)
    address = f"{RecordKind.CLAIM_FROM_POOL}.{config.name}"
    pool = _require_tokens(planned.pool, address=address, attribute="pool")
    claimers = _require_tokens(planned.claimers, address=address, attribute="claimers")
    if planned.assignment is UNKNOWN:
        raise UnresolvedValueError(address, "assignment")

    if prior is None:
        return ClaimFromPoolRecord(
            name=config.name,
            id=id_source(),
            pool=pool,
            claimers=claimers,
            assignment=dict(planned.assignment),
        )
    prior.pool = pool
    prior.claimers = claimers
    prior.assignment = dict(planned.assignment)
    return prior


def import_claim_from_pool(name: str, record_id: str) -> ClaimFromPoolRecord:
    """Re-hydrate a record from its id alone; the next cycle fills in the rest."""

    return ClaimFromPoolRecord(name=name, id=record_id)


# stateful_list ---------------------------------------------------------------


def plan_stateful_list(
    prior: StatefulListState | None,
    config: StatefulListConfig,
) -> StatefulListState:
    """Compute the next stateful-list state from ``prior`` and ``config``."""

    record_id = prior.id if prior is not None else UNKNOWN
    desired = known_tokens(config.input)
    if desired is None:
        return StatefulListState(id=record_id, input=config.input, output=UNKNOWN)

    previous = None
    if prior is not None:
        previous = known_tokens(prior.output)
    return StatefulListState(
        id=record_id,
        input=unique(desired),
        output=accumulate(previous, desired),
    )


def commit_stateful_list(
    prior: StatefulListRecord | None,
    config: StatefulListConfig,
    *,
    id_source: RecordIdSource,
) -> StatefulListRecord:
    """Apply the planned state to ``prior`` or to a freshly identified record."""

    planned = plan_stateful_list(prior.snapshot() if prior is not None else None, config)
    address = f"{RecordKind.STATEFUL_LIST}.{config.name}"
    desired = _require_tokens(planned.input, address=address, attribute="input")
    output = _require_tokens(planned.output, address=address, attribute="output")

    if prior is None:
        return StatefulListRecord(name=config.name, id=id_source(), input=desired, output=output)
    prior.input = desired
    prior.output = output
    return prior


def import_stateful_list(name: str, record_id: str) -> StatefulListRecord:
    """Re-hydrate a record from its id alone; the next cycle fills in the rest."""

    return StatefulListRecord(name=name, id=record_id)
