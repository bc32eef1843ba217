"""Records, desired configuration, and planned state for the two record kinds.

Records are what the state store persists. Configs are what the desired-state
document asks for. States are immutable snapshots shared by plan and apply; their
fields may still be ``UNKNOWN`` while planning.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

from poolclaim.domain.reconciliation.diagnostics import Severity
from poolclaim.domain.values import UNKNOWN, Deferred, Tokens


class RecordKind(StrEnum):
    CLAIM_FROM_POOL = "claim_from_pool"
    STATEFUL_LIST = "stateful_list"


class ChangeAction(StrEnum):
    CREATE = "create"
    UPDATE = "update"
    NOOP = "noop"
    DELETE = "delete"


# States ----------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class ClaimFromPoolState:
    id: Deferred[str] = UNKNOWN
    pool: Deferred[Tokens] = ()
    claimers: Deferred[Tokens] = ()
    assignment: Deferred[dict[str, str]] = field(default_factory=dict["str", "str"])


@dataclass(frozen=True, slots=True, kw_only=True)
class StatefulListState:
    id: Deferred[str] = UNKNOWN
    input: Deferred[Tokens] = ()
    output: Deferred[Tokens] = ()


type RecordState = ClaimFromPoolState | StatefulListState


# Records ---------------------------------------------------------------------


@dataclass(eq=False, kw_only=True)
class ClaimFromPoolRecord:
    """Persisted claimer -> pool item assignment, addressed by ``name``."""

    KIND: ClassVar[RecordKind] = RecordKind.CLAIM_FROM_POOL

    name: str
    id: str
    pool: tuple[str, ...] = ()
    claimers: tuple[str, ...] = ()
    assignment: dict[str, str] = field(default_factory=dict["str", "str"])

    def snapshot(self) -> ClaimFromPoolState:
        return ClaimFromPoolState(
            id=self.id,
            pool=tuple(self.pool),
            claimers=tuple(self.claimers),
            assignment=dict(self.assignment),
        )


@dataclass(eq=False, kw_only=True)
class StatefulListRecord:
    """Persisted accumulated output, addressed by ``name``."""

    KIND: ClassVar[RecordKind] = RecordKind.STATEFUL_LIST

    name: str
    id: str
    input: tuple[str, ...] = ()
    output: tuple[str, ...] = ()

    def snapshot(self) -> StatefulListState:
        return StatefulListState(id=self.id, input=tuple(self.input), output=tuple(self.output))


type Record = ClaimFromPoolRecord | StatefulListRecord


# Desired configuration -------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class ClaimFromPoolConfig:
    name: str
    pool: Deferred[Tokens]
    claimers: Deferred[Tokens]


@dataclass(frozen=True, slots=True, kw_only=True)
class StatefulListConfig:
    name: str
    input: Deferred[Tokens]


@dataclass(frozen=True, slots=True, kw_only=True)
class CheckConfig:
    condition: Deferred[bool]
    summary: str
    detail: str | None = None
    severity: Severity = Severity.BLOCKING


@dataclass(frozen=True, slots=True, kw_only=True)
class DesiredState:
    """Everything one desired-state document asks for."""

    claims: tuple[ClaimFromPoolConfig, ...] = ()
    lists: tuple[StatefulListConfig, ...] = ()
    checks: tuple[CheckConfig, ...] = ()


# Changes ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True, kw_only=True)
class Change:
    """Planned transition of one record from ``before`` to ``after``."""

    kind: RecordKind
    name: str
    action: ChangeAction
    before: RecordState | None = None
    after: RecordState | None = None

    @property
    def address(self) -> str:
        return f"{self.kind}.{self.name}"
