"""Errors raised by the reconciliation domain."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Sequence

    from poolclaim.domain.reconciliation.diagnostics import Diagnostic


class ReconciliationError(Exception):
    """Base class for reconciliation failures."""


class CapacityExceededError(ReconciliationError):
    """Raised when more claimers are desired than the pool can satisfy."""

    def __init__(self, *, claimers: int, pool: int) -> None:
        super().__init__(
            "Number of claimers shouldn't be higher than number of items in the pool "
            f"({claimers} claimers, {pool} pool items)"
        )
        self.claimers = claimers
        self.pool = pool


class StateIntegrityError(ReconciliationError):
    """Raised when persisted state violates an invariant of its record kind."""


class UnresolvedValueError(ReconciliationError):
    """Raised when a value is still unknown at the point it must be committed."""

    def __init__(self, address: str, attribute: str) -> None:
        super().__init__(f"{address}: '{attribute}' must be known before apply")
        self.address = address
        self.attribute = attribute


class BlockingDiagnosticError(ReconciliationError):
    """Raised when at least one blocking diagnostic halts the invocation."""

    def __init__(self, diagnostics: Sequence[Diagnostic]) -> None:
        summaries = "; ".join(diagnostic.summary for diagnostic in diagnostics)
        super().__init__(f"Reconciliation halted: {summaries}")
        self.diagnostics = tuple(diagnostics)


class RecordExistsError(ReconciliationError):
    """Raised when importing a record over an existing address or id."""


class RecordNotFoundError(ReconciliationError):
    """Raised when a record lookup by address or id fails."""
