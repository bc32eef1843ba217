"""Reconciliation core shared by the claim-from-pool and stateful-list records.

Both engines are pure functions of (previous persisted state, desired input).
The driver calls them once while planning and once while applying; identical
input must yield identical output at both call points.
"""

from __future__ import annotations

from .accumulator import accumulate
from .assignment import prune_assignment, reconcile_assignment
from .diagnostics import Diagnostic, Diagnostics, Severity, evaluate_check
from .sets import difference, unique
from .validation import validate_capacity

__all__ = [
    "Diagnostic",
    "Diagnostics",
    "Severity",
    "accumulate",
    "difference",
    "evaluate_check",
    "prune_assignment",
    "reconcile_assignment",
    "unique",
    "validate_capacity",
]
