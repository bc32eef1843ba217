"""Conditional diagnostics raised from desired-state checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum

from poolclaim.domain.errors import BlockingDiagnosticError
from poolclaim.domain.values import UNKNOWN, Deferred


class Severity(StrEnum):
    """Whether a diagnostic halts the invocation."""

    BLOCKING = "blocking"
    NON_BLOCKING = "non_blocking"


@dataclass(frozen=True, slots=True, kw_only=True)
class Diagnostic:
    severity: Severity
    summary: str
    detail: str = ""

    @property
    def blocking(self) -> bool:
        return self.severity is Severity.BLOCKING

    def __str__(self) -> str:
        label = "Error" if self.blocking else "Warning"
        if self.detail:
            return f"{label}: {self.summary}\n  {self.detail}"
        return f"{label}: {self.summary}"


def evaluate_check(
    condition: Deferred[bool],
    summary: str,
    detail: str | None = None,
    *,
    severity: Severity,
) -> Diagnostic | None:
    """Return a diagnostic when ``condition`` is false.

    An unknown condition produces nothing; the check runs once the condition
    can be evaluated.
    """

    if condition is UNKNOWN or condition:
        return None
    return Diagnostic(severity=severity, summary=summary, detail=detail or "")


@dataclass(slots=True)
class Diagnostics:
    """Diagnostics collected during one invocation."""

    items: list[Diagnostic] = field(default_factory=list["Diagnostic"])

    def append(self, diagnostic: Diagnostic | None) -> None:
        if diagnostic is not None:
            self.items.append(diagnostic)

    def extend(self, diagnostics: Diagnostics) -> None:
        self.items.extend(diagnostics.items)

    def add_error(self, summary: str, detail: str = "") -> None:
        self.items.append(Diagnostic(severity=Severity.BLOCKING, summary=summary, detail=detail))

    def add_warning(self, summary: str, detail: str = "") -> None:
        self.items.append(
            Diagnostic(severity=Severity.NON_BLOCKING, summary=summary, detail=detail)
        )

    @property
    def blocking(self) -> list[Diagnostic]:
        return [item for item in self.items if item.blocking]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [item for item in self.items if not item.blocking]

    @property
    def has_blocking(self) -> bool:
        return any(item.blocking for item in self.items)

    def raise_for_blocking(self) -> None:
        if self.has_blocking:
            raise BlockingDiagnosticError(self.blocking)

    def __len__(self) -> int:
        return len(self.items)
