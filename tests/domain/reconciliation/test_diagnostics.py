from __future__ import annotations

import pytest

from poolclaim.domain.errors import BlockingDiagnosticError
from poolclaim.domain.reconciliation import Diagnostic, Diagnostics, Severity, evaluate_check
from poolclaim.domain.values import UNKNOWN


def test_false_condition_emits_diagnostic() -> None:
    diagnostic = evaluate_check(False, "bad", "details here", severity=Severity.BLOCKING)

    assert diagnostic == Diagnostic(
        severity=Severity.BLOCKING, summary="bad", detail="details here"
    )
    assert diagnostic.blocking


def test_true_condition_emits_nothing() -> None:
    assert evaluate_check(True, "fine", severity=Severity.BLOCKING) is None


def test_unknown_condition_is_deferred() -> None:
    assert evaluate_check(UNKNOWN, "later", severity=Severity.NON_BLOCKING) is None


def test_warning_does_not_halt() -> None:
    diagnostics = Diagnostics()
    diagnostics.append(evaluate_check(False, "heads up", severity=Severity.NON_BLOCKING))

    diagnostics.raise_for_blocking()

    assert len(diagnostics) == 1
    assert diagnostics.warnings[0].summary == "heads up"
    assert not diagnostics.has_blocking


def test_blocking_diagnostic_halts_with_all_errors() -> None:
    diagnostics = Diagnostics()
    diagnostics.add_warning("only a warning")
    diagnostics.add_error("first")
    diagnostics.add_error("second", "more")

    with pytest.raises(BlockingDiagnosticError) as excinfo:
        diagnostics.raise_for_blocking()

    assert [item.summary for item in excinfo.value.diagnostics] == ["first", "second"]
    assert "first; second" in str(excinfo.value)


def test_diagnostic_string_includes_detail() -> None:
    error = Diagnostic(severity=Severity.BLOCKING, summary="bad", detail="why")
    warning = Diagnostic(severity=Severity.NON_BLOCKING, summary="meh")

    assert str(error) == "Error: bad\n  why"
    assert str(warning) == "Warning: meh"
