# ruff: noqa: T201

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from signal import SIGINT, signal
from typing import TYPE_CHECKING, cast

from dotenv import load_dotenv

from poolclaim.app import apply_file, import_state, plan_file, show_state
from poolclaim.config import configure_logging
from poolclaim.domain.errors import BlockingDiagnosticError, UnresolvedValueError
from poolclaim.domain.model import (
    Change,
    ChangeAction,
    ClaimFromPoolRecord,
    ClaimFromPoolState,
    Record,
    RecordKind,
    StatefulListState,
)
from poolclaim.domain.values import UNKNOWN

if TYPE_CHECKING:
    from collections.abc import Sequence
    from types import FrameType

log = logging.getLogger(__name__)

_ACTION_SYMBOLS = {
    ChangeAction.CREATE: "+",
    ChangeAction.UPDATE: "~",
    ChangeAction.DELETE: "-",
    ChangeAction.NOOP: " ",
}


def _parse_args(argv: Sequence[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Reconcile pool claims and stateful lists against a desired-state document"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    plan = subparsers.add_parser("plan", help="Preview the changes a document would make")
    plan.add_argument("document", type=Path, help="Desired-state document (.json or .toml)")

    apply = subparsers.add_parser("apply", help="Commit a document to the state store")
    apply.add_argument("document", type=Path, help="Desired-state document (.json or .toml)")

    importer = subparsers.add_parser("import", help="Bring an existing record id under management")
    importer.add_argument(
        "kind",
        type=RecordKind,
        choices=list(RecordKind),
        help="Record kind",
    )
    importer.add_argument("name", type=str, help="Record name used in the document")
    importer.add_argument("record_id", type=str, help="Existing record id")

    show = subparsers.add_parser("show", help="Print stored records as JSON")
    show.add_argument("--id", dest="record_id", type=str, help="Only show the record with this id")

    return parser.parse_args(list(argv))


def _format_value(value: object) -> str:
    if value is UNKNOWN:
        return str(UNKNOWN)
    if isinstance(value, dict):
        return json.dumps(value)
    if isinstance(value, tuple):
        items = cast(tuple[object, ...], value)
        return json.dumps([str(item) if item is UNKNOWN else item for item in items])
    return str(value)


def _state_attributes(state: ClaimFromPoolState | StatefulListState | None) -> dict[str, object]:
    if state is None:
        return {}
    if isinstance(state, ClaimFromPoolState):
        return {
            "id": state.id,
            "pool": state.pool,
            "claimers": state.claimers,
            "assignment": state.assignment,
        }
    return {"id": state.id, "input": state.input, "output": state.output}


def render_change(change: Change) -> list[str]:
    """Render one change as indented attribute lines."""

    lines = [f"{_ACTION_SYMBOLS[change.action]} {change.address} ({change.action})"]
    if change.action is ChangeAction.NOOP:
        return lines
    before = _state_attributes(change.before)
    after = _state_attributes(change.after)
    for attribute in after or before:
        old = before.get(attribute)
        new = after.get(attribute)
        if change.action is ChangeAction.UPDATE and old == new:
            continue
        if change.action is ChangeAction.CREATE:
            lines.append(f"    {attribute} = {_format_value(new)}")
        elif change.action is ChangeAction.DELETE:
            lines.append(f"    {attribute} = {_format_value(old)}")
        else:
            lines.append(f"    {attribute}: {_format_value(old)} -> {_format_value(new)}")
    return lines


def record_payload(record: Record) -> dict[str, object]:
    if isinstance(record, ClaimFromPoolRecord):
        return {
            "kind": str(record.KIND),
            "name": record.name,
            "id": record.id,
            "pool": list(record.pool),
            "claimers": list(record.claimers),
            "assignment": dict(record.assignment),
        }
    return {
        "kind": str(record.KIND),
        "name": record.name,
        "id": record.id,
        "input": list(record.input),
        "output": list(record.output),
    }


def _log_changes(changes: Sequence[Change]) -> None:
    for change in changes:
        for line in render_change(change):
            log.info("%s", line)


def main(argv: Sequence[str] | None = None) -> None:
    """Main application entry point."""
    configure_logging()
    args_list = list(argv) if argv is not None else list(sys.argv[1:])
    parsed_args = _parse_args(args_list)

    try:
        if parsed_args.command == "plan":
            plan_result = plan_file(parsed_args.document)
            _log_changes(plan_result.changes)
            if not plan_result.has_changes:
                log.info("No changes. State matches the document.")
        elif parsed_args.command == "apply":
            apply_result = apply_file(parsed_args.document)
            _log_changes(apply_result.changes)
        elif parsed_args.command == "import":
            record = import_state(parsed_args.kind, parsed_args.name, parsed_args.record_id)
            log.info("Import successful: %s.%s", record.KIND, record.name)
        elif parsed_args.command == "show":
            records = show_state(record_id=parsed_args.record_id)
            print(json.dumps([record_payload(record) for record in records], indent=2))
        else:
            raise ValueError(f"Unsupported command: {parsed_args.command}")  # noqa: TRY301

    except BlockingDiagnosticError as exc:
        for diagnostic in exc.diagnostics:
            log.error("%s", diagnostic)  # noqa: TRY400
        sys.exit(1)
    except (FileNotFoundError, ValueError, UnresolvedValueError):
        log.exception("Invalid input")
        sys.exit(2)
    except Exception:
        log.exception("Fatal error during reconciliation")
        sys.exit(1)


def sigint_handler(_signal_received: int, _frame: FrameType | None) -> None:
    """Handle SIGINT (Ctrl+C) gracefully."""
    log.info("Closed by user (Ctrl+C)")
    sys.exit(0)


def run() -> None:
    """Console-script entry point."""
    load_dotenv()
    signal(SIGINT, sigint_handler)
    main()


if __name__ == "__main__":
    run()
