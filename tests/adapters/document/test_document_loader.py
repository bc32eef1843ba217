from __future__ import annotations

import json
from pathlib import Path  # noqa: TC003

import pytest
from pydantic import ValidationError

from poolclaim.adapters.document import DocumentFormatError, load_document, read_payload
from poolclaim.domain.values import UNKNOWN


def test_load_json_document(tmp_path: Path) -> None:
    path = tmp_path / "desired.json"
    path.write_text(
        json.dumps(
            {
                "claim_from_pool": {"hosts": {"pool": ["a", "b"], "claimers": None}},
                "warning": [{"condition": True, "summary": "fine"}],
            }
        ),
        encoding="utf-8",
    )

    desired = load_document(path)

    assert desired.claims[0].pool == ("a", "b")
    assert desired.claims[0].claimers is UNKNOWN
    assert desired.checks[0].condition is True


def test_load_toml_document(tmp_path: Path) -> None:
    path = tmp_path / "desired.toml"
    path.write_text(
        '[claim_from_pool.hosts]\npool = ["a", "b", "c"]\nclaimers = ["x", "y"]\n\n'
        '[stateful_list.seen]\ninput = ["p"]\n\n'
        '[[error]]\ncondition = true\nsummary = "ok"\n',
        encoding="utf-8",
    )

    desired = load_document(path)

    assert desired.claims[0].claimers == ("x", "y")
    assert desired.lists[0].input == ("p",)
    assert len(desired.checks) == 1


def test_unsupported_suffix_is_rejected(tmp_path: Path) -> None:
    path = tmp_path / "desired.yaml"
    path.write_text("claim_from_pool: {}\n", encoding="utf-8")

    with pytest.raises(DocumentFormatError, match="Unsupported"):
        read_payload(path)


def test_undecodable_document_is_wrapped(tmp_path: Path) -> None:
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(DocumentFormatError, match="Cannot decode"):
        read_payload(path)


def test_schema_errors_surface_as_validation_errors(tmp_path: Path) -> None:
    path = tmp_path / "desired.json"
    path.write_text(json.dumps({"claim_from_pool": []}), encoding="utf-8")

    with pytest.raises(ValidationError):
        read_payload(path)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        read_payload(tmp_path / "absent.json")
