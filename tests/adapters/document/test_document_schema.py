from __future__ import annotations

import pytest
from pydantic import ValidationError

from poolclaim.adapters.document import DesiredStatePayload, translate_document
from poolclaim.domain.reconciliation import Severity
from poolclaim.domain.values import UNKNOWN


@pytest.fixture
def sample_payload() -> dict[str, object]:
    return {
        "claim_from_pool": {
            "hosts": {"pool": ["a", "b", None], "claimers": ["x"]},
            "later": {"pool": None, "claimers": ["y"]},
        },
        "stateful_list": {"seen": {"input": ["p", "q"]}},
        "error": [{"condition": False, "summary": " must hold ", "details": "why"}],
        "warning": [{"condition": None, "summary": "maybe"}],
    }


def test_translate_maps_null_to_unknown(sample_payload: dict[str, object]) -> None:
    desired = translate_document(DesiredStatePayload.model_validate(sample_payload))

    hosts, later = desired.claims
    assert hosts.name == "hosts"
    assert hosts.pool == ("a", "b", UNKNOWN)
    assert hosts.claimers == ("x",)
    assert later.pool is UNKNOWN
    assert desired.lists[0].input == ("p", "q")


def test_translate_orders_errors_before_warnings(sample_payload: dict[str, object]) -> None:
    desired = translate_document(DesiredStatePayload.model_validate(sample_payload))

    error, warning = desired.checks
    assert error.severity is Severity.BLOCKING
    assert error.summary == "must hold"
    assert error.detail == "why"
    assert warning.severity is Severity.NON_BLOCKING
    assert warning.condition is UNKNOWN


def test_empty_document_is_valid() -> None:
    desired = translate_document(DesiredStatePayload.model_validate({}))

    assert desired.claims == ()
    assert desired.lists == ()
    assert desired.checks == ()


@pytest.mark.parametrize(
    "payload",
    [
        {"unexpected": {}},
        {"claim_from_pool": {"hosts": {"pool": ["a"]}}},
        {"claim_from_pool": {"hosts": {"pool": ["a"], "claimers": [], "extra": 1}}},
        {"claim_from_pool": {"a.b": {"pool": [], "claimers": []}}},
        {"stateful_list": {" ": {"input": []}}},
        {"error": [{"condition": True, "summary": "   "}]},
        {"warning": [{"summary": "missing condition"}]},
    ],
)
def test_invalid_documents_are_rejected(payload: dict[str, object]) -> None:
    with pytest.raises(ValidationError):
        DesiredStatePayload.model_validate(payload)
