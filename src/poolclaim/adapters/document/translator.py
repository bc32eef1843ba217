"""Translate validated document payloads into domain configuration."""

from __future__ import annotations

from typing import TYPE_CHECKING

from poolclaim.domain.model import (
    CheckConfig,
    ClaimFromPoolConfig,
    DesiredState,
    StatefulListConfig,
)
from poolclaim.domain.reconciliation import Severity
from poolclaim.domain.values import UNKNOWN, Deferred, Tokens

if TYPE_CHECKING:
    from .schema import CheckPayload, DesiredStatePayload


def _tokens(values: list[str | None] | None) -> Deferred[Tokens]:
    if values is None:
        return UNKNOWN
    return tuple(UNKNOWN if value is None else value for value in values)


def _check(payload: CheckPayload, severity: Severity) -> CheckConfig:
    return CheckConfig(
        condition=UNKNOWN if payload.condition is None else payload.condition,
        summary=payload.summary,
        detail=payload.details,
        severity=severity,
    )


def translate_document(payload: DesiredStatePayload) -> DesiredState:
    """Build the domain ``DesiredState`` for a validated document."""

    claims = tuple(
        ClaimFromPoolConfig(
            name=name,
            pool=_tokens(claim.pool),
            claimers=_tokens(claim.claimers),
        )
        for name, claim in payload.claim_from_pool.items()
    )
    lists = tuple(
        StatefulListConfig(name=name, input=_tokens(stateful_list.input))
        for name, stateful_list in payload.stateful_list.items()
    )
    checks = tuple(_check(check, Severity.BLOCKING) for check in payload.error) + tuple(
        _check(check, Severity.NON_BLOCKING) for check in payload.warning
    )
    return DesiredState(claims=claims, lists=lists, checks=checks)
