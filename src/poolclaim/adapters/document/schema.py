"""Pydantic models describing the desired-state document.

``null`` stands for a value that is not known yet, in place of a collection, a
collection element, or a check condition.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _strip_summary(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValueError("summary must not be blank")
        return stripped
    return value


class DocumentBaseModel(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class ClaimFromPoolPayload(DocumentBaseModel):
    pool: list[str | None] | None
    claimers: list[str | None] | None


class StatefulListPayload(DocumentBaseModel):
    input: list[str | None] | None


class CheckPayload(DocumentBaseModel):
    condition: bool | None
    summary: str
    details: str | None = None

    _normalize_summary = field_validator("summary", mode="before")(_strip_summary)


class DesiredStatePayload(DocumentBaseModel):
    claim_from_pool: dict[str, ClaimFromPoolPayload] = Field(
        default_factory=dict["str", "ClaimFromPoolPayload"]
    )
    stateful_list: dict[str, StatefulListPayload] = Field(
        default_factory=dict["str", "StatefulListPayload"]
    )
    error: list[CheckPayload] = Field(default_factory=list["CheckPayload"])
    warning: list[CheckPayload] = Field(default_factory=list["CheckPayload"])

    @field_validator("claim_from_pool", "stateful_list")
    @classmethod
    def _validate_names(cls, value: dict[str, object]) -> dict[str, object]:
        for name in value:
            if not name.strip():
                raise ValueError("record names must not be blank")
            if "." in name:
                raise ValueError(f"record name {name!r} must not contain '.'")
        return value
