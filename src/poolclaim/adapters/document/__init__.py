"""Desired-state document adapter."""

from __future__ import annotations

from .loader import DocumentFormatError, load_document, read_payload
from .schema import (
    CheckPayload,
    ClaimFromPoolPayload,
    DesiredStatePayload,
    StatefulListPayload,
)
from .translator import translate_document

__all__ = [
    "CheckPayload",
    "ClaimFromPoolPayload",
    "DesiredStatePayload",
    "DocumentFormatError",
    "StatefulListPayload",
    "load_document",
    "read_payload",
    "translate_document",
]
