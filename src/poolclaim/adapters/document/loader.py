"""Read desired-state documents from JSON or TOML files."""

from __future__ import annotations

import json
import logging
import tomllib
from typing import TYPE_CHECKING

from .schema import DesiredStatePayload
from .translator import translate_document

if TYPE_CHECKING:
    from pathlib import Path

    from poolclaim.domain.model import DesiredState

log = logging.getLogger(__name__)


class DocumentFormatError(ValueError):
    """Raised when a document file cannot be decoded."""


def read_payload(path: Path) -> DesiredStatePayload:
    """Decode and validate the document at ``path``.

    TOML has no null, so documents with unknown values must be JSON.
    """

    suffix = path.suffix.lower()
    try:
        if suffix == ".toml":
            with path.open("rb") as handle:
                data: object = tomllib.load(handle)
        elif suffix == ".json":
            with path.open(encoding="utf-8") as handle:
                data = json.load(handle)
        else:
            raise DocumentFormatError(f"Unsupported document format: {path.name}")
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise DocumentFormatError(f"Cannot decode {path}: {exc}") from exc

    log.debug("Loaded desired-state document from %s", path)
    return DesiredStatePayload.model_validate(data)


def load_document(path: Path) -> DesiredState:
    """Read ``path`` and translate it into the domain desired state."""

    return translate_document(read_payload(path))
