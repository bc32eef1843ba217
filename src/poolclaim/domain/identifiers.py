"""Record identifier generation.

Identifiers are opaque, time-derived tokens assigned once when a record is
created. The clock is injected so that planning and tests stay deterministic.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Protocol


class Clock(Protocol):
    def __call__(self) -> datetime: ...


class RecordIdSource(Protocol):
    def __call__(self) -> str: ...


def _utcnow() -> datetime:
    return datetime.now(UTC)


def format_record_id(moment: datetime) -> str:
    """Render ``moment`` as an RFC 3339 UTC timestamp with trimmed fractional seconds."""

    if moment.tzinfo is None:
        raise ValueError("Record id timestamps must include timezone information")
    moment = moment.astimezone(UTC)
    rendered = moment.strftime("%Y-%m-%dT%H:%M:%S")
    if moment.microsecond:
        rendered += f".{moment.microsecond:06d}".rstrip("0")
    return rendered + "Z"


class TimestampIdSource:
    """Issue strictly increasing timestamp ids from a clock.

    A clock that stalls or steps backwards yields the previous id plus one
    microsecond.
    """

    def __init__(self, clock: Clock = _utcnow) -> None:
        self._clock = clock
        self._last: datetime | None = None

    def __call__(self) -> str:
        moment = self._clock()
        if moment.tzinfo is None:
            raise ValueError("Clock must return timezone-aware datetimes")
        moment = moment.astimezone(UTC)
        if self._last is not None and moment <= self._last:
            moment = self._last + timedelta(microseconds=1)
        self._last = moment
        return format_record_id(moment)


__all__ = ["Clock", "RecordIdSource", "TimestampIdSource", "format_record_id"]
