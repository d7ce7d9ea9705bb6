"""Clock helpers

The core never reads the current time on its own. Services accept a `clock`
callable (see `shortlinks.types.Clock`) and default to `utc_now`, so tests can
pass a fixed clock or freeze time with freezegun.

Functions:
    utc_now() -> datetime
        Current time as an aware UTC datetime.
    to_iso(dt: datetime) -> str
        Serialize a datetime to the ISO-8601 wire format ('...T...Z', milliseconds).
    from_iso(value: str) -> datetime
        Parse an ISO-8601 string back into an aware UTC datetime.

Example:
    >>> from datetime import datetime, UTC
    >>> to_iso(datetime(2025, 10, 15, 12, 30, tzinfo=UTC))
    '2025-10-15T12:30:00.000Z'
    >>> from_iso('2025-10-15T12:30:00.000Z')
    datetime.datetime(2025, 10, 15, 12, 30, tzinfo=datetime.timezone.utc)
"""

from datetime import datetime, UTC


def utc_now() -> datetime:
    return datetime.now(UTC)


def to_iso(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    # fmt: off
    return dt.astimezone(UTC) \
             .isoformat(timespec='milliseconds') \
             .replace('+00:00', 'Z')
    # fmt: on


def from_iso(value: str) -> datetime:
    dt = datetime.fromisoformat(value)
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)
