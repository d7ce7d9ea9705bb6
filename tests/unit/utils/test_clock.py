from datetime import datetime, timedelta, timezone, UTC

import pytest
from freezegun import freeze_time

from shortlinks.utils.clock import utc_now, to_iso, from_iso


@freeze_time('2025-10-15 12:30:00')
def test_utc_now():
    now = utc_now()

    assert now == datetime(2025, 10, 15, 12, 30, tzinfo=UTC)
    assert now.tzinfo is not None


@pytest.mark.parametrize(
    'dt, expected',
    [
        (datetime(2025, 10, 15, 12, 30, tzinfo=UTC), '2025-10-15T12:30:00.000Z'),
        (datetime(2025, 10, 15, 12, 30, 1, 999999, tzinfo=UTC), '2025-10-15T12:30:01.999Z'),
        (datetime(2025, 10, 15, 14, 30, tzinfo=timezone(timedelta(hours=2))), '2025-10-15T12:30:00.000Z'),
        (datetime(2025, 10, 15, 12, 30), '2025-10-15T12:30:00.000Z'),
    ],
)
def test_to_iso(dt, expected):
    assert to_iso(dt) == expected


@pytest.mark.parametrize(
    'value, expected',
    [
        ('2025-10-15T12:30:00.000Z', datetime(2025, 10, 15, 12, 30, tzinfo=UTC)),
        ('2025-10-15T14:30:00+02:00', datetime(2025, 10, 15, 12, 30, tzinfo=UTC)),
        ('2025-10-15T12:30:00', datetime(2025, 10, 15, 12, 30, tzinfo=UTC)),
    ],
)
def test_from_iso(value, expected):
    assert from_iso(value) == expected


def test_from_iso_rejects_garbage():
    with pytest.raises(ValueError):
        from_iso('yesterday')
