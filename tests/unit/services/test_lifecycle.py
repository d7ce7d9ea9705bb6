"""Unit tests for the record lifecycle

Test coverage includes:

1. Expiry
   - Ensures a record is active up to and including its expiry instant.

2. Record creation
   - Ensures expiry is creation time plus the validity period.
   - Ensures custom shortcodes are used as given (trimmed).
   - Ensures invalid validation results are refused.
   - Ensures shortcodes violating the policy never reach the store.
   - Ensures timestamps survive a round trip through the stored form.

3. Shortcode allocation
   - Ensures a taken custom shortcode is surfaced, never overwritten.
   - Ensures generated shortcodes are regenerated on collision, within a bounded budget.
   - Ensures generated shortcodes failing the policy are regenerated.
   - Ensures store failures propagate.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import pytest

from shortlinks.exceptions import InvalidEntryError, ShortcodeInUseError, ShortcodeAllocationError
from shortlinks.models import UrlEntryModel, UrlRecordModel, EntryValidationResult
from shortlinks.dao.base import UrlRecordBaseDAO
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.services.lifecycle import (
    RecordLifecycle,
    build_record,
    is_expired,
    GENERATED_SHORTCODE_COLLISION,
    GENERATED_SHORTCODE_REJECTED,
    URL_SHORTENED,
)
from shortlinks.utils.shortener import CONFUSABLE_CHARACTERS
from shortlinks.validation import validate_entry


# -------------------------------
# Fixtures
# -------------------------------


@pytest.fixture
def lifecycle(records, clock, random_source, events):
    return RecordLifecycle(records=records, clock=clock, random_source=random_source, events=events)


@pytest.fixture
def validation():
    return validate_entry(UrlEntryModel(long_url='example.com/article', validity_minutes=45))


@pytest.fixture
def custom_validation():
    return validate_entry(UrlEntryModel(long_url='example.com/article', shortcode=' my-link '))


# -------------------------------
# 1. Expiry
# -------------------------------


def test_is_expired_boundaries(now):
    record = build_record('abc123', 'https://example.com', 30, now)

    assert not is_expired(record, now)
    assert not is_expired(record, record.expiry_time)
    assert is_expired(record, record.expiry_time + timedelta(microseconds=1))


# -------------------------------
# 2. Record creation
# -------------------------------


def test_create_record_with_generated_shortcode(lifecycle, records, validation, now, events):
    record = lifecycle.create_record(validation)

    assert record.long_url == 'https://example.com/article'
    assert record.created_at == now
    assert record.expiry_time == now + timedelta(minutes=45)
    assert len(record.shortcode) in (6, 7, 8)
    assert not set(record.shortcode) & CONFUSABLE_CHARACTERS
    assert records.find(record.shortcode) == record

    event_names = [c.args[0] for c in events.log.call_args_list]
    assert event_names[-1] == URL_SHORTENED


def test_create_record_with_default_validity(lifecycle, now):
    record = lifecycle.create_record(validate_entry(UrlEntryModel(long_url='example.com')))

    assert record.expiry_time - record.created_at == timedelta(minutes=30)


def test_create_record_with_custom_shortcode(lifecycle, records, custom_validation):
    record = lifecycle.create_record(custom_validation)

    assert record.shortcode == 'my-link'
    assert records.find('my-link') == record


def test_create_record_from_invalid_entry(lifecycle, records):
    invalid = EntryValidationResult(is_valid=False, errors={'longUrl': 'URL is required'})

    with pytest.raises(InvalidEntryError):
        lifecycle.create_record(invalid)
    assert records.get_all() == []


@pytest.mark.parametrize('shortcode', ['admin', 'my0link', 'ab', ' my-link '])
def test_create_record_refuses_shortcode_violating_policy(lifecycle, records, shortcode):
    """Ensure a hand-built result cannot smuggle a rejected shortcode into the store."""
    validation = EntryValidationResult(
        is_valid=True,
        normalized_url='https://example.com',
        normalized_minutes=30,
        shortcode=shortcode,
    )

    with pytest.raises(InvalidEntryError):
        lifecycle.create_record(validation)
    assert records.get_all() == []


def test_build_record_keeps_milliseconds_only():
    now = datetime(2025, 10, 15, 12, 0, 0, 123456, tzinfo=timezone.utc)

    record = build_record('abc123', 'https://example.com', 30, now)

    assert record.created_at.microsecond == 123000
    assert record.expiry_time == record.created_at + timedelta(minutes=30)
    assert UrlRecordModel.from_dict(record.to_dict()) == record


# -------------------------------
# 3. Shortcode allocation
# -------------------------------


def test_taken_custom_shortcode_is_not_overwritten(lifecycle, records, custom_validation, now):
    original = build_record('my-link', 'https://original.example.com', 30, now)
    records.insert_if_absent(original)

    with pytest.raises(ShortcodeInUseError, match='This shortcode is already in use'):
        lifecycle.create_record(custom_validation)

    assert records.find('my-link') == original


def test_generated_shortcode_collision_is_retried(clock, random_source, events, validation):
    records = MagicMock(spec=UrlRecordBaseDAO)
    records.insert_if_absent.side_effect = [False, False, True]
    lifecycle = RecordLifecycle(records=records, clock=clock, random_source=random_source, events=events)

    record = lifecycle.create_record(validation)

    assert records.insert_if_absent.call_count == 3
    assert records.insert_if_absent.call_args.args[0] == record
    collisions = [c for c in events.log.call_args_list if c.args[0] == GENERATED_SHORTCODE_COLLISION]
    assert [c.kwargs['attempt'] for c in collisions] == [1, 2]


def test_generated_shortcode_allocation_gives_up(clock, random_source, events, validation):
    records = MagicMock(spec=UrlRecordBaseDAO)
    records.insert_if_absent.return_value = False
    lifecycle = RecordLifecycle(records=records, clock=clock, random_source=random_source, events=events, max_attempts=3)

    with pytest.raises(ShortcodeAllocationError):
        lifecycle.create_record(validation)

    assert records.insert_if_absent.call_count == 3
    events.warning.assert_called_once()


def test_generated_shortcode_failing_policy_is_regenerated(monkeypatch, lifecycle, records, validation, events):
    candidates = iter(['xbadass', 'Qwerty7'])
    monkeypatch.setattr('shortlinks.services.lifecycle.generate_shortcode', lambda source: next(candidates))

    record = lifecycle.create_record(validation)

    assert record.shortcode == 'Qwerty7'
    assert [r.shortcode for r in records.get_all()] == ['Qwerty7']
    rejected = [c for c in events.log.call_args_list if c.args[0] == GENERATED_SHORTCODE_REJECTED]
    assert len(rejected) == 1
    assert rejected[0].kwargs['shortcode'] == 'xbadass'


def test_store_failure_propagates(clock, random_source, events, custom_validation):
    records = MagicMock(spec=UrlRecordBaseDAO)
    records.insert_if_absent.side_effect = DataStoreError("Can't connect to Redis at redis:6379/0.")
    lifecycle = RecordLifecycle(records=records, clock=clock, random_source=random_source, events=events)

    with pytest.raises(DataStoreError):
        lifecycle.create_record(custom_validation)
