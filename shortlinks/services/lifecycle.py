"""Short URL record lifecycle

Creates records from validated entries and decides whether a record has
expired. Records are immutable: once inserted, nothing here changes them.

Functions:
    build_record(shortcode, long_url, minutes, now) -> UrlRecordModel
        Compute creation and expiry times for a new record.
    is_expired(record, now) -> bool
        True strictly after the expiry instant.

Classes:
    RecordLifecycle:
        Chooses the shortcode (custom or generated) and inserts the record
        through the store's atomic insert-if-absent, regenerating on collision.

Example:
    >>> lifecycle = RecordLifecycle(records=UrlRecordMemoryDAO())
    >>> validation = validate_entry(UrlEntryModel(long_url='example.com'))
    >>> record = lifecycle.create_record(validation)
    >>> record.long_url
    'https://example.com'
    >>> record.expiry_time - record.created_at
    datetime.timedelta(seconds=1800)
"""

import logging
from datetime import datetime, timedelta

from shortlinks.types import Clock
from shortlinks.constants import ShortcodeLimits, ValidityMinutes
from shortlinks.exceptions import InvalidEntryError, ShortcodeInUseError, ShortcodeAllocationError
from shortlinks.models import UrlRecordModel, EntryValidationResult
from shortlinks.dao.base import UrlRecordBaseDAO
from shortlinks.validation import is_valid_shortcode
from shortlinks.validation.entry_validator import SHORTCODE_IN_USE
from shortlinks.utils.clock import utc_now
from shortlinks.utils.logging import EventLogger
from shortlinks.utils.shortener import RandomSource, default_random_source, generate_shortcode


# Event names
URL_SHORTENED = 'URL_SHORTENED'
CUSTOM_SHORTCODE_TAKEN = 'CUSTOM_SHORTCODE_TAKEN'
GENERATED_SHORTCODE_COLLISION = 'GENERATED_SHORTCODE_COLLISION'
GENERATED_SHORTCODE_REJECTED = 'GENERATED_SHORTCODE_REJECTED'
SHORTCODE_ALLOCATION_FAILED = 'SHORTCODE_ALLOCATION_FAILED'

SHORTCODE_ALLOCATION_FAILED_MESSAGE = 'Could not allocate a shortcode, please try again'


def build_record(shortcode: str, long_url: str, minutes: int, now: datetime) -> UrlRecordModel:
    # The wire format keeps milliseconds; a stored copy must equal the returned record
    now = now.replace(microsecond=now.microsecond // 1000 * 1000)
    return UrlRecordModel(
        shortcode=shortcode,
        long_url=long_url,
        created_at=now,
        expiry_time=now + timedelta(minutes=minutes),
    )


def is_expired(record: UrlRecordModel, now: datetime) -> bool:
    # A visit at exactly the expiry instant is still valid
    return now > record.expiry_time


class RecordLifecycle:
    """Create short URL records and insert them into the record store.

    Attributes:
        records (UrlRecordBaseDAO):
            Record store; its insert_if_absent is the authoritative uniqueness check.
        clock (Clock):
            Source of the creation time.
        random_source (RandomSource):
            Randomness for generated shortcodes.
        events (EventLogger):
            Structured event logger.
        max_attempts (int):
            Generated shortcodes tried before giving up.
    """

    def __init__(
        self,
        records: UrlRecordBaseDAO,
        clock: Clock = utc_now,
        random_source: RandomSource | None = None,
        events: EventLogger | None = None,
        max_attempts: int = ShortcodeLimits.MAX_ALLOCATION_ATTEMPTS,
    ):
        self.records = records
        self.clock = clock
        self.random_source = random_source if random_source is not None else default_random_source()
        self.events = events if events is not None else EventLogger(logging.getLogger(__name__))
        self.max_attempts = max_attempts

    def create_record(self, validation: EntryValidationResult) -> UrlRecordModel:
        """Create and store a record for a validated entry.

        Args:
            validation (EntryValidationResult):
                Result of `validate_entry()`; must be valid. Its `shortcode` is
                used as the custom shortcode; None means generate one.

        Returns:
            UrlRecordModel: the stored record.

        Raises:
            InvalidEntryError:
                If the validation result is not valid, or its shortcode
                violates the shortcode policy.
            ShortcodeInUseError:
                If the custom shortcode was taken in the meantime.
            ShortcodeAllocationError:
                If every generated shortcode collided.
            DataStoreError:
                If the record store fails.
        """
        if not validation.is_valid or validation.normalized_url is None:
            raise InvalidEntryError(f'Cannot create a record from an invalid entry: {validation.errors}')

        minutes = validation.normalized_minutes or ValidityMinutes.DEFAULT

        if validation.shortcode is not None:
            return self._insert_custom(validation.shortcode, validation.normalized_url, minutes)
        return self._insert_generated(validation.normalized_url, minutes)

    def _insert_custom(self, shortcode: str, long_url: str, minutes: int) -> UrlRecordModel:
        # Results can be built by hand; never store a code the policy rejects
        policy = is_valid_shortcode(shortcode)
        if not policy.is_valid or shortcode != shortcode.strip():
            raise InvalidEntryError(f"Cannot create a record with shortcode {shortcode!r}: {policy.error or 'untrimmed'}")

        record = build_record(shortcode, long_url, minutes, self.clock())
        if not self.records.insert_if_absent(record):
            self.events.log(CUSTOM_SHORTCODE_TAKEN, shortcode=shortcode)
            raise ShortcodeInUseError(SHORTCODE_IN_USE)

        self._log_created(record, custom=True)
        return record

    def _insert_generated(self, long_url: str, minutes: int) -> UrlRecordModel:
        for attempt in range(1, self.max_attempts + 1):
            shortcode = generate_shortcode(self.random_source)

            # e.g. a random 'xgAssk' trips the profanity rule
            policy = is_valid_shortcode(shortcode)
            if not policy.is_valid:
                self.events.log(GENERATED_SHORTCODE_REJECTED, shortcode=shortcode, attempt=attempt, reason=policy.error)
                continue

            record = build_record(shortcode, long_url, minutes, self.clock())
            if self.records.insert_if_absent(record):
                self._log_created(record, custom=False)
                return record

            self.events.log(GENERATED_SHORTCODE_COLLISION, shortcode=shortcode, attempt=attempt)

        self.events.warning(SHORTCODE_ALLOCATION_FAILED, attempts=self.max_attempts, longUrl=long_url)
        raise ShortcodeAllocationError(SHORTCODE_ALLOCATION_FAILED_MESSAGE)

    def _log_created(self, record: UrlRecordModel, custom: bool) -> None:
        self.events.log(
            URL_SHORTENED,
            shortcode=record.shortcode,
            longUrl=record.long_url,
            expiryTime=record.to_dict()['expiryTime'],
            custom=custom,
        )
