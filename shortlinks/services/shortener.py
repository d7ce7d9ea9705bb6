"""Shortening of submitted entries

Runs the entry validator and the record lifecycle for one entry, or for a
batch of up to 5 entries submitted together. Each entry succeeds or fails on
its own: an invalid entry or a store failure on one entry does not stop the
others.

Example:
    >>> service = ShortenerService(records=UrlRecordMemoryDAO())
    >>> result = service.shorten(UrlEntryModel(long_url='example.com', shortcode='my-link'))
    >>> result.created
    True
    >>> result.record.shortcode
    'my-link'
"""

import logging
from dataclasses import dataclass, field
from collections.abc import Sequence

from shortlinks.constants import MAX_BATCH_ENTRIES
from shortlinks.exceptions import TooManyEntriesError, ShortcodeInUseError, ShortcodeAllocationError
from shortlinks.models import UrlEntryModel, UrlRecordModel, EntryValidationResult
from shortlinks.dao.base import UrlRecordBaseDAO
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.services.lifecycle import RecordLifecycle
from shortlinks.validation import validate_entry
from shortlinks.utils.logging import EventLogger


# Event names
ENTRY_REJECTED = 'ENTRY_REJECTED'
STORE_FAILURE = 'STORE_FAILURE'

STORE_FAILURE_MESSAGE = 'Could not save the short URL right now, please try again'


@dataclass(frozen=True)
class ShortenResult:
    """Outcome of shortening one entry.

    Attributes:
        entry (UrlEntryModel):
            The submitted entry, unchanged, so callers can redisplay it.
        validation (EntryValidationResult | None):
            Validation outcome; None if the store failed before validation.
        record (UrlRecordModel | None):
            The created record on success.
        errors (dict[str, str]):
            Field errors, plus 'storage' for store failures.
        warnings (dict[str, str]):
            Field warnings (never block creation).
    """

    entry: UrlEntryModel
    validation: EntryValidationResult | None = None
    record: UrlRecordModel | None = None
    errors: dict[str, str] = field(default_factory=dict)
    warnings: dict[str, str] = field(default_factory=dict)

    @property
    def created(self) -> bool:
        return self.record is not None

    @property
    def store_failed(self) -> bool:
        return 'storage' in self.errors


class ShortenerService:
    def __init__(
        self,
        records: UrlRecordBaseDAO,
        lifecycle: RecordLifecycle | None = None,
        events: EventLogger | None = None,
    ):
        self.records = records
        self.events = events if events is not None else EventLogger(logging.getLogger(__name__))
        self.lifecycle = lifecycle if lifecycle is not None else RecordLifecycle(records=records, events=self.events)

    def shorten(self, entry: UrlEntryModel) -> ShortenResult:
        try:
            validation = validate_entry(entry, self._taken_shortcodes(entry))
            if not validation.is_valid:
                self.events.log(ENTRY_REJECTED, errors=validation.errors)
                return ShortenResult(entry=entry, validation=validation, errors=validation.errors, warnings=validation.warnings)

            try:
                record = self.lifecycle.create_record(validation)
            except (ShortcodeInUseError, ShortcodeAllocationError) as e:
                # ShortcodeInUseError: lost a race for the same custom shortcode
                return ShortenResult(entry=entry, validation=validation, errors={'shortcode': str(e)}, warnings=validation.warnings)

        except DataStoreError as e:
            self.events.warning(STORE_FAILURE, reason=str(e))
            return ShortenResult(entry=entry, errors={'storage': STORE_FAILURE_MESSAGE})

        return ShortenResult(entry=entry, validation=validation, record=record, warnings=validation.warnings)

    def _taken_shortcodes(self, entry: UrlEntryModel) -> set[str]:
        # Only a custom shortcode needs a lookup; generated ones are checked on insert
        shortcode = entry.custom_shortcode
        if shortcode is None or self.records.find(shortcode) is None:
            return set()
        return {shortcode}

    def shorten_many(self, entries: Sequence[UrlEntryModel]) -> list[ShortenResult]:
        """Shorten up to MAX_BATCH_ENTRIES entries, each independently.

        Raises:
            TooManyEntriesError: If more than MAX_BATCH_ENTRIES entries are given.
        """
        if len(entries) > MAX_BATCH_ENTRIES:
            raise TooManyEntriesError(f'Maximum of {MAX_BATCH_ENTRIES} URLs can be shortened at once.')
        return [self.shorten(entry) for entry in entries]
