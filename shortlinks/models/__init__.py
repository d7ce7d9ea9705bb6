from shortlinks.models.url_record_model import UrlRecordModel
from shortlinks.models.click_event_model import ClickEventModel
from shortlinks.models.url_entry_model import UrlEntryModel
from shortlinks.models.validation_results import (
    UrlValidationResult,
    ShortcodeValidationResult,
    ValidityPeriodResult,
    EntryValidationResult,
)


__all__ = [
    'UrlRecordModel',
    'ClickEventModel',
    'UrlEntryModel',
    'UrlValidationResult',
    'ShortcodeValidationResult',
    'ValidityPeriodResult',
    'EntryValidationResult',
]
