"""Submission entry validation

Combines the URL validator, the shortcode policy and the validity period rule
into one per-entry result. Every field is checked, so a single pass reports
all failing fields at once instead of stopping at the first one.

Result keys:
    errors['longUrl']          URL validator error
    errors['shortcode']        shortcode policy error, or "already in use"
    errors['validityMinutes']  validity period error
    warnings['validityMinutes'] unusually short or long validity period

A valid result carries everything needed to create the record: the
normalized URL, the validity in minutes and, for custom shortcodes, the
trimmed shortcode that passed the policy.

Example:
    >>> result = validate_entry(UrlEntryModel(long_url='example.com', shortcode=' my-link '))
    >>> result.is_valid, result.shortcode
    (True, 'my-link')
    >>> validate_entry(UrlEntryModel(long_url='example.com', shortcode=12345)).errors
    {'shortcode': 'Shortcode is required'}
"""

from collections.abc import Collection

from shortlinks.models import UrlEntryModel, EntryValidationResult
from shortlinks.validation.url_validator import validate_url
from shortlinks.validation.shortcode_policy import is_valid_shortcode
from shortlinks.validation.validity_period import validate_validity_period


SHORTCODE_IN_USE = 'This shortcode is already in use'


def validate_entry(entry: UrlEntryModel, existing_shortcodes: Collection[str] = ()) -> EntryValidationResult:
    """Validate one submission entry.

    Args:
        entry (UrlEntryModel):
            Raw submission entry.
        existing_shortcodes (Collection[str]):
            Shortcodes already taken, expired records included. Only consulted
            for a custom shortcode.

    Returns:
        EntryValidationResult

    NOTE:
        The uniqueness check here only reflects a snapshot of the store. The
        record store's insert-if-absent is the authoritative check.
    """
    errors: dict[str, str] = {}
    warnings: dict[str, str] = {}

    url_validation = validate_url(entry.long_url)
    if not url_validation.is_valid:
        errors['longUrl'] = url_validation.error

    shortcode = None
    if entry.has_custom_shortcode:
        shortcode_validation = is_valid_shortcode(entry.shortcode)
        if not shortcode_validation.is_valid:
            errors['shortcode'] = shortcode_validation.error
        elif entry.custom_shortcode in existing_shortcodes:
            errors['shortcode'] = SHORTCODE_IN_USE
        else:
            shortcode = entry.custom_shortcode

    validity = validate_validity_period(entry.validity_minutes)
    if not validity.is_valid:
        errors['validityMinutes'] = validity.error
    elif validity.warning:
        warnings['validityMinutes'] = validity.warning

    return EntryValidationResult(
        is_valid=not errors,
        errors=errors,
        warnings=warnings,
        normalized_url=url_validation.normalized_url,
        normalized_minutes=validity.normalized_minutes,
        shortcode=shortcode,
    )
