"""Unit tests for the entry validator

Test coverage includes:
    1. Valid entries (defaults, custom shortcode, warnings)
    2. Per-field errors, reported together
    3. Uniqueness against existing shortcodes
    4. The validated shortcode carried on the result
"""

from shortlinks.models import UrlEntryModel
from shortlinks.validation import validate_entry
from shortlinks.validation.entry_validator import SHORTCODE_IN_USE
from shortlinks.validation.url_validator import PRIVATE_HOST
from shortlinks.validation.shortcode_policy import SHORTCODE_TOO_SHORT, SHORTCODE_REQUIRED
from shortlinks.validation.validity_period import TOO_SHORT, EXPIRES_QUICKLY


# -------------------------------
# 1. Valid entries
# -------------------------------


def test_valid_entry_with_defaults():
    result = validate_entry(UrlEntryModel(long_url='example.com'))

    assert result.is_valid
    assert result.errors == {}
    assert result.warnings == {}
    assert result.normalized_url == 'https://example.com'
    assert result.normalized_minutes == 30


def test_valid_entry_with_custom_shortcode():
    result = validate_entry(UrlEntryModel(long_url='https://example.com', shortcode='my-link', validity_minutes='60'))

    assert result.is_valid
    assert result.normalized_minutes == 60


def test_blank_shortcode_is_not_validated():
    assert validate_entry(UrlEntryModel(long_url='example.com', shortcode='  ')).is_valid


def test_warning_does_not_block_entry():
    result = validate_entry(UrlEntryModel(long_url='example.com', validity_minutes=3))

    assert result.is_valid
    assert result.warnings == {'validityMinutes': EXPIRES_QUICKLY}


# -------------------------------
# 2. Per-field errors
# -------------------------------


def test_every_failing_field_is_reported():
    result = validate_entry(UrlEntryModel(long_url='http://localhost/x', shortcode='ab', validity_minutes=0))

    assert not result.is_valid
    assert result.errors == {
        'longUrl': PRIVATE_HOST,
        'shortcode': SHORTCODE_TOO_SHORT,
        'validityMinutes': TOO_SHORT,
    }
    assert result.normalized_url is None
    assert result.normalized_minutes is None


# -------------------------------
# 3. Uniqueness
# -------------------------------


def test_taken_shortcode_is_rejected():
    result = validate_entry(UrlEntryModel(long_url='example.com', shortcode='my-link'), existing_shortcodes={'my-link'})

    assert not result.is_valid
    assert result.errors == {'shortcode': SHORTCODE_IN_USE}


def test_taken_shortcode_is_compared_after_trimming():
    result = validate_entry(UrlEntryModel(long_url='example.com', shortcode=' my-link '), existing_shortcodes=['my-link'])

    assert result.errors == {'shortcode': SHORTCODE_IN_USE}


# -------------------------------
# 4. Validated shortcode
# -------------------------------


def test_result_carries_trimmed_shortcode():
    result = validate_entry(UrlEntryModel(long_url='example.com', shortcode=' my-link '))

    assert result.is_valid
    assert result.shortcode == 'my-link'


def test_result_has_no_shortcode_without_custom_one():
    assert validate_entry(UrlEntryModel(long_url='example.com', shortcode='  ')).shortcode is None


def test_rejected_shortcode_is_not_carried():
    assert validate_entry(UrlEntryModel(long_url='example.com', shortcode='admin')).shortcode is None


def test_non_string_shortcode_is_rejected():
    result = validate_entry(UrlEntryModel(long_url='example.com', shortcode=12345))

    assert not result.is_valid
    assert result.errors == {'shortcode': SHORTCODE_REQUIRED}
    assert result.shortcode is None
