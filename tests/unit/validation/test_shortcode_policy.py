"""Unit tests for the custom shortcode policy

Test coverage includes:
    1. Accepted shortcodes
    2. Presence, length and character set
    3. Reserved words and profanity
    4. Confusable characters
"""

import pytest

from shortlinks.validation import is_valid_shortcode
from shortlinks.validation.shortcode_policy import (
    SHORTCODE_REQUIRED,
    SHORTCODE_TOO_SHORT,
    SHORTCODE_TOO_LONG,
    SHORTCODE_BAD_CHARACTERS,
    SHORTCODE_BAD_EDGES,
    SHORTCODE_RESERVED,
    SHORTCODE_PROFANITY,
    SHORTCODE_CONFUSABLE,
    has_confusable_characters,
)


# -------------------------------
# 1. Accepted shortcodes
# -------------------------------


@pytest.mark.parametrize('shortcode', ['my-link', 'abc', 'Promo_2468', 'x' * 20, '  summer-sale  '])
def test_valid_shortcodes(shortcode):
    result = is_valid_shortcode(shortcode)

    assert result.is_valid
    assert result.error is None


# -------------------------------
# 2. Presence, length and character set
# -------------------------------


@pytest.mark.parametrize('shortcode', [None, '', 123])
def test_missing_shortcode(shortcode):
    assert is_valid_shortcode(shortcode).error == SHORTCODE_REQUIRED


def test_too_short_shortcode():
    result = is_valid_shortcode('ab')

    assert not result.is_valid
    assert result.error == SHORTCODE_TOO_SHORT


def test_length_is_measured_after_trimming():
    assert is_valid_shortcode('  ab  ').error == SHORTCODE_TOO_SHORT


def test_too_long_shortcode():
    assert is_valid_shortcode('x' * 21).error == SHORTCODE_TOO_LONG


@pytest.mark.parametrize('shortcode', ['my link', 'my.link', 'ünicode', 'a/b/c'])
def test_bad_characters(shortcode):
    assert is_valid_shortcode(shortcode).error == SHORTCODE_BAD_CHARACTERS


@pytest.mark.parametrize('shortcode', ['-mylink', 'mylink_', '_abc_'])
def test_bad_edges(shortcode):
    assert is_valid_shortcode(shortcode).error == SHORTCODE_BAD_EDGES


# -------------------------------
# 3. Reserved words and profanity
# -------------------------------


@pytest.mark.parametrize('shortcode', ['admin', 'API', 'Stats', 'dashboard'])
def test_reserved_words(shortcode):
    assert is_valid_shortcode(shortcode).error == SHORTCODE_RESERVED


@pytest.mark.parametrize('shortcode', ['what-the-hell', 'CRAPPY', 'badass'])
def test_profanity(shortcode):
    assert is_valid_shortcode(shortcode).error == SHORTCODE_PROFANITY


# -------------------------------
# 4. Confusable characters
# -------------------------------


@pytest.mark.parametrize('shortcode', ['my0link', 'prOmo', 'deal1', 'Idea-x', 'Sale-2', 'cool4'])
def test_confusable_characters(shortcode):
    result = is_valid_shortcode(shortcode)

    assert not result.is_valid
    assert result.error == SHORTCODE_CONFUSABLE


@pytest.mark.parametrize(
    'shortcode, expected',
    [
        ('my-link', False),
        ('my0link', True),
        ('abcO', True),
        ('lower-l', False),
        ('lower-L', True),
        ('l2', True),
        ('xyz', False),
    ],
)
def test_has_confusable_characters(shortcode, expected):
    assert has_confusable_characters(shortcode) is expected
