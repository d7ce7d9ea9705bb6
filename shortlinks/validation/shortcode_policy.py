"""Custom shortcode policy

Checks a user-supplied shortcode against the syntactic and content rules.
Uniqueness against existing records is NOT checked here (see
`shortlinks.validation.entry_validator` and the record store).

Rules, in order (the first failing rule decides the error message):
    - present and a string
    - 3 to 20 characters (after trimming)
    - only letters, digits, '-' and '_'
    - does not start or end with '-' or '_'
    - not a reserved word (case-insensitive)
    - contains no profanity (case-insensitive substring match)
    - contains no confusable characters

Confusable characters:
    '0', 'O', '1' and 'I' are always rejected. Lowercase 'l' is rejected only
    when the shortcode also contains an uppercase letter or a digit, i.e. when
    it can actually be misread as 'I' or '1'. Generated shortcodes never
    contain any of them (see `shortlinks.utils.shortener.ALPHABET`).

Example:
    >>> is_valid_shortcode('my-link')
    ShortcodeValidationResult(is_valid=True, error=None)
    >>> is_valid_shortcode('my0link').error
    'Shortcode contains confusing characters (0, O, 1, l, I)'
"""

import re
from typing import Any

from shortlinks.constants import ShortcodeLimits
from shortlinks.models import ShortcodeValidationResult


SHORTCODE_REQUIRED = 'Shortcode is required'
SHORTCODE_TOO_SHORT = f'Shortcode must be at least {ShortcodeLimits.MIN_LENGTH} characters long'
SHORTCODE_TOO_LONG = f'Shortcode must be {ShortcodeLimits.MAX_LENGTH} characters or less'
SHORTCODE_BAD_CHARACTERS = 'Shortcode can only contain letters, numbers, hyphens, and underscores'
SHORTCODE_BAD_EDGES = 'Shortcode cannot start or end with hyphen or underscore'
SHORTCODE_RESERVED = 'This shortcode is reserved and cannot be used'
SHORTCODE_PROFANITY = 'Shortcode contains inappropriate content'
SHORTCODE_CONFUSABLE = 'Shortcode contains confusing characters (0, O, 1, l, I)'


ALLOWED_PATTERN = re.compile(r'^[a-zA-Z0-9_-]+$')
EDGE_PATTERN = re.compile(r'^[-_]|[-_]$')
ALWAYS_CONFUSABLE_PATTERN = re.compile(r'[0O1I]')

RESERVED_WORDS = frozenset(
    {
        'admin',
        'api',
        'www',
        'mail',
        'ftp',
        'localhost',
        'root',
        'test',
        'demo',
        'sample',
        'example',
        'null',
        'undefined',
        'statistics',
        'stats',
        'analytics',
        'dashboard',
        'login',
        'register',
        'signup',
        'signin',
        'logout',
        'profile',
        'settings',
        'help',
        'support',
        'contact',
        'about',
        'terms',
        'privacy',
        'legal',
        'copyright',
        'trademark',
        'patent',
        'license',
    }
)

PROFANITY_WORDS = ('damn', 'hell', 'crap', 'shit', 'fuck', 'bitch', 'ass')


def has_confusable_characters(shortcode: str) -> bool:
    if ALWAYS_CONFUSABLE_PATTERN.search(shortcode):
        return True
    if 'l' in shortcode:
        return any(c.isupper() or c.isdigit() for c in shortcode)
    return False


def is_valid_shortcode(shortcode: Any) -> ShortcodeValidationResult:
    """Validate a user-supplied shortcode.

    Args:
        shortcode (Any):
            Raw user input. Surrounding whitespace is ignored.

    Returns:
        ShortcodeValidationResult: validity and, if invalid, the error message.
    """
    if not shortcode or not isinstance(shortcode, str):
        return ShortcodeValidationResult(is_valid=False, error=SHORTCODE_REQUIRED)

    shortcode = shortcode.strip()

    if len(shortcode) < ShortcodeLimits.MIN_LENGTH:
        return ShortcodeValidationResult(is_valid=False, error=SHORTCODE_TOO_SHORT)
    if len(shortcode) > ShortcodeLimits.MAX_LENGTH:
        return ShortcodeValidationResult(is_valid=False, error=SHORTCODE_TOO_LONG)

    if not ALLOWED_PATTERN.match(shortcode):
        return ShortcodeValidationResult(is_valid=False, error=SHORTCODE_BAD_CHARACTERS)

    if EDGE_PATTERN.search(shortcode):
        return ShortcodeValidationResult(is_valid=False, error=SHORTCODE_BAD_EDGES)

    lowered = shortcode.lower()
    if lowered in RESERVED_WORDS:
        return ShortcodeValidationResult(is_valid=False, error=SHORTCODE_RESERVED)

    if any(word in lowered for word in PROFANITY_WORDS):
        return ShortcodeValidationResult(is_valid=False, error=SHORTCODE_PROFANITY)

    if has_confusable_characters(shortcode):
        return ShortcodeValidationResult(is_valid=False, error=SHORTCODE_CONFUSABLE)

    return ShortcodeValidationResult(is_valid=True, error=None)
