"""Validity period rule

A validity period is the number of whole minutes a short URL stays active.
Blank input falls back to the default of 30 minutes. Values that are valid but
unusual carry a warning; a result never carries both an error and a warning.

Example:
    >>> validate_validity_period(None)
    ValidityPeriodResult(is_valid=True, normalized_minutes=30, error=None, warning=None)
    >>> validate_validity_period('3').warning
    'Very short validity period - URL will expire quickly'
    >>> validate_validity_period(525601).error
    'Validity period cannot exceed 1 year (525,600 minutes)'
"""

import math
from numbers import Real
from typing import Any

from shortlinks.constants import ValidityMinutes
from shortlinks.models import ValidityPeriodResult


NOT_A_NUMBER = 'Validity period must be a number'
NOT_A_WHOLE_NUMBER = 'Validity period must be a whole number'
TOO_SHORT = f'Validity period must be at least {ValidityMinutes.MIN} minute'
TOO_LONG = f'Validity period cannot exceed 1 year ({ValidityMinutes.MAX:,} minutes)'
EXPIRES_QUICKLY = 'Very short validity period - URL will expire quickly'
CONSIDER_SHORTER = 'Very long validity period - consider shorter duration for security'


def _to_number(minutes: Any) -> float | int | None:
    """Coerce raw input to a number, or None if it is not numeric."""
    if isinstance(minutes, bool):
        return None
    if isinstance(minutes, int):
        return minutes
    if isinstance(minutes, Real):
        value = float(minutes)
    elif isinstance(minutes, str):
        try:
            value = float(minutes.strip())
        except ValueError:
            return None
    else:
        return None
    return None if math.isnan(value) else value


def validate_validity_period(minutes: Any) -> ValidityPeriodResult:
    """Validate a validity period given in minutes.

    Args:
        minutes (Any):
            int, float, numeric string, or None/blank for the default.

    Returns:
        ValidityPeriodResult: with `normalized_minutes` set whenever valid.
    """
    if minutes is None or (isinstance(minutes, str) and not minutes.strip()):
        return ValidityPeriodResult(is_valid=True, normalized_minutes=ValidityMinutes.DEFAULT)

    value = _to_number(minutes)
    if value is None:
        return ValidityPeriodResult(is_valid=False, error=NOT_A_NUMBER)

    if isinstance(value, float):
        if not value.is_integer():
            return ValidityPeriodResult(is_valid=False, error=NOT_A_WHOLE_NUMBER)
        value = int(value)

    if value < ValidityMinutes.MIN:
        return ValidityPeriodResult(is_valid=False, error=TOO_SHORT)
    if value > ValidityMinutes.MAX:
        return ValidityPeriodResult(is_valid=False, error=TOO_LONG)

    if value < ValidityMinutes.SHORT_WARNING:
        return ValidityPeriodResult(is_valid=True, normalized_minutes=value, warning=EXPIRES_QUICKLY)
    if value > ValidityMinutes.LONG_WARNING:
        return ValidityPeriodResult(is_valid=True, normalized_minutes=value, warning=CONSIDER_SHORTER)

    return ValidityPeriodResult(is_valid=True, normalized_minutes=value)
