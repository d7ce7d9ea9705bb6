from shortlinks.validation.url_validator import validate_url, normalize_url
from shortlinks.validation.shortcode_policy import is_valid_shortcode
from shortlinks.validation.validity_period import validate_validity_period
from shortlinks.validation.entry_validator import validate_entry


__all__ = [
    'validate_url',
    'normalize_url',
    'is_valid_shortcode',
    'validate_validity_period',
    'validate_entry',
]
