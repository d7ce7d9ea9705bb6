from enum import StrEnum


class TTL:
    """TTL durations in seconds."""

    # Retention of a short URL record after it expires (1 year in seconds)
    RECORD_RETENTION = 31_536_000  # 60 * 60 * 24 * 365


class URLLimits:
    """Length limits for submitted URLs."""

    MAX_LENGTH = 2048
    MIN_LENGTH = 4
    MAX_HOST_LABELS = 5  # More than 5 labels looks like a generated domain


class ShortcodeLimits:
    """Shortcode length limits and generation parameters."""

    MIN_LENGTH = 3
    MAX_LENGTH = 20
    GENERATED_LENGTHS = (6, 7, 8)
    MAX_ALLOCATION_ATTEMPTS = 5


class ValidityMinutes:
    """Validity period bounds in minutes."""

    DEFAULT = 30
    MIN = 1
    MAX = 525_600  # 1 year
    SHORT_WARNING = 5  # Below this: valid, but expires quickly
    LONG_WARNING = 43_200  # Above this (30 days): valid, but discouraged


# Maximum number of entries accepted in one shorten request
MAX_BATCH_ENTRIES = 5

# Sentinel referrer for clicks without a Referer header
DIRECT_REFERRER = 'Direct'


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        APP_NAME = 'APP_NAME'
        AWS_SAM_LOCAL = 'AWS_SAM_LOCAL'
        LOG_LEVEL = 'LOG_LEVEL'
        BASE_URL = 'SHORTLINKS_BASE_URL'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'
        AGENT_URL = 'APPCONFIG_AGENT_URL'
        PROFILE_NAME = 'APPCONFIG_PROFILE_NAME'


# Error codes
UNKNOWN_INTERNAL_SERVER_ERROR = 'UNKNOWN_INTERNAL_SERVER_ERROR'
