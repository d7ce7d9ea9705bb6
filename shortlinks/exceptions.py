class ShortLinksError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:shortlinks_error'


class ConfigurationError(ShortLinksError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class LifecycleError(ShortLinksError):
    """Base exception for short URL record creation errors."""

    error_code = 'lifecycle:lifecycle_error'


class InvalidEntryError(LifecycleError):
    """Raised when a record is requested for an entry that failed validation."""

    error_code = 'lifecycle:invalid_entry_error'


class ShortcodeInUseError(LifecycleError):
    """Raised when a user-supplied shortcode is already taken."""

    error_code = 'lifecycle:shortcode_in_use_error'


class ShortcodeAllocationError(LifecycleError):
    """Raised when no free shortcode could be generated within the attempt budget."""

    error_code = 'lifecycle:shortcode_allocation_error'


class TooManyEntriesError(ShortLinksError):
    """Raised when a single submission carries more entries than allowed."""

    error_code = 'request:too_many_entries_error'
