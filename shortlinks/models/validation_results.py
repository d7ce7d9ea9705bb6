"""Transient validation results

None of these are persisted. Validators always return one of them instead of
raising: a rejected URL or shortcode is an expected outcome.

Classes:
    UrlValidationResult:
        Outcome of validating one URL (normalized URL or error message).
    ShortcodeValidationResult:
        Outcome of validating one user-supplied shortcode.
    ValidityPeriodResult:
        Outcome of validating a validity period; carries an error or a warning, never both.
    EntryValidationResult:
        Per-field outcome of validating a whole submission entry.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UrlValidationResult:
    is_valid: bool
    normalized_url: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ShortcodeValidationResult:
    is_valid: bool
    error: str | None = None


@dataclass(frozen=True)
class ValidityPeriodResult:
    is_valid: bool
    normalized_minutes: int | None = None
    error: str | None = None
    warning: str | None = None


@dataclass(frozen=True)
class EntryValidationResult:
    """Validation outcome for a submission entry.

    Attributes:
        is_valid (bool):
            True iff `errors` is empty. Warnings never affect validity.
        errors (dict[str, str]):
            Field name ('longUrl', 'shortcode', 'validityMinutes') -> error message.
        warnings (dict[str, str]):
            Field name -> warning message.
        normalized_url (str | None):
            Normalized URL when the URL passed validation.
        normalized_minutes (int | None):
            Validity period in minutes when it passed validation.
        shortcode (str | None):
            Trimmed custom shortcode that passed the policy and the uniqueness
            snapshot. None means "generate one".
    """

    is_valid: bool
    errors: dict[str, str] = field(default_factory=dict)
    warnings: dict[str, str] = field(default_factory=dict)
    normalized_url: str | None = None
    normalized_minutes: int | None = None
    shortcode: str | None = None

    def to_dict(self) -> dict:
        return {
            'isValid': self.is_valid,
            'errors': dict(self.errors),
            'warnings': dict(self.warnings),
            'normalizedUrl': self.normalized_url,
            'normalizedMinutes': self.normalized_minutes,
            'shortcode': self.shortcode,
        }
