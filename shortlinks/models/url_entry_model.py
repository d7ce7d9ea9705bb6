from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class UrlEntryModel:
    """Represent one submission entry, exactly as the user typed it.

    Attributes:
        long_url (Any):
            Raw URL input. Not yet trimmed, normalized or even guaranteed to be a string.
        shortcode (Any):
            Optional custom shortcode. Blank values mean "generate one for me".
        validity_minutes (Any):
            Optional validity period. Blank values mean the default of 30 minutes.

    Example:
        >>> entry = UrlEntryModel.from_dict({'longUrl': 'example.com', 'validityMinutes': '15'})
        >>> entry.long_url
        'example.com'
        >>> entry.custom_shortcode is None
        True
    """

    long_url: Any
    shortcode: Any = None
    validity_minutes: Any = None

    @property
    def has_custom_shortcode(self) -> bool:
        """False only when the shortcode is missing or blank.

        Any other value, including non-strings like 12345, is a request for a
        custom shortcode and must go through the shortcode policy.
        """
        if isinstance(self.shortcode, str):
            return bool(self.shortcode.strip())
        return self.shortcode is not None

    @property
    def custom_shortcode(self) -> str | None:
        """Trimmed custom shortcode, or None when it is missing, blank or not a string."""
        if self.has_custom_shortcode and isinstance(self.shortcode, str):
            return self.shortcode.strip()
        return None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> 'UrlEntryModel':
        return cls(
            long_url=data.get('longUrl'),
            shortcode=data.get('shortcode'),
            validity_minutes=data.get('validityMinutes'),
        )
