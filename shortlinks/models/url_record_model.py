from dataclasses import dataclass
from datetime import datetime

from shortlinks.types import JSONRecord
from shortlinks.utils.clock import to_iso, from_iso


@dataclass(frozen=True)
class UrlRecordModel:
    """Represent a time-limited short URL mapping.

    Attributes:
        shortcode (str):
            Unique short identifier. Expired records keep their shortcode.
        long_url (str):
            Normalized absolute URL the shortcode redirects to.
        created_at (datetime):
            Creation time (UTC). Set once, never changed.
        expiry_time (datetime):
            `created_at` plus the validity period. The link redirects up to and
            including this instant.

    Example:
        >>> from datetime import datetime, timedelta, UTC
        >>> now = datetime(2025, 10, 15, 12, 0, tzinfo=UTC)
        >>> record = UrlRecordModel(
        ...     shortcode='abc123',
        ...     long_url='https://example.com/article/123',
        ...     created_at=now,
        ...     expiry_time=now + timedelta(minutes=30),
        ... )
        >>> record.to_dict()['expiryTime']
        '2025-10-15T12:30:00.000Z'
    """

    shortcode: str
    long_url: str
    created_at: datetime
    expiry_time: datetime

    def to_dict(self) -> JSONRecord:
        return {
            'shortcode': self.shortcode,
            'longUrl': self.long_url,
            'createdAt': to_iso(self.created_at),
            'expiryTime': to_iso(self.expiry_time),
        }

    @classmethod
    def from_dict(cls, data: JSONRecord) -> 'UrlRecordModel':
        """Build a record from its wire representation.

        Raises:
            KeyError: If a required attribute is missing.
            ValueError: If a timestamp is not valid ISO-8601.
        """
        return cls(
            shortcode=data['shortcode'],
            long_url=data['longUrl'],
            created_at=from_iso(data['createdAt']),
            expiry_time=from_iso(data['expiryTime']),
        )
