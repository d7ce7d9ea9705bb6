from dataclasses import dataclass
from datetime import datetime

from shortlinks.constants import DIRECT_REFERRER
from shortlinks.types import JSONRecord
from shortlinks.utils.clock import to_iso, from_iso


# fmt: off
@dataclass(frozen=True)
class ClickEventModel:
    shortcode: str                      # Shortcode that was visited (record may be gone since)
    timestamp: datetime                 # Time of the redirect (UTC)
    referrer: str = DIRECT_REFERRER     # Referer header, or 'Direct'
    location: str = 'Unknown'           # Best-effort, non-authoritative location
# fmt: on

    def to_dict(self) -> JSONRecord:
        return {
            'shortcode': self.shortcode,
            'timestamp': to_iso(self.timestamp),
            'referrer': self.referrer,
            'location': self.location,
        }

    @classmethod
    def from_dict(cls, data: JSONRecord) -> 'ClickEventModel':
        return cls(
            shortcode=data['shortcode'],
            timestamp=from_iso(data['timestamp']),
            referrer=data.get('referrer') or DIRECT_REFERRER,
            location=data.get('location') or 'Unknown',
        )
