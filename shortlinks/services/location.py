"""Best-effort click location

The location attached to a click event is descriptive only and never
authoritative. The default provider maps a client IP onto a fixed list of
cities; a real geo-IP lookup can be plugged in by implementing
`LocationProvider`.

Example:
    >>> provider = MockLocationProvider()
    >>> provider.locate('203.0.113.7') == provider.locate('203.0.113.7')
    True
    >>> provider.locate(None)
    'Unknown'
"""

from abc import ABC, abstractmethod

import xxhash


UNKNOWN_LOCATION = 'Unknown'

MOCK_LOCATIONS = (
    'New York, NY, USA',
    'Los Angeles, CA, USA',
    'Chicago, IL, USA',
    'Houston, TX, USA',
    'Phoenix, AZ, USA',
    'Philadelphia, PA, USA',
    'San Antonio, TX, USA',
    'San Diego, CA, USA',
    'Dallas, TX, USA',
    'San Jose, CA, USA',
)


class LocationProvider(ABC):
    @abstractmethod
    def locate(self, client_ip: str | None) -> str:
        """Return a human-readable location for a client IP. Must not raise."""
        pass


class MockLocationProvider(LocationProvider):
    """Deterministic stand-in for a geo-IP lookup.

    The same IP always lands on the same city, so repeated clicks from one
    client look consistent in the statistics.
    """

    def __init__(self, locations: tuple[str, ...] = MOCK_LOCATIONS):
        self.locations = locations

    def locate(self, client_ip: str | None) -> str:
        if not client_ip or not self.locations:
            return UNKNOWN_LOCATION
        return self.locations[xxhash.xxh64_intdigest(client_ip) % len(self.locations)]
