from shortlinks.services.lifecycle import RecordLifecycle, build_record, is_expired
from shortlinks.services.redirect import RedirectResolver, RedirectResult, RedirectStatus
from shortlinks.services.shortener import ShortenerService, ShortenResult
from shortlinks.services.statistics import LinkPerformance, LinkStatistics, collect_statistics
from shortlinks.services.security import security_score, security_level
from shortlinks.services.location import LocationProvider, MockLocationProvider


__all__ = [
    'RecordLifecycle',
    'build_record',
    'is_expired',
    'RedirectResolver',
    'RedirectResult',
    'RedirectStatus',
    'ShortenerService',
    'ShortenResult',
    'LinkPerformance',
    'LinkStatistics',
    'collect_statistics',
    'security_score',
    'security_level',
    'LocationProvider',
    'MockLocationProvider',
]
