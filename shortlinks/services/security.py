"""Heuristic URL security score

A coarse 0-100 indicator shown next to a validated URL. It is a local
heuristic only; no threat-intelligence service is consulted.

Example:
    >>> security_score(validate_url('https://example.com'))
    100
    >>> security_level(80)
    'Medium'
"""

from urllib.parse import urlsplit

from shortlinks.models import UrlValidationResult


BASE_SCORE = 70
HTTPS_BONUS = 20
TRUSTED_TLD_BONUS = 10
MAX_SCORE = 100

TRUSTED_TLDS = ('.com', '.org', '.edu', '.gov')

# (minimum score, level), highest first
SECURITY_LEVELS = (
    (90, 'High'),
    (70, 'Medium'),
    (50, 'Low'),
)
LOWEST_SECURITY_LEVEL = 'Very Low'


def security_score(result: UrlValidationResult) -> int:
    if not result.is_valid or not result.normalized_url:
        return 0

    parts = urlsplit(result.normalized_url)
    host = (parts.hostname or '').lower()

    score = BASE_SCORE
    if parts.scheme == 'https':
        score += HTTPS_BONUS
    if host.endswith(TRUSTED_TLDS):
        score += TRUSTED_TLD_BONUS
    return min(score, MAX_SCORE)


def security_level(score: int) -> str:
    for minimum, level in SECURITY_LEVELS:
        if score >= minimum:
            return level
    return LOWEST_SECURITY_LEVEL
