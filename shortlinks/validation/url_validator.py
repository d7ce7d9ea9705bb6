"""URL normalization and validation

Decides whether a submitted long URL is acceptable for shortening and returns
its normalized form. The checks are static pattern checks (no DNS, no live
reputation lookups) and run in a fixed order; the first failing check decides
the error message.

Pipeline:
    1. required / non-empty
    2. length bounds (4..2048 characters, after trimming)
    3. normalization: prepend 'https://' when no http(s) scheme is present
    4. parse
    5. http/https scheme only
    6. non-empty hostname
    7. no private, loopback or link-local hosts
    8. no suspicious patterns
    9. no denylisted domains or disposable TLDs
    10. recognizable top-level domain
    11. at most 5 hostname labels

Functions:
    normalize_url(url: str) -> str
        Prepend 'https://' to a trimmed URL without an http(s) scheme.
    validate_url(raw: Any) -> UrlValidationResult
        Run the whole pipeline.

Example:
    >>> validate_url('example.com')
    UrlValidationResult(is_valid=True, normalized_url='https://example.com', error=None)
    >>> validate_url('http://localhost/admin').error
    'Private/localhost URLs are not allowed'
"""

import re
import ipaddress
from typing import Any
from urllib.parse import urlsplit, SplitResult

from shortlinks.constants import URLLimits
from shortlinks.models import UrlValidationResult


# Error messages
URL_REQUIRED = 'URL is required'
URL_EMPTY = 'URL cannot be empty'
URL_TOO_LONG = f'URL is too long (maximum {URLLimits.MAX_LENGTH} characters)'
URL_TOO_SHORT = 'URL is too short'
INVALID_URL_FORMAT = 'Invalid URL format'
UNSUPPORTED_PROTOCOL = 'Only HTTP and HTTPS protocols are allowed'
INVALID_HOSTNAME = 'Invalid hostname'
PRIVATE_HOST = 'Private/localhost URLs are not allowed'
SUSPICIOUS_PATTERN = 'URL contains suspicious patterns'
MALICIOUS_DOMAIN = 'This domain is flagged as potentially malicious'
INVALID_TLD = 'Invalid top-level domain'
TOO_MANY_SUBDOMAINS = 'Too many subdomains detected'


SCHEME_PATTERN = re.compile(r'^https?://', re.IGNORECASE)

# Characters allowed in a (non IPv6 literal) hostname after IDNA encoding
HOSTNAME_PATTERN = re.compile(r"^[a-z0-9._~!$&'()*+,;=-]+$")

PRIVATE_HOST_PATTERNS = (
    re.compile(r'^localhost$', re.IGNORECASE),
    re.compile(r'^127\.'),
    re.compile(r'^192\.168\.'),
    re.compile(r'^10\.'),
    re.compile(r'^172\.(1[6-9]|2[0-9]|3[0-1])\.'),
    re.compile(r'^::1$'),
    re.compile(r'^fe80:', re.IGNORECASE),
    re.compile(r'\.local$', re.IGNORECASE),
)

SUSPICIOUS_URL_PATTERNS = (
    # Multiple redirects
    re.compile(r'redirect.*redirect', re.IGNORECASE),
    # Script-injection-looking query keys
    re.compile(r'[?&](exec|eval|script|javascript|vbscript)', re.IGNORECASE),
    # Runs of dots or dashes
    re.compile(r'\.{4,}|-{4,}'),
    # Base64 data URIs carrying scripts
    re.compile(r'data:.*base64.*script', re.IGNORECASE),
    # Over-encoding: four or more percent-encoded octets
    re.compile(r'%[0-9a-f]{2}.*%[0-9a-f]{2}.*%[0-9a-f]{2}.*%[0-9a-f]{2}', re.IGNORECASE),
)

# Executable downloads, matched against the end of the path only
DANGEROUS_EXTENSION_PATTERN = re.compile(r'\.(exe|bat|cmd|scr|pif|com|jar)$', re.IGNORECASE)

MALICIOUS_DOMAINS = frozenset(
    {
        'malware.com',
        'phishing.net',
        'spam.org',
        'virus.info',
    }
)

# Free TLDs often used for throwaway malicious domains
DISPOSABLE_TLDS = ('.tk', '.ml', '.ga', '.cf')

# fmt: off
KNOWN_TLDS = (
    '.com', '.org', '.net', '.edu', '.gov', '.mil', '.int', '.co', '.io', '.ai',
    '.app', '.dev', '.tech', '.info', '.biz', '.name', '.pro', '.museum', '.aero',
    '.coop', '.travel', '.jobs', '.mobi', '.tel', '.asia', '.cat', '.xxx', '.post',
    '.geo', '.local', '.localhost',
    # Country codes
    '.us', '.uk', '.ca', '.au', '.de', '.fr', '.jp', '.cn', '.in', '.br', '.mx',
    '.es', '.it', '.nl', '.se', '.no', '.dk', '.fi', '.pl', '.ru', '.za', '.kr',
    '.sg', '.hk',
)
# fmt: on

# Any alphabetic suffix of two or more letters is accepted as well
GENERIC_TLD_PATTERN = re.compile(r'\.[a-z]{2,}$', re.IGNORECASE)


def invalid(error: str) -> UrlValidationResult:
    return UrlValidationResult(is_valid=False, normalized_url=None, error=error)


def normalize_url(url: str) -> str:
    if not SCHEME_PATTERN.match(url):
        return f'https://{url}'
    return url


def _parse(url: str) -> tuple[SplitResult, str] | None:
    """Split a URL and return it with its ASCII (IDNA) hostname.

    Returns None when the URL cannot be parsed: malformed IPv6 literal,
    invalid port, backslash in the authority, hostname that cannot be
    IDNA-encoded or that contains characters not allowed in a hostname.
    """
    try:
        parts = urlsplit(url)
        parts.port  # noqa: B018 (raises ValueError on a malformed port)
    except ValueError:
        return None

    # Browsers end the authority at a backslash, urlsplit does not: for
    # https://evil.net\@example.com we would check example.com while a
    # browser visits evil.net
    if '\\' in parts.netloc:
        return None

    hostname = parts.hostname or ''
    if not hostname:
        return parts, hostname

    if '[' in parts.netloc:
        try:
            ipaddress.IPv6Address(hostname.split('%')[0])
        except ValueError:
            return None
        return parts, hostname

    if not hostname.isascii():
        try:
            hostname = hostname.encode('idna').decode('ascii')
        except UnicodeError:
            return None

    if not HOSTNAME_PATTERN.match(hostname):
        return None
    return parts, hostname


def is_private_host(hostname: str) -> bool:
    return any(pattern.search(hostname) for pattern in PRIVATE_HOST_PATTERNS)


def has_suspicious_patterns(url: str, path: str = '') -> bool:
    if DANGEROUS_EXTENSION_PATTERN.search(path):
        return True
    return any(pattern.search(url) for pattern in SUSPICIOUS_URL_PATTERNS)


def is_malicious_domain(hostname: str) -> bool:
    hostname = hostname.lower()
    return hostname in MALICIOUS_DOMAINS or hostname.endswith(DISPOSABLE_TLDS)


def has_valid_tld(hostname: str) -> bool:
    hostname = hostname.lower()
    return hostname.endswith(KNOWN_TLDS) or bool(GENERIC_TLD_PATTERN.search(hostname))


def has_excessive_subdomains(hostname: str) -> bool:
    return len(hostname.split('.')) > URLLimits.MAX_HOST_LABELS


def validate_url(raw: Any) -> UrlValidationResult:
    """Validate and normalize a submitted URL.

    Args:
        raw (Any):
            Raw user input. Anything that is not a non-empty string is rejected.

    Returns:
        UrlValidationResult:
            `is_valid=True` with `normalized_url` set, or `is_valid=False` with
            the error message of the first failing check.
    """
    if not raw or not isinstance(raw, str):
        return invalid(URL_REQUIRED)

    url = raw.strip()
    if not url:
        return invalid(URL_EMPTY)

    if len(url) > URLLimits.MAX_LENGTH:
        return invalid(URL_TOO_LONG)
    if len(url) < URLLimits.MIN_LENGTH:
        return invalid(URL_TOO_SHORT)

    url = normalize_url(url)

    parsed = _parse(url)
    if parsed is None:
        return invalid(INVALID_URL_FORMAT)
    parts, hostname = parsed

    if parts.scheme not in ('http', 'https'):
        return invalid(UNSUPPORTED_PROTOCOL)

    if not hostname:
        return invalid(INVALID_HOSTNAME)

    if is_private_host(hostname):
        return invalid(PRIVATE_HOST)

    if has_suspicious_patterns(url, parts.path):
        return invalid(SUSPICIOUS_PATTERN)

    if is_malicious_domain(hostname):
        return invalid(MALICIOUS_DOMAIN)

    if not has_valid_tld(hostname):
        return invalid(INVALID_TLD)

    if has_excessive_subdomains(hostname):
        return invalid(TOO_MANY_SUBDOMAINS)

    return UrlValidationResult(is_valid=True, normalized_url=url, error=None)
