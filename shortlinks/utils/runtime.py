"""Runtime utilities

Functions:
    running_locally() -> bool:
        True if lambda is running in local SAM, False otherwise.
    client_ip(event) -> str | None:
        Source IP of the API Gateway request, if present.
    referrer(event) -> str | None:
        Referer header of the API Gateway request, if present.

Example:
    >>> from shortlinks.utils.runtime import running_locally
    >>> os.environ['APP_ENV'] = 'local'
    >>> running_locally()
    True
"""

import os

from shortlinks.types import LambdaEvent
from shortlinks.constants import ENV


def running_locally() -> bool:
    """Return True if running in SAM local invoke/api, False otherwise."""
    env = os.getenv(ENV.App.APP_ENV, '').lower()
    return env == 'local' or os.getenv(ENV.App.AWS_SAM_LOCAL) == 'true'


def client_ip(event: LambdaEvent) -> str | None:
    return (event.get('requestContext') or {}).get('identity', {}).get('sourceIp')


def referrer(event: LambdaEvent) -> str | None:
    # API Gateway keeps the client's header casing
    headers = event.get('headers') or {}
    for name, value in headers.items():
        if name.lower() in ('referer', 'referrer') and value:
            return value
    return None
