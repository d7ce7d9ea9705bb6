"""Helper utilities for AWS lambda functions.

Functions:
    base_url() -> str
        Extract correct public base URL from API Gateway event
    get_short_url() -> str
        Get string representation of short URL for a given shortcode
    json_response() -> dict
        Build an API Gateway proxy response with a JSON body
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present
    guarantee_500_response(handler) -> Callable
        Decorator: Turn unexpected handler exceptions into a 500 response

Example:
    Typical usage inside a Lambda handler:

        >>> from shortlinks.utils.helpers import base_url
        >>> event = {
        ...     "requestContext": {
        ...         "domainName": "abc123.execute-api.us-east-1.amazonaws.com",
        ...         "stage": "Prod"
        ...     }
        ... }
        >>> base_url(event)
        'https://abc123.execute-api.us-east-1.amazonaws.com/Prod'

        >>> base_url({})
        'http://localhost:3000'
"""

import os
import json
import logging
import functools
from typing import Any
from collections.abc import Callable

from shortlinks.types import LambdaEvent, LambdaResponse
from shortlinks.constants import ENV, UNKNOWN_INTERNAL_SERVER_ERROR
from shortlinks.exceptions import MissingEnvironmentVariableError
from shortlinks.utils.runtime import running_locally


logger = logging.getLogger(__name__)


def base_url(event: LambdaEvent) -> str:
    """Extract public base URL from API Gateway event

    Return the public base URL for the current Lambda invocation.

    `SHORTLINKS_BASE_URL` takes precedence when set. Otherwise works with
    both custom and default AWS API Gateway domains: if a custom domain is
    configured, the stage name is omitted; with the default execute-api
    domain, the stage name is included.

    Args:
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: Base URL, e.g.:
             - "https://sho.rt"
             - "https://abc123.execute-api.us-east-1.amazonaws.com/Prod"
    """
    configured = os.environ.get(ENV.App.BASE_URL)
    if configured:
        return configured.rstrip('/')

    request_context = event.get('requestContext', {})
    domain = request_context.get('domainName', '')
    stage = request_context.get('stage', '')

    if domain and 'execute-api' not in domain:
        # If the domain is a custom domain (no execute-api), skip stage
        return f'https://{domain}'
    elif domain:
        # Otherwise include the stage (for AWS default domains)
        return f'https://{domain}/{stage}'
    else:
        # Fallback: local invocation (SAM CLI, tests, etc.)
        return 'http://localhost:3000'


def get_short_url(shortcode: str, event: LambdaEvent) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        event (dict): API Gateway event object passed to Lambda handler

    Returns:
        str: short url string representation
    """
    return f'{base_url(event).rstrip("/")}/{shortcode}'


def json_response(status_code: int, body: dict[str, Any], headers: dict[str, str] | None = None) -> LambdaResponse:
    response = {
        'statusCode': status_code,
        'headers': {'Content-Type': 'application/json', **(headers or {})},
        'body': json.dumps(body),
    }
    return response


def require_environment(*names: str) -> Callable:
    """Decorator ensuring required environment variables are present.

    Args:
        *names (str):
            Names of required environment variables.

    Raises:
        MissingEnvironmentVariableError:
            If any required environment variable is missing or empty.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def my_function():
        ...     pass
        >>> my_function()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            missing = [name for name in names if not os.environ.get(name)]
            if missing:
                missing_list = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {missing_list}')
            return func(*args, **kwargs)

        return wrapper

    return decorator


def guarantee_500_response(handler: Callable[[LambdaEvent, Any], LambdaResponse]) -> Callable[[LambdaEvent, Any], LambdaResponse]:
    """Decorator: respond with HTTP 500 instead of crashing the Lambda.

    Any exception escaping the handler is logged and turned into a generic
    500 response. When running locally the exception is re-raised instead,
    so it shows up in the SAM console.
    """

    @functools.wraps(handler)
    def wrapper(event: LambdaEvent, context: Any) -> LambdaResponse:
        try:
            return handler(event, context)
        except Exception as e:
            if running_locally():
                raise
            logger.exception(
                'Unhandled exception in lambda handler. Responding with 500.',
                extra={'event': UNKNOWN_INTERNAL_SERVER_ERROR, 'errorCode': getattr(e, 'error_code', None)},
            )
            return json_response(
                500,
                {
                    'message': 'Internal Server Error',
                    'errorCode': UNKNOWN_INTERNAL_SERVER_ERROR,
                },
            )

    return wrapper
