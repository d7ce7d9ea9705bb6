import logging

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.dao.redis import UrlRecordRedisDAO, ClickEventRedisDAO
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import ConfigurationError
from shortlinks.services import RedirectResolver, RedirectStatus
from shortlinks.utils import load_config, get_short_url, app_prefix, json_response
from shortlinks.utils.helpers import guarantee_500_response
from shortlinks.utils.runtime import client_ip, referrer
from shortlinks.lambdas.redirect_url.constants import (
    MISSING_SHORTCODE,
    SHORT_URL_NOT_FOUND,
    SHORT_URL_EXPIRED,
    REDIRECT_SUCCESS,
)


logger = logging.getLogger(__name__)


def response_500(message: str | None = None) -> LambdaResponse:
    base = 'Internal Server Error'
    return json_response(500, {'message': base if not message else f'{base} ({message})'})


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(400, body)


def response_404(*, message: str, error_code: str) -> LambdaResponse:
    return json_response(404, {'message': message, 'errorCode': error_code})


def response_410(*, message: str, error_code: str, expiry_time: str) -> LambdaResponse:
    return json_response(410, {'message': message, 'errorCode': error_code, 'expiryTime': expiry_time})


def response_302(*, location: str) -> LambdaResponse:
    return {
        'statusCode': 302,
        'headers': {
            'Location': location,
            'Cache-Control': 'no-store',  # every visit must reach the resolver
        },
        'body': '',
    }


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to redirect short URLs

    This Lambda handler follows this procedure to redirect URLs:
    - Step 1: Extract shortcode from request path
    - Step 2: Resolve the shortcode against the record store
    - Step 3: Redirect client to target URL (the click is recorded by the resolver)

    HTTP responses:
        302: Successful redirect
            headers:
                Location: target URL destination
        400: Bad client request
            message: missing shortcode in path parameters
        404: Not found
            message: no record for this shortcode
        410: Gone
            message: the short URL has expired
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (dict):
            API Gateway event payload containing the shortcode path parameter.
        context (LambdaContext):
            AWS Lambda runtime context object (not used directly).

    Returns:
        dict:
            API Gateway-compatible response including statusCode, headers, and body.

    Example:
        >>> event = {'pathParameters': {'shortcode': 'Gh7kTCN'}}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        302
        >>> response['headers']['Location']
        'https://example.com/my-page'
    """
    # 0- Get application's config
    try:
        app_config = load_config('redirect_url')
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for redirect URL function. Responding with 500.')
        return response_500()
    else:
        logger.debug('Assuming Redis as the backend database for short URLs')
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 1- Extract shortcode from request's path
    shortcode = (event.get('pathParameters') or {}).get('shortcode')
    if not shortcode:
        logger.info(
            'Missing "shortcode" in path. Responding with 400.',
            extra={'event': MISSING_SHORTCODE},
        )
        return response_400(message="missing 'shortcode' in path", error_code=MISSING_SHORTCODE)
    logger.debug('Client requested short URL %s.', get_short_url(shortcode, event))

    # 2- Resolve shortcode against the record store
    try:
        resolver = RedirectResolver(
            records=UrlRecordRedisDAO(**redis_config, prefix=app_prefix()),
            clicks=ClickEventRedisDAO(**redis_config, prefix=app_prefix()),
        )
        result = resolver.resolve(shortcode, referrer=referrer(event), client_ip=client_ip(event))
    except DataStoreError:
        logger.exception('Failed to resolve short URL. Responding with 500.', extra={'shortcode': shortcode})
        return response_500()

    if result.status is RedirectStatus.NOT_FOUND:
        logger.info(
            'Short URL record not found in database. Responding with 404.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_NOT_FOUND},
        )
        return response_404(message=result.message, error_code=SHORT_URL_NOT_FOUND)

    if result.status is RedirectStatus.EXPIRED:
        expiry_time = result.record.to_dict()['expiryTime']
        logger.info(
            'Short URL has expired. Responding with 410.',
            extra={'shortcode': shortcode, 'event': SHORT_URL_EXPIRED, 'expiryTime': expiry_time},
        )
        return response_410(message=result.message, error_code=SHORT_URL_EXPIRED, expiry_time=expiry_time)

    # 3- Redirect client to target URL
    logger.info(
        'Redirecting client to target URL. Responding with 302.',
        extra={'shortcode': shortcode, 'event': REDIRECT_SUCCESS},
    )
    return response_302(location=result.target_url)
