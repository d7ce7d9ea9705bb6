import logging

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.dao.redis import UrlRecordRedisDAO, ClickEventRedisDAO
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import ConfigurationError
from shortlinks.services import collect_statistics
from shortlinks.utils import load_config, get_short_url, app_prefix, json_response, utc_now
from shortlinks.utils.helpers import guarantee_500_response
from shortlinks.lambdas.link_statistics.constants import DATA_STORE_UNAVAILABLE, STATISTICS_SUCCESS


logger = logging.getLogger(__name__)


def response_500(message: str | None = None) -> LambdaResponse:
    base = 'Internal Server Error'
    return json_response(500, {'message': base if not message else f'{base} ({message})'})


def response_503(error_code: str | None = None) -> LambdaResponse:
    body = {'message': 'Service Unavailable'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(503, body)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Report click counts for every retained short URL

    HTTP responses:
        200: Statistics
            totalUrls, totalClicks, activeUrls, mostClicked, links
        503: Service unavailable
            message: the record or click store could not be reached
        500: Internal server error
            message: server experienced an internal error

    Example:
        >>> response = lambda_handler({}, None)
        >>> json.loads(response['body'])['totalUrls']
        3
    """
    try:
        app_config = load_config('link_statistics')
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for link statistics function. Responding with 500.')
        return response_500()
    else:
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    try:
        statistics = collect_statistics(
            records=UrlRecordRedisDAO(**redis_config, prefix=app_prefix()),
            clicks=ClickEventRedisDAO(**redis_config, prefix=app_prefix()),
            now=utc_now(),
        )
    except DataStoreError:
        logger.exception('Record store unavailable. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_503(error_code=DATA_STORE_UNAVAILABLE)

    body = statistics.to_dict()
    for link in body['links']:
        link['shortUrl'] = get_short_url(link['shortcode'], event)

    logger.info(
        'Collected link statistics. Responding with 200.',
        extra={'event': STATISTICS_SUCCESS, 'totalUrls': statistics.total_urls, 'totalClicks': statistics.total_clicks},
    )
    return json_response(200, body)
