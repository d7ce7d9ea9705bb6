import json
import logging

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.services import security_score, security_level
from shortlinks.validation import validate_url
from shortlinks.utils import json_response
from shortlinks.utils.helpers import guarantee_500_response
from shortlinks.lambdas.check_url.constants import INVALID_JSON_BODY, MISSING_URL, URL_CHECKED


logger = logging.getLogger(__name__)


def response_400(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    base = 'Bad Request'
    body = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(400, body)


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Validate a URL and report its security score without shortening it

    The URL is read from the `url` query string parameter, or from a JSON
    body `{"url": "..."}`. No data store is involved.

    HTTP responses:
        200: URL checked (valid or not)
            isValid, normalizedUrl, error, securityScore, securityLevel
        400: Bad client request
            message: invalid JSON body or missing 'url'
    """
    url = (event.get('queryStringParameters') or {}).get('url')
    if url is None and event.get('body'):
        try:
            url = json.loads(event['body']).get('url')
        except (json.JSONDecodeError, AttributeError):
            logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
            return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    if url is None:
        logger.info('Missing "url" in request. Responding with 400.', extra={'event': MISSING_URL})
        return response_400(message="missing 'url'", error_code=MISSING_URL)

    result = validate_url(url)
    score = security_score(result)

    logger.info(
        'URL checked. Responding with 200.',
        extra={'event': URL_CHECKED, 'isValid': result.is_valid, 'securityScore': score},
    )
    return json_response(
        200,
        {
            'isValid': result.is_valid,
            'normalizedUrl': result.normalized_url,
            'error': result.error,
            'securityScore': score,
            'securityLevel': security_level(score),
        },
    )
