import json
import logging
from typing import Any

from shortlinks.types import LambdaEvent, LambdaContext, LambdaResponse
from shortlinks.constants import MAX_BATCH_ENTRIES
from shortlinks.models import UrlEntryModel
from shortlinks.dao.redis import UrlRecordRedisDAO
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.exceptions import ConfigurationError, TooManyEntriesError
from shortlinks.services import ShortenerService, ShortenResult
from shortlinks.utils import load_config, get_short_url, app_prefix, json_response
from shortlinks.utils.helpers import guarantee_500_response
from shortlinks.lambdas.shorten_url.constants import (
    INVALID_JSON_BODY,
    MISSING_ENTRIES,
    INVALID_ENTRY,
    TOO_MANY_ENTRIES,
    ENTRIES_REJECTED,
    DATA_STORE_UNAVAILABLE,
    SHORTEN_SUCCESS,
    SHORTEN_PARTIAL_SUCCESS,
    STATUS_CREATED,
    STATUS_INVALID,
    STATUS_FAILED,
)


logger = logging.getLogger(__name__)


def response_500(message: str | None = None) -> LambdaResponse:
    base = 'Internal Server Error'
    return json_response(500, {'message': base if not message else f'{base} ({message})'})


def response_503(message: str | None = None, error_code: str | None = None) -> LambdaResponse:
    body = {'message': message or 'Service Unavailable'}
    if error_code:
        body['errorCode'] = error_code
    return json_response(503, body)


def response_400(message: str | None = None, error_code: str | None = None, results: list[dict] | None = None) -> LambdaResponse:
    base = 'Bad Request'
    body: dict[str, Any] = {'message': base if not message else f'{base} ({message})'}
    if error_code:
        body['errorCode'] = error_code
    if results is not None:
        body['results'] = results
    return json_response(400, body)


def serialize_result(result: ShortenResult, event: LambdaEvent) -> dict[str, Any]:
    """Per-entry response item; the submitted values are echoed back for redisplay."""
    if result.created:
        return {
            'status': STATUS_CREATED,
            **result.record.to_dict(),
            'shortUrl': get_short_url(result.record.shortcode, event),
            'warnings': result.warnings,
        }

    return {
        'status': STATUS_FAILED if result.store_failed else STATUS_INVALID,
        'entry': {
            'longUrl': result.entry.long_url,
            'shortcode': result.entry.shortcode,
            'validityMinutes': result.entry.validity_minutes,
        },
        'errors': result.errors,
        'warnings': result.warnings,
    }


def parse_entries(body: Any) -> list[UrlEntryModel] | None:
    """Read entries from `{"entries": [...]}` or from a single entry object.

    Returns None if the body has the wrong shape.
    """
    if not isinstance(body, dict):
        return None

    raw_entries = body['entries'] if 'entries' in body else [body]
    if not isinstance(raw_entries, list) or not all(isinstance(raw, dict) for raw in raw_entries):
        return None
    return [UrlEntryModel.from_dict(raw) for raw in raw_entries]


@guarantee_500_response
def lambda_handler(event: LambdaEvent, context: LambdaContext) -> LambdaResponse:
    """Handle incoming API Gateway requests to shorten URLs

    This Lambda handler follows this procedure to shorten URLs:
    - Step 1: Extract entries from request body (one entry or up to 5)
    - Step 2: Validate and create a record for every entry, independently
    - Step 3: Respond with the outcome of each entry

    Request body, either a single entry:
        {"longUrl": "example.com/page", "shortcode": "my-link", "validityMinutes": 60}
    or a batch:
        {"entries": [{"longUrl": "..."}, {"longUrl": "...", "validityMinutes": 15}]}

    HTTP responses:
        200: Every entry was shortened
            results: one item per entry (shortcode, shortUrl, longUrl, createdAt, expiryTime, warnings)
        207: Some entries were shortened, others were rejected or failed
            results: one item per entry, in request order
        400: Bad client request
            message: invalid JSON, missing/malformed entries, more than 5 entries,
                     or every entry failed validation (errors per entry in results)
        503: Service unavailable
            message: the record store could not be reached
        500: Internal server error
            message: server experienced an internal error

    Args:
        event (LambdaEvent):
            API Gateway event payload in Lambda Proxy format.
        context (LambdaContext):
            AWS Lambda context object containing runtime information.

    Returns:
        LambdaResponse:
            JSON-serializable response following API Gateway Lambda Proxy
            output format. Includes status code, headers, and response body.

    Example:
        >>> event = {'body': '{"longUrl": "example.com"}'}
        >>> response = lambda_handler(event, None)
        >>> response['statusCode']
        200
        >>> json.loads(response['body'])['results'][0]['longUrl']
        'https://example.com'
    """
    # 0- Get application's config
    try:
        app_config = load_config('shorten_url')
    except ConfigurationError:
        logger.exception('Failed to load AppConfig for shorten URL function. Responding with 500.')
        return response_500()
    else:
        redis_config = {f'redis_{k}': v for k, v in app_config['redis'].items()}

    # 1- Extract entries from request body
    try:
        request_body = json.loads(event.get('body') or '{}')
    except json.JSONDecodeError:
        logger.info('Invalid JSON body. Responding with 400.', extra={'event': INVALID_JSON_BODY})
        return response_400(message='invalid JSON body', error_code=INVALID_JSON_BODY)

    entries = parse_entries(request_body)
    if entries is None:
        logger.info('Malformed entries in JSON body. Responding with 400.', extra={'event': INVALID_ENTRY})
        return response_400(message='entries must be JSON objects', error_code=INVALID_ENTRY)
    if not entries:
        logger.info('No entries in JSON body. Responding with 400.', extra={'event': MISSING_ENTRIES})
        return response_400(message='at least one entry is required', error_code=MISSING_ENTRIES)

    # 2- Validate & create records, each entry on its own
    try:
        service = ShortenerService(records=UrlRecordRedisDAO(**redis_config, prefix=app_prefix()))
        results = service.shorten_many(entries)
    except TooManyEntriesError:
        logger.info(
            'Too many entries in one request. Responding with 400.',
            extra={'event': TOO_MANY_ENTRIES, 'entries': len(entries)},
        )
        return response_400(message=f'at most {MAX_BATCH_ENTRIES} entries per request', error_code=TOO_MANY_ENTRIES)
    except DataStoreError:
        logger.exception('Record store unavailable. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
        return response_503(error_code=DATA_STORE_UNAVAILABLE)

    # 3- Respond with per-entry outcome
    items = [serialize_result(result, event) for result in results]
    created = sum(1 for result in results if result.created)

    if created == len(results):
        logger.info('Shortened %s URL(s). Responding with 200.', created, extra={'event': SHORTEN_SUCCESS})
        return json_response(200, {'message': f'Successfully shortened {created} URL(s)', 'results': items})

    if created == 0:
        if any(result.store_failed for result in results):
            logger.info('No entry could be stored. Responding with 503.', extra={'event': DATA_STORE_UNAVAILABLE})
            return json_response(
                503,
                {'message': 'Service Unavailable', 'errorCode': DATA_STORE_UNAVAILABLE, 'results': items},
            )

        logger.info('Every entry was rejected. Responding with 400.', extra={'event': ENTRIES_REJECTED})
        return response_400(message='no entry passed validation', error_code=ENTRIES_REJECTED, results=items)

    logger.info(
        'Shortened %s of %s URL(s). Responding with 207.',
        created,
        len(results),
        extra={'event': SHORTEN_PARTIAL_SUCCESS},
    )
    return json_response(207, {'message': f'Shortened {created} of {len(results)} URL(s)', 'results': items})
