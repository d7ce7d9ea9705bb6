"""Unit tests for the shorten_url AWS Lambda handler.

Verify the handler parses single and batch submissions, reports every
entry's outcome in request order, and picks the status code from the
mix of created, rejected and failed entries.
"""

import json
from datetime import datetime, UTC
from typing import cast

import pytest
from pytest import MonkeyPatch
from freezegun import freeze_time

from shortlinks.types import LambdaEvent, LambdaContext, LambdaConfiguration
from shortlinks.constants import ENV
from shortlinks.lambdas.shorten_url import app
from shortlinks.dao.exceptions import DataStoreError
from shortlinks.dao.memory import UrlRecordMemoryDAO
from shortlinks.exceptions import BadConfigurationError


NOW = datetime(2025, 10, 15, 12, 0, tzinfo=UTC)


class UnreachableRecords(UrlRecordMemoryDAO):
    def find(self, shortcode, **kwargs):
        raise DataStoreError("Can't connect to Redis at redis.test:6379/0.")

    def insert_if_absent(self, record, **kwargs):
        raise DataStoreError("Can't connect to Redis at redis.test:6379/0.")


def shorten_event(body: object) -> LambdaEvent:
    return cast(LambdaEvent, {
        'resource': '/shorten',
        'httpMethod': 'POST',
        'path': '/shorten',
        'body': body if isinstance(body, str) else json.dumps(body),
        'requestContext': {'domainName': 'sho.rt', 'stage': 'test'},
    })


@freeze_time(NOW)
class TestShortenUrlHandler:

    @pytest.fixture
    def context(self) -> LambdaContext:
        return cast(LambdaContext, {'function_name': 'shorten_url'})

    @pytest.fixture
    def config(self) -> LambdaConfiguration:
        return cast(LambdaConfiguration, {'redis': {'host': 'redis.test', 'port': 6379, 'db': 0}})

    @pytest.fixture(autouse=True)
    def setup(self, monkeypatch: MonkeyPatch, context: LambdaContext, config: LambdaConfiguration) -> None:
        self.records = UrlRecordMemoryDAO()

        # Patch Lambda dependencies
        monkeypatch.setattr(app, 'load_config', lambda *a, **kw: config)
        monkeypatch.setattr(app, 'UrlRecordRedisDAO', lambda *a, **kw: self.records)
        monkeypatch.setattr('shortlinks.utils.helpers.running_locally', lambda: False)
        monkeypatch.delenv(ENV.App.BASE_URL, raising=False)

        self.context = context

    def test_lambda_handler_with_single_entry(self) -> None:
        event = shorten_event({'longUrl': 'example.com/page', 'shortcode': 'my-link', 'validityMinutes': 60})

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 200
        assert response['headers']['Content-Type'] == 'application/json'
        assert body['results'] == [
            {
                'status': 'created',
                'shortcode': 'my-link',
                'longUrl': 'https://example.com/page',
                'createdAt': '2025-10-15T12:00:00.000Z',
                'expiryTime': '2025-10-15T13:00:00.000Z',
                'shortUrl': 'https://sho.rt/my-link',
                'warnings': {},
            }
        ]
        assert self.records.find('my-link') is not None

    def test_lambda_handler_generates_shortcode_with_default_validity(self) -> None:
        event = shorten_event({'longUrl': 'https://example.com/page'})

        response = app.lambda_handler(event, self.context)
        result = json.loads(response['body'])['results'][0]

        assert response['statusCode'] == 200
        assert len(result['shortcode']) in (6, 7, 8)
        assert result['expiryTime'] == '2025-10-15T12:30:00.000Z'
        assert result['shortUrl'] == f'https://sho.rt/{result["shortcode"]}'

    def test_lambda_handler_reports_validity_warning(self) -> None:
        event = shorten_event({'longUrl': 'https://example.com/page', 'validityMinutes': 3})

        response = app.lambda_handler(event, self.context)
        result = json.loads(response['body'])['results'][0]

        assert response['statusCode'] == 200
        assert 'validityMinutes' in result['warnings']

    def test_lambda_handler_with_mixed_batch(self) -> None:
        event = shorten_event(
            {
                'entries': [
                    {'longUrl': 'https://example.com/one'},
                    {'longUrl': 'ftp://example.com/two', 'shortcode': 'admin'},
                    {'longUrl': 'https://example.com/three', 'shortcode': 'Promo_2468'},
                ]
            }
        )

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 207
        assert [item['status'] for item in body['results']] == ['created', 'invalid', 'created']

        rejected = body['results'][1]
        assert rejected['entry'] == {'longUrl': 'ftp://example.com/two', 'shortcode': 'admin', 'validityMinutes': None}
        assert rejected['errors'] == {
            'longUrl': 'Only HTTP and HTTPS protocols are allowed',
            'shortcode': 'This shortcode is reserved and cannot be used',
        }
        assert len(self.records.get_all()) == 2

    def test_lambda_handler_with_duplicate_custom_shortcode_in_batch(self) -> None:
        event = shorten_event(
            {
                'entries': [
                    {'longUrl': 'https://example.com/one', 'shortcode': 'my-link'},
                    {'longUrl': 'https://example.com/two', 'shortcode': 'my-link'},
                ]
            }
        )

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 207
        assert body['results'][1]['errors'] == {'shortcode': 'This shortcode is already in use'}
        assert self.records.find('my-link').long_url == 'https://example.com/one'

    def test_lambda_handler_with_every_entry_rejected(self) -> None:
        event = shorten_event({'entries': [{'longUrl': ''}, {'longUrl': 'http://localhost/admin'}]})

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'ENTRIES_REJECTED'
        assert [item['status'] for item in body['results']] == ['invalid', 'invalid']
        assert self.records.get_all() == []

    def test_lambda_handler_with_non_string_shortcode(self) -> None:
        event = shorten_event({'longUrl': 'https://example.com/page', 'shortcode': 12345})

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['results'][0]['errors'] == {'shortcode': 'Shortcode is required'}
        assert self.records.get_all() == []

    def test_lambda_handler_with_invalid_json(self) -> None:
        response = app.lambda_handler(shorten_event('{"longUrl": '), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['message'] == 'Bad Request (invalid JSON body)'
        assert body['errorCode'] == 'INVALID_JSON_BODY'

    def test_lambda_handler_with_missing_entries(self) -> None:
        response = app.lambda_handler(shorten_event({'entries': []}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'MISSING_ENTRIES'

    @pytest.mark.parametrize('body', [['https://example.com'], {'entries': 'https://example.com'}, {'entries': [42]}])
    def test_lambda_handler_with_malformed_entries(self, body: object) -> None:
        response = app.lambda_handler(shorten_event(body), self.context)

        assert response['statusCode'] == 400
        assert json.loads(response['body'])['errorCode'] == 'INVALID_ENTRY'

    def test_lambda_handler_with_too_many_entries(self) -> None:
        entries = [{'longUrl': f'https://example.com/{i}'} for i in range(6)]

        response = app.lambda_handler(shorten_event({'entries': entries}), self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 400
        assert body['errorCode'] == 'TOO_MANY_ENTRIES'
        assert self.records.get_all() == []

    def test_lambda_handler_with_unreachable_store(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setattr(app, 'UrlRecordRedisDAO', lambda *a, **kw: UnreachableRecords())
        event = shorten_event({'longUrl': 'https://example.com/page', 'shortcode': 'my-link'})

        response = app.lambda_handler(event, self.context)
        body = json.loads(response['body'])

        assert response['statusCode'] == 503
        assert body['errorCode'] == 'DATA_STORE_UNAVAILABLE'
        assert body['results'][0]['status'] == 'failed'
        assert body['results'][0]['errors'] == {'storage': 'Could not save the short URL right now, please try again'}
        assert body['results'][0]['entry']['shortcode'] == 'my-link'

    def test_lambda_handler_with_bad_configuration(self, monkeypatch: MonkeyPatch) -> None:
        def load_config(*a, **kw):
            raise BadConfigurationError('no shorten_url section')

        monkeypatch.setattr(app, 'load_config', load_config)

        response = app.lambda_handler(shorten_event({'longUrl': 'https://example.com'}), self.context)

        assert response['statusCode'] == 500
