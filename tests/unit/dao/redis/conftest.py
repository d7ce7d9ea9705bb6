from datetime import datetime, timedelta, UTC
from unittest.mock import MagicMock

import pytest
import redis

from shortlinks.models import UrlRecordModel, ClickEventModel


@pytest.fixture
def app_prefix() -> str:
    return 'testapp:test'


@pytest.fixture
def redis_client() -> redis.Redis:
    """Mock a Redis pipeline-compatible client."""
    client = MagicMock(spec=redis.client.Pipeline)
    client.connection_pool = MagicMock(
        spec=redis.ConnectionPool,
        connection_kwargs={'host': 'redis.test', 'port': 6379, 'db': 0},
    )
    client.pipeline.return_value = client
    client.__enter__.return_value = client
    client.__exit__.return_value = None
    return client


@pytest.fixture
def record() -> UrlRecordModel:
    created_at = datetime(2025, 10, 15, 12, 0, tzinfo=UTC)
    return UrlRecordModel(
        shortcode='abc123',
        long_url='https://example.com/article/123',
        created_at=created_at,
        expiry_time=created_at + timedelta(minutes=30),
    )


@pytest.fixture
def click() -> ClickEventModel:
    return ClickEventModel(
        shortcode='abc123',
        timestamp=datetime(2025, 10, 15, 12, 5, tzinfo=UTC),
        referrer='https://news.example.org/',
        location='Chicago, IL, USA',
    )
