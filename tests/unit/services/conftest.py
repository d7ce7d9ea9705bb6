from datetime import datetime, UTC
from unittest.mock import MagicMock

import pytest

from shortlinks.dao.memory import UrlRecordMemoryDAO, ClickEventMemoryDAO
from shortlinks.utils.logging import EventLogger
from shortlinks.utils.shortener import PseudoRandomSource


NOW = datetime(2025, 10, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock(now):
    return lambda: now


@pytest.fixture
def records() -> UrlRecordMemoryDAO:
    return UrlRecordMemoryDAO()


@pytest.fixture
def clicks() -> ClickEventMemoryDAO:
    return ClickEventMemoryDAO()


@pytest.fixture
def events() -> EventLogger:
    return MagicMock(spec=EventLogger)


@pytest.fixture
def random_source() -> PseudoRandomSource:
    return PseudoRandomSource(seed=42)
