"""In-memory DAO implementations

Process-local stores for tests, local experiments and single-process
deployments. A lock serializes the check-then-insert so insert_if_absent keeps
the same atomicity guarantee as the Redis implementation.

Classes:
    UrlRecordMemoryDAO:
        Dict-backed UrlRecordBaseDAO.
    ClickEventMemoryDAO:
        List-backed ClickEventBaseDAO.

Example:
    >>> records = UrlRecordMemoryDAO()
    >>> records.insert_if_absent(record)
    True
    >>> records.insert_if_absent(record)
    False
"""

import threading

from beartype import beartype

from shortlinks.models import UrlRecordModel, ClickEventModel
from shortlinks.dao.base import UrlRecordBaseDAO, ClickEventBaseDAO


class UrlRecordMemoryDAO(UrlRecordBaseDAO):
    def __init__(self, records: list[UrlRecordModel] | None = None):
        self._lock = threading.Lock()
        self._records: dict[str, UrlRecordModel] = {}
        for record in records or []:
            self.insert_if_absent(record)

    @beartype
    def insert_if_absent(self, record: UrlRecordModel, **kwargs) -> bool:
        with self._lock:
            if record.shortcode in self._records:
                return False
            self._records[record.shortcode] = record
            return True

    @beartype
    def get_all(self, **kwargs) -> list[UrlRecordModel]:
        with self._lock:
            return list(self._records.values())

    @beartype
    def find(self, shortcode: str, **kwargs) -> UrlRecordModel | None:
        with self._lock:
            return self._records.get(shortcode)


class ClickEventMemoryDAO(ClickEventBaseDAO):
    def __init__(self):
        self._lock = threading.Lock()
        self._clicks: list[ClickEventModel] = []

    @beartype
    def append(self, click: ClickEventModel, **kwargs) -> None:
        with self._lock:
            self._clicks.append(click)

    @beartype
    def list_all(self, **kwargs) -> list[ClickEventModel]:
        with self._lock:
            return list(self._clicks)
