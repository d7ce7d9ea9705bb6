"""Abstract base class for ClickEvent data access objects (DAOs).

Click events are append-only: the interface offers no update or delete.

Example:
    >>> from shortlinks.dao.redis import ClickEventRedisDAO
    >>> dao = ClickEventRedisDAO(...)
    >>> dao.append(click)
    >>> len(dao.list_all())
    1
"""

from abc import ABC, abstractmethod

from shortlinks.models import ClickEventModel


class ClickEventBaseDAO(ABC):
    """Interface for ClickEvent data access objects (DAOs).

    Methods:
        append(click: ClickEventModel, **kwargs) -> None:
            Append one click event.
            Raises DataStoreError on connection or write failure.

        list_all(**kwargs) -> list[ClickEventModel]:
            Return every click event in insertion order.
            Raises DataStoreError on connection or read failure.
    """

    @abstractmethod
    def append(self, click: ClickEventModel, **kwargs) -> None:
        pass

    @abstractmethod
    def list_all(self, **kwargs) -> list[ClickEventModel]:
        pass
