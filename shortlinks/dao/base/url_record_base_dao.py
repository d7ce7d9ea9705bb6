"""Abstract base class for UrlRecord data access objects (DAOs).

This class establishes a consistent contract for all UrlRecord DAO implementations,
regardless of the underlying storage mechanism (e.g., Redis, in-memory).

Responsibilities:
    - Provide an atomic insert-if-absent keyed by shortcode.
    - Provide lookups of a single record and of all retained records.
    - Standardize error handling across multiple data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from shortlinks.dao.redis import UrlRecordRedisDAO
        >>> dao = UrlRecordRedisDAO(...)

        >>> dao.insert_if_absent(record)
        True
        >>> dao.insert_if_absent(record)
        False

        >>> dao.find('abc123').long_url
        'https://example.com/blog/article-123'
        >>> dao.find('missing') is None
        True
"""

from abc import ABC, abstractmethod

from shortlinks.models import UrlRecordModel


class UrlRecordBaseDAO(ABC):
    """Interface for UrlRecord data access objects (DAOs).

    Methods:
        insert_if_absent(record: UrlRecordModel, **kwargs) -> bool:
            Atomically insert a record unless its shortcode is taken.
            Returns False on collision, never overwriting the stored record.
            Raises DataStoreError on connection or write failure.

        get_all(**kwargs) -> list[UrlRecordModel]:
            Return every retained record, expired ones included.
            Raises DataStoreError on connection or read failure.

        find(shortcode: str, **kwargs) -> UrlRecordModel | None:
            Return the record for a shortcode, or None.
            Raises DataStoreError on connection or read failure.

    Subclassing:
        Datastore-specific implementations must extend this class and
        implement all abstract methods.

    NOTE:
        - Expired records are retained (and keep their shortcode) until the
          store's own retention policy removes them.
    """

    @abstractmethod
    def insert_if_absent(self, record: UrlRecordModel, **kwargs) -> bool:
        """Insert a record unless a record with the same shortcode exists.

        The existence check and the write are one atomic operation.

        Args:
            record (UrlRecordModel):
                The record to insert.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            bool: True if inserted, False if the shortcode was already taken.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def get_all(self, **kwargs) -> list[UrlRecordModel]:
        """Return all retained records.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass

    @abstractmethod
    def find(self, shortcode: str, **kwargs) -> UrlRecordModel | None:
        """Retrieve a record by its shortcode.

        Args:
            shortcode (str):
                The shortcode of the record to be retrieved.

        Returns:
            UrlRecordModel | None: the record if found, otherwise None.

        Raises:
            DataStoreError:
                If there is an error in the data store.
        """
        pass
