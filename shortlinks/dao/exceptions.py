"""Errors raised by record and click stores.

Services let these propagate, except where a failure must not block the user:
    - a click that cannot be stored never blocks the redirect;
    - a record that cannot be stored fails only its own entry of a batch.

Example:
    >>> from shortlinks.dao.exceptions import DataStoreError
    >>> raise DataStoreError("Can't connect to Redis at localhost:6379/0.")
    Traceback (most recent call last):
        ...
    shortlinks.dao.exceptions.DataStoreError: Can't connect to Redis at localhost:6379/0.
"""


class DAOError(Exception):
    """Base class for store errors."""


class DataStoreError(DAOError):
    """The store could not be reached or refused the operation."""


class MalformedRecordError(DataStoreError):
    """A stored payload could not be decoded into a record or click.

    Treated like an unavailable store: the data exists but cannot be trusted.
    """
