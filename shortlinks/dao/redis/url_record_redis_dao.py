"""Data Access Object (DAO) implementation for managing short URL records in Redis

This module provides a Redis-based implementation of UrlRecordBaseDAO.

Responsibilities:
    - Insert records atomically only if their shortcode is free (SET NX);
    - Retrieve a single record or all retained records;
    - Keep an index set of taken shortcodes;
    - Retain expired records (and their shortcodes) until the retention TTL runs out.

Data layout (with prefix 'app:dev'):
    app:dev:links:<shortcode>:record   STRING  JSON wire representation of the record
    app:dev:links:index                SET     every shortcode ever inserted

Classes:
    UrlRecordRedisDAO:
        DAO for storing and retrieving UrlRecordModel in a Redis datastore.

Example:
    >>> from shortlinks.dao.redis import UrlRecordRedisDAO
    >>> dao = UrlRecordRedisDAO(prefix="app:dev")
    >>> dao.insert_if_absent(record)
    True
    >>> dao.find("abc123").long_url
    'https://example.com/page'
"""

import json
from datetime import timedelta

from beartype import beartype

from shortlinks.models import UrlRecordModel
from shortlinks.dao.base import UrlRecordBaseDAO
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_connection_error
from shortlinks.dao.exceptions import MalformedRecordError
from shortlinks.constants import TTL


class UrlRecordRedisDAO(RedisClientMixin, UrlRecordBaseDAO):
    """Redis-based Data Access Object (DAO) for short URL records

    Attributes (see RedisClientMixin):
        redis (redis.Redis):
            Redis client used to communicate with the Redis datastore.
        keys (RedisKeySchema):
            Key schema helper for generating namespaced Redis keys.
        retention (int | None):
            Seconds a record is kept after its expiry time. None keeps it forever.
    """

    def __init__(self, *args, retention: int | None = TTL.RECORD_RETENTION, **kwargs):
        self.retention = retention
        super().__init__(*args, **kwargs)

    @handle_redis_connection_error
    @beartype
    def insert_if_absent(self, record: UrlRecordModel, **kwargs) -> bool:
        """Insert a record unless its shortcode is already taken

        SET NX performs the existence check and the write as one atomic command,
        so two concurrent inserts of the same shortcode cannot both succeed.
        The index update runs in the same MULTI block; SADD is idempotent, so
        it is harmless when the SET was a no-op.

        Args:
            record (UrlRecordModel):
                Record to insert.

        Returns:
            bool: True if inserted, False on shortcode collision.

        Raises:
            DataStoreError:
                If a Redis connection issue occurs during the transaction.
        """
        record_key = self.keys.link_record_key(record.shortcode)
        payload = json.dumps(record.to_dict())

        options = {'nx': True}
        if self.retention is not None:
            options['exat'] = int((record.expiry_time + timedelta(seconds=self.retention)).timestamp())

        with self.redis.pipeline(transaction=True) as pipe:
            pipe.set(record_key, payload, **options)
            pipe.sadd(self.keys.links_index_key(), record.shortcode)
            created, _ = pipe.execute()

        return bool(created)

    @handle_redis_connection_error
    @beartype
    def find(self, shortcode: str, **kwargs) -> UrlRecordModel | None:
        payload = self.redis.get(self.keys.link_record_key(shortcode))
        if payload is None:
            return None
        return self._decode(payload)

    @handle_redis_connection_error
    @beartype
    def get_all(self, **kwargs) -> list[UrlRecordModel]:
        """Return every retained record, oldest first

        Shortcodes whose record already fell out of retention are still in the
        index set; MGET returns None for them and they are skipped.
        """
        shortcodes = sorted(self.redis.smembers(self.keys.links_index_key()))
        if not shortcodes:
            return []

        payloads = self.redis.mget([self.keys.link_record_key(shortcode) for shortcode in shortcodes])
        records = [self._decode(payload) for payload in payloads if payload is not None]
        return sorted(records, key=lambda record: record.created_at)

    @staticmethod
    def _decode(payload: str | bytes) -> UrlRecordModel:
        try:
            return UrlRecordModel.from_dict(json.loads(payload))
        except (ValueError, KeyError, TypeError) as e:
            raise MalformedRecordError(f'Stored short URL record is malformed: {payload!r}') from e
