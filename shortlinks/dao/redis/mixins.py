"""Shared Redis client setup for the record and click DAOs.

Both DAOs of one Lambda invocation usually talk to the same Redis server. The
handler may build one client and hand it to both (`redis_client=`), or let
each DAO build its own from the `redis_*` keyword arguments, which map 1:1 to
the `redis` section of the AppConfig document:

    {"redis": {"host": "...", "port": 6379, "db": 0, "ssl": true, "socket_timeout": 1.5}}

A redirect is on the visitor's critical path, so every client built here has
a socket timeout. A hanging server then surfaces as DataStoreError instead of
holding the request until the Lambda times out.

Classes:
    RedisClientMixin:
        Client construction, key schema and reachability check for Redis DAOs.

Example:
    >>> class ClickEventRedisDAO(RedisClientMixin, ClickEventBaseDAO):
    ...     pass
    ...
    >>> dao = ClickEventRedisDAO(redis_host='redis.internal', prefix='shortlinks:prod')
    >>> dao.keys.clicks_key()
    'shortlinks:prod:clicks'
"""

import redis

from shortlinks.dao.redis.redis_key_schema import RedisKeySchema
from shortlinks.dao.redis.helpers import redis_location
from shortlinks.dao.exceptions import DataStoreError


DEFAULT_SOCKET_TIMEOUT = 2.0  # seconds


class RedisClientMixin:
    """Give a Redis DAO its client (`self.redis`) and key schema (`self.keys`).

    The client is pinged once on construction unless `healthcheck=False`, so
    a misconfigured or unreachable server is reported before any record is
    read or written.
    """

    def __init__(
        self,
        redis_host: str = 'localhost',
        redis_port: int | str = 6379,
        redis_db: int | str = 0,
        redis_username: str | None = None,
        redis_password: str | None = None,
        redis_ssl: bool = False,
        redis_socket_timeout: float | None = DEFAULT_SOCKET_TIMEOUT,
        redis_client: redis.Redis | None = None,
        prefix: str | None = None,
        healthcheck: bool = True,
    ):
        """Initialize a Redis-based DAO

        Args:
            redis_host, redis_port, redis_db (str, int | str, int | str):
                Server location. Port and db may come as strings from config.
            redis_username, redis_password (str | None):
                ACL credentials, if the server requires them.
            redis_ssl (bool):
                Use TLS (ElastiCache in-transit encryption).
            redis_socket_timeout (float | None):
                Seconds to wait on connect and on every command.
            redis_client (redis.Redis | None):
                Pre-built client; the connection arguments above are ignored.
            prefix (str | None):
                Key namespace, usually `app_prefix()`.
            healthcheck (bool):
                PING the server right away.

        Raises:
            DataStoreError:
                If the healthcheck fails.
        """
        if redis_client is None:
            redis_client = redis.Redis(
                host=redis_host,
                port=int(redis_port),
                db=int(redis_db),
                username=redis_username,
                password=redis_password,
                ssl=redis_ssl,
                socket_timeout=redis_socket_timeout,
                socket_connect_timeout=redis_socket_timeout,
                decode_responses=True,
            )

        self.redis = redis_client
        self.keys = RedisKeySchema(prefix=prefix)

        if healthcheck:
            self._healthcheck()

    def _healthcheck(self, raise_error: bool = True) -> bool:
        """Return True if the server answers PING.

        Raises:
            DataStoreError:
                If the server is unreachable and `raise_error` is True.
        """
        try:
            self.redis.ping()
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            if not raise_error:
                return False
            raise DataStoreError(
                f"Can't connect to Redis at {redis_location(self.redis)}. Check the 'redis' section of the app config."
            ) from e
        return True
