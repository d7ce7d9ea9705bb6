import functools
import redis
from typing import TypeVar, Any
from collections.abc import Callable

from shortlinks.dao.exceptions import DataStoreError


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def redis_location(client: redis.Redis) -> str:
    info = client.connection_pool.connection_kwargs
    return f'{info.get("host")}:{info.get("port")}/{info.get("db")}'


def handle_redis_connection_error[F](method: F) -> F:
    """Wrap Redis-interacting DAO methods to handle data store errors

    Connection problems and timeouts become "can't connect" errors. Errors
    reported by the server itself (e.g. OOM once maxmemory is reached) become
    "rejected" errors. Both are raised as DataStoreError.

    Args:
        method (Callable[..., Any]):
            DAO method performing Redis operations.

    Returns:
        Callable[..., Any]:
            Wrapped method which raises DataStoreError on Redis failures.

    Example:
        >>> @handle_redis_connection_error
        ... def get_count(self):
        ...     return self.redis.get('count')
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (redis.exceptions.ConnectionError, redis.exceptions.TimeoutError) as e:
            raise DataStoreError(f"Can't connect to Redis at {redis_location(self.redis)}.") from e
        except redis.exceptions.ResponseError as e:
            raise DataStoreError(f'Redis at {redis_location(self.redis)} rejected the command: {e}') from e

    return wrapper
