"""Redis key layout

    <prefix>:links:<shortcode>:record   one record per shortcode (JSON string)
    <prefix>:links:index                set of every shortcode ever inserted
    <prefix>:clicks                     append-only list of click events (JSON strings)

The prefix is `<app name>:<app env>` (see `shortlinks.utils.app_prefix`), so
several stages can share one Redis database without seeing each other's links.
"""

import functools
from collections.abc import Callable


__all__ = ['RedisKeySchema']


def prefix_key(func: Callable[..., str]) -> Callable[..., str]:
    @functools.wraps(func)
    def wrapper(self: 'RedisKeySchema', *args, **kwargs) -> str:
        key = func(self, *args, **kwargs)
        if self.prefix is None:
            return key
        return f'{self.prefix}:{key}'

    return wrapper


class RedisKeySchema:
    def __init__(self, prefix: str | None = None):
        if prefix is not None and not isinstance(prefix, str):
            raise TypeError(f'Key prefix must be a string, got {type(prefix).__name__}.')
        self.prefix = prefix

    @prefix_key
    def link_record_key(self, shortcode: str) -> str:
        # Shortcodes never contain ':' (see shortcode policy), so keys can't collide
        return f'links:{shortcode}:record'

    @prefix_key
    def links_index_key(self) -> str:
        return 'links:index'

    @prefix_key
    def clicks_key(self) -> str:
        return 'clicks'
