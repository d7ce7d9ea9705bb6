"""Redis-based append-only click event log

Data layout (with prefix 'app:dev'):
    app:dev:clicks   LIST   JSON wire representation of each click, oldest first
"""

import json

from beartype import beartype

from shortlinks.models import ClickEventModel
from shortlinks.dao.base import ClickEventBaseDAO
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.helpers import handle_redis_connection_error
from shortlinks.dao.exceptions import MalformedRecordError


class ClickEventRedisDAO(RedisClientMixin, ClickEventBaseDAO):
    @handle_redis_connection_error
    @beartype
    def append(self, click: ClickEventModel, **kwargs) -> None:
        self.redis.rpush(self.keys.clicks_key(), json.dumps(click.to_dict()))

    @handle_redis_connection_error
    @beartype
    def list_all(self, **kwargs) -> list[ClickEventModel]:
        clicks = []
        for payload in self.redis.lrange(self.keys.clicks_key(), 0, -1):
            try:
                clicks.append(ClickEventModel.from_dict(json.loads(payload)))
            except (ValueError, KeyError, TypeError) as e:
                raise MalformedRecordError(f'Stored click event is malformed: {payload!r}') from e
        return clicks
