from shortlinks.dao.redis.redis_key_schema import RedisKeySchema
from shortlinks.dao.redis.mixins import RedisClientMixin
from shortlinks.dao.redis.url_record_redis_dao import UrlRecordRedisDAO
from shortlinks.dao.redis.click_event_redis_dao import ClickEventRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'UrlRecordRedisDAO',
    'ClickEventRedisDAO',
]
