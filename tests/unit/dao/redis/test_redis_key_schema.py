"""Unit tests for RedisKeySchema."""

import pytest

from shortlinks.dao.redis.redis_key_schema import RedisKeySchema


@pytest.mark.parametrize('shortcode', ['abc123', 'my-link', 'Promo_2468'])
def test_link_record_key_embeds_shortcode(shortcode):
    assert RedisKeySchema().link_record_key(shortcode) == f'links:{shortcode}:record'


def test_unprefixed_keys():
    keys = RedisKeySchema()

    assert keys.links_index_key() == 'links:index'
    assert keys.clicks_key() == 'clicks'


def test_prefixed_keys(app_prefix):
    keys = RedisKeySchema(prefix=app_prefix)

    assert keys.link_record_key('abc123') == 'testapp:test:links:abc123:record'
    assert keys.links_index_key() == 'testapp:test:links:index'
    assert keys.clicks_key() == 'testapp:test:clicks'


def test_stages_do_not_share_keys():
    dev, prod = RedisKeySchema(prefix='shortlinks:dev'), RedisKeySchema(prefix='shortlinks:prod')

    assert dev.link_record_key('abc123') != prod.link_record_key('abc123')
    assert dev.clicks_key() != prod.clicks_key()


@pytest.mark.parametrize('prefix', [123, 45.6, b'shortlinks', [], {}])
def test_non_string_prefix_raises_type_error(prefix):
    with pytest.raises(TypeError, match='Key prefix must be a string'):
        RedisKeySchema(prefix=prefix)
