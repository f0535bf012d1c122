from ephemeralpaste.dao.redis.redis_key_schema import RedisKeySchema
from ephemeralpaste.dao.redis.mixins import RedisClientMixin
from ephemeralpaste.dao.redis.paste_redis_dao import PasteRedisDAO


__all__ = [
    'RedisKeySchema',
    'RedisClientMixin',
    'PasteRedisDAO',
]
