"""Конфигурация aiocache по настройкам."""

import pytest

from config.settings import CacheSettings
from deeptrader.utils.cache import CACHE_NAMESPACE, build_cache_config


class TestBuildCacheConfig:
    def test_memory_backend(self):
        config = build_cache_config(CacheSettings(ttl_seconds=15))

        assert config == {
            "default": {
                "cache": "aiocache.SimpleMemoryCache",
                "namespace": CACHE_NAMESPACE,
                "ttl": 15,
            }
        }

    def test_redis_backend(self):
        settings = CacheSettings(backend="redis", redis_dsn="redis://:secret@cache.local:6380/2")

        entry = build_cache_config(settings)["default"]

        assert entry["cache"] == "aiocache.RedisCache"
        assert entry["endpoint"] == "cache.local"
        assert entry["port"] == 6380
        assert entry["password"] == "secret"
        assert entry["db"] == 2
        assert entry["serializer"] == {"class": "aiocache.serializers.PickleSerializer"}

    def test_redis_without_dsn(self):
        with pytest.raises(RuntimeError):
            build_cache_config(CacheSettings(backend="redis"))

    def test_unsupported_scheme(self):
        with pytest.raises(ValueError):
            build_cache_config(CacheSettings(backend="redis", redis_dsn="memcached://x"))
