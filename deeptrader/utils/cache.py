"""aiocache для DeepTrader.

Один алиас ``default`` с namespace проекта. Сейчас в кеше живут только агрегаты
для /stats; в Redis они кладутся через pickle, потому что это dataclass.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable
from urllib.parse import urlparse

from aiocache import caches
from aiocache.base import BaseCache

from config.settings import CacheSettings, get_settings

CACHE_NAMESPACE = "deeptrader"

_BACKENDS = {
    "memory": "aiocache.SimpleMemoryCache",
    "redis": "aiocache.RedisCache",
}

_configured = False


def build_cache_config(settings: CacheSettings) -> dict[str, Any]:
    """Конфиг для ``caches.set_config`` по секции настроек ``cache``."""

    entry: dict[str, Any] = {
        "cache": _BACKENDS[settings.backend],
        "namespace": CACHE_NAMESPACE,
        "ttl": settings.ttl_seconds,
    }
    if settings.backend == "redis":
        entry.update(_redis_endpoint(settings.redis_dsn))
        entry["serializer"] = {"class": "aiocache.serializers.PickleSerializer"}
    return {"default": entry}


def configure_cache(settings: CacheSettings | None = None, *, force: bool = False) -> None:
    global _configured
    if _configured and not force:
        return
    caches.set_config(build_cache_config(settings or get_settings().cache))
    _configured = True


def get_cache(alias: str = "default") -> BaseCache:
    configure_cache()
    return caches.get(alias)


async def cached_call(key: str, ttl: int, factory: Callable[[], Awaitable[Any]]) -> Any:
    """Значение из кеша; при промахе вызывает ``factory`` и сохраняет результат на ``ttl`` секунд."""

    cache = get_cache()
    value = await cache.get(key)
    if value is not None:
        return value
    value = await factory()
    await cache.set(key, value, ttl=ttl)
    return value


def _redis_endpoint(dsn: str | None) -> dict[str, Any]:
    if not dsn:
        raise RuntimeError("CACHE__BACKEND=redis, но CACHE__REDIS_DSN не указан")
    parsed = urlparse(dsn)
    if parsed.scheme != "redis":
        raise ValueError(f"Неподдерживаемая схема Redis DSN: {parsed.scheme}")
    path = parsed.path.lstrip("/")
    return {
        "endpoint": parsed.hostname or "localhost",
        "port": parsed.port or 6379,
        "password": parsed.password,
        "db": int(path) if path.isdigit() else 0,
    }


__all__ = ["CACHE_NAMESPACE", "build_cache_config", "cached_call", "configure_cache", "get_cache"]
