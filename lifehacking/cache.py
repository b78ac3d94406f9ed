from __future__ import annotations

import asyncio
import json
import logging
from typing import Any

from redis.asyncio import Redis
from redis.exceptions import ConnectionError as RedisConnectionError

from lifehacking.settings import get_settings

logger = logging.getLogger(__name__)

_DEFAULT_TTL_SECONDS = 600
_FAVORITES_USER_PREFIX = "favorites:user"

_redis_client: Redis | None = None
_client_lock = asyncio.Lock()
_redis_disabled = False


def favorites_user_key(user_id: str) -> str:
    return f"{_FAVORITES_USER_PREFIX}:{user_id}"


async def get_redis() -> Redis | None:
    """Get Redis client, returning None if connection fails."""
    global _redis_client, _redis_disabled

    if _redis_disabled:
        logger.debug("Redis connection disabled after previous failure; skipping attempt.")
        return None

    async with _client_lock:
        if _redis_client is not None:
            return _redis_client

        if _redis_disabled:
            return None

        client = Redis.from_url(
            get_settings().redis_url, decode_responses=True, encoding="utf-8"
        )
        try:
            await client.ping()
        except (RedisConnectionError, OSError) as exc:
            logger.warning(f"Redis connection failed: {exc}. Caching will be disabled.")
            await client.aclose()
            _redis_disabled = True
            return None

        _redis_client = client
        logger.info("Redis connection established successfully")
        return _redis_client


class CacheClient:
    """JSON cache over Redis; every operation is a no-op when Redis is absent."""

    def __init__(self, redis: Redis | None) -> None:
        self._redis = redis

    @property
    def enabled(self) -> bool:
        return self._redis is not None

    async def get_json(self, key: str) -> Any:
        if self._redis is None:
            return None
        try:
            payload = await self._redis.get(key)
        except RedisConnectionError as exc:
            logger.debug(f"Redis get failed for key {key}: {exc}")
            return None
        if payload is None:
            return None
        try:
            return json.loads(payload)
        except json.JSONDecodeError:
            return None

    async def set_json(self, key: str, value: Any, ttl: int | None = None) -> None:
        if self._redis is None:
            return
        encoded = json.dumps(value, default=str)
        if ttl is None:
            ttl = _DEFAULT_TTL_SECONDS
        try:
            await self._redis.set(key, encoded, ex=ttl)
        except RedisConnectionError as exc:
            logger.debug(f"Redis set failed for key {key}: {exc}")

    async def delete(self, *keys: str) -> None:
        if self._redis is None or not keys:
            return
        try:
            await self._redis.delete(*keys)
        except RedisConnectionError as exc:
            logger.debug(f"Redis delete failed: {exc}")


async def get_cache_client() -> CacheClient:
    redis = await get_redis()
    return CacheClient(redis)


async def close_redis() -> None:
    """Close the global Redis connection gracefully."""
    global _redis_client, _redis_disabled
    if _redis_client is not None:
        await _redis_client.aclose()
        _redis_client = None
    _redis_disabled = False


__all__ = [
    "CacheClient",
    "close_redis",
    "favorites_user_key",
    "get_cache_client",
    "get_redis",
]
