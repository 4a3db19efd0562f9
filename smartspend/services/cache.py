"""
Lookup cache backed by Redis, falling back to an in-process map with expiry
when Redis is unavailable or a Redis call fails. While Redis answers, the
in-process map is not consulted.
"""

import json
import logging
import time
from typing import Any, Dict, Optional, Tuple

import redis
from fastapi import Request

logger = logging.getLogger(__name__)


class LookupCache:
    """JSON value cache with per-key TTL."""

    def __init__(self, redis_client: Optional[redis.Redis] = None, default_ttl: int = 3600):
        self.redis_client = redis_client
        self.default_ttl = default_ttl
        self._local: Dict[str, Tuple[str, float]] = {}

    @classmethod
    def from_url(cls, redis_url: Optional[str], default_ttl: int = 3600) -> "LookupCache":
        if not redis_url:
            logger.warning("Redis URL not configured. Using in-memory cache only.")
            return cls(default_ttl=default_ttl)

        client = redis.Redis.from_url(redis_url, socket_connect_timeout=2, socket_timeout=2)
        try:
            client.ping()
        except redis.RedisError as e:
            logger.warning(f"Redis unavailable ({e}). Using in-memory cache only.")
            return cls(default_ttl=default_ttl)

        logger.info("Redis cache connected")
        return cls(redis_client=client, default_ttl=default_ttl)

    def get(self, key: str) -> Optional[Any]:
        if self.redis_client is not None:
            try:
                data = self.redis_client.get(key)
                return json.loads(data) if data is not None else None
            except redis.RedisError as e:
                logger.error(f"Redis get cache error: {e}")

        return self._get_local(key)

    def set(self, key: str, value: Any, ttl: Optional[int] = None) -> None:
        ttl = ttl or self.default_ttl
        data = json.dumps(value, default=str)

        if self.redis_client is not None:
            try:
                self.redis_client.set(key, data, ex=ttl)
                return
            except redis.RedisError as e:
                logger.error(f"Redis cache error: {e}")

        self._local[key] = (data, time.monotonic() + ttl)

    def invalidate(self, key: str) -> None:
        self._local.pop(key, None)

        if self.redis_client is not None:
            try:
                self.redis_client.delete(key)
            except redis.RedisError as e:
                logger.error(f"Redis invalidate cache error: {e}")

    def _get_local(self, key: str) -> Optional[Any]:
        cached = self._local.get(key)
        if cached is None:
            return None
        data, expiry = cached
        if expiry <= time.monotonic():
            del self._local[key]
            return None
        return json.loads(data)


def get_cache(request: Request) -> LookupCache:
    return request.app.state.cache
