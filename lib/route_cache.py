# =============================================================================
# lib/route_cache.py - Redis-backed Route Cache
# =============================================================================
# Stores the JSON payload served by a route, keyed by the route path.
# Mutations call revalidate_path() so the next request recomputes it.
#
# Usage:
#   cache = RouteCache.from_url(settings.REDIS_URL)
#   generation = cache.generation("/dashboard/invoices")
#   cache.set("/dashboard/invoices", invoices, generation=generation)
#   cache.revalidate_path("/dashboard/invoices")
# =============================================================================

from __future__ import annotations

import json
import logging
from typing import Any

import redis

logger = logging.getLogger(__name__)

KEY_PREFIX = "route-cache:"
GENERATION_PREFIX = "route-cache-gen:"


class RouteCache:
    """
    Cache of rendered route payloads.

    Redis errors never fail a request: a failed read is a miss, a failed
    write or invalidation is logged and the entry expires on its TTL.

    Every revalidation bumps a per-route generation counter. A payload
    computed under an older generation is never written back, so a read
    that races a mutation cannot re-cache stale data.
    """

    def __init__(self, client: redis.Redis, ttl_seconds: int = 300):
        self.client = client
        self.ttl_seconds = ttl_seconds

    @classmethod
    def from_url(cls, url: str, ttl_seconds: int = 300) -> RouteCache:
        """Create a cache backed by the Redis server at url."""
        return cls(redis.Redis.from_url(url), ttl_seconds=ttl_seconds)

    @staticmethod
    def _normalize(path: str) -> str:
        return path.rstrip("/") or "/"

    @classmethod
    def key_for(cls, path: str) -> str:
        """Redis key for a route path (trailing slash insensitive)."""
        return f"{KEY_PREFIX}{cls._normalize(path)}"

    @classmethod
    def generation_key_for(cls, path: str) -> str:
        """Redis key of the revalidation counter for a route path."""
        return f"{GENERATION_PREFIX}{cls._normalize(path)}"

    def get(self, path: str) -> Any | None:
        """Return the cached payload for path, or None on a miss."""
        try:
            raw = self.client.get(self.key_for(path))
        except redis.RedisError as e:
            logger.warning(f"Route cache read failed for {path}: {e}")
            return None

        if raw is None:
            return None

        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding corrupt route cache entry for {path}")
            return None

    def generation(self, path: str) -> int | None:
        """
        Current revalidation counter for path.

        Read it before computing a payload and pass it to set().
        Returns None if Redis is unreachable.
        """
        try:
            raw = self.client.get(self.generation_key_for(path))
        except redis.RedisError as e:
            logger.warning(f"Route cache generation read failed for {path}: {e}")
            return None
        return int(raw) if raw is not None else 0

    def set(self, path: str, payload: Any, generation: int | None = None) -> None:
        """
        Cache payload for path with the configured TTL.

        With a generation, the write only happens if path has not been
        revalidated since that generation was read.
        """
        key = self.key_for(path)
        data = json.dumps(payload)

        try:
            if generation is None:
                self.client.set(key, data, ex=self.ttl_seconds)
                return

            generation_key = self.generation_key_for(path)
            with self.client.pipeline() as pipe:
                pipe.watch(generation_key)
                raw = pipe.get(generation_key)
                current = int(raw) if raw is not None else 0
                if current != generation:
                    logger.debug(f"Skipped caching {path}: revalidated during read")
                    return
                pipe.multi()
                pipe.set(key, data, ex=self.ttl_seconds)
                pipe.execute()
        except redis.WatchError:
            logger.debug(f"Skipped caching {path}: revalidated during write")
        except redis.RedisError as e:
            logger.warning(f"Route cache write failed for {path}: {e}")

    def revalidate_path(self, path: str) -> None:
        """Mark the cached output for path as stale."""
        try:
            self.client.incr(self.generation_key_for(path))
            self.client.delete(self.key_for(path))
            logger.debug(f"Revalidated route {path}")
        except redis.RedisError as e:
            logger.warning(f"Route cache invalidation failed for {path}: {e}")
