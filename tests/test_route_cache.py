# =============================================================================
# tests/test_route_cache.py - Route Cache Tests
# =============================================================================
# Tests for RouteCache with a mocked Redis client:
# - Keys are derived from the route path
# - Payloads round-trip as JSON with the configured TTL
# - Redis failures degrade to cache misses instead of failing the request
# - Stale payloads are not written back after a revalidation
# =============================================================================

import json
from unittest.mock import MagicMock

import pytest
import redis

from core.services.effects import RequestEffects
from lib.route_cache import RouteCache


@pytest.fixture
def redis_client():
    return MagicMock(spec=redis.Redis)


@pytest.fixture
def cache(redis_client):
    return RouteCache(redis_client, ttl_seconds=60)


class TestRouteCache:
    """Tests for RouteCache."""

    def test_key_ignores_trailing_slash(self):
        assert RouteCache.key_for("/dashboard/invoices/") == RouteCache.key_for("/dashboard/invoices")
        assert RouteCache.key_for("/") == "route-cache:/"

    def test_set_stores_json_with_ttl(self, cache, redis_client):
        cache.set("/dashboard/invoices", [{"id": "i-1"}])

        redis_client.set.assert_called_once_with(
            "route-cache:/dashboard/invoices", json.dumps([{"id": "i-1"}]), ex=60
        )

    def test_get_hit(self, cache, redis_client):
        redis_client.get.return_value = b'[{"id": "i-1"}]'

        assert cache.get("/dashboard/invoices") == [{"id": "i-1"}]

    def test_get_miss(self, cache, redis_client):
        redis_client.get.return_value = None

        assert cache.get("/dashboard/invoices") is None

    def test_get_corrupt_entry_is_a_miss(self, cache, redis_client):
        redis_client.get.return_value = b"{not json"

        assert cache.get("/dashboard/invoices") is None

    def test_get_redis_down_is_a_miss(self, cache, redis_client):
        redis_client.get.side_effect = redis.ConnectionError("refused")

        assert cache.get("/dashboard/invoices") is None

    def test_revalidate_deletes_key(self, cache, redis_client):
        cache.revalidate_path("/dashboard/invoices")

        redis_client.delete.assert_called_once_with("route-cache:/dashboard/invoices")

    def test_revalidate_bumps_generation(self, cache, redis_client):
        cache.revalidate_path("/dashboard/invoices/")

        redis_client.incr.assert_called_once_with("route-cache-gen:/dashboard/invoices")

    def test_revalidate_survives_redis_errors(self, cache, redis_client):
        redis_client.delete.side_effect = redis.ConnectionError("refused")

        cache.revalidate_path("/dashboard/invoices")

    def test_from_url_builds_client(self):
        cache = RouteCache.from_url("redis://localhost:6379/0", ttl_seconds=5)

        assert isinstance(cache.client, redis.Redis)
        assert cache.ttl_seconds == 5


class TestRouteCacheGenerations:
    """A payload read before a revalidation is never written back."""

    @pytest.fixture
    def pipe(self, redis_client):
        pipe = MagicMock()
        pipe.get.return_value = None
        redis_client.pipeline.return_value.__enter__.return_value = pipe
        return pipe

    def test_generation_starts_at_zero(self, cache, redis_client):
        redis_client.get.return_value = None

        assert cache.generation("/dashboard/invoices") == 0
        redis_client.get.assert_called_once_with("route-cache-gen:/dashboard/invoices")

    def test_generation_reads_counter(self, cache, redis_client):
        redis_client.get.return_value = b"3"

        assert cache.generation("/dashboard/invoices") == 3

    def test_generation_redis_down(self, cache, redis_client):
        redis_client.get.side_effect = redis.ConnectionError("refused")

        assert cache.generation("/dashboard/invoices") is None

    def test_set_with_current_generation(self, cache, pipe):
        pipe.get.return_value = b"2"

        cache.set("/dashboard/invoices", [{"id": "i-1"}], generation=2)

        pipe.watch.assert_called_once_with("route-cache-gen:/dashboard/invoices")
        pipe.multi.assert_called_once()
        pipe.set.assert_called_once_with(
            "route-cache:/dashboard/invoices", json.dumps([{"id": "i-1"}]), ex=60
        )
        pipe.execute.assert_called_once()

    def test_set_skipped_after_revalidation(self, cache, pipe):
        pipe.get.return_value = b"1"

        cache.set("/dashboard/invoices", [{"id": "stale"}], generation=0)

        pipe.set.assert_not_called()
        pipe.execute.assert_not_called()

    def test_revalidation_during_write(self, cache, pipe):
        pipe.execute.side_effect = redis.WatchError("watched key changed")

        cache.set("/dashboard/invoices", [{"id": "stale"}], generation=0)

    def test_set_redis_down(self, cache, redis_client):
        redis_client.pipeline.side_effect = redis.ConnectionError("refused")

        cache.set("/dashboard/invoices", [], generation=0)


class TestRequestEffects:
    """Tests for the per-request effects object."""

    def test_revalidate_goes_to_cache(self, cache, redis_client):
        effects = RequestEffects(cache)

        effects.revalidate_path("/dashboard/invoices")

        assert effects.revalidated == ["/dashboard/invoices"]
        redis_client.delete.assert_called_once_with("route-cache:/dashboard/invoices")

    def test_redirect_is_recorded(self):
        effects = RequestEffects()

        assert effects.location is None
        effects.redirect("/dashboard/invoices")
        assert effects.location == "/dashboard/invoices"
