"""Tests for database client singletons"""
from unittest.mock import AsyncMock, Mock, patch

import pytest

import promocart.db as db
from promocart.services.domains import catalog as catalog_module


def test_cart_key():
    assert db.RedisKeys.cart_key("promo-cart-u1") == "cart:promo-cart-u1"


def test_get_redis_requires_env():
    """Test Redis client refuses to start without Upstash credentials"""
    with patch.object(db, "_redis_client", None), \
            patch.object(db, "UPSTASH_REDIS_REST_URL", ""), \
            patch.object(db, "UPSTASH_REDIS_REST_TOKEN", ""):
        with pytest.raises(ValueError):
            db.get_redis()


def test_get_redis_singleton():
    with patch.object(db, "_redis_client", None), \
            patch.object(db, "UPSTASH_REDIS_REST_URL", "https://redis.test"), \
            patch.object(db, "UPSTASH_REDIS_REST_TOKEN", "token"), \
            patch.object(db, "AsyncRedis") as redis_cls:
        first = db.get_redis()
        second = db.get_redis()

    assert first is second
    redis_cls.assert_called_once_with(url="https://redis.test", token="token")


@pytest.mark.asyncio
async def test_get_supabase_requires_env():
    with patch.object(db, "_async_supabase_client", None), \
            patch.object(db, "SUPABASE_URL", ""):
        with pytest.raises(ValueError):
            await db.get_supabase()


@pytest.mark.asyncio
async def test_catalog_service_uses_shared_client():
    client = Mock()
    with patch.object(catalog_module, "_catalog_service", None), \
            patch.object(db, "get_supabase", AsyncMock(return_value=client)):
        service = await catalog_module.get_catalog_service()
        again = await catalog_module.get_catalog_service()

    assert service is again
    assert service.services.client is client
