"""
Database clients for the hub.

- Supabase (async) stores orders and their payment state.
- Upstash Redis (sync REST client) holds one cart slot per session.

Both are created on first use so a cold start that never touches them pays
nothing. Missing credentials surface as ValueError at that point.
"""

import os
from typing import Optional

from supabase._async.client import AsyncClient, create_client as acreate_client
from upstash_redis import Redis


SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY", "")

# Upstash REST credentials
UPSTASH_REDIS_REST_URL = os.environ.get("UPSTASH_REDIS_REST_URL", "")
UPSTASH_REDIS_REST_TOKEN = os.environ.get("UPSTASH_REDIS_REST_TOKEN", "")


_supabase: Optional[AsyncClient] = None
_cart_redis: Optional[Redis] = None


async def get_supabase() -> AsyncClient:
    """Shared async Supabase client."""
    global _supabase

    if _supabase is None:
        if not (SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY):
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
        _supabase = await acreate_client(SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY)

    return _supabase


def get_redis_sync() -> Redis:
    """
    Shared sync Upstash client.

    Cart mutations run synchronously inside the request, so carts use the
    blocking REST client rather than upstash_redis.asyncio.
    """
    global _cart_redis

    if _cart_redis is None:
        if not (UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN):
            raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")
        _cart_redis = Redis(url=UPSTASH_REDIS_REST_URL, token=UPSTASH_REDIS_REST_TOKEN)

    return _cart_redis


class RedisKeys:
    """Redis key layout."""

    UNIFIED_CART = "cart:unified:"  # + session id

    @staticmethod
    def unified_cart_key(session_id: str) -> str:
        return f"{RedisKeys.UNIFIED_CART}{session_id}"
