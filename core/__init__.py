"""
Digital Hub Core Module

This package contains the core components:
- cart: unified cart engine, pricing rules, storage strategies
- orders: checkout hand-off and order status workflow
- services: money helpers, Telegram notifications, repositories
- db: Database clients (Supabase + Redis)

Note: Imports are lazy to avoid circular dependency issues
and ensure clean module loading in serverless environments.
"""

# Lazy imports to avoid issues at module load time
__all__ = [
    "UnifiedCart",
    "get_supabase",
    "get_redis_sync",
]


def __getattr__(name):
    """Lazy attribute access for clean serverless loading."""
    if name == "UnifiedCart":
        from core.cart import UnifiedCart
        return UnifiedCart
    elif name == "get_supabase":
        from core.db import get_supabase
        return get_supabase
    elif name == "get_redis_sync":
        from core.db import get_redis_sync
        return get_redis_sync
    raise AttributeError(f"module 'core' has no attribute '{name}'")
