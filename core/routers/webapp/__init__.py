"""WebApp API Router.

Endpoints for the hub frontend.
Combines all sub-routers into a single router with prefix /api/webapp.
"""

from fastapi import APIRouter

from .cart import router as cart_router
from .checkout import router as checkout_router

# Create main router with prefix
router = APIRouter(prefix="/api/webapp", tags=["webapp"])

# Include all sub-routers
router.include_router(cart_router)
router.include_router(checkout_router)

__all__ = ["router"]
