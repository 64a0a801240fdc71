# ==============================================================================
# MAIN API ROUTER - Route Aggregation
# ==============================================================================
# Combines every endpoint router under the API prefix
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter

from shoppy.core.settings import settings
from shoppy.api.v1 import (
    admin_router,
    auth_router,
    cart_router,
    chat_router,
    orders_router,
    payments_router,
    storefront_router,
)

# Create main API router
api_router = APIRouter()

api_router.include_router(auth_router, prefix=settings.API_PREFIX)
api_router.include_router(chat_router, prefix=settings.API_PREFIX)
api_router.include_router(admin_router, prefix=settings.API_PREFIX)
api_router.include_router(storefront_router, prefix=settings.API_PREFIX)
api_router.include_router(cart_router, prefix=settings.API_PREFIX)
api_router.include_router(orders_router, prefix=settings.API_PREFIX)
api_router.include_router(payments_router, prefix=settings.API_PREFIX)
