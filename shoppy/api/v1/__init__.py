# ==============================================================================
# API V1 ENDPOINTS PACKAGE
# ==============================================================================

"""
API V1 Endpoints
================

Every router is mounted under the ``/api`` prefix.
"""

from shoppy.api.v1.auth import router as auth_router
from shoppy.api.v1.chat import router as chat_router
from shoppy.api.v1.cart import router as cart_router
from shoppy.api.v1.orders import router as orders_router
from shoppy.api.v1.payments import router as payments_router
from shoppy.api.v1.storefront import router as storefront_router
from shoppy.api.v1.admin import router as admin_router

__all__ = [
    "auth_router",
    "chat_router",
    "cart_router",
    "orders_router",
    "payments_router",
    "storefront_router",
    "admin_router",
]
