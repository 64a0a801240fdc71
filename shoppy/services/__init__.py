# ==============================================================================
# SERVICES PACKAGE INITIALIZATION
# ==============================================================================

"""
Business logic layer.

Services take a database adapter (and vendor clients where needed) and
return response schemas; routers never touch the adapter directly.
"""

from shoppy.services.base_service import BaseService
from shoppy.services.user_service import UserService
from shoppy.services.usage_service import UsageService
from shoppy.services.chat_service import ChatService
from shoppy.services.cart_service import CartService
from shoppy.services.order_service import OrderService
from shoppy.services.payment_service import PaymentService
from shoppy.services.storefront_service import StorefrontService
from shoppy.services.admin_service import AdminService

__all__ = [
    "BaseService",
    "UserService",
    "UsageService",
    "ChatService",
    "CartService",
    "OrderService",
    "PaymentService",
    "StorefrontService",
    "AdminService",
]
