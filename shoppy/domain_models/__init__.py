# ==============================================================================
# DOMAIN MODELS PACKAGE INITIALIZATION
# ==============================================================================

"""
Domain Models
=============

SQLAlchemy ORM models for database entities:
- User: Accounts and vendor user link
- Chat: Sessions and messages
- Cart: Carts and cart items
- Order: Orders, order items and payments
- ApiUsage: Vendor API call log
"""

from shoppy.domain_models.base import SQLBase, TimestampMixin
from shoppy.domain_models.user import User
from shoppy.domain_models.chat import ChatSession, ChatMessage
from shoppy.domain_models.cart import Cart, CartItem, CartStatus
from shoppy.domain_models.order import (
    Order,
    OrderItem,
    OrderStatus,
    Payment,
    PaymentStatus,
)
from shoppy.domain_models.api_usage import ApiUsage

__all__ = [
    "SQLBase",
    "TimestampMixin",
    "User",
    "ChatSession",
    "ChatMessage",
    "Cart",
    "CartItem",
    "CartStatus",
    "Order",
    "OrderItem",
    "OrderStatus",
    "Payment",
    "PaymentStatus",
    "ApiUsage",
]
