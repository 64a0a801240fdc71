# ==============================================================================
# SCHEMAS PACKAGE INITIALIZATION
# ==============================================================================

"""
Pydantic request and response schemas.

Every schema serializes with camelCase aliases.
"""

from shoppy.schemas.base import APIResponse, BaseSchema, HealthResponse, TimestampSchema
from shoppy.schemas.user import AuthResponse, MeResponse, UserLogin, UserRegister, UserResponse
from shoppy.schemas.chat import (
    ChatMessageResponse,
    ChatSendRequest,
    ChatSendResponse,
    ChatSessionSummary,
    VendorHistoryResponse,
)
from shoppy.schemas.cart import CartItemAdd, CartItemResponse, CartItemUpdate, CartResponse
from shoppy.schemas.order import (
    CustomerInfo,
    OrderCreate,
    OrderItemResponse,
    OrderResponse,
    PaymentCreate,
    PaymentData,
    PaymentResponse,
    PaymentStatusUpdate,
)
from shoppy.schemas.storefront import ProductListResponse, ProductSearchRequest, StorefrontCartAdd
from shoppy.schemas.admin import AdminUserResponse, ApiUsageResponse

__all__ = [
    "APIResponse",
    "BaseSchema",
    "HealthResponse",
    "TimestampSchema",
    "AuthResponse",
    "MeResponse",
    "UserLogin",
    "UserRegister",
    "UserResponse",
    "ChatMessageResponse",
    "ChatSendRequest",
    "ChatSendResponse",
    "ChatSessionSummary",
    "VendorHistoryResponse",
    "CartItemAdd",
    "CartItemResponse",
    "CartItemUpdate",
    "CartResponse",
    "CustomerInfo",
    "OrderCreate",
    "OrderItemResponse",
    "OrderResponse",
    "PaymentCreate",
    "PaymentData",
    "PaymentResponse",
    "PaymentStatusUpdate",
    "ProductListResponse",
    "ProductSearchRequest",
    "StorefrontCartAdd",
    "AdminUserResponse",
    "ApiUsageResponse",
]
