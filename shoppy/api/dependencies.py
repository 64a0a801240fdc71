# ==============================================================================
# API DEPENDENCIES - Dependency Injection
# ==============================================================================
# FastAPI dependencies for authentication, database access and vendor clients
# ==============================================================================

from __future__ import annotations

from functools import lru_cache
from typing import Annotated, Any, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer

from shoppy.core.settings import settings
from shoppy.core.security import verify_access_token
from shoppy.core.constants import ErrorMessages
from shoppy.core.exceptions import AuthenticationError, AuthorizationError
from shoppy.database.factory import DatabaseFactory
from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter
from shoppy.clients.sensay_client import SensayClient
from shoppy.clients.shopify_client import ShopifyClient
from shoppy.services import (
    AdminService,
    CartService,
    ChatService,
    OrderService,
    PaymentService,
    StorefrontService,
    UserService,
)

# OAuth2 scheme for JWT tokens
oauth2_scheme = OAuth2PasswordBearer(
    tokenUrl=f"{settings.API_PREFIX}/auth/login",
    auto_error=False,
)


# ==============================================================================
# DATABASE DEPENDENCIES
# ==============================================================================

async def get_adapter() -> BaseDatabaseAdapter:
    """
    Get database adapter dependency.

    Returns initialized adapter from factory.
    """
    return DatabaseFactory.get_adapter()


# Annotated type for database adapter
DatabaseDep = Annotated[BaseDatabaseAdapter, Depends(get_adapter)]


# ==============================================================================
# VENDOR CLIENT DEPENDENCIES
# ==============================================================================

@lru_cache()
def get_sensay_client() -> SensayClient:
    """Process-wide Sensay client (one connection pool)."""
    return SensayClient()


@lru_cache()
def get_shopify_client() -> ShopifyClient:
    """Process-wide Shopify client (one connection pool per API)."""
    return ShopifyClient()


SensayDep = Annotated[SensayClient, Depends(get_sensay_client)]
ShopifyDep = Annotated[ShopifyClient, Depends(get_shopify_client)]


# ==============================================================================
# AUTHENTICATION DEPENDENCIES
# ==============================================================================

def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    adapter: DatabaseDep,
) -> Any:
    """
    Resolve the Bearer token to a user record.

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired,
            or its user no longer exists
    """
    if not token:
        raise _unauthorized(ErrorMessages.TOKEN_REQUIRED)

    try:
        payload = verify_access_token(token)
    except AuthenticationError:
        raise _unauthorized(ErrorMessages.TOKEN_INVALID)

    user = await UserService(adapter).get_user(payload["sub"])
    if not user:
        raise _unauthorized(ErrorMessages.USER_NOT_FOUND)

    return user


async def get_admin_user(
    user: Annotated[Any, Depends(get_current_user)],
) -> Any:
    """
    Require an operator account.

    Operators are recognised by an email address containing ``admin``.
    """
    if "admin" not in user.email:
        raise AuthorizationError(
            message=ErrorMessages.ADMIN_REQUIRED,
            required_permission="admin",
        )
    return user


# Annotated types
CurrentUser = Annotated[Any, Depends(get_current_user)]
AdminUser = Annotated[Any, Depends(get_admin_user)]


# ==============================================================================
# SERVICE DEPENDENCIES
# ==============================================================================

async def get_user_service(
    adapter: DatabaseDep,
) -> UserService:
    """Get user service instance."""
    return UserService(adapter)


async def get_chat_service(
    adapter: DatabaseDep,
    sensay: SensayDep,
    shopify: ShopifyDep,
) -> ChatService:
    """Get chat service instance."""
    return ChatService(adapter, sensay, shopify)


async def get_cart_service(
    adapter: DatabaseDep,
    shopify: ShopifyDep,
) -> CartService:
    """Get cart service instance."""
    return CartService(adapter, shopify)


async def get_order_service(
    adapter: DatabaseDep,
) -> OrderService:
    """Get order service instance."""
    return OrderService(adapter)


async def get_payment_service(
    adapter: DatabaseDep,
) -> PaymentService:
    """Get payment service instance."""
    return PaymentService(adapter)


async def get_storefront_service(
    shopify: ShopifyDep,
) -> StorefrontService:
    """Get storefront service instance."""
    return StorefrontService(shopify)


async def get_admin_service(
    adapter: DatabaseDep,
) -> AdminService:
    """Get admin service instance."""
    return AdminService(adapter)


# Annotated service types
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ChatServiceDep = Annotated[ChatService, Depends(get_chat_service)]
CartServiceDep = Annotated[CartService, Depends(get_cart_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]
StorefrontServiceDep = Annotated[StorefrontService, Depends(get_storefront_service)]
AdminServiceDep = Annotated[AdminService, Depends(get_admin_service)]
