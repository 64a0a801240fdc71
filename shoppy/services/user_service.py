# ==============================================================================
# USER SERVICE - Authentication & User Management
# ==============================================================================
# Registration, login and profile lookups
# ==============================================================================

from __future__ import annotations

import logging
from typing import Any, Optional

from shoppy.core.security import (
    create_access_token,
    hash_password,
    verify_password,
)
from shoppy.core.exceptions import (
    AuthenticationError,
    AlreadyExistsError,
    BadRequestError,
)
from shoppy.core.constants import DatabaseConstants, ErrorMessages
from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter
from shoppy.schemas.user import (
    AuthResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)
from shoppy.services.base_service import BaseService

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6


class UserService(BaseService[UserResponse]):
    """
    User service for authentication and profile management.

    Accounts are identified by email or username; both are unique.
    """

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        """Initialize user service."""
        super().__init__(adapter, DatabaseConstants.USERS_COLLECTION)

    def _to_response(self, entity: Any) -> UserResponse:
        """Convert user entity to response schema."""
        return UserResponse.model_validate(entity.to_dict())

    # ==========================================================================
    # AUTHENTICATION
    # ==========================================================================

    async def register(self, schema: UserRegister) -> AuthResponse:
        """
        Register a new user.

        Args:
            schema: User registration data

        Returns:
            Created user and an access token

        Raises:
            BadRequestError: If a field is missing or the password is short
            AlreadyExistsError: If email or username is taken
        """
        if not schema.email or not schema.username or not schema.password:
            raise BadRequestError(ErrorMessages.REGISTER_FIELDS_REQUIRED)

        if len(schema.password) < MIN_PASSWORD_LENGTH:
            raise BadRequestError(ErrorMessages.PASSWORD_TOO_SHORT)

        if await self._find_by_login(schema.email, schema.username):
            raise AlreadyExistsError(
                message=ErrorMessages.USER_EXISTS,
                resource_type="user",
            )

        user = await self._adapter.create(
            self._collection_name,
            {
                "email": schema.email,
                "username": schema.username,
                "password_hash": hash_password(schema.password),
            },
        )
        logger.info(f"User registered: {user.id}")

        return AuthResponse(
            user=self._to_response(user),
            token=create_access_token(subject=user.id),
        )

    async def authenticate(self, schema: UserLogin) -> AuthResponse:
        """
        Authenticate by email or username.

        Raises:
            BadRequestError: If a field is missing
            AuthenticationError: If the user is unknown or the password wrong
        """
        if not schema.email_or_username or not schema.password:
            raise BadRequestError(ErrorMessages.LOGIN_FIELDS_REQUIRED)

        user = await self._find_by_login(schema.email_or_username, schema.email_or_username)
        if not user:
            raise AuthenticationError(message=ErrorMessages.USER_NOT_FOUND)

        if not verify_password(schema.password, user.password_hash):
            raise AuthenticationError(message=ErrorMessages.INVALID_PASSWORD)

        logger.info(f"User logged in: {user.id}")
        return AuthResponse(
            user=self._to_response(user),
            token=create_access_token(subject=user.id),
        )

    # ==========================================================================
    # LOOKUPS
    # ==========================================================================

    async def get_user(self, user_id: str) -> Optional[Any]:
        """Return the user record, or None."""
        return await self._adapter.get_by_id(self._collection_name, user_id)

    async def _find_by_login(self, email: str, username: str) -> Optional[Any]:
        user = await self._adapter.find_one(self._collection_name, {"email": email})
        if user:
            return user
        return await self._adapter.find_one(self._collection_name, {"username": username})
