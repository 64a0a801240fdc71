# ==============================================================================
# AUTH ENDPOINTS - Authentication Routes
# ==============================================================================
# Register, login and current-user endpoints
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter, status

from shoppy.api.dependencies import CurrentUser, UserServiceDep
from shoppy.core.constants import SuccessMessages
from shoppy.schemas.base import APIResponse
from shoppy.schemas.user import (
    AuthResponse,
    MeResponse,
    UserLogin,
    UserRegister,
    UserResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post(
    "/register",
    response_model=APIResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register new user",
    description="Create an account and receive an access token.",
)
async def register(
    schema: UserRegister,
    service: UserServiceDep,
) -> APIResponse[AuthResponse]:
    """Register a new user."""
    result = await service.register(schema)
    return APIResponse.ok(data=result, message=SuccessMessages.USER_REGISTERED)


@router.post(
    "/login",
    response_model=APIResponse[AuthResponse],
    summary="User login",
    description="Authenticate with email or username and password.",
)
async def login(
    credentials: UserLogin,
    service: UserServiceDep,
) -> APIResponse[AuthResponse]:
    """Authenticate user and return a token."""
    result = await service.authenticate(credentials)
    return APIResponse.ok(data=result, message=SuccessMessages.LOGIN_SUCCESS)


@router.get(
    "/me",
    response_model=APIResponse[MeResponse],
    summary="Current user",
    description="Profile of the token holder.",
)
async def me(user: CurrentUser) -> APIResponse[MeResponse]:
    return APIResponse.ok(
        data=MeResponse(user=UserResponse.model_validate(user.to_dict()))
    )
