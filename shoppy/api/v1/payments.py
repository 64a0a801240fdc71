# ==============================================================================
# PAYMENT ENDPOINTS - Gateway Payment Routes
# ==============================================================================

from __future__ import annotations

from fastapi import APIRouter, status

from shoppy.api.dependencies import CurrentUser, PaymentServiceDep
from shoppy.core.constants import SuccessMessages
from shoppy.schemas.base import APIResponse
from shoppy.schemas.order import PaymentCreate, PaymentResponse, PaymentStatusUpdate

router = APIRouter(prefix="/payment", tags=["Payments"])


@router.post(
    "/create",
    response_model=APIResponse[PaymentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Record payment",
    description="Record a pending gateway payment against one of the user's orders.",
)
async def create_payment(
    schema: PaymentCreate,
    user: CurrentUser,
    service: PaymentServiceDep,
) -> APIResponse[PaymentResponse]:
    payment = await service.create_payment(user.id, schema)
    return APIResponse.ok(data=payment, message=SuccessMessages.PAYMENT_RECORDED)


@router.put(
    "/{payment_id}/status",
    response_model=APIResponse[PaymentResponse],
    summary="Update payment status",
    description="Apply a gateway status update, looked up by gateway payment id.",
)
async def update_payment_status(
    payment_id: str,
    schema: PaymentStatusUpdate,
    user: CurrentUser,
    service: PaymentServiceDep,
) -> APIResponse[PaymentResponse]:
    payment = await service.update_status(user.id, payment_id, schema)
    return APIResponse.ok(data=payment, message=SuccessMessages.PAYMENT_UPDATED)
