# ==============================================================================
# PAYMENT SERVICE - Gateway Payment Records
# ==============================================================================

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any

from shoppy.core.constants import DatabaseConstants, ErrorMessages
from shoppy.core.exceptions import AlreadyExistsError, BadRequestError, NotFoundError
from shoppy.database.adapters.base_adapter import BaseDatabaseAdapter
from shoppy.domain_models.order import PaymentStatus
from shoppy.schemas.order import PaymentCreate, PaymentResponse, PaymentStatusUpdate
from shoppy.services.base_service import BaseService
from shoppy.utils.helpers import utc_now

logger = logging.getLogger(__name__)


class PaymentService(BaseService[PaymentResponse]):
    """Payments are recorded against the caller's own orders only."""

    def __init__(self, adapter: BaseDatabaseAdapter) -> None:
        super().__init__(adapter, DatabaseConstants.PAYMENTS_COLLECTION)

    def _to_response(self, entity: Any) -> PaymentResponse:
        return PaymentResponse.model_validate(entity.to_dict())

    async def _owned_order(self, user_id: str, order_id: str, message: str) -> Any:
        order = await self._adapter.get_by_id(DatabaseConstants.ORDERS_COLLECTION, order_id)
        if not order or order.user_id != user_id:
            raise NotFoundError(message=message, resource_type="order", resource_id=order_id)
        return order

    async def create_payment(self, user_id: str, schema: PaymentCreate) -> PaymentResponse:
        """
        Record a PENDING payment for an order.

        Raises:
            BadRequestError: If order id or payment data is missing
            NotFoundError: If the order is not the user's
            AlreadyExistsError: If the gateway payment id was already used
        """
        if not schema.order_id or not schema.payment_data:
            raise BadRequestError(ErrorMessages.PAYMENT_FIELDS_REQUIRED)

        order = await self._owned_order(user_id, schema.order_id, ErrorMessages.ORDER_NOT_FOUND)
        data = schema.payment_data

        if await self._adapter.find_one(self._collection_name, {"payment_id": data.payment_id}):
            raise AlreadyExistsError(
                message=ErrorMessages.PAYMENT_EXISTS,
                resource_type="payment",
            )

        payment = await self._adapter.create(
            self._collection_name,
            {
                "order_id": order.id,
                "payment_id": data.payment_id,
                "amount": Decimal(str(data.amount)),
                "currency": (data.currency or order.currency).upper(),
                "method": data.method,
                "gateway": data.gateway,
                "transaction_id": data.transaction_id,
                "reference": data.reference,
            },
        )
        logger.info(f"Payment {data.payment_id} recorded for order {order.order_number}")
        return self._to_response(payment)

    async def update_status(
        self,
        user_id: str,
        payment_id: str,
        schema: PaymentStatusUpdate,
    ) -> PaymentResponse:
        """
        Apply a gateway status update, looked up by gateway payment id.

        PAID without an explicit ``paid_at`` is stamped with the current time.

        Raises:
            BadRequestError: If status is missing or unknown
            NotFoundError: If the payment does not belong to the user's orders
        """
        if not schema.status:
            raise BadRequestError(ErrorMessages.STATUS_REQUIRED)

        try:
            status = PaymentStatus(schema.status.upper())
        except ValueError:
            raise BadRequestError(
                ErrorMessages.INVALID_PAYMENT_STATUS,
                details={"allowed": [s.value for s in PaymentStatus]},
            )

        payment = await self._adapter.find_one(self._collection_name, {"payment_id": payment_id})
        if not payment:
            raise NotFoundError(
                message=ErrorMessages.PAYMENT_NOT_FOUND,
                resource_type="payment",
                resource_id=payment_id,
            )
        await self._owned_order(user_id, payment.order_id, ErrorMessages.PAYMENT_NOT_FOUND)

        data: dict = {"status": status}
        paid_at = schema.paid_at
        if paid_at is None and status == PaymentStatus.PAID:
            paid_at = utc_now()
        if paid_at is not None:
            data["paid_at"] = paid_at

        updated = await self._adapter.update(self._collection_name, payment.id, data)
        logger.info(f"Payment {payment_id} is now {status.value}")
        return self._to_response(updated)
