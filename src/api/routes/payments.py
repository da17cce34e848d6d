"""
Payment API Routes.

Order creation always answers 200: provider failures come back as a mock
order with ``mock: true``.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_order_service
from api.models import (
    PaymentCreateRequest,
    PaymentCreateResponse,
    PaymentVerifyRequest,
    PaymentVerifyResponse,
)
from payments.orders import OrderService

router = APIRouter(prefix="/api/payment", tags=["Payments"])


@router.post(
    "/create",
    response_model=PaymentCreateResponse,
    response_model_exclude_none=True,
)
def create_payment(
    request: PaymentCreateRequest,
    orders: OrderService = Depends(get_order_service),
) -> PaymentCreateResponse:
    order = orders.create_order(request.amount, request.currency)
    return PaymentCreateResponse.model_validate(order.to_dict())


@router.post("/verify", response_model=PaymentVerifyResponse)
def verify_payment(
    request: PaymentVerifyRequest,
    orders: OrderService = Depends(get_order_service),
) -> PaymentVerifyResponse:
    verified = orders.verify_payment(request.order_id, request.payment_id, request.signature)
    return PaymentVerifyResponse(verified=verified)
