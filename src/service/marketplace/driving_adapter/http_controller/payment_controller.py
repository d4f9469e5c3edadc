from typing import List

from fastapi import APIRouter, Depends
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.command.create_payment_intent_use_case import (
    CreatePaymentIntentUseCase,
)
from src.service.marketplace.app.command.record_payment_use_case import RecordPaymentUseCase
from src.service.marketplace.app.query.list_transactions_use_case import ListTransactionsUseCase
from src.service.marketplace.driving_adapter.http_controller.auth.identity_auth import (
    get_current_email,
)
from src.service.marketplace.driving_adapter.http_controller.schema.payment_schema import (
    PaymentIntentRequest,
    PaymentIntentResponse,
    PaymentResponse,
    RecordPaymentRequest,
    RecordPaymentResponse,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/create-payment-intent', response_model=PaymentIntentResponse)
@Logger.io
async def create_payment_intent(
    request: PaymentIntentRequest,
    email: str = Depends(get_current_email),
    use_case: CreatePaymentIntentUseCase = Depends(CreatePaymentIntentUseCase.depends),
) -> PaymentIntentResponse:
    client_secret = await use_case.create_payment_intent(amount=request.amount)
    return PaymentIntentResponse(client_secret=client_secret)


@router.post('/payments', response_model=RecordPaymentResponse)
@Logger.io
async def record_payment(
    request: RecordPaymentRequest,
    email: str = Depends(get_current_email),
    use_case: RecordPaymentUseCase = Depends(RecordPaymentUseCase.depends),
) -> RecordPaymentResponse:
    with tracer.start_as_current_span('controller.record_payment') as span:
        span.set_attribute('booking.id', str(request.booking_id))

        booking = await use_case.record_payment(
            booking_id=request.booking_id,
            transaction_id=request.transaction_id,
            amount=request.amount,
            method=request.method,
            requester_email=email,
        )
        return RecordPaymentResponse(
            message='Payment recorded',
            booking_id=booking.id,
            status=booking.status.value,
            paid_at=booking.paid_at,
        )


@router.get('/user/transactions', response_model=List[PaymentResponse])
@Logger.io
async def list_my_transactions(
    email: str = Depends(get_current_email),
    use_case: ListTransactionsUseCase = Depends(ListTransactionsUseCase.depends),
) -> List[PaymentResponse]:
    payments = await use_case.list_transactions(customer_email=email)
    return [PaymentResponse.model_validate(payment) for payment in payments]
