from typing import List

from fastapi import APIRouter, Depends, status
from opentelemetry import trace

from src.platform.logging.loguru_io import Logger
from src.platform.types import UtilsUUID7
from src.service.marketplace.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.marketplace.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.marketplace.app.command.update_booking_status_use_case import (
    UpdateBookingStatusUseCase,
)
from src.service.marketplace.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.driving_adapter.http_controller.auth.identity_auth import (
    get_current_email,
)
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import require_user
from src.service.marketplace.driving_adapter.http_controller.schema.booking_schema import (
    BookingCreateRequest,
    BookingResponse,
    BookingStatusUpdateRequest,
)


router = APIRouter()
tracer = trace.get_tracer(__name__)


@router.post('/bookings', response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
@Logger.io
async def create_booking(
    request: BookingCreateRequest,
    email: str = Depends(get_current_email),
    use_case: CreateBookingUseCase = Depends(CreateBookingUseCase.depends),
) -> BookingResponse:
    with tracer.start_as_current_span('controller.create_booking') as span:
        span.set_attribute('ticket.id', str(request.ticket_id))

        booking = await use_case.create_booking(
            customer_email=email,
            ticket_id=request.ticket_id,
            quantity=request.quantity,
            seat=request.seat,
        )
        return BookingResponse.model_validate(booking)


@router.get('/user/bookings', response_model=List[BookingResponse])
@Logger.io
async def list_my_bookings(
    email: str = Depends(get_current_email),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_customer_bookings(customer_email=email)
    return [BookingResponse.model_validate(booking) for booking in bookings]


@router.patch('/bookings/{booking_id}/status', response_model=BookingResponse)
@Logger.io
async def update_booking_status(
    booking_id: UtilsUUID7,
    request: BookingStatusUpdateRequest,
    current_user: UserEntity = Depends(require_user),
    use_case: UpdateBookingStatusUseCase = Depends(UpdateBookingStatusUseCase.depends),
) -> BookingResponse:
    booking = await use_case.update_status(
        booking_id=booking_id, status=request.status, requester=current_user
    )
    return BookingResponse.model_validate(booking)


@router.delete('/bookings/{booking_id}', response_model=BookingResponse)
@Logger.io
async def cancel_booking(
    booking_id: UtilsUUID7,
    email: str = Depends(get_current_email),
    use_case: CancelBookingUseCase = Depends(CancelBookingUseCase.depends),
) -> BookingResponse:
    booking = await use_case.cancel_booking(booking_id=booking_id, requester_email=email)
    return BookingResponse.model_validate(booking)
