from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils
from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ConflictError, CustomBaseError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.marketplace.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.marketplace.domain.entity.booking_entity import Booking


class CreateBookingUseCase:
    """
    Reserve a seat on a ticket

    Flow:
    1. Load the ticket and validate it is bookable for the requested quantity
    2. Normalize the supplied seat, or generate one
    3. Insert a pending booking; the partial unique index on (ticket_id, seat)
       rejects a seat already held by another active booking

    Ticket quantity is not touched here, only on confirmation.
    Generated seats are retried with a fresh seat up to SEAT_ASSIGNMENT_ATTEMPTS times,
    a supplied seat conflicts immediately.
    """

    def __init__(
        self,
        *,
        ticket_query_repo: ITicketQueryRepo,
        booking_command_repo: IBookingCommandRepo,
        seat_assignment_attempts: int = settings.SEAT_ASSIGNMENT_ATTEMPTS,
    ) -> None:
        self.ticket_query_repo = ticket_query_repo
        self.booking_command_repo = booking_command_repo
        self.seat_assignment_attempts = max(1, seat_assignment_attempts)
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
    ) -> Self:
        return cls(ticket_query_repo=ticket_query_repo, booking_command_repo=booking_command_repo)

    @Logger.io
    async def create_booking(
        self,
        *,
        customer_email: str,
        ticket_id: UUID,
        quantity: int,
        seat: Optional[str] = None,
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.create_booking',
            attributes={'ticket.id': str(ticket_id), 'booking.quantity': quantity},
        ) as span:
            try:
                booking = await self._create_booking(
                    customer_email=customer_email, ticket_id=ticket_id, quantity=quantity, seat=seat
                )
            except ConflictError:
                metrics.record_booking_created(result='conflict')
                raise
            except CustomBaseError:
                metrics.record_booking_created(result='rejected')
                raise

            span.set_attribute('booking.id', str(booking.id))
            metrics.record_booking_created(result='created')
            return booking

    async def _create_booking(
        self, *, customer_email: str, ticket_id: UUID, quantity: int, seat: Optional[str]
    ) -> Booking:
        ticket = await self.ticket_query_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError('Ticket not found')

        booking = Booking.create(
            id=uuid_utils.uuid7(),
            ticket=ticket,
            customer_email=customer_email,
            quantity=quantity,
            seat=seat,
        )

        attempts = 1 if seat else self.seat_assignment_attempts
        for attempt in range(1, attempts):
            try:
                created = await self.booking_command_repo.create(booking)
                break
            except ConflictError:
                Logger.base.warning(
                    f'💺 [BOOKING] Seat {booking.seat} taken on ticket {ticket_id}, '
                    f'retrying ({attempt}/{attempts})'
                )
                booking = booking.reassign_seat()
        else:
            # Last attempt, a conflict here goes to the caller
            created = await self.booking_command_repo.create(booking)

        Logger.base.info(
            f'📝 [BOOKING] {created.booking_reference} seat {created.seat} '
            f'x{created.quantity} for {customer_email}'
        )
        return created
