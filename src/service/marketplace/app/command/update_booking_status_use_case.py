from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.command.cancel_booking_use_case import CancelBookingUseCase
from src.service.marketplace.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.marketplace.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.marketplace.domain.entity.booking_entity import (
    Booking,
    BookingStatus,
    map_external_status,
)
from src.service.marketplace.domain.entity.user_entity import UserEntity, UserRole


class UpdateBookingStatusUseCase:
    """
    PATCH /bookings/{id}/status

    Authorization:
    - the vendor owning the ticket, or an admin: any mapped status
    - the booking owner: cancelled only

    Moving to confirmed is an offline settlement (inventory deducted, paid_at stamped,
    no payment row). Moving to cancelled shares the cancel path of DELETE /bookings/{id}.
    """

    def __init__(
        self,
        *,
        booking_command_repo: IBookingCommandRepo,
        ticket_query_repo: ITicketQueryRepo,
    ) -> None:
        self.booking_command_repo = booking_command_repo
        self.ticket_query_repo = ticket_query_repo
        self.cancel_use_case = CancelBookingUseCase(booking_command_repo=booking_command_repo)

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
    ) -> Self:
        return cls(booking_command_repo=booking_command_repo, ticket_query_repo=ticket_query_repo)

    @Logger.io
    async def update_status(
        self, *, booking_id: UUID, status: str, requester: UserEntity
    ) -> Booking:
        target = map_external_status(status)

        booking = await self.booking_command_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')

        await self._authorize(booking=booking, target=target, requester=requester)
        booking.validate_transition(target)

        if target == BookingStatus.CANCELLED:
            return await self.cancel_use_case.cancel(booking)

        confirmed = booking.confirm(payment_method='offline')
        settled = await self.booking_command_repo.confirm_and_deduct_atomically(booking=confirmed)
        Logger.base.info(
            f'✅ [BOOKING] {settled.booking_reference} confirmed by {requester.email}, '
            f'deducted {settled.quantity} from ticket {settled.ticket_id}'
        )
        return settled

    async def _authorize(
        self, *, booking: Booking, target: BookingStatus, requester: UserEntity
    ) -> None:
        if requester.role == UserRole.ADMIN:
            return

        ticket = await self.ticket_query_repo.get_by_id(ticket_id=booking.ticket_id)
        vendor_email = ticket.vendor_email if ticket else booking.vendor_email
        if requester.role == UserRole.VENDOR and requester.email == vendor_email:
            return

        if booking.is_owned_by(requester.email) and target == BookingStatus.CANCELLED:
            return

        raise ForbiddenError('Not authorized')
