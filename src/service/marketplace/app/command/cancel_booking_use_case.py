from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.marketplace.domain.entity.booking_entity import Booking, BookingStatus


class CancelBookingUseCase:
    def __init__(self, *, booking_command_repo: IBookingCommandRepo) -> None:
        self.booking_command_repo = booking_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
    ) -> Self:
        return cls(booking_command_repo=booking_command_repo)

    @Logger.io
    async def cancel_booking(self, *, booking_id: UUID, requester_email: str) -> Booking:
        booking = await self.booking_command_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if not booking.is_owned_by(requester_email):
            raise ForbiddenError('Not authorized')

        return await self.cancel(booking)

    @Logger.io
    async def cancel(self, booking: Booking) -> Booking:
        """
        Cancel through the conditional repo statement

        The pre-check gives a precise error; the repo statement itself only matches
        an active booking, so a concurrent cancel can never restore twice.
        """
        booking.validate_transition(BookingStatus.CANCELLED)

        cancelled, restored = await self.booking_command_repo.cancel_and_restore_atomically(
            booking_id=booking.id
        )
        metrics.record_cancellation(inventory_restored=restored)
        Logger.base.info(
            f'🚫 [BOOKING] Cancelled {cancelled.booking_reference}'
            + (f', restored {cancelled.quantity} to ticket {cancelled.ticket_id}' if restored else '')
        )
        return cancelled
