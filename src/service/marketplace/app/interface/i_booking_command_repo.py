from abc import ABC, abstractmethod

from uuid_utils import UUID

from src.service.marketplace.domain.entity.booking_entity import Booking
from src.service.marketplace.domain.entity.payment_entity import Payment


class IBookingCommandRepo(ABC):
    """
    Write side of the booking ledger

    Every method that moves a booking into or out of confirmed also applies the
    matching ticket quantity delta in the same SQL statement.
    """

    @abstractmethod
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        pass

    @abstractmethod
    async def create(self, booking: Booking) -> Booking:
        """
        Raises:
            ConflictError: Another active booking already holds (ticket_id, seat)
        """
        pass

    @abstractmethod
    async def settle_with_payment_atomically(self, *, booking: Booking, payment: Payment) -> Booking:
        """
        Confirm a pending booking, insert its payment and deduct inventory in one statement

        Raises:
            DomainError: The booking was no longer pending, or already has a payment row
        """
        pass

    @abstractmethod
    async def confirm_and_deduct_atomically(self, *, booking: Booking) -> Booking:
        """
        Confirm a pending booking without a payment row (offline settlement)

        Raises:
            DomainError: The booking was no longer pending
        """
        pass

    @abstractmethod
    async def cancel_and_restore_atomically(self, *, booking_id: UUID) -> tuple[Booking, bool]:
        """
        Cancel an active booking and restore inventory iff it was confirmed

        Returns:
            (cancelled booking, whether inventory was restored)

        Raises:
            DomainError: The booking was already cancelled
        """
        pass
