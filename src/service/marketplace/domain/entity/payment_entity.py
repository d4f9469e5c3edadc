from datetime import date, datetime
from typing import Optional

import attrs
from uuid_utils import UUID

from src.service.marketplace.domain.entity.booking_entity import Booking


@attrs.define(frozen=True)
class Payment:
    """Settled payment record, append-only"""

    id: UUID
    booking_id: UUID
    customer_email: str
    transaction_id: str
    amount: int
    method: str
    paid_at: datetime
    ticket_title: str = ''
    seat: str = ''
    from_location: str = ''
    to_location: str = ''
    departure_date: Optional[date] = None

    @classmethod
    def for_booking(
        cls, *, id: UUID, booking: Booking, transaction_id: str, amount: int, method: str
    ) -> 'Payment':
        """Build the payment for a booking already moved to confirmed (paid_at comes from it)"""
        assert booking.paid_at is not None, 'Booking must be confirmed before recording payment'
        return cls(
            id=id,
            booking_id=booking.id,
            customer_email=booking.customer_email,
            transaction_id=transaction_id,
            amount=amount,
            method=method,
            paid_at=booking.paid_at,
            ticket_title=booking.ticket_title,
            seat=booking.seat,
            from_location=booking.from_location,
            to_location=booking.to_location,
            departure_date=booking.departure_date,
        )
