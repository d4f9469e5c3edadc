from datetime import date, datetime, time, timezone
from enum import StrEnum
from typing import Optional

import attrs
from uuid_utils import UUID

from src.platform.exception.exceptions import DomainError, ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.domain.entity.ticket_entity import Ticket
from src.service.marketplace.domain.seat_assignment_domain import (
    generate_booking_reference,
    generate_seat,
    normalize_seat,
)


class BookingStatus(StrEnum):
    PENDING = 'pending'
    CONFIRMED = 'confirmed'
    CANCELLED = 'cancelled'


# Statuses that hold a seat (partial unique index on booking(ticket_id, seat))
ACTIVE_BOOKING_STATUSES = frozenset({BookingStatus.PENDING, BookingStatus.CONFIRMED})

BOOKING_TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.PENDING: frozenset({BookingStatus.CONFIRMED, BookingStatus.CANCELLED}),
    BookingStatus.CONFIRMED: frozenset({BookingStatus.CANCELLED}),
    BookingStatus.CANCELLED: frozenset(),
}

# Vocabulary accepted by PATCH /bookings/{id}/status
EXTERNAL_STATUS_MAPPING: dict[str, BookingStatus] = {
    'accepted': BookingStatus.CONFIRMED,
    'rejected': BookingStatus.CANCELLED,
    'paid': BookingStatus.CONFIRMED,
    'pending': BookingStatus.PENDING,
    'cancelled': BookingStatus.CANCELLED,
}


def map_external_status(status: str) -> BookingStatus:
    try:
        return EXTERNAL_STATUS_MAPPING[status]
    except KeyError:
        raise ValidationError('Invalid status')


@attrs.define
class Booking:
    id: UUID
    ticket_id: UUID
    customer_email: str
    vendor_email: str
    quantity: int
    unit_price: int
    total_price: int
    seat: str
    booking_reference: str
    status: BookingStatus = BookingStatus.PENDING
    ticket_title: str = ''
    ticket_image: Optional[str] = None
    from_location: str = ''
    to_location: str = ''
    departure_date: Optional[date] = None
    departure_time: Optional[time] = None
    transaction_id: Optional[str] = None
    payment_method: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @classmethod
    @Logger.io
    def create(
        cls,
        *,
        id: UUID,
        ticket: Ticket,
        customer_email: str,
        quantity: int,
        seat: Optional[str] = None,
        booking_reference: Optional[str] = None,
    ) -> 'Booking':
        ticket.validate_bookable(quantity=quantity)
        seat = normalize_seat(seat) if seat else generate_seat()

        now = datetime.now(timezone.utc)
        return cls(
            id=id,
            ticket_id=ticket.id,
            customer_email=customer_email,
            vendor_email=ticket.vendor_email,
            quantity=quantity,
            unit_price=ticket.price,
            total_price=ticket.price * quantity,
            seat=seat,
            booking_reference=booking_reference or generate_booking_reference(now),
            status=BookingStatus.PENDING,
            ticket_title=ticket.title,
            ticket_image=ticket.image,
            from_location=ticket.from_location,
            to_location=ticket.to_location,
            departure_date=ticket.departure_date,
            departure_time=ticket.departure_time,
            created_at=now,
            updated_at=now,
        )

    @property
    def is_active(self) -> bool:
        return self.status in ACTIVE_BOOKING_STATUSES

    @property
    def departure_at(self) -> Optional[datetime]:
        if self.departure_date is None or self.departure_time is None:
            return None
        return datetime.combine(self.departure_date, self.departure_time, tzinfo=timezone.utc)

    def is_owned_by(self, email: str) -> bool:
        return self.customer_email == email

    def validate_transition(self, target: BookingStatus) -> None:
        """
        Validate a lifecycle transition against BOOKING_TRANSITIONS

        Raises:
            DomainError: When the transition is not in the table
        """
        if target in BOOKING_TRANSITIONS[self.status]:
            return
        if self.status == BookingStatus.CANCELLED and target == BookingStatus.CANCELLED:
            raise DomainError('Booking already cancelled')
        if self.status == BookingStatus.CONFIRMED and target == BookingStatus.CONFIRMED:
            raise DomainError('Booking already paid')
        raise DomainError(f'Invalid status transition: {self.status} -> {target}')

    def validate_can_be_paid(self) -> None:
        if self.status == BookingStatus.CONFIRMED:
            raise DomainError('Booking already paid')
        elif self.status == BookingStatus.CANCELLED:
            raise DomainError('Cannot pay for cancelled booking')

    def validate_payment_amount(self, amount: int) -> None:
        if amount != self.total_price:
            raise ValidationError('Payment amount does not match booking total')

    def validate_not_departed(self, *, now: datetime) -> None:
        departure_at = self.departure_at
        if departure_at is not None and departure_at < now:
            raise DomainError('Cannot pay for past tickets')

    @Logger.io
    def confirm(
        self,
        *,
        transaction_id: Optional[str] = None,
        payment_method: Optional[str] = None,
    ) -> 'Booking':
        self.validate_transition(BookingStatus.CONFIRMED)
        now = datetime.now(timezone.utc)
        return attrs.evolve(
            self,
            status=BookingStatus.CONFIRMED,
            transaction_id=transaction_id,
            payment_method=payment_method,
            paid_at=now,
            updated_at=now,
        )

    @Logger.io
    def cancel(self) -> 'Booking':
        self.validate_transition(BookingStatus.CANCELLED)
        return attrs.evolve(
            self, status=BookingStatus.CANCELLED, updated_at=datetime.now(timezone.utc)
        )

    def reassign_seat(self) -> 'Booking':
        """Fresh generated seat after a uniqueness conflict"""
        return attrs.evolve(self, seat=generate_seat())
