"""
Unit tests for the Booking entity

1. Creation: snapshot of the ticket, seat normalization, pending status
2. Lifecycle transitions: pending -> confirmed -> cancelled, cancelled is terminal
3. Payment validations: payable status, exact amount, departure not passed
"""

from datetime import date, datetime, time, timezone
import re

import attrs
import pytest
import uuid_utils

from src.platform.exception.exceptions import DomainError, ValidationError
from src.service.marketplace.domain.entity.booking_entity import (
    Booking,
    BookingStatus,
    map_external_status,
)
from src.service.marketplace.domain.enum.verification_status import VerificationStatus
from test.service.marketplace.builders import CUSTOMER_EMAIL, VENDOR_EMAIL, make_booking, make_ticket


pytestmark = pytest.mark.unit


class TestCreateBooking:
    def test_snapshot_of_ticket(self) -> None:
        # Arrange
        ticket = make_ticket(price=15, image='https://example.com/bus.png')

        # Act
        booking = Booking.create(
            id=uuid_utils.uuid7(), ticket=ticket, customer_email=CUSTOMER_EMAIL, quantity=3, seat=' 7b '
        )

        # Assert
        assert booking.status == BookingStatus.PENDING
        assert booking.seat == '7B'
        assert booking.unit_price == 15
        assert booking.total_price == 45
        assert booking.vendor_email == VENDOR_EMAIL
        assert booking.ticket_title == ticket.title
        assert booking.ticket_image == ticket.image
        assert booking.departure_date == ticket.departure_date
        assert re.fullmatch(r'TB-\d{14}-[0-9A-Z]{6}', booking.booking_reference)

    def test_generated_seat_when_none_supplied(self) -> None:
        booking = Booking.create(
            id=uuid_utils.uuid7(), ticket=make_ticket(), customer_email=CUSTOMER_EMAIL, quantity=1
        )

        assert re.fullmatch(r'(?:[1-9]|[1-4][0-9]|50)[A-F]', booking.seat)

    def test_ticket_quantity_is_not_touched(self) -> None:
        ticket = make_ticket(quantity=5)

        Booking.create(id=uuid_utils.uuid7(), ticket=ticket, customer_email=CUSTOMER_EMAIL, quantity=5)

        assert ticket.quantity == 5

    @pytest.mark.parametrize(
        'overrides,quantity,message',
        [
            ({'verification_status': VerificationStatus.PENDING}, 1, 'Ticket is not available for booking'),
            ({'is_hidden': True}, 1, 'Ticket is not available for booking'),
            ({'quantity': 2}, 3, 'Not enough tickets available'),
        ],
    )
    def test_unbookable_ticket(self, overrides: dict, quantity: int, message: str) -> None:
        with pytest.raises(DomainError, match=message):
            Booking.create(
                id=uuid_utils.uuid7(),
                ticket=make_ticket(**overrides),
                customer_email=CUSTOMER_EMAIL,
                quantity=quantity,
            )

    def test_quantity_below_one(self) -> None:
        with pytest.raises(ValidationError, match='Quantity must be at least 1'):
            Booking.create(
                id=uuid_utils.uuid7(), ticket=make_ticket(), customer_email=CUSTOMER_EMAIL, quantity=0
            )


class TestTransitions:
    def test_confirm_pending(self) -> None:
        booking = make_booking()

        confirmed = booking.confirm(transaction_id='pi_1', payment_method='card')

        assert confirmed.status == BookingStatus.CONFIRMED
        assert confirmed.transaction_id == 'pi_1'
        assert confirmed.paid_at is not None
        assert booking.status == BookingStatus.PENDING

    def test_cancel_confirmed(self) -> None:
        booking = make_booking(status=BookingStatus.CONFIRMED)

        assert booking.cancel().status == BookingStatus.CANCELLED

    def test_cancelled_is_terminal(self) -> None:
        booking = make_booking(status=BookingStatus.CANCELLED)

        with pytest.raises(DomainError, match='Booking already cancelled'):
            booking.cancel()
        with pytest.raises(DomainError, match='Invalid status transition: cancelled -> confirmed'):
            booking.confirm()

    def test_confirm_twice(self) -> None:
        booking = make_booking(status=BookingStatus.CONFIRMED)

        with pytest.raises(DomainError, match='Booking already paid'):
            booking.confirm()

    @pytest.mark.parametrize('status', list(BookingStatus))
    def test_pending_is_never_a_target(self, status: BookingStatus) -> None:
        booking = make_booking(status=status)

        with pytest.raises(DomainError, match=f'Invalid status transition: {status} -> pending'):
            booking.validate_transition(BookingStatus.PENDING)

    def test_active_statuses(self) -> None:
        assert make_booking().is_active
        assert make_booking(status=BookingStatus.CONFIRMED).is_active
        assert not make_booking(status=BookingStatus.CANCELLED).is_active

    @pytest.mark.parametrize(
        'external,expected',
        [
            ('accepted', BookingStatus.CONFIRMED),
            ('paid', BookingStatus.CONFIRMED),
            ('rejected', BookingStatus.CANCELLED),
            ('cancelled', BookingStatus.CANCELLED),
            ('pending', BookingStatus.PENDING),
        ],
    )
    def test_external_status_vocabulary(self, external: str, expected: BookingStatus) -> None:
        assert map_external_status(external) == expected

    def test_unknown_external_status(self) -> None:
        with pytest.raises(ValidationError, match='Invalid status'):
            map_external_status('refunded')


class TestPaymentValidation:
    def test_cancelled_cannot_be_paid(self) -> None:
        with pytest.raises(DomainError, match='Cannot pay for cancelled booking'):
            make_booking(status=BookingStatus.CANCELLED).validate_can_be_paid()

    def test_confirmed_cannot_be_paid_again(self) -> None:
        with pytest.raises(DomainError, match='Booking already paid'):
            make_booking(status=BookingStatus.CONFIRMED).validate_can_be_paid()

    def test_amount_must_equal_total(self) -> None:
        booking = make_booking(quantity=2)

        booking.validate_payment_amount(40)
        with pytest.raises(ValidationError, match='Payment amount does not match booking total'):
            booking.validate_payment_amount(41)

    def test_departure_in_the_past(self) -> None:
        booking = attrs.evolve(
            make_booking(), departure_date=date(2025, 1, 1), departure_time=time(9, 0)
        )

        booking.validate_not_departed(now=datetime(2025, 1, 1, 8, 59, tzinfo=timezone.utc))
        with pytest.raises(DomainError, match='Cannot pay for past tickets'):
            booking.validate_not_departed(now=datetime(2025, 1, 1, 9, 1, tzinfo=timezone.utc))

    def test_missing_departure_never_blocks(self) -> None:
        booking = attrs.evolve(make_booking(), departure_date=None, departure_time=None)

        booking.validate_not_departed(now=datetime.now(timezone.utc))
