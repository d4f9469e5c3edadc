import re

import pytest
import uuid_utils

from src.platform.exception.exceptions import ForbiddenError, ValidationError
from src.service.marketplace.domain.entity.ticket_entity import Ticket
from src.service.marketplace.domain.enum.verification_status import VerificationStatus
from src.service.marketplace.domain.seat_assignment_domain import (
    generate_booking_reference,
    generate_seat,
    normalize_seat,
)
from test.service.marketplace.builders import OTHER_VENDOR_EMAIL, VENDOR_EMAIL, future_date, make_ticket


pytestmark = pytest.mark.unit


def _create(**overrides) -> Ticket:
    fields = {
        'id': uuid_utils.uuid7(),
        'vendor_email': VENDOR_EMAIL,
        'title': '  Dhaka to Khulna  ',
        'price': 12,
        'quantity': 20,
        'from_location': 'Dhaka',
        'to_location': 'Khulna',
        'departure_date': future_date(5),
        'departure_time': make_ticket().departure_time,
        **overrides,
    }
    return Ticket.create(**fields)


class TestCreateTicket:
    def test_new_listing_defaults(self) -> None:
        ticket = _create()

        assert ticket.title == 'Dhaka to Khulna'
        assert ticket.verification_status == VerificationStatus.PENDING
        assert ticket.is_advertised is False
        assert ticket.is_hidden is False
        assert ticket.perks == []
        assert ticket.is_publicly_visible is False

    @pytest.mark.parametrize(
        'overrides,message',
        [
            ({'title': '   '}, 'Ticket title is required'),
            ({'price': -1}, 'Price must not be negative'),
            ({'quantity': -1}, 'Quantity must not be negative'),
        ],
    )
    def test_invalid_listing(self, overrides: dict, message: str) -> None:
        with pytest.raises(ValidationError, match=message):
            _create(**overrides)


class TestVendorUpdate:
    def test_only_given_fields_change(self) -> None:
        ticket = make_ticket()

        updated = ticket.apply_vendor_update({'price': 35})

        assert updated.price == 35
        assert updated.quantity == ticket.quantity
        assert updated.verification_status == ticket.verification_status

    def test_protected_fields_are_rejected(self) -> None:
        with pytest.raises(ValidationError, match='Fields cannot be updated: is_advertised, vendor_email'):
            make_ticket().apply_vendor_update({'vendor_email': OTHER_VENDOR_EMAIL, 'is_advertised': True})

    def test_update_is_validated(self) -> None:
        with pytest.raises(ValidationError, match='Quantity must not be negative'):
            make_ticket().apply_vendor_update({'quantity': -3})

    def test_ownership(self) -> None:
        ticket = make_ticket()

        ticket.validate_owned_by(VENDOR_EMAIL)
        with pytest.raises(ForbiddenError):
            ticket.validate_owned_by(OTHER_VENDOR_EMAIL)


class TestVerify:
    @pytest.mark.parametrize('status', ['approved', 'rejected'])
    def test_admin_decision(self, status: str) -> None:
        ticket = make_ticket(verification_status=VerificationStatus.PENDING)

        assert ticket.verify(status).verification_status == VerificationStatus(status)

    @pytest.mark.parametrize('status,still_advertised', [('approved', True), ('rejected', False)])
    def test_only_approved_stays_advertised(self, status: str, still_advertised: bool) -> None:
        ticket = make_ticket(is_advertised=True)

        assert ticket.verify(status).is_advertised is still_advertised

    @pytest.mark.parametrize('status', ['pending', 'APPROVED', ''])
    def test_invalid_decision(self, status: str) -> None:
        with pytest.raises(ValidationError, match='Invalid verification status'):
            make_ticket().verify(status)


class TestSeatAssignment:
    @pytest.mark.parametrize('raw,expected', [('12c', '12C'), (' 1a ', '1A'), ('50F', '50F')])
    def test_normalize(self, raw: str, expected: str) -> None:
        assert normalize_seat(raw) == expected

    @pytest.mark.parametrize('raw', ['0A', '51A', '12G', 'A12', '012C', '12'])
    def test_out_of_range(self, raw: str) -> None:
        with pytest.raises(ValidationError, match='Invalid seat format'):
            normalize_seat(raw)

    def test_generated_seats_are_valid(self) -> None:
        for _ in range(200):
            assert normalize_seat(generate_seat())

    def test_booking_reference_format(self) -> None:
        reference = generate_booking_reference()

        assert re.fullmatch(r'TB-\d{14}-[0-9A-Z]{6}', reference)
