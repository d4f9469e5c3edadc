"""
Unit tests for CreateBookingUseCase

1. Ticket lookup and bookability checks happen before any insert
2. Generated seats are retried on a uniqueness conflict, up to the attempt limit
3. A seat chosen by the customer conflicts immediately
"""

from unittest.mock import AsyncMock

import pytest
import uuid_utils

from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError
from src.service.marketplace.app.command.create_booking_use_case import CreateBookingUseCase
from src.service.marketplace.domain.entity.booking_entity import Booking, BookingStatus
from test.service.marketplace.builders import CUSTOMER_EMAIL, make_ticket


pytestmark = pytest.mark.unit


def _conflict_then_succeed(conflicts: int):
    """Repo.create stand-in: the first `conflicts` inserts hit the unique index"""
    seen: list[Booking] = []

    async def create(booking: Booking) -> Booking:
        seen.append(booking)
        if len(seen) <= conflicts:
            raise ConflictError('Seat already booked')
        return booking

    return create, seen


class TestCreateBookingUseCase:
    @pytest.fixture
    def ticket(self):
        return make_ticket(quantity=10)

    @pytest.fixture
    def ticket_query_repo(self, ticket) -> AsyncMock:
        repo = AsyncMock()
        repo.get_by_id = AsyncMock(return_value=ticket)
        return repo

    @pytest.fixture
    def booking_command_repo(self) -> AsyncMock:
        repo = AsyncMock()
        repo.create = AsyncMock(side_effect=lambda booking: booking)
        return repo

    @pytest.fixture
    def use_case(
        self, ticket_query_repo: AsyncMock, booking_command_repo: AsyncMock
    ) -> CreateBookingUseCase:
        return CreateBookingUseCase(
            ticket_query_repo=ticket_query_repo,
            booking_command_repo=booking_command_repo,
            seat_assignment_attempts=3,
        )

    async def test_creates_pending_booking(
        self, use_case: CreateBookingUseCase, booking_command_repo: AsyncMock, ticket
    ) -> None:
        booking = await use_case.create_booking(
            customer_email=CUSTOMER_EMAIL, ticket_id=ticket.id, quantity=2, seat='3a'
        )

        assert booking.status == BookingStatus.PENDING
        assert booking.seat == '3A'
        assert booking.total_price == ticket.price * 2
        booking_command_repo.create.assert_awaited_once()

    async def test_generated_seat_is_retried_on_conflict(
        self, use_case: CreateBookingUseCase, booking_command_repo: AsyncMock, ticket
    ) -> None:
        """
        Given: The first two generated seats are already taken
        When: A booking is created without a seat
        Then: The third insert succeeds, and every attempt keeps the same booking id
        """
        # Arrange
        create, seen = _conflict_then_succeed(conflicts=2)
        booking_command_repo.create = AsyncMock(side_effect=create)

        # Act
        booking = await use_case.create_booking(
            customer_email=CUSTOMER_EMAIL, ticket_id=ticket.id, quantity=1
        )

        # Assert
        assert len(seen) == 3
        assert booking is seen[-1]
        assert {b.id for b in seen} == {booking.id}

    async def test_gives_up_after_attempt_limit(
        self, use_case: CreateBookingUseCase, booking_command_repo: AsyncMock, ticket
    ) -> None:
        create, seen = _conflict_then_succeed(conflicts=10)
        booking_command_repo.create = AsyncMock(side_effect=create)

        with pytest.raises(ConflictError, match='Seat already booked'):
            await use_case.create_booking(
                customer_email=CUSTOMER_EMAIL, ticket_id=ticket.id, quantity=1
            )

        assert len(seen) == 3

    async def test_supplied_seat_is_not_retried(
        self, use_case: CreateBookingUseCase, booking_command_repo: AsyncMock, ticket
    ) -> None:
        create, seen = _conflict_then_succeed(conflicts=1)
        booking_command_repo.create = AsyncMock(side_effect=create)

        with pytest.raises(ConflictError):
            await use_case.create_booking(
                customer_email=CUSTOMER_EMAIL, ticket_id=ticket.id, quantity=1, seat='12C'
            )

        assert len(seen) == 1

    async def test_supplied_seat_is_inserted_once(
        self, use_case: CreateBookingUseCase, booking_command_repo: AsyncMock, ticket
    ) -> None:
        booking = await use_case.create_booking(
            customer_email=CUSTOMER_EMAIL, ticket_id=ticket.id, quantity=1, seat='3b'
        )

        assert booking.seat == '3B'
        booking_command_repo.create.assert_awaited_once_with(booking)

    async def test_unknown_ticket(
        self,
        use_case: CreateBookingUseCase,
        ticket_query_repo: AsyncMock,
        booking_command_repo: AsyncMock,
    ) -> None:
        ticket_query_repo.get_by_id = AsyncMock(return_value=None)

        with pytest.raises(NotFoundError, match='Ticket not found'):
            await use_case.create_booking(
                customer_email=CUSTOMER_EMAIL, ticket_id=uuid_utils.uuid7(), quantity=1
            )

        booking_command_repo.create.assert_not_awaited()

    async def test_not_enough_inventory_never_inserts(
        self, use_case: CreateBookingUseCase, booking_command_repo: AsyncMock, ticket
    ) -> None:
        with pytest.raises(DomainError, match='Not enough tickets available'):
            await use_case.create_booking(
                customer_email=CUSTOMER_EMAIL, ticket_id=ticket.id, quantity=11
            )

        booking_command_repo.create.assert_not_awaited()

    def test_attempts_never_below_one(self) -> None:
        use_case = CreateBookingUseCase(
            ticket_query_repo=AsyncMock(), booking_command_repo=AsyncMock(), seat_assignment_attempts=0
        )

        assert use_case.seat_assignment_attempts == 1
