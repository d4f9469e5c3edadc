"""
Booking Command Repository Implementation

Raw SQL on the asyncpg pool. Each lifecycle step that touches inventory is a
single statement of data-modifying CTEs, so PostgreSQL applies the booking
update, the payment insert and the ticket quantity delta together or not at all.
"""

from datetime import datetime, timezone

import asyncpg
from uuid_utils import UUID

from src.platform.database.asyncpg_setting import get_asyncpg_pool
from src.platform.exception.exceptions import ConflictError, DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.marketplace.domain.entity.booking_entity import Booking, BookingStatus
from src.service.marketplace.domain.entity.payment_entity import Payment


SEAT_UNIQUE_INDEX = 'uq_booking_ticket_seat_active'
PAYMENT_BOOKING_UNIQUE_INDEX = 'uq_payment_booking_id'

BOOKING_COLUMNS = """
    id, ticket_id, customer_email, vendor_email, quantity, unit_price, total_price,
    seat, booking_reference, status, ticket_title, ticket_image, from_location,
    to_location, departure_date, departure_time, transaction_id, payment_method,
    paid_at, created_at, updated_at
"""


def booking_row_to_entity(row: asyncpg.Record) -> Booking:
    return Booking(
        id=row['id'],
        ticket_id=row['ticket_id'],
        customer_email=row['customer_email'],
        vendor_email=row['vendor_email'],
        quantity=row['quantity'],
        unit_price=row['unit_price'],
        total_price=row['total_price'],
        seat=row['seat'],
        booking_reference=row['booking_reference'],
        status=BookingStatus(row['status']),
        ticket_title=row['ticket_title'],
        ticket_image=row['ticket_image'],
        from_location=row['from_location'],
        to_location=row['to_location'],
        departure_date=row['departure_date'],
        departure_time=row['departure_time'],
        transaction_id=row['transaction_id'],
        payment_method=row['payment_method'],
        paid_at=row['paid_at'],
        created_at=row['created_at'],
        updated_at=row['updated_at'],
    )


class BookingCommandRepoImpl(IBookingCommandRepo):
    @Logger.io
    async def get_by_id(self, *, booking_id: UUID) -> Booking | None:
        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                f'SELECT {BOOKING_COLUMNS} FROM booking WHERE id = $1',
                booking_id,
            )
            return booking_row_to_entity(row) if row else None

    @Logger.io
    async def create(self, booking: Booking) -> Booking:
        async with (await get_asyncpg_pool()).acquire() as conn:
            try:
                row = await conn.fetchrow(
                    f"""
                    INSERT INTO booking (
                        id, ticket_id, customer_email, vendor_email, quantity, unit_price,
                        total_price, seat, booking_reference, status, ticket_title,
                        ticket_image, from_location, to_location, departure_date,
                        departure_time, created_at, updated_at
                    )
                    VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10, $11, $12, $13, $14,
                            $15, $16, $17, $17)
                    RETURNING {BOOKING_COLUMNS}
                    """,
                    booking.id,
                    booking.ticket_id,
                    booking.customer_email,
                    booking.vendor_email,
                    booking.quantity,
                    booking.unit_price,
                    booking.total_price,
                    booking.seat,
                    booking.booking_reference,
                    booking.status.value,
                    booking.ticket_title,
                    booking.ticket_image,
                    booking.from_location,
                    booking.to_location,
                    booking.departure_date,
                    booking.departure_time,
                    booking.created_at or datetime.now(timezone.utc),
                )
            except asyncpg.UniqueViolationError as e:
                if e.constraint_name == SEAT_UNIQUE_INDEX:
                    raise ConflictError('Seat already booked') from e
                raise

            return booking_row_to_entity(row)

    @Logger.io
    async def settle_with_payment_atomically(
        self, *, booking: Booking, payment: Payment
    ) -> Booking:
        """
        settled: pending -> confirmed (no row when already settled or cancelled)
        recorded: payment row, only if settled matched
        deducted: ticket.quantity -= booking.quantity, only if settled matched
        """
        async with (await get_asyncpg_pool()).acquire() as conn:
            try:
                row = await conn.fetchrow(
                    f"""
                    WITH settled AS (
                        UPDATE booking
                        SET status = 'confirmed',
                            transaction_id = $2,
                            payment_method = $3,
                            paid_at = $4,
                            updated_at = $4
                        WHERE id = $1 AND status = 'pending'
                        RETURNING {BOOKING_COLUMNS}
                    ),
                    recorded AS (
                        INSERT INTO payment (
                            id, booking_id, customer_email, transaction_id, amount, method,
                            ticket_title, seat, from_location, to_location, departure_date,
                            paid_at
                        )
                        SELECT $5, s.id, s.customer_email, $2, $6, $3,
                               s.ticket_title, s.seat, s.from_location, s.to_location,
                               s.departure_date, $4
                        FROM settled s
                        RETURNING id
                    ),
                    deducted AS (
                        UPDATE ticket t
                        SET quantity = t.quantity - s.quantity,
                            updated_at = $4
                        FROM settled s
                        WHERE t.id = s.ticket_id
                        RETURNING t.id
                    )
                    SELECT * FROM settled
                    """,
                    booking.id,
                    booking.transaction_id,
                    booking.payment_method,
                    booking.paid_at,
                    payment.id,
                    payment.amount,
                )
            except asyncpg.UniqueViolationError as e:
                if e.constraint_name == PAYMENT_BOOKING_UNIQUE_INDEX:
                    raise DomainError('Booking already paid') from e
                raise

            if not row:
                raise DomainError('Booking already paid')
            return booking_row_to_entity(row)

    @Logger.io
    async def confirm_and_deduct_atomically(self, *, booking: Booking) -> Booking:
        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                f"""
                WITH confirmed AS (
                    UPDATE booking
                    SET status = 'confirmed',
                        transaction_id = COALESCE($2, transaction_id),
                        payment_method = COALESCE($3, payment_method),
                        paid_at = $4,
                        updated_at = $4
                    WHERE id = $1 AND status = 'pending'
                    RETURNING {BOOKING_COLUMNS}
                ),
                deducted AS (
                    UPDATE ticket t
                    SET quantity = t.quantity - c.quantity,
                        updated_at = $4
                    FROM confirmed c
                    WHERE t.id = c.ticket_id
                    RETURNING t.id
                )
                SELECT * FROM confirmed
                """,
                booking.id,
                booking.transaction_id,
                booking.payment_method,
                booking.paid_at or datetime.now(timezone.utc),
            )

            if not row:
                raise DomainError('Booking already paid')
            return booking_row_to_entity(row)

    @Logger.io
    async def cancel_and_restore_atomically(self, *, booking_id: UUID) -> tuple[Booking, bool]:
        """
        prev: the booking while still active, row-locked
        cancelled: -> cancelled
        restored: ticket.quantity += booking.quantity, only when prev was confirmed

        A concurrent second cancel re-checks prev after the first commits, finds
        the row cancelled and matches nothing, so inventory is restored once.
        """
        now = datetime.now(timezone.utc)

        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                """
                WITH prev AS (
                    SELECT id, ticket_id, quantity, status AS previous_status
                    FROM booking
                    WHERE id = $1 AND status IN ('pending', 'confirmed')
                    FOR UPDATE
                ),
                cancelled AS (
                    UPDATE booking b
                    SET status = 'cancelled',
                        updated_at = $2
                    FROM prev
                    WHERE b.id = prev.id
                    RETURNING b.*
                ),
                restored AS (
                    UPDATE ticket t
                    SET quantity = t.quantity + prev.quantity,
                        updated_at = $2
                    FROM prev
                    WHERE t.id = prev.ticket_id AND prev.previous_status = 'confirmed'
                    RETURNING t.id
                )
                SELECT cancelled.*, EXISTS (SELECT 1 FROM restored) AS inventory_restored
                FROM cancelled
                """,
                booking_id,
                now,
            )

            if not row:
                exists = await conn.fetchval('SELECT 1 FROM booking WHERE id = $1', booking_id)
                if not exists:
                    raise NotFoundError('Booking not found')
                raise DomainError('Booking already cancelled')

            return booking_row_to_entity(row), row['inventory_restored']
