from typing import List

import asyncpg

from src.platform.database.asyncpg_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_payment_query_repo import IPaymentQueryRepo
from src.service.marketplace.domain.entity.booking_entity import Booking
from src.service.marketplace.domain.entity.payment_entity import Payment
from src.service.marketplace.driven_adapter.repo.booking_command_repo_impl import (
    BOOKING_COLUMNS,
    booking_row_to_entity,
)


PAYMENT_COLUMNS = """
    p.id, p.booking_id, p.customer_email, p.transaction_id, p.amount, p.method,
    p.ticket_title, p.seat, p.from_location, p.to_location, p.departure_date, p.paid_at
"""


def _row_to_payment(row: asyncpg.Record) -> Payment:
    return Payment(
        id=row['id'],
        booking_id=row['booking_id'],
        customer_email=row['customer_email'],
        transaction_id=row['transaction_id'],
        amount=row['amount'],
        method=row['method'],
        paid_at=row['paid_at'],
        ticket_title=row['ticket_title'],
        seat=row['seat'],
        from_location=row['from_location'],
        to_location=row['to_location'],
        departure_date=row['departure_date'],
    )


class PaymentQueryRepoImpl(IPaymentQueryRepo):
    @Logger.io
    async def list_by_customer(self, *, customer_email: str) -> List[Payment]:
        async with (await get_asyncpg_pool()).acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {PAYMENT_COLUMNS}
                FROM payment p
                WHERE p.customer_email = $1
                ORDER BY p.paid_at DESC
                """,
                customer_email,
            )
            return [_row_to_payment(row) for row in rows]

    @Logger.io
    async def find_unsettled(self) -> List[tuple[Payment, Booking | None]]:
        async with (await get_asyncpg_pool()).acquire() as conn:
            payment_rows = await conn.fetch(
                f"""
                SELECT {PAYMENT_COLUMNS}
                FROM payment p
                LEFT JOIN booking b ON b.id = p.booking_id
                WHERE b.id IS NULL OR b.status = 'pending'
                ORDER BY p.paid_at
                """
            )
            if not payment_rows:
                return []

            booking_rows = await conn.fetch(
                f'SELECT {BOOKING_COLUMNS} FROM booking WHERE id = ANY($1::uuid[])',
                [row['booking_id'] for row in payment_rows],
            )
            bookings = {row['id']: booking_row_to_entity(row) for row in booking_rows}

            return [
                (_row_to_payment(row), bookings.get(row['booking_id'])) for row in payment_rows
            ]
