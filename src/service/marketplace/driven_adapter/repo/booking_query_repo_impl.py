from typing import List

from src.platform.database.asyncpg_setting import get_asyncpg_pool
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.marketplace.domain.entity.booking_entity import Booking
from src.service.marketplace.domain.value_object.vendor_revenue import VendorRevenue
from src.service.marketplace.driven_adapter.repo.booking_command_repo_impl import (
    BOOKING_COLUMNS,
    booking_row_to_entity,
)


class BookingQueryRepoImpl(IBookingQueryRepo):
    @Logger.io
    async def list_by_customer(self, *, customer_email: str) -> List[Booking]:
        async with (await get_asyncpg_pool()).acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {BOOKING_COLUMNS}
                FROM booking
                WHERE customer_email = $1
                ORDER BY created_at DESC
                """,
                customer_email,
            )
            return [booking_row_to_entity(row) for row in rows]

    @Logger.io
    async def list_by_vendor(self, *, vendor_email: str) -> List[Booking]:
        async with (await get_asyncpg_pool()).acquire() as conn:
            rows = await conn.fetch(
                f"""
                SELECT {BOOKING_COLUMNS}
                FROM booking
                WHERE vendor_email = $1
                ORDER BY created_at DESC
                """,
                vendor_email,
            )
            return [booking_row_to_entity(row) for row in rows]

    @Logger.io
    async def get_vendor_revenue(self, *, vendor_email: str) -> VendorRevenue:
        async with (await get_asyncpg_pool()).acquire() as conn:
            row = await conn.fetchrow(
                """
                SELECT COALESCE(SUM(total_price), 0) AS total_revenue,
                       COALESCE(SUM(quantity), 0) AS total_tickets_sold
                FROM booking
                WHERE vendor_email = $1 AND status = 'confirmed'
                """,
                vendor_email,
            )
            return VendorRevenue(
                total_revenue=int(row['total_revenue']),
                total_tickets_sold=int(row['total_tickets_sold']),
            )
