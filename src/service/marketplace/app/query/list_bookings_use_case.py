from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.marketplace.domain.entity.booking_entity import Booking


class ListBookingsUseCase:
    def __init__(self, *, booking_query_repo: IBookingQueryRepo) -> None:
        self.booking_query_repo = booking_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo)

    @Logger.io
    async def list_customer_bookings(self, *, customer_email: str) -> List[Booking]:
        return await self.booking_query_repo.list_by_customer(customer_email=customer_email)

    @Logger.io
    async def list_vendor_bookings(self, *, vendor_email: str) -> List[Booking]:
        return await self.booking_query_repo.list_by_vendor(vendor_email=vendor_email)
