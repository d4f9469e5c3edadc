from typing import Self

import attrs
from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.marketplace.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.marketplace.domain.value_object.vendor_revenue import VendorRevenue


class GetVendorRevenueUseCase:
    def __init__(
        self, *, booking_query_repo: IBookingQueryRepo, ticket_query_repo: ITicketQueryRepo
    ) -> None:
        self.booking_query_repo = booking_query_repo
        self.ticket_query_repo = ticket_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        booking_query_repo: IBookingQueryRepo = Depends(Provide[Container.booking_query_repo]),
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
    ) -> Self:
        return cls(booking_query_repo=booking_query_repo, ticket_query_repo=ticket_query_repo)

    @Logger.io
    async def get_revenue(self, *, vendor_email: str) -> VendorRevenue:
        revenue = await self.booking_query_repo.get_vendor_revenue(vendor_email=vendor_email)
        tickets_added = await self.ticket_query_repo.count_by_vendor(vendor_email=vendor_email)
        return attrs.evolve(revenue, total_tickets_added=tickets_added)
