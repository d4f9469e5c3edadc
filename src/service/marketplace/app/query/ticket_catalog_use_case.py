from typing import List, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.marketplace.domain.entity.ticket_entity import Ticket


class TicketCatalogUseCase:
    """Public catalog plus vendor and admin listings, all newest first"""

    def __init__(self, *, ticket_query_repo: ITicketQueryRepo) -> None:
        self.ticket_query_repo = ticket_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
    ) -> Self:
        return cls(ticket_query_repo=ticket_query_repo)

    @Logger.io
    async def list_public(self) -> List[Ticket]:
        return await self.ticket_query_repo.list_public()

    @Logger.io
    async def list_latest(self) -> List[Ticket]:
        return await self.ticket_query_repo.list_public(limit=settings.LATEST_TICKETS_LIMIT)

    @Logger.io
    async def list_advertised(self) -> List[Ticket]:
        return await self.ticket_query_repo.list_advertised(limit=settings.ADVERTISE_CAP)

    @Logger.io
    async def get_public(self, *, ticket_id: UUID) -> Ticket:
        ticket = await self.ticket_query_repo.get_by_id(ticket_id=ticket_id)
        # Unverified or hidden listings are indistinguishable from missing ones
        if not ticket or not ticket.is_publicly_visible:
            raise NotFoundError('Ticket not found')
        return ticket

    @Logger.io
    async def list_vendor_tickets(self, *, vendor_email: str) -> List[Ticket]:
        return await self.ticket_query_repo.list_by_vendor(vendor_email=vendor_email)

    @Logger.io
    async def list_all(self) -> List[Ticket]:
        return await self.ticket_query_repo.list_all()
