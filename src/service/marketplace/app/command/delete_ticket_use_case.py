from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.marketplace.app.interface.i_ticket_query_repo import ITicketQueryRepo


class DeleteTicketUseCase:
    """Vendor deletes own listing. Bookings keep their denormalized snapshot."""

    def __init__(
        self, *, ticket_command_repo: ITicketCommandRepo, ticket_query_repo: ITicketQueryRepo
    ) -> None:
        self.ticket_command_repo = ticket_command_repo
        self.ticket_query_repo = ticket_query_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_command_repo: ITicketCommandRepo = Depends(Provide[Container.ticket_command_repo]),
        ticket_query_repo: ITicketQueryRepo = Depends(Provide[Container.ticket_query_repo]),
    ) -> Self:
        return cls(ticket_command_repo=ticket_command_repo, ticket_query_repo=ticket_query_repo)

    @Logger.io
    async def delete_ticket(self, *, ticket_id: UUID, vendor_email: str) -> None:
        ticket = await self.ticket_query_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError('Ticket not found')
        ticket.validate_owned_by(vendor_email)

        if not await self.ticket_command_repo.delete(ticket_id=ticket_id):
            raise NotFoundError('Ticket not found')
        Logger.base.info(f'🗑️ [TICKET] {vendor_email} deleted ticket {ticket_id}')
