from typing import Any, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.marketplace.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.marketplace.domain.entity.ticket_entity import Ticket


class UpdateTicketUseCase:
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
    async def update_ticket(
        self, *, ticket_id: UUID, vendor_email: str, changes: dict[str, Any]
    ) -> Ticket:
        ticket = await self.ticket_query_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError('Ticket not found')
        ticket.validate_owned_by(vendor_email)

        if not changes:
            return ticket
        updated = ticket.apply_vendor_update(changes)
        # Only the sent columns are written, so quantity moves from bookings survive
        return await self.ticket_command_repo.update_fields(
            ticket_id=ticket_id, changes={field: getattr(updated, field) for field in changes}
        )
