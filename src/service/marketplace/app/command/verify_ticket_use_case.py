from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.marketplace.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.marketplace.domain.entity.ticket_entity import Ticket


class VerifyTicketUseCase:
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
    async def verify_ticket(self, *, ticket_id: UUID, verification_status: str) -> Ticket:
        ticket = await self.ticket_query_repo.get_by_id(ticket_id=ticket_id)
        if not ticket:
            raise NotFoundError('Ticket not found')

        verified = ticket.verify(verification_status)
        updated = await self.ticket_command_repo.set_verification_status(
            ticket_id=ticket_id, verification_status=verified.verification_status
        )
        if ticket.is_advertised and not updated.is_advertised:
            Logger.base.info(
                f'📢 [ADVERTISE] Ticket {ticket_id} un-advertised, '
                f'now {updated.verification_status.value}'
            )
        return updated
