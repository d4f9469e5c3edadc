from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from uuid_utils import UUID

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import DomainError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.marketplace.domain.entity.ticket_entity import Ticket


class ToggleTicketAdvertiseUseCase:
    """
    Flip a ticket's advertised flag

    Check-and-set runs inside the repo under an advisory lock, so the cap holds
    under concurrent admin requests.
    """

    def __init__(
        self, *, ticket_command_repo: ITicketCommandRepo, advertise_cap: int = settings.ADVERTISE_CAP
    ) -> None:
        self.ticket_command_repo = ticket_command_repo
        self.advertise_cap = advertise_cap

    @classmethod
    @inject
    def depends(
        cls,
        ticket_command_repo: ITicketCommandRepo = Depends(Provide[Container.ticket_command_repo]),
    ) -> Self:
        return cls(ticket_command_repo=ticket_command_repo)

    @Logger.io
    async def toggle_advertise(self, *, ticket_id: UUID) -> Ticket:
        try:
            ticket = await self.ticket_command_repo.toggle_advertise_atomically(
                ticket_id=ticket_id, cap=self.advertise_cap
            )
        except DomainError as e:
            if e.message.startswith('Max'):
                metrics.record_advertise_toggle(result='cap_reached')
            raise

        metrics.record_advertise_toggle(result='on' if ticket.is_advertised else 'off')
        Logger.base.info(
            f'📣 [ADVERTISE] Ticket {ticket_id} is_advertised={ticket.is_advertised}'
        )
        return ticket
