from datetime import date, time
from typing import List, Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
import uuid_utils

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.marketplace.domain.entity.ticket_entity import Ticket


class CreateTicketUseCase:
    def __init__(self, *, ticket_command_repo: ITicketCommandRepo) -> None:
        self.ticket_command_repo = ticket_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        ticket_command_repo: ITicketCommandRepo = Depends(Provide[Container.ticket_command_repo]),
    ) -> Self:
        return cls(ticket_command_repo=ticket_command_repo)

    @Logger.io
    async def create_ticket(
        self,
        *,
        vendor_email: str,
        title: str,
        price: int,
        quantity: int,
        from_location: str,
        to_location: str,
        departure_date: date,
        departure_time: time,
        transport_type: str = '',
        image: Optional[str] = None,
        perks: Optional[List[str]] = None,
    ) -> Ticket:
        ticket = Ticket.create(
            id=uuid_utils.uuid7(),
            vendor_email=vendor_email,
            title=title,
            price=price,
            quantity=quantity,
            from_location=from_location,
            to_location=to_location,
            departure_date=departure_date,
            departure_time=departure_time,
            transport_type=transport_type,
            image=image,
            perks=perks,
        )
        created = await self.ticket_command_repo.create(ticket)
        Logger.base.info(f'🎫 [TICKET] {vendor_email} listed "{created.title}" ({created.id})')
        return created
