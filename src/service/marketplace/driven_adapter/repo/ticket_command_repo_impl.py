from typing import Any, AsyncContextManager, Callable

from sqlalchemy import delete, func, select, text, update
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.exception.exceptions import DomainError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.marketplace.domain.entity.ticket_entity import Ticket
from src.service.marketplace.domain.enum.verification_status import VerificationStatus
from src.service.marketplace.driven_adapter.model.ticket_model import TicketModel
from src.service.marketplace.driven_adapter.repo.ticket_query_repo_impl import (
    ticket_model_to_entity,
    to_db_uuid,
)


# Serializes every advertise toggle in the cluster (pg_advisory_xact_lock key)
ADVERTISE_LOCK_KEY = 7_300_601


class TicketCommandRepoImpl(ITicketCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def create(self, ticket: Ticket) -> Ticket:
        async with self.session_factory() as session:
            ticket_model = TicketModel(
                id=to_db_uuid(ticket.id),
                vendor_email=ticket.vendor_email,
                title=ticket.title,
                image=ticket.image,
                from_location=ticket.from_location,
                to_location=ticket.to_location,
                transport_type=ticket.transport_type,
                departure_date=ticket.departure_date,
                departure_time=ticket.departure_time,
                price=ticket.price,
                quantity=ticket.quantity,
                perks=ticket.perks,
                verification_status=ticket.verification_status.value,
                is_advertised=ticket.is_advertised,
                is_hidden=ticket.is_hidden,
            )
            session.add(ticket_model)
            await session.commit()
            await session.refresh(ticket_model)

            return ticket_model_to_entity(ticket_model)

    @Logger.io
    async def update_fields(self, *, ticket_id: UUID, changes: dict[str, Any]) -> Ticket:
        """
        Write only the given columns

        Columns left out keep whatever the database holds now, so a settlement or
        cancellation that moved quantity in between is never overwritten.
        """
        values = {**changes, 'updated_at': func.now()}
        if 'perks' in values:
            values['perks'] = list(values['perks'])

        async with self.session_factory() as session:
            result = await session.execute(
                update(TicketModel)
                .where(TicketModel.id == to_db_uuid(ticket_id))
                .values(**values)
                .returning(TicketModel)
            )
            ticket_model = result.scalar_one_or_none()
            if not ticket_model:
                raise NotFoundError('Ticket not found')
            ticket = ticket_model_to_entity(ticket_model)
            await session.commit()

            return ticket

    @Logger.io
    async def set_verification_status(
        self, *, ticket_id: UUID, verification_status: VerificationStatus
    ) -> Ticket:
        values: dict[str, Any] = {
            'verification_status': verification_status.value,
            'updated_at': func.now(),
        }
        # Leaving approved drops the advertised flag in the same statement
        if verification_status != VerificationStatus.APPROVED:
            values['is_advertised'] = False

        async with self.session_factory() as session:
            result = await session.execute(
                update(TicketModel)
                .where(TicketModel.id == to_db_uuid(ticket_id))
                .values(**values)
                .returning(TicketModel)
            )
            ticket_model = result.scalar_one_or_none()
            if not ticket_model:
                raise NotFoundError('Ticket not found')
            ticket = ticket_model_to_entity(ticket_model)
            await session.commit()

            return ticket

    @Logger.io
    async def delete(self, *, ticket_id: UUID) -> bool:
        async with self.session_factory() as session:
            result = await session.execute(
                delete(TicketModel)
                .where(TicketModel.id == to_db_uuid(ticket_id))
                .returning(TicketModel.id)
            )
            deleted = result.scalar_one_or_none() is not None
            await session.commit()
            return deleted

    @Logger.io
    async def toggle_advertise_atomically(self, *, ticket_id: UUID, cap: int) -> Ticket:
        """
        Advisory lock -> row lock -> count -> flip, committed as one transaction

        The advisory lock is released automatically at commit or rollback.
        """
        async with self.session_factory() as session:
            async with session.begin():
                await session.execute(
                    text('SELECT pg_advisory_xact_lock(:key)'), {'key': ADVERTISE_LOCK_KEY}
                )

                result = await session.execute(
                    select(TicketModel)
                    .where(TicketModel.id == to_db_uuid(ticket_id))
                    .with_for_update()
                )
                ticket_model = result.scalar_one_or_none()
                if not ticket_model:
                    raise NotFoundError('Ticket not found')

                if not ticket_model.is_advertised:
                    if ticket_model.verification_status != VerificationStatus.APPROVED.value:
                        raise DomainError('Only approved tickets can be advertised')

                    advertised_count = await session.scalar(
                        select(func.count())
                        .select_from(TicketModel)
                        .where(
                            TicketModel.is_advertised.is_(True),
                            TicketModel.verification_status == VerificationStatus.APPROVED.value,
                        )
                    )
                    if (advertised_count or 0) >= cap:
                        raise DomainError(f'Max {cap} advertised')

                ticket_model.is_advertised = not ticket_model.is_advertised

            await session.refresh(ticket_model)
            return ticket_model_to_entity(ticket_model)
