from typing import AsyncContextManager, Callable, List, Optional
import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from uuid_utils import UUID

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.marketplace.domain.entity.ticket_entity import Ticket
from src.service.marketplace.domain.enum.verification_status import VerificationStatus
from src.service.marketplace.driven_adapter.model.ticket_model import TicketModel


def to_db_uuid(value: UUID) -> uuid.UUID:
    return uuid.UUID(str(value))


def ticket_model_to_entity(ticket_model: TicketModel) -> Ticket:
    return Ticket(
        id=UUID(str(ticket_model.id)),
        vendor_email=ticket_model.vendor_email,
        title=ticket_model.title,
        price=ticket_model.price,
        quantity=ticket_model.quantity,
        from_location=ticket_model.from_location,
        to_location=ticket_model.to_location,
        departure_date=ticket_model.departure_date,
        departure_time=ticket_model.departure_time,
        transport_type=ticket_model.transport_type,
        image=ticket_model.image,
        perks=list(ticket_model.perks or []),
        verification_status=VerificationStatus(ticket_model.verification_status),
        is_advertised=ticket_model.is_advertised,
        is_hidden=ticket_model.is_hidden,
        created_at=ticket_model.created_at,
        updated_at=ticket_model.updated_at,
    )


class TicketQueryRepoImpl(ITicketQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @staticmethod
    def _public_filter():
        return (
            TicketModel.verification_status == VerificationStatus.APPROVED.value,
            TicketModel.is_hidden.is_(False),
        )

    @Logger.io
    async def get_by_id(self, *, ticket_id: UUID) -> Optional[Ticket]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel).where(TicketModel.id == to_db_uuid(ticket_id))
            )
            ticket_model = result.scalar_one_or_none()
            return ticket_model_to_entity(ticket_model) if ticket_model else None

    @Logger.io
    async def list_public(self, *, limit: Optional[int] = None) -> List[Ticket]:
        async with self.session_factory() as session:
            stmt = (
                select(TicketModel)
                .where(*self._public_filter())
                .order_by(TicketModel.created_at.desc())
            )
            if limit is not None:
                stmt = stmt.limit(limit)
            result = await session.execute(stmt)
            return [ticket_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_advertised(self, *, limit: int) -> List[Ticket]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel)
                .where(*self._public_filter(), TicketModel.is_advertised.is_(True))
                .order_by(TicketModel.created_at.desc())
                .limit(limit)
            )
            return [ticket_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_by_vendor(self, *, vendor_email: str) -> List[Ticket]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel)
                .where(TicketModel.vendor_email == vendor_email)
                .order_by(TicketModel.created_at.desc())
            )
            return [ticket_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def list_all(self) -> List[Ticket]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(TicketModel).order_by(TicketModel.created_at.desc())
            )
            return [ticket_model_to_entity(m) for m in result.scalars().all()]

    @Logger.io
    async def count_by_vendor(self, *, vendor_email: str) -> int:
        async with self.session_factory() as session:
            count = await session.scalar(
                select(func.count())
                .select_from(TicketModel)
                .where(TicketModel.vendor_email == vendor_email)
            )
            return count or 0
