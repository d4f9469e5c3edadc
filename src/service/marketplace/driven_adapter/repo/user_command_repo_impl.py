from typing import AsyncContextManager, Callable

from sqlalchemy import update
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.marketplace.domain.entity.user_entity import UserEntity, UserRole
from src.service.marketplace.driven_adapter.model.ticket_model import TicketModel
from src.service.marketplace.driven_adapter.model.user_model import UserModel


class UserCommandRepoImpl(IUserCommandRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]):
        self.session_factory = session_factory

    @Logger.io
    async def upsert(self, user_entity: UserEntity) -> UserEntity:
        async with self.session_factory() as session:
            stmt = insert(UserModel).values(
                email=user_entity.email,
                name=user_entity.name,
                photo_url=user_entity.photo_url,
                role=user_entity.role.value,
                is_fraud=False,
                created_at=user_entity.created_at,
                last_logged_in=user_entity.last_logged_in,
            )
            # role, is_fraud and created_at are only set on first insert
            stmt = stmt.on_conflict_do_update(
                index_elements=[UserModel.email],
                set_={
                    'name': stmt.excluded.name,
                    'photo_url': stmt.excluded.photo_url,
                    'last_logged_in': stmt.excluded.last_logged_in,
                },
            ).returning(UserModel)

            result = await session.execute(stmt)
            user_model = result.scalar_one()
            await session.commit()

            return self._model_to_entity(user_model)

    @Logger.io
    async def update_role(self, *, email: str, role: UserRole) -> UserEntity | None:
        async with self.session_factory() as session:
            result = await session.execute(
                update(UserModel)
                .where(UserModel.email == email)
                .values(role=role.value)
                .returning(UserModel)
            )
            user_model = result.scalar_one_or_none()
            await session.commit()

            return self._model_to_entity(user_model) if user_model else None

    @Logger.io
    async def mark_as_fraud_and_hide_tickets(self, *, email: str) -> int | None:
        async with self.session_factory() as session:
            user_result = await session.execute(
                update(UserModel)
                .where(UserModel.email == email)
                .values(is_fraud=True)
                .returning(UserModel.id)
            )
            if user_result.scalar_one_or_none() is None:
                await session.rollback()
                return None

            ticket_result = await session.execute(
                update(TicketModel)
                .where(TicketModel.vendor_email == email)
                .values(is_hidden=True)
                .returning(TicketModel.id)
            )
            hidden_count = len(ticket_result.scalars().all())
            await session.commit()

            return hidden_count

    @staticmethod
    def _model_to_entity(user_model: UserModel) -> UserEntity:
        return UserEntity(
            id=user_model.id,
            email=user_model.email,
            name=user_model.name,
            photo_url=user_model.photo_url,
            role=UserRole(user_model.role),
            is_fraud=user_model.is_fraud,
            created_at=user_model.created_at,
            last_logged_in=user_model.last_logged_in,
        )
