from typing import AsyncContextManager, Callable, List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_user_query_repo import IUserQueryRepo
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.driven_adapter.model.user_model import UserModel
from src.service.marketplace.driven_adapter.repo.user_command_repo_impl import UserCommandRepoImpl


class UserQueryRepoImpl(IUserQueryRepo):
    def __init__(self, session_factory: Callable[..., AsyncContextManager[AsyncSession]]) -> None:
        self.session_factory = session_factory

    @Logger.io
    async def get_by_email(self, email: str) -> Optional[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(
                select(UserModel).where(UserModel.email == email.lower())
            )
            user_model = result.scalar_one_or_none()

            if not user_model:
                return None

            return UserCommandRepoImpl._model_to_entity(user_model)

    @Logger.io
    async def list_all(self) -> List[UserEntity]:
        async with self.session_factory() as session:
            result = await session.execute(select(UserModel).order_by(UserModel.created_at.desc()))
            return [UserCommandRepoImpl._model_to_entity(m) for m in result.scalars().all()]
