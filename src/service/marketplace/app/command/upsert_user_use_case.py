from datetime import datetime, timezone
from typing import Optional, Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.marketplace.domain.entity.user_entity import UserEntity


class UpsertUserUseCase:
    """Create the user on first sign-in, refresh the profile afterwards. Role is never touched."""

    def __init__(self, *, user_command_repo: IUserCommandRepo) -> None:
        self.user_command_repo = user_command_repo

    @classmethod
    @inject
    def depends(
        cls,
        user_command_repo: IUserCommandRepo = Depends(Provide[Container.user_command_repo]),
    ) -> Self:
        return cls(user_command_repo=user_command_repo)

    @Logger.io
    async def upsert(
        self, *, email: Optional[str], name: str = '', photo_url: Optional[str] = None
    ) -> UserEntity:
        now = datetime.now(timezone.utc)
        user = UserEntity(
            email=UserEntity.validate_email(email),
            name=name,
            photo_url=photo_url,
            created_at=now,
            last_logged_in=now,
        )
        return await self.user_command_repo.upsert(user)
