from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.marketplace.domain.entity.user_entity import UserEntity


class UpdateUserRoleUseCase:
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
    async def update_role(self, *, email: str, role: str) -> UserEntity:
        user = await self.user_command_repo.update_role(
            email=email.strip().lower(), role=UserEntity.validate_role(role)
        )
        if not user:
            raise NotFoundError('User not found')

        Logger.base.info(f'👤 [ADMIN] {user.email} is now {user.role.value}')
        return user
