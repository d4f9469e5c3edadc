from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.di import Container
from src.platform.exception.exceptions import NotFoundError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_user_command_repo import IUserCommandRepo


class MarkUserAsFraudUseCase:
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
    async def mark_as_fraud(self, *, email: str) -> int:
        """Returns the number of the vendor's tickets hidden"""
        hidden_count = await self.user_command_repo.mark_as_fraud_and_hide_tickets(
            email=email.strip().lower()
        )
        if hidden_count is None:
            raise NotFoundError('User not found')

        Logger.base.warning(f'🚩 [ADMIN] {email} marked as fraud, {hidden_count} tickets hidden')
        return hidden_count
