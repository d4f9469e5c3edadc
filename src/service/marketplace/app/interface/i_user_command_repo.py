from abc import ABC, abstractmethod

from src.service.marketplace.domain.entity.user_entity import UserEntity, UserRole


class IUserCommandRepo(ABC):
    @abstractmethod
    async def upsert(self, user_entity: UserEntity) -> UserEntity:
        """Insert on first sign-in, otherwise refresh name/photo/last_logged_in (role untouched)"""
        pass

    @abstractmethod
    async def update_role(self, *, email: str, role: UserRole) -> UserEntity | None:
        pass

    @abstractmethod
    async def mark_as_fraud_and_hide_tickets(self, *, email: str) -> int | None:
        """
        Flag the user as fraud and hide every ticket they list, in one transaction

        Returns:
            Number of hidden tickets, or None when the user does not exist
        """
        pass
