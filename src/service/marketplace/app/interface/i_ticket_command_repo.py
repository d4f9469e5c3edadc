from abc import ABC, abstractmethod
from typing import Any

from uuid_utils import UUID

from src.service.marketplace.domain.entity.ticket_entity import Ticket
from src.service.marketplace.domain.enum.verification_status import VerificationStatus


class ITicketCommandRepo(ABC):
    @abstractmethod
    async def create(self, ticket: Ticket) -> Ticket:
        pass

    @abstractmethod
    async def update_fields(self, *, ticket_id: UUID, changes: dict[str, Any]) -> Ticket:
        """Write only the given vendor-editable columns, leaving the rest as stored"""
        pass

    @abstractmethod
    async def set_verification_status(
        self, *, ticket_id: UUID, verification_status: VerificationStatus
    ) -> Ticket:
        """
        Set the moderation status in one statement

        Any status other than approved also clears is_advertised, so an advertised
        ticket can never re-enter the advertised-and-approved count unchecked.
        """
        pass

    @abstractmethod
    async def delete(self, *, ticket_id: UUID) -> bool:
        pass

    @abstractmethod
    async def toggle_advertise_atomically(self, *, ticket_id: UUID, cap: int) -> Ticket:
        """
        Flip is_advertised under a transaction-scoped advisory lock

        The advertised-and-approved count is checked inside the same transaction,
        so concurrent toggles can never push it above cap.

        Raises:
            NotFoundError: Ticket missing
            DomainError: Ticket not approved, or the cap would be exceeded
        """
        pass
