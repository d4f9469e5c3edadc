from abc import ABC, abstractmethod
from typing import List, Optional

from uuid_utils import UUID

from src.service.marketplace.domain.entity.ticket_entity import Ticket


class ITicketQueryRepo(ABC):
    @abstractmethod
    async def get_by_id(self, *, ticket_id: UUID) -> Optional[Ticket]:
        pass

    @abstractmethod
    async def list_public(self, *, limit: Optional[int] = None) -> List[Ticket]:
        """Approved and not hidden, newest first"""
        pass

    @abstractmethod
    async def list_advertised(self, *, limit: int) -> List[Ticket]:
        pass

    @abstractmethod
    async def list_by_vendor(self, *, vendor_email: str) -> List[Ticket]:
        pass

    @abstractmethod
    async def list_all(self) -> List[Ticket]:
        pass

    @abstractmethod
    async def count_by_vendor(self, *, vendor_email: str) -> int:
        pass
