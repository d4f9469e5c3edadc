from abc import ABC, abstractmethod
from typing import List

from src.service.marketplace.domain.entity.booking_entity import Booking
from src.service.marketplace.domain.entity.payment_entity import Payment


class IPaymentQueryRepo(ABC):
    @abstractmethod
    async def list_by_customer(self, *, customer_email: str) -> List[Payment]:
        pass

    @abstractmethod
    async def find_unsettled(self) -> List[tuple[Payment, Booking | None]]:
        """
        Payments whose booking is still pending or no longer exists

        Returns:
            (payment, booking) pairs, booking is None for orphaned payments
        """
        pass
