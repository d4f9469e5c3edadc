from abc import ABC, abstractmethod
from typing import List

from src.service.marketplace.domain.entity.booking_entity import Booking
from src.service.marketplace.domain.value_object.vendor_revenue import VendorRevenue


class IBookingQueryRepo(ABC):
    @abstractmethod
    async def list_by_customer(self, *, customer_email: str) -> List[Booking]:
        pass

    @abstractmethod
    async def list_by_vendor(self, *, vendor_email: str) -> List[Booking]:
        pass

    @abstractmethod
    async def get_vendor_revenue(self, *, vendor_email: str) -> VendorRevenue:
        """Revenue and sold count over confirmed bookings (total_tickets_added left at 0)"""
        pass
