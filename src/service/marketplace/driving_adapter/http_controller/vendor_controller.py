from typing import List

from fastapi import APIRouter, Depends

from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.query.get_vendor_revenue_use_case import GetVendorRevenueUseCase
from src.service.marketplace.app.query.list_bookings_use_case import ListBookingsUseCase
from src.service.marketplace.app.query.ticket_catalog_use_case import TicketCatalogUseCase
from src.service.marketplace.domain.entity.user_entity import UserEntity
from src.service.marketplace.driving_adapter.http_controller.auth.role_auth import require_vendor
from src.service.marketplace.driving_adapter.http_controller.schema.booking_schema import (
    BookingResponse,
    VendorRevenueResponse,
)
from src.service.marketplace.driving_adapter.http_controller.schema.ticket_schema import (
    TicketResponse,
)


router = APIRouter()


@router.get('/tickets', response_model=List[TicketResponse])
@Logger.io
async def list_vendor_tickets(
    current_user: UserEntity = Depends(require_vendor),
    use_case: TicketCatalogUseCase = Depends(TicketCatalogUseCase.depends),
) -> List[TicketResponse]:
    tickets = await use_case.list_vendor_tickets(vendor_email=current_user.email)
    return [TicketResponse.model_validate(t) for t in tickets]


@router.get('/bookings', response_model=List[BookingResponse])
@Logger.io
async def list_vendor_bookings(
    current_user: UserEntity = Depends(require_vendor),
    use_case: ListBookingsUseCase = Depends(ListBookingsUseCase.depends),
) -> List[BookingResponse]:
    bookings = await use_case.list_vendor_bookings(vendor_email=current_user.email)
    return [BookingResponse.model_validate(b) for b in bookings]


@router.get('/revenue', response_model=VendorRevenueResponse)
@Logger.io
async def get_vendor_revenue(
    current_user: UserEntity = Depends(require_vendor),
    use_case: GetVendorRevenueUseCase = Depends(GetVendorRevenueUseCase.depends),
) -> VendorRevenueResponse:
    revenue = await use_case.get_revenue(vendor_email=current_user.email)
    return VendorRevenueResponse.model_validate(revenue)
