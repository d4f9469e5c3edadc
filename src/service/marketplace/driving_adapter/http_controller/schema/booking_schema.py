from datetime import date, datetime, time
from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.platform.types import UtilsUUID7


class BookingCreateRequest(BaseModel):
    ticket_id: UtilsUUID7
    quantity: int
    seat: Optional[str] = None  # generated when omitted

    class Config:
        json_schema_extra = {
            'examples': [
                {'ticket_id': '01936d8f-5e73-7c4e-a9c5-123456789abc', 'quantity': 2, 'seat': '12C'},
                {'ticket_id': '01936d8f-5e73-7c4e-a9c5-123456789abc', 'quantity': 1},
            ]
        }


class BookingStatusUpdateRequest(BaseModel):
    status: str

    class Config:
        json_schema_extra = {'example': {'status': 'accepted'}}


class BookingResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            'example': {
                'id': '01936d8f-5e73-7c4e-a9c5-123456789abc',  # UUID7
                'ticket_id': '01936d8f-1111-7c4e-a9c5-123456789abc',
                'customer_email': 'traveler@example.com',
                'vendor_email': 'vendor@example.com',
                'quantity': 2,
                'unit_price': 20,
                'total_price': 40,
                'seat': '12C',
                'booking_reference': 'TB-20261201083000-A1B2C3',
                'status': 'pending',
            }
        },
    )

    id: UtilsUUID7
    ticket_id: UtilsUUID7
    customer_email: str
    vendor_email: str
    quantity: int
    unit_price: int
    total_price: int
    seat: str
    booking_reference: str
    status: str
    ticket_title: str
    ticket_image: Optional[str] = None
    from_location: str
    to_location: str
    departure_date: Optional[date] = None
    departure_time: Optional[time] = None
    transaction_id: Optional[str] = None
    payment_method: Optional[str] = None
    paid_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class VendorRevenueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_revenue: int
    total_tickets_sold: int
    total_tickets_added: int
