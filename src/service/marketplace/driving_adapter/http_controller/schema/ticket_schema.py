from datetime import date, datetime, time
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.platform.types import UtilsUUID7


class TicketCreateRequest(BaseModel):
    title: str = Field(min_length=1)
    price: int = Field(ge=0)
    quantity: int = Field(ge=0)
    from_location: str
    to_location: str
    departure_date: date
    departure_time: time
    transport_type: str = ''
    image: Optional[str] = None
    perks: List[str] = []

    class Config:
        json_schema_extra = {
            'example': {
                'title': 'Dhaka to Chittagong Express',
                'price': 20,
                'quantity': 40,
                'from_location': 'Dhaka',
                'to_location': 'Chittagong',
                'departure_date': '2026-12-01',
                'departure_time': '08:30:00',
                'transport_type': 'bus',
                'image': 'https://example.com/bus.png',
                'perks': ['AC', 'Wifi'],
            }
        }


class TicketUpdateRequest(BaseModel):
    """Only the fields present in the body are changed"""

    title: Optional[str] = Field(default=None, min_length=1)
    price: Optional[int] = Field(default=None, ge=0)
    quantity: Optional[int] = Field(default=None, ge=0)
    from_location: Optional[str] = None
    to_location: Optional[str] = None
    departure_date: Optional[date] = None
    departure_time: Optional[time] = None
    transport_type: Optional[str] = None
    image: Optional[str] = None
    perks: Optional[List[str]] = None

    class Config:
        json_schema_extra = {'example': {'price': 25, 'quantity': 30}}


class TicketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UtilsUUID7
    vendor_email: str
    title: str
    image: Optional[str] = None
    from_location: str
    to_location: str
    transport_type: str
    departure_date: date
    departure_time: time
    price: int
    quantity: int
    perks: List[str]
    verification_status: str
    is_advertised: bool
    is_hidden: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TicketVerifyRequest(BaseModel):
    verification_status: str

    class Config:
        json_schema_extra = {'example': {'verification_status': 'approved'}}


class AdvertiseToggleResponse(BaseModel):
    message: str
    is_advertised: bool

    class Config:
        json_schema_extra = {'example': {'message': 'Toggled advertise', 'is_advertised': True}}
