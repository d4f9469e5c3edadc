from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict

from src.platform.types import UtilsUUID7


class PaymentIntentRequest(BaseModel):
    amount: Decimal

    class Config:
        json_schema_extra = {'example': {'amount': 40}}


class PaymentIntentResponse(BaseModel):
    client_secret: str


class RecordPaymentRequest(BaseModel):
    booking_id: UtilsUUID7
    transaction_id: str
    amount: int
    method: str = 'card'

    class Config:
        json_schema_extra = {
            'example': {
                'booking_id': '01936d8f-5e73-7c4e-a9c5-123456789abc',
                'transaction_id': 'pi_3Nc1example',
                'amount': 40,
                'method': 'card',
            }
        }


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UtilsUUID7
    booking_id: UtilsUUID7
    customer_email: str
    transaction_id: str
    amount: int
    method: str
    ticket_title: str
    seat: str
    from_location: str
    to_location: str
    departure_date: Optional[date] = None
    paid_at: datetime


class RecordPaymentResponse(BaseModel):
    message: str
    booking_id: UtilsUUID7
    status: str
    paid_at: Optional[datetime] = None
