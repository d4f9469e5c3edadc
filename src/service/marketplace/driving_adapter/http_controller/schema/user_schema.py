from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict


class UpsertUserRequest(BaseModel):
    email: Optional[str] = None
    name: str = ''
    photo_url: Optional[str] = None

    class Config:
        json_schema_extra = {
            'example': {
                'email': 'traveler@example.com',
                'name': 'Ada Traveler',
                'photo_url': 'https://example.com/ada.png',
            }
        }


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    email: str
    name: str
    photo_url: Optional[str] = None
    role: str
    is_fraud: bool
    created_at: Optional[datetime] = None
    last_logged_in: Optional[datetime] = None


class UserRoleResponse(BaseModel):
    role: str

    class Config:
        json_schema_extra = {'example': {'role': 'customer'}}


class UpdateUserRoleRequest(BaseModel):
    role: str

    class Config:
        json_schema_extra = {'example': {'role': 'vendor'}}


class FraudResponse(BaseModel):
    message: str
    hidden_tickets: int
