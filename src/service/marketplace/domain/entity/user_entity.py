from datetime import datetime
from enum import Enum
from typing import Optional

import attrs

from src.platform.exception.exceptions import ValidationError


class UserRole(str, Enum):
    CUSTOMER = 'customer'
    VENDOR = 'vendor'
    ADMIN = 'admin'


@attrs.define
class UserEntity:
    email: str
    name: str = ''
    photo_url: Optional[str] = None
    role: UserRole = UserRole.CUSTOMER
    is_fraud: bool = False
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    last_logged_in: Optional[datetime] = None

    @staticmethod
    def validate_email(email: Optional[str]) -> str:
        if not email or not email.strip():
            raise ValidationError('Email required')
        return email.strip().lower()

    @staticmethod
    def validate_role(role: str) -> UserRole:
        """Parse an externally supplied role"""
        try:
            return UserRole(role)
        except ValueError:
            raise ValidationError('Invalid role')
