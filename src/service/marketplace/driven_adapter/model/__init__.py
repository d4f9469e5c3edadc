"""
Database Models

Import all models here to ensure they are registered with SQLAlchemy
"""

from src.service.marketplace.driven_adapter.model.booking_model import BookingModel
from src.service.marketplace.driven_adapter.model.payment_model import PaymentModel
from src.service.marketplace.driven_adapter.model.ticket_model import TicketModel
from src.service.marketplace.driven_adapter.model.user_model import UserModel

__all__ = [
    'BookingModel',
    'PaymentModel',
    'TicketModel',
    'UserModel',
]
