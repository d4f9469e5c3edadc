"""Application layer interfaces (Ports)"""

from src.service.marketplace.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.marketplace.app.interface.i_booking_query_repo import IBookingQueryRepo
from src.service.marketplace.app.interface.i_identity_verifier import IIdentityVerifier
from src.service.marketplace.app.interface.i_payment_processor import IPaymentProcessor
from src.service.marketplace.app.interface.i_payment_query_repo import IPaymentQueryRepo
from src.service.marketplace.app.interface.i_ticket_command_repo import ITicketCommandRepo
from src.service.marketplace.app.interface.i_ticket_query_repo import ITicketQueryRepo
from src.service.marketplace.app.interface.i_user_command_repo import IUserCommandRepo
from src.service.marketplace.app.interface.i_user_query_repo import IUserQueryRepo

__all__ = [
    'IBookingCommandRepo',
    'IBookingQueryRepo',
    'IIdentityVerifier',
    'IPaymentProcessor',
    'IPaymentQueryRepo',
    'ITicketCommandRepo',
    'ITicketQueryRepo',
    'IUserCommandRepo',
    'IUserQueryRepo',
]
