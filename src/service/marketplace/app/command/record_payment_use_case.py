from datetime import datetime, timezone
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends
from opentelemetry import trace
import uuid_utils
from uuid_utils import UUID

from src.platform.config.di import Container
from src.platform.exception.exceptions import CustomBaseError, ForbiddenError, NotFoundError
from src.platform.logging.loguru_io import Logger
from src.platform.metrics.marketplace_metrics import metrics
from src.service.marketplace.app.interface.i_booking_command_repo import IBookingCommandRepo
from src.service.marketplace.domain.entity.booking_entity import Booking
from src.service.marketplace.domain.entity.payment_entity import Payment


class RecordPaymentUseCase:
    """
    Record a processor-confirmed payment and settle the booking

    Checks run in order: booking exists, requester owns it, booking is payable,
    amount equals total_price, departure has not passed. Settlement (confirm,
    insert payment, deduct inventory) is one conditional SQL statement, so a
    second concurrent payment sees 'Booking already paid' instead of deducting twice.
    """

    def __init__(self, *, booking_command_repo: IBookingCommandRepo) -> None:
        self.booking_command_repo = booking_command_repo
        self.tracer = trace.get_tracer(__name__)

    @classmethod
    @inject
    def depends(
        cls,
        booking_command_repo: IBookingCommandRepo = Depends(
            Provide[Container.booking_command_repo]
        ),
    ) -> Self:
        return cls(booking_command_repo=booking_command_repo)

    @Logger.io
    async def record_payment(
        self,
        *,
        booking_id: UUID,
        transaction_id: str,
        amount: int,
        method: str,
        requester_email: str,
    ) -> Booking:
        with self.tracer.start_as_current_span(
            'use_case.record_payment',
            attributes={'booking.id': str(booking_id), 'payment.amount': amount},
        ):
            try:
                settled = await self._settle(
                    booking_id=booking_id,
                    transaction_id=transaction_id,
                    amount=amount,
                    method=method,
                    requester_email=requester_email,
                )
            except CustomBaseError as e:
                metrics.record_payment(
                    result='already_paid' if e.message == 'Booking already paid' else 'rejected'
                )
                raise

            metrics.record_payment(result='settled')
            return settled

    async def _settle(
        self,
        *,
        booking_id: UUID,
        transaction_id: str,
        amount: int,
        method: str,
        requester_email: str,
    ) -> Booking:
        booking = await self.booking_command_repo.get_by_id(booking_id=booking_id)
        if not booking:
            raise NotFoundError('Booking not found')
        if not booking.is_owned_by(requester_email):
            raise ForbiddenError('Not authorized')

        booking.validate_can_be_paid()
        booking.validate_payment_amount(amount)
        booking.validate_not_departed(now=datetime.now(timezone.utc))

        confirmed = booking.confirm(transaction_id=transaction_id, payment_method=method)
        payment = Payment.for_booking(
            id=uuid_utils.uuid7(),
            booking=confirmed,
            transaction_id=transaction_id,
            amount=amount,
            method=method,
        )
        settled = await self.booking_command_repo.settle_with_payment_atomically(
            booking=confirmed, payment=payment
        )

        Logger.base.info(
            f'💳 [PAYMENT] {settled.booking_reference} settled by {transaction_id}, '
            f'deducted {settled.quantity} from ticket {settled.ticket_id}'
        )
        return settled
