from decimal import ROUND_HALF_UP, Decimal
from typing import Self

from dependency_injector.wiring import Provide, inject
from fastapi import Depends

from src.platform.config.core_setting import settings
from src.platform.config.di import Container
from src.platform.exception.exceptions import ValidationError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_payment_processor import IPaymentProcessor


class CreatePaymentIntentUseCase:
    def __init__(self, *, payment_processor: IPaymentProcessor) -> None:
        self.payment_processor = payment_processor

    @classmethod
    @inject
    def depends(
        cls,
        payment_processor: IPaymentProcessor = Depends(Provide[Container.payment_processor]),
    ) -> Self:
        return cls(payment_processor=payment_processor)

    @staticmethod
    def to_cents(amount: Decimal | float | int) -> int:
        cents = (Decimal(str(amount)) * 100).quantize(Decimal('1'), rounding=ROUND_HALF_UP)
        return int(cents)

    @Logger.io
    async def create_payment_intent(self, *, amount: Decimal | float | int) -> str:
        if amount is None or Decimal(str(amount)) <= 0:
            raise ValidationError('Amount must be positive')

        return await self.payment_processor.create_payment_intent(
            amount_in_cents=self.to_cents(amount), currency=settings.PAYMENT_CURRENCY
        )
