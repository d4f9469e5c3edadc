from functools import partial
from typing import Optional

import anyio
import stripe

from src.platform.config.core_setting import Settings, settings
from src.platform.exception.exceptions import ExternalServiceError
from src.platform.logging.loguru_io import Logger
from src.service.marketplace.app.interface.i_payment_processor import IPaymentProcessor


class StripePaymentProcessor(IPaymentProcessor):
    def __init__(self, config: Optional[Settings] = None) -> None:
        config = config or settings
        stripe.api_key = config.STRIPE_SECRET_KEY.get_secret_value()

    @Logger.io
    async def create_payment_intent(self, *, amount_in_cents: int, currency: str) -> str:
        try:
            # stripe-python is synchronous
            intent = await anyio.to_thread.run_sync(
                partial(
                    stripe.PaymentIntent.create,
                    amount=amount_in_cents,
                    currency=currency,
                    payment_method_types=['card'],
                )
            )
        except stripe.StripeError as e:
            Logger.base.error(f'💥 [PAYMENT] Stripe rejected intent of {amount_in_cents}: {e}')
            raise ExternalServiceError('Payment processor unavailable') from e

        return intent.client_secret
