from abc import ABC, abstractmethod


class IPaymentProcessor(ABC):
    @abstractmethod
    async def create_payment_intent(self, *, amount_in_cents: int, currency: str) -> str:
        """
        Create a card payment intent and return its client confirmation secret

        Raises:
            ExternalServiceError: When the processor rejects or cannot be reached
        """
        pass
