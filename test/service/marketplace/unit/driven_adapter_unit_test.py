from datetime import datetime, timedelta, timezone
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import jwt
import pytest
import stripe

from src.platform.config.core_setting import Settings
from src.platform.exception.exceptions import AuthenticationError, ExternalServiceError
from src.service.marketplace.driven_adapter.identity.jwt_identity_verifier_impl import (
    JwtIdentityVerifier,
)
from src.service.marketplace.driven_adapter.payment.stripe_payment_processor_impl import (
    StripePaymentProcessor,
)


pytestmark = pytest.mark.unit

SECRET = 'unit_test_identity_secret'


def _token(secret: str = SECRET, **claims) -> str:
    payload = {'exp': datetime.now(timezone.utc) + timedelta(minutes=5), **claims}
    return jwt.encode(payload, secret, algorithm='HS256')


class TestJwtIdentityVerifier:
    @pytest.fixture
    def verifier(self) -> JwtIdentityVerifier:
        return JwtIdentityVerifier(Settings(SECRET_KEY=SECRET))

    async def test_returns_normalized_email(self, verifier: JwtIdentityVerifier) -> None:
        email = await verifier.verify(token=_token(email=' Rider@Example.com '))

        assert email == 'rider@example.com'

    @pytest.mark.parametrize(
        'token',
        [
            '',
            'not-a-jwt',
            _token(secret='someone_elses_secret', email='rider@example.com'),
            _token(email='rider@example.com', exp=datetime.now(timezone.utc) - timedelta(minutes=1)),
            _token(sub='no-email-claim'),
            _token(email=42),
        ],
        ids=['empty', 'garbage', 'wrong_key', 'expired', 'missing_email', 'non_string_email'],
    )
    async def test_rejected_tokens(self, verifier: JwtIdentityVerifier, token: str) -> None:
        with pytest.raises(AuthenticationError, match='Unauthorized Access!'):
            await verifier.verify(token=token)

    async def test_audience_is_enforced_when_configured(self) -> None:
        verifier = JwtIdentityVerifier(
            Settings(SECRET_KEY=SECRET, IDENTITY_AUDIENCE='ticket-marketplace')
        )

        assert await verifier.verify(
            token=_token(email='rider@example.com', aud='ticket-marketplace')
        ) == 'rider@example.com'
        with pytest.raises(AuthenticationError):
            await verifier.verify(token=_token(email='rider@example.com', aud='another-app'))


class TestStripePaymentProcessor:
    @pytest.fixture
    def processor(self) -> StripePaymentProcessor:
        return StripePaymentProcessor(Settings(STRIPE_SECRET_KEY='sk_test_unit'))

    async def test_creates_card_intent(self, processor: StripePaymentProcessor) -> None:
        create = MagicMock(return_value=SimpleNamespace(client_secret='pi_1_secret_abc'))

        with patch.object(stripe.PaymentIntent, 'create', create):
            client_secret = await processor.create_payment_intent(
                amount_in_cents=4000, currency='usd'
            )

        assert client_secret == 'pi_1_secret_abc'
        assert stripe.api_key == 'sk_test_unit'
        create.assert_called_once_with(amount=4000, currency='usd', payment_method_types=['card'])

    async def test_processor_error_becomes_bad_gateway(
        self, processor: StripePaymentProcessor
    ) -> None:
        create = MagicMock(side_effect=stripe.StripeError('card network down'))

        with patch.object(stripe.PaymentIntent, 'create', create):
            with pytest.raises(ExternalServiceError) as exc_info:
                await processor.create_payment_intent(amount_in_cents=100, currency='usd')

        assert exc_info.value.status_code == 502
