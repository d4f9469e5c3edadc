"""
API test fixtures

The production app (routes, auth dependencies, exception handlers) runs against
in-memory repositories swapped in through dependency_injector provider overrides.
Identity tokens are real HS256 JWTs verified by JwtIdentityVerifier.
"""

from collections.abc import Generator

from fastapi.testclient import TestClient
import pytest

from src.platform.config.di import container
from src.service.marketplace.domain.entity.user_entity import UserRole
from test.service.marketplace.builders import (
    ADMIN_EMAIL,
    CUSTOMER_EMAIL,
    OTHER_CUSTOMER_EMAIL,
    OTHER_VENDOR_EMAIL,
    VENDOR_EMAIL,
    make_user,
)
from test.service.marketplace.fakes import (
    InMemoryBookingCommandRepo,
    InMemoryBookingQueryRepo,
    InMemoryPaymentQueryRepo,
    InMemoryStore,
    InMemoryTicketCommandRepo,
    InMemoryTicketQueryRepo,
    InMemoryUserCommandRepo,
    InMemoryUserQueryRepo,
    RecordingPaymentProcessor,
)


@pytest.fixture
def store() -> InMemoryStore:
    """Store seeded with one user per role"""
    store = InMemoryStore()
    store.add_user(make_user(CUSTOMER_EMAIL, UserRole.CUSTOMER))
    store.add_user(make_user(OTHER_CUSTOMER_EMAIL, UserRole.CUSTOMER))
    store.add_user(make_user(VENDOR_EMAIL, UserRole.VENDOR))
    store.add_user(make_user(OTHER_VENDOR_EMAIL, UserRole.VENDOR))
    store.add_user(make_user(ADMIN_EMAIL, UserRole.ADMIN))
    return store


@pytest.fixture
def payment_processor() -> RecordingPaymentProcessor:
    return RecordingPaymentProcessor()


@pytest.fixture
def client(
    store: InMemoryStore, payment_processor: RecordingPaymentProcessor
) -> Generator[TestClient, None, None]:
    from test.test_main import app

    container.user_command_repo.override(InMemoryUserCommandRepo(store))
    container.user_query_repo.override(InMemoryUserQueryRepo(store))
    container.ticket_command_repo.override(InMemoryTicketCommandRepo(store))
    container.ticket_query_repo.override(InMemoryTicketQueryRepo(store))
    container.booking_command_repo.override(InMemoryBookingCommandRepo(store))
    container.booking_query_repo.override(InMemoryBookingQueryRepo(store))
    container.payment_query_repo.override(InMemoryPaymentQueryRepo(store))
    container.payment_processor.override(payment_processor)

    try:
        with TestClient(app, raise_server_exceptions=False) as test_client:
            yield test_client
    finally:
        container.reset_override()
