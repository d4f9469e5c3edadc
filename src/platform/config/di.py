"""
https://python-dependency-injector.ets-labs.org/index.html
https://python-dependency-injector.ets-labs.org/examples/fastapi-sqlalchemy.html
"""

from dependency_injector import containers, providers

from src.platform.config.core_setting import Settings
from src.platform.database.orm_db_setting import Database
from src.service.marketplace.driven_adapter.identity.jwt_identity_verifier_impl import (
    JwtIdentityVerifier,
)
from src.service.marketplace.driven_adapter.payment.stripe_payment_processor_impl import (
    StripePaymentProcessor,
)
from src.service.marketplace.driven_adapter.repo.booking_command_repo_impl import (
    BookingCommandRepoImpl,
)
from src.service.marketplace.driven_adapter.repo.booking_query_repo_impl import (
    BookingQueryRepoImpl,
)
from src.service.marketplace.driven_adapter.repo.payment_query_repo_impl import (
    PaymentQueryRepoImpl,
)
from src.service.marketplace.driven_adapter.repo.ticket_command_repo_impl import (
    TicketCommandRepoImpl,
)
from src.service.marketplace.driven_adapter.repo.ticket_query_repo_impl import (
    TicketQueryRepoImpl,
)
from src.service.marketplace.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)
from src.service.marketplace.driven_adapter.repo.user_query_repo_impl import UserQueryRepoImpl


class Container(containers.DeclarativeContainer):
    # Configuration
    config_service = providers.Singleton(Settings)

    # Database (uses AsyncEngineManager with settings from config_service)
    database = providers.Singleton(Database)

    # Repositories (stateless - SQLAlchemy ones open a session per call)
    user_command_repo = providers.Singleton(
        UserCommandRepoImpl, session_factory=database.provided.session
    )
    user_query_repo = providers.Singleton(
        UserQueryRepoImpl, session_factory=database.provided.session
    )
    ticket_command_repo = providers.Singleton(
        TicketCommandRepoImpl, session_factory=database.provided.session
    )
    ticket_query_repo = providers.Singleton(
        TicketQueryRepoImpl, session_factory=database.provided.session
    )

    # Booking ledger and payments (asyncpg pool, raw SQL CTEs)
    booking_command_repo = providers.Singleton(BookingCommandRepoImpl)
    booking_query_repo = providers.Singleton(BookingQueryRepoImpl)
    payment_query_repo = providers.Singleton(PaymentQueryRepoImpl)

    # External collaborators
    identity_verifier = providers.Singleton(JwtIdentityVerifier, config=config_service)
    payment_processor = providers.Singleton(StripePaymentProcessor, config=config_service)


container = Container()


def setup() -> None:
    container.config_service()


def cleanup() -> None:
    container.reset_singletons()
