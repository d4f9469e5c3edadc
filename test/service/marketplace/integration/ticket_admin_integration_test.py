import asyncio

import pytest
from sqlalchemy import func, select
import uuid_utils

from src.platform.database.orm_db_setting import Database
from src.platform.exception.exceptions import DomainError, NotFoundError
from src.service.marketplace.domain.entity.user_entity import UserRole
from src.service.marketplace.domain.enum.verification_status import VerificationStatus
from src.service.marketplace.driven_adapter.model.ticket_model import TicketModel
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
from test.service.marketplace.builders import OTHER_VENDOR_EMAIL, VENDOR_EMAIL, make_ticket, make_user


pytestmark = pytest.mark.integration


@pytest.fixture
def database() -> Database:
    return Database()


@pytest.fixture
def ticket_command_repo(database: Database) -> TicketCommandRepoImpl:
    return TicketCommandRepoImpl(session_factory=database.session)


@pytest.fixture
def ticket_query_repo(database: Database) -> TicketQueryRepoImpl:
    return TicketQueryRepoImpl(session_factory=database.session)


class TestAdvertiseCap:
    async def test_cap_holds_and_unadvertising_is_always_allowed(
        self, ticket_command_repo: TicketCommandRepoImpl
    ) -> None:
        first, second, third = [await ticket_command_repo.create(make_ticket()) for _ in range(3)]

        await ticket_command_repo.toggle_advertise_atomically(ticket_id=first.id, cap=2)
        await ticket_command_repo.toggle_advertise_atomically(ticket_id=second.id, cap=2)
        with pytest.raises(DomainError, match='Max 2 advertised'):
            await ticket_command_repo.toggle_advertise_atomically(ticket_id=third.id, cap=2)

        off = await ticket_command_repo.toggle_advertise_atomically(ticket_id=first.id, cap=2)
        on = await ticket_command_repo.toggle_advertise_atomically(ticket_id=third.id, cap=2)

        assert off.is_advertised is False
        assert on.is_advertised is True

    async def test_concurrent_toggles_never_exceed_cap(
        self, ticket_command_repo: TicketCommandRepoImpl, ticket_query_repo: TicketQueryRepoImpl
    ) -> None:
        """
        Given: Four approved, unadvertised tickets and a cap of 2
        When: All four are toggled on concurrently
        Then: Two are advertised and the other two are rejected by the cap
        """
        # Arrange
        tickets = [await ticket_command_repo.create(make_ticket()) for _ in range(4)]

        # Act
        results = await asyncio.gather(
            *(
                ticket_command_repo.toggle_advertise_atomically(ticket_id=t.id, cap=2)
                for t in tickets
            ),
            return_exceptions=True,
        )

        # Assert
        rejected = [r for r in results if isinstance(r, DomainError)]
        assert len(rejected) == 2
        assert len(await ticket_query_repo.list_advertised(limit=6)) == 2

    async def test_reject_then_reapprove_cannot_exceed_cap(
        self, database: Database, ticket_command_repo: TicketCommandRepoImpl
    ) -> None:
        """
        Given: Two advertised tickets at a cap of 2
        When: One is rejected, a third takes its slot, and the first is approved again
        Then: The first comes back unadvertised, so two stay advertised and approved
        """
        # Arrange
        first, second, third = [await ticket_command_repo.create(make_ticket()) for _ in range(3)]
        await ticket_command_repo.toggle_advertise_atomically(ticket_id=first.id, cap=2)
        await ticket_command_repo.toggle_advertise_atomically(ticket_id=second.id, cap=2)

        # Act
        rejected = await ticket_command_repo.set_verification_status(
            ticket_id=first.id, verification_status=VerificationStatus.REJECTED
        )
        await ticket_command_repo.toggle_advertise_atomically(ticket_id=third.id, cap=2)
        reapproved = await ticket_command_repo.set_verification_status(
            ticket_id=first.id, verification_status=VerificationStatus.APPROVED
        )

        # Assert
        assert rejected.is_advertised is False
        assert reapproved.is_advertised is False
        assert reapproved.verification_status == VerificationStatus.APPROVED
        async with database.session() as session:
            live = await session.scalar(
                select(func.count())
                .select_from(TicketModel)
                .where(
                    TicketModel.is_advertised.is_(True),
                    TicketModel.verification_status == VerificationStatus.APPROVED.value,
                )
            )
        assert live == 2

    async def test_vendor_edit_writes_only_sent_fields(
        self, ticket_command_repo: TicketCommandRepoImpl
    ) -> None:
        created = await ticket_command_repo.create(make_ticket(quantity=10))

        updated = await ticket_command_repo.update_fields(
            ticket_id=created.id, changes={'price': 35, 'perks': ['AC', 'Wifi']}
        )

        assert updated.price == 35
        assert updated.perks == ['AC', 'Wifi']
        assert updated.quantity == 10
        assert updated.title == created.title

    async def test_unknown_ticket_status_change(
        self, ticket_command_repo: TicketCommandRepoImpl
    ) -> None:
        with pytest.raises(NotFoundError, match='Ticket not found'):
            await ticket_command_repo.set_verification_status(
                ticket_id=uuid_utils.uuid7(), verification_status=VerificationStatus.APPROVED
            )

    async def test_only_approved_tickets(self, ticket_command_repo: TicketCommandRepoImpl) -> None:
        pending = await ticket_command_repo.create(
            make_ticket(verification_status=VerificationStatus.PENDING)
        )

        with pytest.raises(DomainError, match='Only approved tickets can be advertised'):
            await ticket_command_repo.toggle_advertise_atomically(ticket_id=pending.id, cap=6)


class TestCatalogVisibility:
    async def test_public_catalog_is_newest_first(
        self, ticket_command_repo: TicketCommandRepoImpl, ticket_query_repo: TicketQueryRepoImpl
    ) -> None:
        older = await ticket_command_repo.create(make_ticket(title='Older'))
        newer = await ticket_command_repo.create(make_ticket(title='Newer'))
        await ticket_command_repo.create(make_ticket(verification_status=VerificationStatus.REJECTED))

        public = await ticket_query_repo.list_public()
        latest = await ticket_query_repo.list_public(limit=1)

        assert [t.id for t in public] == [newer.id, older.id]
        assert [t.id for t in latest] == [newer.id]

    async def test_fraud_hides_only_that_vendors_tickets(
        self,
        database: Database,
        ticket_command_repo: TicketCommandRepoImpl,
        ticket_query_repo: TicketQueryRepoImpl,
    ) -> None:
        """
        Given: Two vendors with one approved ticket each
        When: One vendor is marked as fraud
        Then: Only the other vendor's ticket stays in the public catalog
        """
        # Arrange
        user_command_repo = UserCommandRepoImpl(session_factory=database.session)
        await user_command_repo.upsert(make_user(VENDOR_EMAIL, UserRole.VENDOR))
        await ticket_command_repo.create(make_ticket())
        kept = await ticket_command_repo.create(make_ticket(vendor_email=OTHER_VENDOR_EMAIL))

        # Act
        hidden_count = await user_command_repo.mark_as_fraud_and_hide_tickets(email=VENDOR_EMAIL)

        # Assert
        assert hidden_count == 1
        assert [t.id for t in await ticket_query_repo.list_public()] == [kept.id]
        user = await UserQueryRepoImpl(session_factory=database.session).get_by_email(VENDOR_EMAIL)
        assert user is not None
        assert user.is_fraud is True
        assert user.role == UserRole.VENDOR

    async def test_fraud_for_unknown_user(self, database: Database) -> None:
        user_command_repo = UserCommandRepoImpl(session_factory=database.session)

        assert await user_command_repo.mark_as_fraud_and_hide_tickets(email='ghost@example.com') is None

    async def test_upsert_keeps_role_on_repeat_sign_in(self, database: Database) -> None:
        user_command_repo = UserCommandRepoImpl(session_factory=database.session)
        await user_command_repo.upsert(make_user(VENDOR_EMAIL, UserRole.VENDOR))

        again = await user_command_repo.upsert(make_user(VENDOR_EMAIL, UserRole.CUSTOMER, name='Renamed'))

        assert again.role == UserRole.VENDOR
        assert again.name == 'Renamed'
