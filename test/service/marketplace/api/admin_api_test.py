from fastapi.testclient import TestClient
import pytest

from src.service.marketplace.domain.entity.user_entity import UserRole
from src.service.marketplace.domain.enum.verification_status import VerificationStatus
from test.service.marketplace.builders import (
    ADMIN_EMAIL,
    CUSTOMER_EMAIL,
    VENDOR_EMAIL,
    auth_header,
    make_ticket,
)
from test.service.marketplace.fakes import InMemoryStore


pytestmark = pytest.mark.unit


ADMIN = auth_header(ADMIN_EMAIL)


class TestAdminGuard:
    @pytest.mark.parametrize('email', [CUSTOMER_EMAIL, VENDOR_EMAIL])
    def test_non_admin_is_forbidden(self, client: TestClient, email: str) -> None:
        response = client.get('/admin/users', headers=auth_header(email))

        assert response.status_code == 403
        assert response.json() == {'detail': 'Admin only Actions!'}


class TestTicketVerification:
    def test_approve_ticket(self, client: TestClient, store: InMemoryStore) -> None:
        ticket = store.add_ticket(make_ticket(verification_status=VerificationStatus.PENDING))

        response = client.patch(
            f'/admin/tickets/{ticket.id}/verify',
            json={'verification_status': 'approved'},
            headers=ADMIN,
        )

        assert response.status_code == 200
        assert response.json()['verification_status'] == 'approved'
        assert client.get(f'/tickets/{ticket.id}').status_code == 200

    def test_unknown_verification_status(self, client: TestClient, store: InMemoryStore) -> None:
        ticket = store.add_ticket(make_ticket(verification_status=VerificationStatus.PENDING))

        response = client.patch(
            f'/admin/tickets/{ticket.id}/verify',
            json={'verification_status': 'maybe'},
            headers=ADMIN,
        )

        assert response.status_code == 400
        assert response.json() == {'detail': 'Invalid verification status'}

    def test_admin_lists_every_ticket(self, client: TestClient, store: InMemoryStore) -> None:
        store.add_ticket(make_ticket())
        store.add_ticket(make_ticket(verification_status=VerificationStatus.PENDING))
        store.add_ticket(make_ticket(is_hidden=True))

        response = client.get('/admin/tickets', headers=ADMIN)

        assert len(response.json()) == 3


class TestAdvertiseToggle:
    def _toggle(self, client: TestClient, ticket_id):
        return client.patch(f'/admin/tickets/advertise/{ticket_id}', headers=ADMIN)

    def test_toggle_on_and_off(self, client: TestClient, store: InMemoryStore) -> None:
        ticket = store.add_ticket(make_ticket())

        on = self._toggle(client, ticket.id)
        off = self._toggle(client, ticket.id)

        assert on.json() == {'message': 'Toggled advertise', 'is_advertised': True}
        assert off.json() == {'message': 'Toggled advertise', 'is_advertised': False}

    def test_cap_of_six_advertised(self, client: TestClient, store: InMemoryStore) -> None:
        """
        Given: Six approved tickets already advertised
        When: The admin advertises a seventh
        Then: 400 Max 6 advertised, and un-advertising one of the six still works
        """
        advertised = [store.add_ticket(make_ticket(is_advertised=True)) for _ in range(6)]
        seventh = store.add_ticket(make_ticket())

        response = self._toggle(client, seventh.id)
        turn_off = self._toggle(client, advertised[0].id)

        assert response.status_code == 400
        assert response.json() == {'detail': 'Max 6 advertised'}
        assert store.ticket(seventh.id).is_advertised is False
        assert turn_off.json()['is_advertised'] is False

    def test_reject_then_reapprove_keeps_cap(
        self, client: TestClient, store: InMemoryStore
    ) -> None:
        """
        Given: Six advertised tickets
        When: One is rejected, another takes its slot, and the first is approved again
        Then: The re-approved ticket is no longer advertised and the cap still holds
        """
        # Arrange
        advertised = [store.add_ticket(make_ticket(is_advertised=True)) for _ in range(6)]
        replacement = store.add_ticket(make_ticket())
        first = advertised[0]

        # Act
        rejected = client.patch(
            f'/admin/tickets/{first.id}/verify',
            json={'verification_status': 'rejected'},
            headers=ADMIN,
        )
        swapped_in = self._toggle(client, replacement.id)
        reapproved = client.patch(
            f'/admin/tickets/{first.id}/verify',
            json={'verification_status': 'approved'},
            headers=ADMIN,
        )

        # Assert
        assert rejected.json()['is_advertised'] is False
        assert reapproved.status_code == 200
        assert reapproved.json()['is_advertised'] is False
        assert swapped_in.json()['is_advertised'] is True
        live = [
            t
            for t in store.tickets.values()
            if t.is_advertised and t.verification_status == VerificationStatus.APPROVED
        ]
        assert len(live) == 6

    def test_unapproved_ticket_cannot_be_advertised(
        self, client: TestClient, store: InMemoryStore
    ) -> None:
        ticket = store.add_ticket(make_ticket(verification_status=VerificationStatus.PENDING))

        response = self._toggle(client, ticket.id)

        assert response.status_code == 400
        assert response.json() == {'detail': 'Only approved tickets can be advertised'}


class TestUserAdministration:
    def test_promote_customer_to_vendor(self, client: TestClient, store: InMemoryStore) -> None:
        response = client.patch(
            f'/admin/users/{CUSTOMER_EMAIL}/role', json={'role': 'vendor'}, headers=ADMIN
        )

        assert response.status_code == 200
        assert response.json()['role'] == 'vendor'
        assert store.users[CUSTOMER_EMAIL].role == UserRole.VENDOR

    def test_unknown_role(self, client: TestClient) -> None:
        response = client.patch(
            f'/admin/users/{CUSTOMER_EMAIL}/role', json={'role': 'superuser'}, headers=ADMIN
        )

        assert response.status_code == 400
        assert response.json() == {'detail': 'Invalid role'}

    def test_unknown_user(self, client: TestClient) -> None:
        response = client.patch(
            '/admin/users/ghost@example.com/role', json={'role': 'vendor'}, headers=ADMIN
        )

        assert response.status_code == 404
        assert response.json() == {'detail': 'User not found'}

    def test_mark_vendor_as_fraud_hides_tickets(
        self, client: TestClient, store: InMemoryStore
    ) -> None:
        """
        Given: A vendor with two approved tickets
        When: The admin marks the vendor as fraud
        Then: Both tickets disappear from the public catalog
        """
        store.add_ticket(make_ticket())
        store.add_ticket(make_ticket())

        response = client.patch(f'/admin/users/{VENDOR_EMAIL}/fraud', headers=ADMIN)

        assert response.status_code == 200
        assert response.json() == {'message': 'User marked as fraud', 'hidden_tickets': 2}
        assert store.users[VENDOR_EMAIL].is_fraud is True
        assert client.get('/tickets/all').json() == []

    def test_list_users(self, client: TestClient) -> None:
        response = client.get('/admin/users', headers=ADMIN)

        assert response.status_code == 200
        assert {u['email'] for u in response.json()} >= {ADMIN_EMAIL, CUSTOMER_EMAIL}
