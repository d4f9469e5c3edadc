"""
Wire Modules Configuration

Defines the modules that need dependency injection wiring.
Shared between production and test environments.
"""

from types import ModuleType

from src.service.marketplace.app.command import (
    cancel_booking_use_case,
    create_booking_use_case,
    create_payment_intent_use_case,
    create_ticket_use_case,
    delete_ticket_use_case,
    mark_user_as_fraud_use_case,
    record_payment_use_case,
    toggle_ticket_advertise_use_case,
    update_booking_status_use_case,
    update_ticket_use_case,
    update_user_role_use_case,
    upsert_user_use_case,
    verify_ticket_use_case,
)
from src.service.marketplace.app.query import (
    get_vendor_revenue_use_case,
    list_bookings_use_case,
    list_transactions_use_case,
    ticket_catalog_use_case,
    user_query_use_case,
)
from src.service.marketplace.driving_adapter.http_controller.auth import identity_auth


WIRE_MODULES: list[ModuleType] = [
    # Commands
    upsert_user_use_case,
    create_booking_use_case,
    update_booking_status_use_case,
    cancel_booking_use_case,
    create_payment_intent_use_case,
    record_payment_use_case,
    create_ticket_use_case,
    update_ticket_use_case,
    delete_ticket_use_case,
    verify_ticket_use_case,
    toggle_ticket_advertise_use_case,
    update_user_role_use_case,
    mark_user_as_fraud_use_case,
    # Queries
    user_query_use_case,
    list_bookings_use_case,
    list_transactions_use_case,
    ticket_catalog_use_case,
    get_vendor_revenue_use_case,
    # Auth dependencies
    identity_auth,
]
