#!/usr/bin/env python3
"""
Database Seed Script
Populate development data into the database

Features:
1. Create Users - one admin, one vendor, one customer
2. Create Tickets - approved listings for the vendor, the first ones advertised
3. Print Tokens - HS256 bearer tokens signed with SECRET_KEY for local API calls

Notes:
- Run `python -m script.reset_database` first for an empty schema
- Tokens only work while IDENTITY_JWKS_URL is unset
"""

import asyncio
from dataclasses import dataclass
from datetime import datetime, time, timedelta, timezone

import jwt
import uuid_utils

from src.platform.config.core_setting import settings
from src.platform.database.asyncpg_setting import close_all_asyncpg_pools
from src.platform.database.orm_db_setting import Database, dispose_engine
from src.service.marketplace.domain.entity.ticket_entity import Ticket
from src.service.marketplace.domain.entity.user_entity import UserEntity, UserRole
from src.service.marketplace.driven_adapter.repo.ticket_command_repo_impl import (
    TicketCommandRepoImpl,
)
from src.service.marketplace.driven_adapter.repo.user_command_repo_impl import (
    UserCommandRepoImpl,
)


@dataclass
class UserConfig:
    """User seed configuration"""

    email: str
    name: str
    role: UserRole


SEED_USERS = [
    UserConfig(email='admin@t.com', name='init admin', role=UserRole.ADMIN),
    UserConfig(email='vendor@t.com', name='init vendor', role=UserRole.VENDOR),
    UserConfig(email='customer@t.com', name='init customer', role=UserRole.CUSTOMER),
]

# (from, to, transport, price, quantity, days until departure)
SEED_ROUTES = [
    ('Dhaka', 'Chittagong', 'bus', 20, 40, 7),
    ('Dhaka', 'Sylhet', 'train', 15, 120, 10),
    ('Dhaka', "Cox's Bazar", 'plane', 90, 60, 14),
    ('Khulna', 'Dhaka', 'launch', 12, 200, 21),
]
ADVERTISED_ROUTES = 2


async def seed_users(database: Database) -> None:
    repo = UserCommandRepoImpl(session_factory=database.session)
    now = datetime.now(timezone.utc)

    for config in SEED_USERS:
        await repo.upsert(
            UserEntity(
                email=config.email,
                name=config.name,
                role=config.role,
                created_at=now,
                last_logged_in=now,
            )
        )
        # upsert never changes the role of an existing user
        await repo.update_role(email=config.email, role=config.role)
        print(f'   ✅ {config.role.value}: {config.email}')


async def seed_tickets(database: Database, *, vendor_email: str) -> None:
    repo = TicketCommandRepoImpl(session_factory=database.session)
    today = datetime.now(timezone.utc).date()

    for index, (origin, destination, transport, price, quantity, days) in enumerate(SEED_ROUTES):
        ticket = Ticket.create(
            id=uuid_utils.uuid7(),
            vendor_email=vendor_email,
            title=f'{origin} to {destination}',
            price=price,
            quantity=quantity,
            from_location=origin,
            to_location=destination,
            departure_date=today + timedelta(days=days),
            departure_time=time(8, 30),
            transport_type=transport,
            perks=['AC'],
        )
        created = await repo.create(ticket.verify('approved'))
        if index < ADVERTISED_ROUTES:
            await repo.toggle_advertise_atomically(ticket_id=created.id, cap=settings.ADVERTISE_CAP)
        print(f'   ✅ {created.title} ({created.id})')


def print_tokens() -> None:
    expires_at = datetime.now(timezone.utc) + timedelta(days=7)
    for config in SEED_USERS:
        token = jwt.encode(
            {'email': config.email, 'exp': expires_at},
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.IDENTITY_ALGORITHM,
        )
        print(f'   🔑 {config.email}: Bearer {token}')


async def main() -> None:
    database = Database()
    print('🌱 Seeding development data...')
    print('=' * 50)

    try:
        print('👤 Creating users...')
        await seed_users(database)

        print('🎫 Creating tickets...')
        await seed_tickets(database, vendor_email=SEED_USERS[1].email)

        print('🔐 Development tokens (valid 7 days):')
        print_tokens()
    finally:
        await dispose_engine()
        await close_all_asyncpg_pools()

    print('=' * 50)
    print('✅ Seed completed!')


if __name__ == '__main__':
    asyncio.run(main())
