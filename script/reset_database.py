#!/usr/bin/env python3
"""
Database Reset Script
Reset PostgreSQL database structure

Features:
1. Drop & Recreate Database - completely wipe the database
2. Run Alembic Migrations - create the latest schema

Notes:
- This script only resets database structure, does not seed data
- To seed development data, run `python -m script.seed_data`
"""

import asyncio

from alembic import command
from alembic.config import Config
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from src.platform.config.core_setting import settings
from src.platform.constant.path import ALEMBIC_INI


def _parse_db_connection(database_url: str) -> tuple[str, str]:
    """Return (server_url, db_name)"""
    server_url, db_name = database_url.rsplit('/', 1)
    return server_url, db_name


async def _drop_and_create_db(server_url: str, db_name: str) -> None:
    admin_engine = create_async_engine(f'{server_url}/postgres', isolation_level='AUTOCOMMIT')

    try:
        async with admin_engine.connect() as conn:
            await conn.execute(
                text(
                    'SELECT pg_terminate_backend(pid) FROM pg_stat_activity '
                    'WHERE datname = :name AND pid <> pg_backend_pid()'
                ),
                {'name': db_name},
            )
            await conn.execute(text(f'DROP DATABASE IF EXISTS "{db_name}"'))
            print(f"   ✅ Database '{db_name}' dropped")

            await conn.execute(text(f'CREATE DATABASE "{db_name}"'))
            print(f"   ✅ Database '{db_name}' created")
    finally:
        await admin_engine.dispose()


def _run_alembic_migrations() -> None:
    # env.py runs its own event loop, so this is called outside asyncio.run
    print("   🔄 Running 'alembic upgrade head'...")
    command.upgrade(Config(str(ALEMBIC_INI)), 'head')
    print('   ✅ Database migrations completed')


def main() -> None:
    database_url = settings.DATABASE_URL_ASYNC
    server_url, db_name = _parse_db_connection(database_url)

    print('🔄 Starting database reset...')
    print('=' * 50)
    print(f'Database name: {db_name}')

    try:
        print('🗑️ Dropping database...')
        asyncio.run(_drop_and_create_db(server_url, db_name))

        print('🏗️ Running database migrations...')
        _run_alembic_migrations()
    except Exception as e:
        print(f'❌ Reset failed: {e}')
        raise SystemExit(1) from e

    print('=' * 50)
    print('✅ Database reset completed!')
    print('💡 To seed development data, run: python -m script.seed_data')


if __name__ == '__main__':
    main()
