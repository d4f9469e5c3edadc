"""
Test Configuration and Fixtures

This module provides:
- Environment setup for the test database, done before any application import
- Test database creation and alembic migrations (integration runs only)
- Table cleanup between integration tests

Architecture:
- Unit tests (@pytest.mark.unit): mocked collaborators or in-memory repositories, no database
- Integration tests (@pytest.mark.integration): real PostgreSQL, skipped when it is unreachable
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# Settings are read at import time (src.platform.config.core_setting.settings)
# =============================================================================
import os
from pathlib import Path

from dotenv import load_dotenv

from test.constants import TEST_SECRET_KEY


_PROJECT_ROOT = Path(__file__).resolve().parent.parent


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    # Connection settings come from .env (or .env.example); test overrides follow
    env_file = _PROJECT_ROOT / '.env'
    load_dotenv(env_file if env_file.exists() else _PROJECT_ROOT / '.env.example')

    worker_id = os.environ.get('PYTEST_XDIST_WORKER', 'master')
    if worker_id == 'master':
        os.environ['POSTGRES_DB'] = 'ticket_marketplace_test_db'
    else:
        os.environ['POSTGRES_DB'] = f'ticket_marketplace_test_db_{worker_id}'

    test_log_dir = Path(__file__).parent / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    # HS256 tokens signed by the tests themselves
    os.environ['SECRET_KEY'] = TEST_SECRET_KEY
    os.environ.pop('IDENTITY_JWKS_URL', None)
    os.environ.pop('IDENTITY_AUDIENCE', None)
    os.environ.pop('IDENTITY_ISSUER', None)

    os.environ['RECONCILE_INTERVAL_SECONDS'] = '0'
    os.environ.setdefault('DB_POOL_SIZE', '2')
    os.environ.setdefault('DB_POOL_MAX_OVERFLOW', '2')
    os.environ.setdefault('ASYNCPG_POOL_MIN_SIZE', '1')
    os.environ.setdefault('ASYNCPG_POOL_MAX_SIZE', '5')


_early_setup_test_environment()

import asyncio  # noqa: E402
from collections.abc import AsyncGenerator  # noqa: E402
import contextlib  # noqa: E402
from typing import Optional  # noqa: E402

from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import text  # noqa: E402
from sqlalchemy.ext.asyncio import create_async_engine  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.constant.path import ALEMBIC_INI  # noqa: E402


# Set when PostgreSQL cannot be prepared; integration tests are skipped with it
_database_unavailable_reason: Optional[str] = None

_TABLES = ('payment', 'booking', 'ticket', 'user')


# =============================================================================
# Pytest Hooks
# =============================================================================
def _is_unit_test_only_run(config: pytest.Config) -> bool:
    markexpr = config.getoption('markexpr', default='')
    if markexpr and 'unit' in str(markexpr) and 'integration' not in str(markexpr):
        return True

    args = config.args or []
    test_paths = [arg for arg in args if arg and not arg.startswith('-')]
    return bool(
        test_paths
        and all(
            '/unit' in path or '/api' in path or '\\unit' in path or '\\api' in path
            for path in test_paths
        )
    )


def pytest_sessionstart(session: pytest.Session) -> None:
    global _database_unavailable_reason
    if _is_unit_test_only_run(session.config):
        _database_unavailable_reason = 'unit test run'
        return

    try:
        asyncio.run(_create_test_database())
        _run_migrations()
    except Exception as e:
        _database_unavailable_reason = f'PostgreSQL unavailable: {type(e).__name__}: {e}'


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if 'integration' not in [m.name for m in item.iter_markers()]:
            continue
        if _database_unavailable_reason:
            item.add_marker(pytest.mark.skip(reason=_database_unavailable_reason))
        else:
            # Truncate before any fixture seeds rows
            item.fixturenames.insert(0, 'clean_database')


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
async def _create_test_database() -> None:
    db_url = settings.DATABASE_URL_ASYNC
    test_db = settings.POSTGRES_DB

    # Create database if not exists
    postgres_url = db_url.rsplit('/', 1)[0] + '/postgres'
    engine = create_async_engine(
        postgres_url, isolation_level='AUTOCOMMIT', connect_args={'timeout': 5}
    )
    try:
        async with engine.connect() as conn:
            exists = await conn.scalar(
                text('SELECT 1 FROM pg_database WHERE datname = :name'), {'name': test_db}
            )
            if not exists:
                await conn.execute(text(f'CREATE DATABASE "{test_db}"'))
    finally:
        await engine.dispose()

    # Reset schema, migrations run afterwards outside the event loop
    reset_engine = create_async_engine(db_url)
    try:
        async with reset_engine.begin() as conn:
            await conn.execute(text('DROP SCHEMA public CASCADE'))
            await conn.execute(text('CREATE SCHEMA public'))
    finally:
        await reset_engine.dispose()


def _run_migrations() -> None:
    # env.py drives its own event loop, so this must not run inside one
    alembic_cfg = Config(str(ALEMBIC_INI))
    command.upgrade(alembic_cfg, 'head')


async def _truncate_all_tables() -> None:
    engine = create_async_engine(settings.DATABASE_URL_ASYNC)
    try:
        async with engine.begin() as conn:
            quoted = ', '.join(f'"{table}"' for table in _TABLES)
            await conn.execute(text(f'TRUNCATE {quoted} RESTART IDENTITY CASCADE'))
    finally:
        await engine.dispose()


@pytest.fixture(scope='function')
async def clean_database() -> AsyncGenerator[None, None]:
    await _truncate_all_tables()
    yield

    # Engines and pools are bound to this test's event loop
    from src.platform.database.asyncpg_setting import close_asyncpg_pool
    from src.platform.database.orm_db_setting import dispose_engine

    with contextlib.suppress(Exception):
        await dispose_engine()
    with contextlib.suppress(Exception):
        await close_asyncpg_pool()
