"""
Marketplace Service - Main Application
Handles users, ticket listings, bookings and payments.
"""

from contextlib import asynccontextmanager

import anyio
from fastapi import FastAPI

from src.platform.app_factory import create_app
from src.platform.config.core_setting import settings
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.database.asyncpg_setting import close_all_asyncpg_pools, get_asyncpg_pool
from src.platform.database.orm_db_setting import dispose_engine, get_engine
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.service.marketplace.app.command.reconcile_payments_use_case import (
    ReconcilePaymentsUseCase,
)


async def run_payment_reconciliation(interval_seconds: int) -> None:
    """Periodic sweep confirming bookings that have a payment but are still pending"""
    use_case = ReconcilePaymentsUseCase(
        payment_query_repo=container.payment_query_repo(),
        booking_command_repo=container.booking_command_repo(),
    )
    while True:
        await anyio.sleep(interval_seconds)
        try:
            confirmed = await use_case.reconcile()
        except Exception as e:
            # Keep sweeping; the next run retries
            Logger.base.error(f'🧾 [RECONCILE] Sweep failed: {type(e).__name__}: {e}')
            continue
        if confirmed:
            Logger.base.warning(f'🧾 [RECONCILE] Confirmed {confirmed} pending bookings')


@asynccontextmanager
async def lifespan(_app: FastAPI):
    """Manage application lifespan: startup and shutdown"""
    Logger.base.info('🚀 [Marketplace Service] Starting up...')

    # Setup OpenTelemetry tracing
    tracing = TracingConfig(service_name='marketplace-service')
    tracing.setup()
    tracing.instrument_sqlalchemy(engine=get_engine())
    Logger.base.info('📊 [Marketplace Service] OpenTelemetry tracing configured')

    # Wire dependency injection
    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [Marketplace Service] Dependency injection wired')

    # Fail fast when PostgreSQL is unreachable
    await get_asyncpg_pool()
    Logger.base.info('🗄️ [Marketplace Service] asyncpg pool ready')

    async with anyio.create_task_group() as task_group:
        if settings.RECONCILE_INTERVAL_SECONDS > 0:
            task_group.start_soon(run_payment_reconciliation, settings.RECONCILE_INTERVAL_SECONDS)
            Logger.base.info(
                f'🧾 [Marketplace Service] Payment reconciliation every '
                f'{settings.RECONCILE_INTERVAL_SECONDS}s'
            )

        Logger.base.info('✅ [Marketplace Service] Startup complete')
        yield

        # Shutdown
        Logger.base.info('🛑 [Marketplace Service] Shutting down...')
        task_group.cancel_scope.cancel()

    await close_all_asyncpg_pools()
    await dispose_engine()
    Logger.base.info('🗄️ [Marketplace Service] Database connections closed')

    tracing.shutdown()
    container.unwire()
    Logger.base.info('👋 [Marketplace Service] Shutdown complete')


app = create_app(lifespan=lifespan)
