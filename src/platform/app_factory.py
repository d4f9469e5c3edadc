"""
Shared FastAPI App Factory

Provides common app setup for production and test environments.
"""

from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from src.platform.config.core_setting import settings
from src.platform.exception.exception_handlers import register_exception_handlers
from src.platform.observability.tracing import TracingConfig
from src.service.marketplace.driving_adapter.http_controller.admin_controller import (
    router as admin_router,
)
from src.service.marketplace.driving_adapter.http_controller.booking_controller import (
    router as booking_router,
)
from src.service.marketplace.driving_adapter.http_controller.payment_controller import (
    router as payment_router,
)
from src.service.marketplace.driving_adapter.http_controller.ticket_controller import (
    router as ticket_router,
)
from src.service.marketplace.driving_adapter.http_controller.user_controller import (
    router as user_router,
)
from src.service.marketplace.driving_adapter.http_controller.vendor_controller import (
    router as vendor_router,
)


def create_app(
    *,
    lifespan: Callable[[FastAPI], AbstractAsyncContextManager[Any]],
    title_suffix: str = '',
    description: str = 'Ticket marketplace booking and payment backend',
    service_name: str = 'marketplace-service',
) -> FastAPI:
    """
    Create a configured FastAPI application.

    Args:
        lifespan: Async context manager for app lifespan (startup/shutdown)
        title_suffix: Optional suffix for app title (e.g., " (Test)")
        description: App description
        service_name: Service name for tracing

    Returns:
        Configured FastAPI application
    """
    app = FastAPI(
        title=f'{settings.PROJECT_NAME}{title_suffix}',
        description=description,
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # Auto-instrument FastAPI (must be done before mounting routes)
    tracing_config = TracingConfig(service_name=service_name)
    tracing_config.instrument_fastapi(app=app)

    app.add_middleware(
        CORSMiddleware,  # type: ignore
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=['*'],
        allow_headers=['*'],
    )

    register_exception_handlers(app)

    # Paths are part of the public contract, no /api prefix
    app.include_router(user_router, prefix='/user', tags=['user'])
    app.include_router(booking_router, tags=['booking'])
    app.include_router(payment_router, tags=['payment'])
    app.include_router(ticket_router, prefix='/tickets', tags=['ticket'])
    app.include_router(vendor_router, prefix='/vendor', tags=['vendor'])
    app.include_router(admin_router, prefix='/admin', tags=['admin'])

    _register_common_endpoints(app)

    return app


def _register_common_endpoints(app: FastAPI) -> None:
    """Register root, health and metrics endpoints."""

    @app.get('/', response_class=PlainTextResponse)
    async def root() -> str:
        return 'Hello from Server..'

    @app.get('/health')
    async def health_check() -> dict[str, str]:
        """Health check endpoint for container orchestration."""
        return {'status': 'healthy', 'service': 'Ticket Marketplace'}

    @app.get('/metrics')
    async def get_metrics() -> PlainTextResponse:
        """Prometheus metrics endpoint."""
        return PlainTextResponse(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
