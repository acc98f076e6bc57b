"""
Production FastAPI Application

LINE booking API backed by Kvrocks.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.responses import RedirectResponse

from src.platform.app_factory import create_app
from src.platform.config.di import container
from src.platform.config.wire_modules import WIRE_MODULES
from src.platform.logging.loguru_io import Logger
from src.platform.observability.tracing import TracingConfig
from src.platform.state.kvrocks_client import kvrocks_client


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Manage application lifespan: startup and shutdown."""
    Logger.base.info('🚀 [LINE Booking] Starting up...')

    tracing = TracingConfig(service_name='line-booking')
    tracing.setup()
    tracing.instrument_redis()
    Logger.base.info('📊 [LINE Booking] OpenTelemetry tracing configured')

    container.wire(modules=WIRE_MODULES)
    Logger.base.info('🔌 [LINE Booking] Dependency injection wired')

    # Initialize Kvrocks connection pool (fail-fast)
    await kvrocks_client.initialize()
    Logger.base.info(
        f'📡 [LINE Booking] Kvrocks initialized (cluster={kvrocks_client.is_cluster_mode})'
    )

    Logger.base.info('✅ [LINE Booking] Ready to serve requests')
    yield

    Logger.base.info('🛑 [LINE Booking] Shutting down...')

    await kvrocks_client.disconnect()
    Logger.base.info('📡 [LINE Booking] Kvrocks disconnected')

    tracing.shutdown()
    container.unwire()

    Logger.base.info('👋 [LINE Booking] Shutdown complete')


app = create_app(lifespan=lifespan)


@app.get('/')
async def root() -> RedirectResponse:
    """Root endpoint - redirect to docs."""
    return RedirectResponse(url='/docs')
