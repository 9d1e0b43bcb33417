"""FastAPI application factory and lifespan for the thermo telemetry backend."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .api.router import api_router
from .services.telemetry import TelemetryHub

# Configure logging for our app (uvicorn only configures its own loggers)
logging.basicConfig(
    level=logging.INFO,
    format="%(levelname)s:     %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: create the store schema, drain flushes on exit."""
    hub: TelemetryHub = app.state.telemetry

    logger.info("Store: %s", hub.store.engine.url)
    hub.store.init_schema()
    logger.info(
        "Telemetry ready (buffer=%d, flush every %dms, history limit %d)",
        hub.buffer.capacity, hub.writer.flush_interval_ms, hub.send_data_limit,
    )

    yield

    logger.info("Shutting down...")
    if hub.writer.pending:
        logger.info("Waiting for %d pending flush(es)", hub.writer.pending)
    await hub.writer.drain()
    logger.info(
        "Application shutdown complete (%d flushes, %d failed)",
        hub.writer.flush_count, hub.writer.failed_flushes,
    )


def create_app(hub: Optional[TelemetryHub] = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="Thermo Telemetry",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.telemetry = hub if hub is not None else TelemetryHub.from_settings(settings)

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(api_router)

    return app


# Application instance
app = create_app()

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=settings.host, port=settings.port)
