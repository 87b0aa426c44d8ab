"""FastAPI application initialization."""

from contextlib import asynccontextmanager

import logfire
import sentry_sdk
from fastapi import FastAPI
from sentry_sdk.integrations.fastapi import FastApiIntegration

from src.api import health, webhook
from src.config import get_settings
from src.logging_config import setup_logfire
from src.middleware.correlation_id import CorrelationIDMiddleware

APP_TITLE = "WhatsApp FAQ Bot"
APP_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Settings are validated here, before the first request, so a missing
    token stops the process at startup.
    """
    settings = get_settings()

    setup_logfire(app, settings)

    # Initialize Sentry if DSN is provided
    if settings.sentry_dsn:
        sentry_sdk.init(
            dsn=settings.sentry_dsn,
            environment=settings.env,
            traces_sample_rate=settings.sentry_traces_sample_rate,
            integrations=[FastApiIntegration()],
        )

    logfire.info(
        "Server is listening on port {port}",
        port=settings.port,
        environment=settings.env,
        graph_api_version=settings.graph_api_version,
    )

    yield

    logfire.info("Application shutdown complete")


app = FastAPI(
    title=APP_TITLE,
    description="Menu-driven FAQ auto-responder for the WhatsApp Cloud API",
    version=APP_VERSION,
    lifespan=lifespan,
)

# Correlation ID middleware (must be first for request tracing)
app.add_middleware(CorrelationIDMiddleware)

# Register routers
app.include_router(health.router, tags=["health"])
app.include_router(webhook.router, prefix="/webhook", tags=["webhook"])


@app.get("/")
def root():
    """Root endpoint."""
    return {"message": f"{APP_TITLE} API", "version": APP_VERSION}


def run() -> None:
    """Validate configuration, then serve the app with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "src.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.env == "local",
    )


if __name__ == "__main__":
    run()
