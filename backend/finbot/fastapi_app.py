"""
FastAPI Application Factory.
Creates and configures the FastAPI application with the Slack gateway, metrics and DI.

Endpoints:
- POST /slack/commands, GET /metrics, GET /health
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from starlette.middleware.base import BaseHTTPMiddleware

from finbot import __version__
from finbot.adapters.base_bot_adapter import BaseBotAdapter
from finbot.adapters.slack.slack_routes import router as slack_router
from finbot.config.logging_config import (
    NO_CORRELATION_ID,
    correlation_id_var,
    setup_logging,
)
from finbot.config.settings import Config, validate_config
from finbot.presentation.api import health_router, metrics_router

logger = logging.getLogger(__name__)


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Middleware to extract and set correlation ID from request headers."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get("X-Correlation-ID", NO_CORRELATION_ID)

        # Set in contextvars (propagates to async tasks and logging)
        correlation_id_var.set(correlation_id)

        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id
        return response


@asynccontextmanager
async def _serve_configured_gateway(app: FastAPI):
    """
    Startup/shutdown when the app builds its own gateway from Config.

    - Startup: validate config, create DI container, dispatcher and Slack
      adapter, log in and publish commands. Any failure here aborts startup.
    - Shutdown: drain in-flight commands, close the container (disconnects Prisma)
    - SLACK_ENABLED=false: no gateway at all; /health reports it absent and
      /slack/commands answers that the bot is disabled
    """
    setup_logging(Config.LOG_LEVEL, Config.LOG_PATH)
    validate_config()

    if not Config.SLACK_ENABLED:
        logger.info("Finbot started with Slack disabled, no gateway is running.")
        yield
        return

    # Imported here so the app module stays importable without a generated Prisma client
    from finbot.adapters.slack.slack_adapter import SlackBotAdapter
    from finbot.application.routing import create_dispatcher
    from finbot.setup.ioc.container import create_container

    container = create_container()
    try:
        adapter = SlackBotAdapter(create_dispatcher(container))
        await adapter.start()
        app.state.slack_adapter = adapter
        logger.info("Finbot started. DI container initialized.")
        try:
            yield
        finally:
            await adapter.stop(grace=Config.SHUTDOWN_GRACE_SECONDS)
    finally:
        await container.close()
        logger.info("Finbot shutdown. DI container closed.")


def create_fastapi_app(adapter: BaseBotAdapter | None = None) -> FastAPI:
    """
    Application factory for creating FastAPI app.

    Args:
        adapter: pre-built gateway adapter (tests, embedding). When omitted the
            lifespan builds one from Config.

    Returns:
        FastAPI application instance
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if adapter is None:
            async with _serve_configured_gateway(app):
                yield
            return
        await adapter.start()
        try:
            yield
        finally:
            await adapter.stop(grace=Config.SHUTDOWN_GRACE_SECONDS)

    app = FastAPI(
        title="Finbot",
        description="Slash-command bridge to the Finapp finance services",
        version=__version__,
        lifespan=lifespan,
    )
    if adapter is not None:
        app.state.slack_adapter = adapter

    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(slack_router)  # POST /slack/commands

    return app


# Create the app instance
app = create_fastapi_app()
