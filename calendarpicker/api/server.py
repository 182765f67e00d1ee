"""calendarpicker.api.server - aiohttp server for the calendar picker API.

This module wires the picker service into an aiohttp application:
- middleware for correlation ids, CORS, JSON errors and API-token auth
- routes for month grids, keyboards, selections and platform callbacks
- a runner that serves until SIGINT/SIGTERM
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import os
import signal
from typing import Optional

from aiohttp import web

from calendarpicker.api.middleware import (
    correlation_id_middleware,
    create_auth_middleware,
    create_cors_middleware,
    error_middleware,
)
from calendarpicker.api.routes import (
    register_calendar_routes,
    register_info_routes,
    register_selection_routes,
)
from calendarpicker.core.config_manager import PickerConfig
from calendarpicker.core.dependencies import AppDependencies, DependencyContainer

logger = logging.getLogger(__name__)

DEPENDENCIES_KEY = web.AppKey("dependencies", AppDependencies)


def create_app(
    config: PickerConfig,
    dependencies: Optional[AppDependencies] = None,
) -> web.Application:
    """Create the aiohttp application with middleware and routes registered.

    Args:
        config: Application configuration
        dependencies: Optional pre-built dependencies (tests inject their own)

    Returns:
        Configured web.Application
    """
    deps = dependencies or DependencyContainer.build_dependencies(config)

    app = web.Application(
        middlewares=[
            correlation_id_middleware,
            create_cors_middleware(config.cors_origins),
            error_middleware,
            create_auth_middleware(config.api_token),
        ]
    )
    app[DEPENDENCIES_KEY] = deps

    register_info_routes(app, deps.store, deps.health_tracker)
    register_calendar_routes(app, deps.service, deps.health_tracker)
    register_selection_routes(app, deps.service, deps.health_tracker)

    async def _shutdown(_app: web.Application) -> None:
        logger.info("Application shutdown requested")

    app.on_shutdown.append(_shutdown)
    return app


async def _serve(config: PickerConfig, external_stop_event: asyncio.Event | None = None) -> None:
    """Run the server until signalled to stop.

    Args:
        config: Server configuration
        external_stop_event: Optional event to signal shutdown. If provided,
            signal handlers are not registered (caller owns signal handling).
    """
    stop_event = external_stop_event or asyncio.Event()

    if not config.api_token:
        logger.warning("No API token configured; /api routes are unauthenticated")

    logger.debug(
        "Creating web application. Config: %s",
        ", ".join(
            f"{k}={'<redacted>' if 'token' in k else v!r}" for k, v in vars(config).items()
        ),
    )
    app = create_app(config)

    runner = web.AppRunner(app)
    await runner.setup()

    site = web.TCPSite(runner, host=config.server_bind, port=config.server_port)
    try:
        await site.start()
    except OSError:
        logger.exception("Failed to start server on %s:%d", config.server_bind, config.server_port)
        await runner.cleanup()
        raise

    logger.info(
        "Calendar API started on %s:%d (pid %d)",
        config.server_bind,
        config.server_port,
        os.getpid(),
    )

    if external_stop_event is None:
        loop = asyncio.get_running_loop()

        def _on_signal() -> None:
            logger.info("Shutdown signal received")
            stop_event.set()

        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.add_signal_handler(sig, _on_signal)
    else:
        logger.debug("Using external stop event - skipping signal handler registration")

    await stop_event.wait()
    logger.info("Stop event received, shutting down")

    await runner.cleanup()
    logger.info("Server shutdown complete")


def start_server(config: PickerConfig) -> None:
    """Start the asyncio event loop and HTTP server.

    Blocks the calling thread until SIGINT/SIGTERM is received.

    Args:
        config: Server configuration
    """
    from calendarpicker.core.picker_logging import configure_picker_logging

    configure_picker_logging(debug_mode=config.debug_logging, log_level=config.log_level)
    logger.debug("Logging configuration applied: debug_mode=%s", config.debug_logging)

    try:
        asyncio.run(_serve(config))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
