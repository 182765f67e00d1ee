"""Service index and health routes (public, no token required)."""

from __future__ import annotations

import logging

from aiohttp import web

from calendarpicker import __version__
from calendarpicker.core.health_tracker import HealthTracker, get_system_diagnostics
from calendarpicker.core.time_utils import now_iso
from calendarpicker.domain.selection_store import SelectionStore

logger = logging.getLogger(__name__)

SERVICE_NAME = "Calendar API"

ENDPOINTS = {
    "GET /api/calendar": "Month grid as JSON",
    "GET /api/calendar/keyboard": "Telegram inline keyboard structure",
    "GET /api/calendar/protalk": "Flattened ##INLINE## keyboard for Protalk",
    "GET /api/navigate": "Previous/next month",
    "POST /api/select": "Save a selected date",
    "GET /api/selection/{userId}": "Get a user's selection",
    "DELETE /api/selection/{userId}": "Clear a user's selection",
    "POST /api/webhook/protalk": "Handle a keyboard callback",
    "GET /health": "Health check",
}

EXAMPLES = {
    "calendar": "/api/calendar?year=2024&month=11&mode=single",
    "keyboard": "/api/calendar/keyboard?year=2024&month=11&userId=123&mode=single",
}


def register_info_routes(
    app: web.Application,
    store: SelectionStore,
    health_tracker: HealthTracker,
) -> None:
    """Register index and health routes.

    Args:
        app: aiohttp web application
        store: Selection store, for the active selection count
        health_tracker: Health tracking instance
    """

    async def index(_request: web.Request) -> web.Response:
        return web.json_response(
            {
                "service": SERVICE_NAME,
                "version": __version__,
                "endpoints": ENDPOINTS,
                "examples": EXAMPLES,
            }
        )

    async def health_check(_request: web.Request) -> web.Response:
        """Health check endpoint for monitoring system status."""
        status = health_tracker.get_health_status(store.active_count())
        diag = get_system_diagnostics()
        return web.json_response(
            {
                "status": status.status,
                "service": SERVICE_NAME,
                "version": __version__,
                "uptime": status.uptime_seconds,
                "timestamp": now_iso(),
                "pid": status.pid,
                "requests": {
                    "served": status.requests_served,
                    "failed": status.failed_requests,
                },
                "active_selections": status.active_selections,
                "system_diagnostics": {
                    "platform": diag.platform,
                    "python_version": diag.python_version,
                },
            }
        )

    app.router.add_get("/", index)
    app.router.add_get("/health", health_check)
