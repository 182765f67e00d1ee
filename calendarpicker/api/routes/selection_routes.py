"""Selection and callback webhook routes."""

from __future__ import annotations

import logging

from aiohttp import web

from calendarpicker.api.models import SelectRequest, WebhookRequest
from calendarpicker.api.responses import (
    RequestValidationError,
    invalid_request_response,
    parse_body,
    result_response,
)
from calendarpicker.core.health_tracker import HealthTracker
from calendarpicker.domain.picker_service import CalendarPickerService

logger = logging.getLogger(__name__)


def register_selection_routes(
    app: web.Application,
    service: CalendarPickerService,
    health_tracker: HealthTracker,
) -> None:
    """Register selection state routes.

    Args:
        app: aiohttp web application
        service: Calendar picker service
        health_tracker: Health tracking instance
    """

    async def post_select(request: web.Request) -> web.Response:
        """Apply a date selection for a user."""
        try:
            body = await parse_body(request, SelectRequest)
        except RequestValidationError as e:
            return invalid_request_response(str(e), health_tracker)

        result = service.select(body.user_id, body.year, body.month, body.day, body.mode)
        return result_response(result, health_tracker)

    async def get_selection(request: web.Request) -> web.Response:
        """Report a user's current selection."""
        result = service.get_selection(request.match_info["user_id"])
        return result_response(result, health_tracker)

    async def delete_selection(request: web.Request) -> web.Response:
        """Clear a user's selection."""
        result = service.clear_selection(request.match_info["user_id"])
        return result_response(result, health_tracker)

    async def post_webhook(request: web.Request) -> web.Response:
        """Handle a keyboard button callback from the bot platform."""
        try:
            body = await parse_body(request, WebhookRequest)
        except RequestValidationError as e:
            return invalid_request_response(str(e), health_tracker)

        logger.debug("Webhook callback %r for user %s", body.callback_data, body.user_id)
        result = service.handle_callback(body.callback_data, body.user_id)
        return result_response(result, health_tracker)

    app.router.add_post("/api/select", post_select)
    app.router.add_get("/api/selection/{user_id}", get_selection)
    app.router.add_delete("/api/selection/{user_id}", delete_selection)
    app.router.add_post("/api/webhook/protalk", post_webhook)
    logger.debug("Registered selection routes")
