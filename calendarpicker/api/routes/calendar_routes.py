"""Calendar grid, keyboard and navigation routes."""

from __future__ import annotations

import logging

from aiohttp import web

from calendarpicker.api.models import CalendarQueryParams, NavigateQueryParams
from calendarpicker.api.responses import (
    RequestValidationError,
    invalid_request_response,
    parse_query,
    result_response,
)
from calendarpicker.core.health_tracker import HealthTracker
from calendarpicker.domain.picker_service import CalendarPickerService

logger = logging.getLogger(__name__)


def register_calendar_routes(
    app: web.Application,
    service: CalendarPickerService,
    health_tracker: HealthTracker,
) -> None:
    """Register calendar rendering routes.

    Args:
        app: aiohttp web application
        service: Calendar picker service
        health_tracker: Health tracking instance
    """

    async def get_calendar(request: web.Request) -> web.Response:
        """Month grid as JSON."""
        try:
            params = parse_query(request, CalendarQueryParams)
        except RequestValidationError as e:
            return invalid_request_response(str(e), health_tracker)

        result = service.calendar(params.year, params.month, params.mode)
        return result_response(result, health_tracker)

    async def get_keyboard(request: web.Request) -> web.Response:
        """Telegram inline keyboard for a month."""
        try:
            params = parse_query(request, CalendarQueryParams)
        except RequestValidationError as e:
            return invalid_request_response(str(e), health_tracker)

        result = service.keyboard(params.year, params.month, params.user_id, params.mode)
        return result_response(result, health_tracker)

    async def get_protalk_keyboard(request: web.Request) -> web.Response:
        """Flattened ##INLINE## keyboard for a month."""
        try:
            params = parse_query(request, CalendarQueryParams)
        except RequestValidationError as e:
            return invalid_request_response(str(e), health_tracker)

        result = service.flat_keyboard(params.year, params.month, params.user_id, params.mode)
        return result_response(result, health_tracker)

    async def get_navigate(request: web.Request) -> web.Response:
        """Previous or next month relative to the given one."""
        try:
            params = parse_query(request, NavigateQueryParams)
        except RequestValidationError as e:
            return invalid_request_response(str(e), health_tracker)

        result = service.navigate(params.year, params.month, params.direction)
        return result_response(result, health_tracker)

    app.router.add_get("/api/calendar", get_calendar)
    app.router.add_get("/api/calendar/keyboard", get_keyboard)
    app.router.add_get("/api/calendar/protalk", get_protalk_keyboard)
    app.router.add_get("/api/navigate", get_navigate)
    logger.debug("Registered calendar routes")
