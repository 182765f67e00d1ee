"""JSON response helpers shared by the route modules."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional, TypeVar

from aiohttp import web
from pydantic import BaseModel, ValidationError

from calendarpicker.core.health_tracker import HealthTracker
from calendarpicker.domain.picker_service import OperationResult

logger = logging.getLogger(__name__)

INVALID_REQUEST = "InvalidRequest"

ModelT = TypeVar("ModelT", bound=BaseModel)


class RequestValidationError(Exception):
    """Query or body parameters failed validation."""


def result_response(
    result: OperationResult, health_tracker: Optional[HealthTracker] = None
) -> web.Response:
    """Map an OperationResult to a JSON response (200 on success, 400 on failure)."""
    if health_tracker is not None:
        health_tracker.record_request(result.ok)
    return web.json_response(result.to_dict(), status=200 if result.ok else 400)


def invalid_request_response(
    message: str, health_tracker: Optional[HealthTracker] = None
) -> web.Response:
    if health_tracker is not None:
        health_tracker.record_request(False)
    return web.json_response(
        {"success": False, "kind": INVALID_REQUEST, "error": message}, status=400
    )


def parse_query(request: web.Request, model: type[ModelT]) -> ModelT:
    """Validate the request query string against a model.

    Raises:
        RequestValidationError: If validation fails
    """
    try:
        return model.model_validate(dict(request.query))
    except ValidationError as e:
        raise RequestValidationError(_describe(e)) from e


async def parse_body(request: web.Request, model: type[ModelT]) -> ModelT:
    """Validate the JSON request body against a model.

    Raises:
        RequestValidationError: If the body is not JSON or validation fails
    """
    try:
        data: Any = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise RequestValidationError("request body must be valid JSON") from e
    if not isinstance(data, dict):
        raise RequestValidationError("request body must be a JSON object")
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise RequestValidationError(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    parts = []
    for item in error.errors():
        location = ".".join(str(p) for p in item.get("loc", ())) or "request"
        parts.append(f"{location}: {item.get('msg', 'invalid value')}")
    return "Invalid request parameters: " + "; ".join(parts)
