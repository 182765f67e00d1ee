"""CORS middleware for browser-based bot builders calling the API directly."""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Sequence

from aiohttp import web

ALLOWED_METHODS = "GET, POST, DELETE, OPTIONS"
ALLOWED_HEADERS = "Authorization, Content-Type, X-Request-ID, X-Correlation-ID"

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def _allowed_origin(origin: str | None, allowed: Sequence[str]) -> str | None:
    if "*" in allowed:
        return "*"
    if origin and origin in allowed:
        return origin
    return None


def create_cors_middleware(allowed_origins: Sequence[str]) -> Callable[..., Awaitable[web.StreamResponse]]:
    """Build a middleware answering preflights and adding CORS headers.

    Args:
        allowed_origins: Origins allowed to call the API; "*" allows any
    """
    allowed = tuple(allowed_origins) or ("*",)

    @web.middleware
    async def cors_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
        origin = _allowed_origin(request.headers.get("Origin"), allowed)

        if request.method == "OPTIONS" and "Access-Control-Request-Method" in request.headers:
            response: web.StreamResponse = web.Response(status=204)
        else:
            try:
                response = await handler(request)
            except web.HTTPException as exc:
                if origin is not None:
                    exc.headers["Access-Control-Allow-Origin"] = origin
                raise

        if origin is not None:
            response.headers["Access-Control-Allow-Origin"] = origin
            response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
            response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
            if origin != "*":
                response.headers["Vary"] = "Origin"
        return response

    return cors_middleware
