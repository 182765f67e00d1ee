"""API token authentication middleware."""

from __future__ import annotations

import hmac
import json
import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Optional

from aiohttp import web

logger = logging.getLogger(__name__)

PUBLIC_PATHS: frozenset[str] = frozenset({"/", "/health"})

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


def get_bearer_token(request: web.Request) -> Optional[str]:
    """Return the token from an 'Authorization: Bearer <token>' header, if present."""
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header[7:].strip() or None


async def extract_token(request: web.Request) -> Optional[str]:
    """Find the API token in the header, the query string, or a JSON body.

    The body is only inspected for JSON requests; aiohttp caches the body so
    handlers can still read it afterwards.
    """
    token = get_bearer_token(request) or request.query.get("token")
    if token:
        return token

    if request.can_read_body and request.content_type == "application/json":
        try:
            body = await request.json()
        except (json.JSONDecodeError, UnicodeDecodeError):
            return None
        if isinstance(body, dict) and isinstance(body.get("token"), str):
            return body["token"]
    return None


def create_auth_middleware(
    api_token: Optional[str],
    public_paths: Iterable[str] = PUBLIC_PATHS,
) -> Callable[..., Awaitable[web.StreamResponse]]:
    """Build a middleware rejecting requests without the configured token.

    Args:
        api_token: Required token; None or empty disables authentication
        public_paths: Paths served without a token
    """
    public = frozenset(public_paths)

    @web.middleware
    async def auth_middleware(request: web.Request, handler: Handler) -> web.StreamResponse:
        if not api_token or request.path in public or request.method == "OPTIONS":
            return await handler(request)

        provided = await extract_token(request)
        if provided is None or not hmac.compare_digest(provided.encode(), api_token.encode()):
            logger.warning("Rejected unauthenticated request to %s", request.path)
            return web.json_response(
                {
                    "success": False,
                    "kind": "Unauthorized",
                    "error": "Unauthorized. Invalid or missing API token.",
                },
                status=401,
            )

        return await handler(request)

    return auth_middleware
