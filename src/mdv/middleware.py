"""Request middlewares.

`path_guard` runs first on every request and refuses malformed or
traversing targets before routing; `error_pages` turns every error status
into the rendered error page.
"""

import logging
from collections.abc import Awaitable, Callable

from aiohttp import web

from mdv.core import pathguard
from mdv.views import render_error

logger = logging.getLogger(__name__)

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]


@web.middleware
async def path_guard(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Validate the raw request target before any handler runs."""
    try:
        pathguard.validate(request.raw_path)
    except pathguard.PathRejectedError as exc:
        return render_error(request, exc.status)
    return await handler(request)


@web.middleware
async def error_pages(request: web.Request, handler: Handler) -> web.StreamResponse:
    """Render error statuses through the error template."""
    try:
        return await handler(request)
    except web.HTTPException as exc:
        if exc.status < 400:
            raise
        response = render_error(request, exc.status)
        allow = exc.headers.get("Allow")
        if allow is not None:
            response.headers["Allow"] = allow
        return response
    except Exception:
        logger.exception(f"Unhandled error while serving {request.method} {request.path}")
        return render_error(request, 500)
