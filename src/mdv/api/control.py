"""Server control API endpoint."""

import logging

from aiohttp import web

from mdv.app_keys import shutdown_key

logger = logging.getLogger(__name__)


def create_control_routes() -> list[web.RouteDef]:
    return [web.post("/api/shutdown", shutdown)]


async def shutdown(request: web.Request) -> web.Response:
    """Acknowledge the request and start a graceful shutdown."""
    logger.info("Shutdown requested via API")
    request.app[shutdown_key].trigger("shutdown API")
    return web.Response(text="Shutdown signal received. Server is shutting down.\n")
