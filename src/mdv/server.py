"""aiohttp server for mdv.

Application factory, route registration and the serve loop with graceful
shutdown.
"""

import asyncio
import logging
import signal
from pathlib import Path

from aiohttp import web

from mdv.api.control import create_control_routes
from mdv.api.listing import create_listing_routes
from mdv.app_keys import (
    renderer_key,
    root_dir_key,
    shutdown_key,
    templates_key,
)
from mdv.assets import get_static_dir, get_templates_dir
from mdv.browser import open_browser
from mdv.config import Config
from mdv.core.renderer import MarkdownRenderer
from mdv.core.shutdown import ShutdownSignal
from mdv.core.templates import load_templates
from mdv.middleware import error_pages, path_guard
from mdv.views import create_view_routes

logger = logging.getLogger(__name__)

SHUTDOWN_TIMEOUT = 5.0
KEEPALIVE_TIMEOUT = 60.0


def create_app(
    root_dir: Path,
    *,
    shutdown: ShutdownSignal | None = None,
    templates_dir: Path | None = None,
    static_dir: Path | None = None,
) -> web.Application:
    """Create aiohttp application.

    Templates are compiled here, once; the resulting mapping is read-only.

    Args:
        root_dir: Absolute served root
        shutdown: Shutdown notification triggered by the shutdown API
        templates_dir: Page template directory (default: bundled templates)
        static_dir: Static asset directory (default: bundled assets)

    Returns:
        Configured aiohttp application

    Raises:
        FileNotFoundError: If the template or static directory is missing
        jinja2.TemplateError: If a template fails to compile
    """
    # path_guard is outermost so rejected requests never reach a handler.
    app = web.Application(middlewares=[path_guard, error_pages])

    static_dir = static_dir or get_static_dir()

    app[root_dir_key] = root_dir
    app[renderer_key] = MarkdownRenderer()
    app[templates_key] = load_templates(templates_dir or get_templates_dir())
    app[shutdown_key] = shutdown or ShutdownSignal()

    app.router.add_routes(create_listing_routes())
    app.router.add_routes(create_control_routes())

    app.router.add_routes(create_view_routes())
    app.router.add_static("/static", static_dir)

    return app


async def serve(
    app: web.Application,
    host: str,
    port: int,
    *,
    open_in_browser: bool = False,
) -> str:
    """Serve the application until shutdown is requested.

    Shutdown is triggered by the shutdown API or SIGINT/SIGTERM, whichever
    comes first. In-flight requests get SHUTDOWN_TIMEOUT seconds to finish.

    Args:
        app: Application created by create_app()
        host: Interface to bind
        port: Port to bind
        open_in_browser: Open the UI in the default browser once listening

    Returns:
        Reason the server stopped

    Raises:
        OSError: If the listener cannot bind
    """
    shutdown = app[shutdown_key]
    runner = web.AppRunner(
        app,
        shutdown_timeout=SHUTDOWN_TIMEOUT,
        keepalive_timeout=KEEPALIVE_TIMEOUT,
    )
    await runner.setup()
    try:
        site = web.TCPSite(runner, host, port)
        await site.start()

        url = f"http://{host}:{port}"
        logger.info(f"Server listening on {url}")
        logger.info(f"Serving Markdown from {app[root_dir_key]}")

        _install_signal_handlers(shutdown)
        if open_in_browser:
            try:
                await asyncio.to_thread(open_browser, url)
            except ValueError as exc:
                logger.warning(f"Failed to open browser: {exc}")

        reason = await shutdown.wait()
        logger.info(f"Shutting down ({reason})...")
    finally:
        _remove_signal_handlers()
        await runner.cleanup()

    logger.info("Server exited gracefully")
    return reason


def run_server(config: Config) -> None:
    """Run the server.

    Args:
        config: Application configuration

    Raises:
        ValueError: If the target directory is invalid
        OSError: If the listener cannot bind
    """
    root_dir = config.resolve_root()
    app = create_app(root_dir)
    asyncio.run(
        serve(
            app,
            config.server.host,
            config.server.port,
            open_in_browser=config.server.open,
        )
    )


def _install_signal_handlers(shutdown: ShutdownSignal) -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, shutdown.trigger, f"signal {sig.name}")
        except (NotImplementedError, RuntimeError):
            # Not supported on Windows event loops or outside the main thread.
            logger.debug(f"Cannot install handler for {sig.name}")


def _remove_signal_handlers() -> None:
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.remove_signal_handler(sig)
        except (NotImplementedError, RuntimeError):
            pass
