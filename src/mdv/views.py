"""HTML page handlers.

Serves the UI shell pages and the rendered Markdown view. Every page,
including error pages, is produced from the template mapping loaded at
startup.
"""

import asyncio
import logging
from http import HTTPStatus
from typing import Any

from aiohttp import web

from mdv.app_keys import renderer_key, root_dir_key, templates_key
from mdv.core.pathguard import clean_display_path, contains_dot_dot
from mdv.core.renderer import RenderError

logger = logging.getLogger(__name__)


def create_view_routes() -> list[web.RouteDef]:
    return [
        web.get("/", page_handler("index.html")),
        web.get("/welcome", page_handler("welcome.html")),
        web.get("/files", page_handler("treeview.html")),
        web.get("/files/", page_handler("treeview.html")),
        web.get("/view/{path:.*}", view_markdown),
    ]


def render_page(
    request: web.Request,
    name: str,
    *,
    status: int = 200,
    **context: Any,
) -> web.Response:
    """Render a template from the startup template mapping.

    Args:
        request: Current request
        name: Template file name (e.g., "index.html")
        status: HTTP status of the response
        **context: Template variables

    Returns:
        HTML response

    Raises:
        web.HTTPInternalServerError: If the template is missing
    """
    template = request.app[templates_key].get(name)
    if template is None:
        logger.error(f"Template not found: {name}")
        raise web.HTTPInternalServerError()
    return web.Response(
        text=template.render(**context),
        status=status,
        content_type="text/html",
    )


def render_error(request: web.Request, status: int) -> web.Response:
    """Render the error page for an HTTP status.

    Falls back to a plain-text 500 if the error template itself is missing.
    """
    template = request.app[templates_key].get("error.html")
    if template is None:
        logger.error("Template not found: error.html")
        return web.Response(
            text="An internal error occurred and the error page template was not found.",
            status=500,
        )
    try:
        status_text = HTTPStatus(status).phrase
    except ValueError:
        status_text = "Error"
    return web.Response(
        text=template.render(status_code=status, status_text=status_text),
        status=status,
        content_type="text/html",
    )


def page_handler(name: str):
    """Create a handler that renders a static UI shell template."""

    async def handler(request: web.Request) -> web.Response:
        return render_page(request, name)

    handler.__name__ = f"page_{name.removesuffix('.html')}"
    return handler


async def view_markdown(request: web.Request) -> web.Response:
    """Render a Markdown file under the served root as an HTML page."""
    raw_path = request.match_info["path"]
    if contains_dot_dot(raw_path):
        raise web.HTTPForbidden()

    display_path = clean_display_path(raw_path)
    source_path = request.app[root_dir_key] / display_path
    renderer = request.app[renderer_key]

    try:
        document = await asyncio.to_thread(renderer.render_file, source_path)
    except (OSError, ValueError):
        # ValueError: embedded null byte in the decoded path.
        raise web.HTTPNotFound() from None
    except RenderError:
        logger.exception(f"Failed to render {display_path}")
        raise web.HTTPInternalServerError() from None

    return render_page(
        request,
        "markdown.html",
        title=document.title,
        content=document.html,
    )
