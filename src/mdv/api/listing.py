"""Directory listing API endpoint.

Returns the Markdown files and subdirectories of a directory under the
served root for the tree navigator.
"""

import asyncio

from aiohttp import web

from mdv.app_keys import root_dir_key
from mdv.core.listing import list_directory
from mdv.core.pathguard import clean_display_path, contains_dot_dot


def create_listing_routes() -> list[web.RouteDef]:
    return [web.get("/api/list", get_listing)]


async def get_listing(request: web.Request) -> web.Response:
    path = request.query.get("path", "")
    if contains_dot_dot(path):
        raise web.HTTPForbidden()

    display_path = clean_display_path(path)
    try:
        items = await asyncio.to_thread(
            list_directory, request.app[root_dir_key], display_path
        )
    except (OSError, ValueError):
        return web.json_response({"error": "Directory not found"}, status=404)

    return web.json_response([item.to_dict() for item in items])
