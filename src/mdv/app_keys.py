"""Application keys for type-safe app configuration access."""

from collections.abc import Mapping
from pathlib import Path

import jinja2
from aiohttp import web

from mdv.core.renderer import MarkdownRenderer
from mdv.core.shutdown import ShutdownSignal

root_dir_key = web.AppKey("root_dir", Path)
renderer_key = web.AppKey("renderer", MarkdownRenderer)
templates_key = web.AppKey("templates", Mapping[str, jinja2.Template])
shutdown_key = web.AppKey("shutdown", ShutdownSignal)
