"""HTML page templates.

Templates are compiled once when the application is created and exposed
as a read-only mapping; nothing reloads them afterwards.
"""

from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

import jinja2


def load_templates(directory: Path) -> Mapping[str, jinja2.Template]:
    """Compile every *.html template in a directory.

    Args:
        directory: Directory containing the page templates

    Returns:
        Read-only mapping of template file name to compiled template

    Raises:
        FileNotFoundError: If the directory does not exist
        jinja2.TemplateError: If a template fails to compile
    """
    if not directory.is_dir():
        raise FileNotFoundError(f"Template directory not found: {directory}")

    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(directory),
        autoescape=jinja2.select_autoescape(["html"]),
        undefined=jinja2.StrictUndefined,
    )
    names = env.list_templates(filter_func=lambda name: name.endswith(".html"))
    return MappingProxyType({name: env.get_template(name) for name in names})
