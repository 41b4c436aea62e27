"""Asset discovery for bundled templates and static files.

Locates the page templates and frontend assets shipped inside the mdv
package.
"""

from importlib.resources import files
from pathlib import Path


def get_static_dir() -> Path:
    """Return path to bundled static assets.

    Returns:
        Path to the directory containing scripts and stylesheets.

    Raises:
        FileNotFoundError: If static assets are not bundled.
    """
    return _bundled_dir("static")


def get_templates_dir() -> Path:
    """Return path to bundled page templates.

    Raises:
        FileNotFoundError: If templates are not bundled.
    """
    return _bundled_dir("templates")


def _bundled_dir(name: str) -> Path:
    resource = files("mdv").joinpath(name)
    if not resource.is_dir():
        msg = f"Bundled {name} directory not found. Reinstall mdv with 'pip install -e .'."
        raise FileNotFoundError(msg)
    return Path(str(resource))
