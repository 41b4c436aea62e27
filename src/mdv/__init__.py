"""mdv - a local Markdown viewer with a built-in directory tree navigator."""

__version__ = "0.1.0"
