"""Request-independent building blocks: path validation, listing and rendering."""
