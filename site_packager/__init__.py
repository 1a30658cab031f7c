"""Package a web project's build output into a single distributable ZIP archive."""

__version__ = "0.1.0"
