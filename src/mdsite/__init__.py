"""MdSite: a small per-host Markdown content server."""

__version__ = "0.1.0"
