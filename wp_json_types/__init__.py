"""Generate TypeScript declarations from a WordPress REST API's schemas."""

__version__ = "0.1.0"
