"""
wp-json-types exception hierarchy.

All tool-specific exceptions inherit from WpJsonTypesError so the CLI can
report domain failures without a traceback.
"""

from datetime import UTC, datetime


class WpJsonTypesError(Exception):
    """Base exception for all wp-json-types errors."""

    def __init__(
        self,
        detail: str = "An unexpected error occurred",
        code: str = "WP_JSON_TYPES_ERROR",
    ) -> None:
        self.detail = detail
        self.code = code
        self.timestamp = datetime.now(UTC).isoformat()
        super().__init__(detail)


class RouteDiscoveryError(WpJsonTypesError):
    """Raised when the API root cannot be fetched or has no route table."""

    def __init__(self, detail: str = "Route discovery failed") -> None:
        super().__init__(detail=detail, code="ROUTE_DISCOVERY_ERROR")


class SchemaFetchError(WpJsonTypesError):
    """Raised when a route's metadata request fails or carries no schema."""

    def __init__(self, uri: str, detail: str = "Schema fetch failed") -> None:
        self.uri = uri
        super().__init__(detail=f"{detail}: {uri}", code="SCHEMA_FETCH_ERROR")


class GenerationError(WpJsonTypesError):
    """Raised when the external declaration generator fails."""

    def __init__(self, detail: str = "Declaration generation failed") -> None:
        super().__init__(detail=detail, code="GENERATION_ERROR")


class CommonTypeCollisionError(WpJsonTypesError):
    """Raised when two hoisted common types share a name but not a union."""

    def __init__(self, name: str, first: str, second: str) -> None:
        self.name = name
        super().__init__(
            detail=f"Common type {name} declared as both {first} and {second}",
            code="COMMON_TYPE_COLLISION",
        )


class OutputDirError(WpJsonTypesError):
    """Raised when the output directory is one that must never be deleted."""

    def __init__(self, path: str, detail: str = "Refusing to delete output directory") -> None:
        self.path = path
        super().__init__(detail=f"{detail}: {path}", code="OUTPUT_DIR_ERROR")
