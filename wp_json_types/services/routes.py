"""
Route discovery: turn the API's route table into generation work items.

Templated routes (regex groups or ``<param>`` placeholders) describe single
items rather than resources, and search/directory routes produce schemas
the generator cannot handle, so all of those are dropped.
"""

import logging
from collections.abc import Iterable, Mapping

from wp_json_types.core.config import get_settings
from wp_json_types.core.models import Collection, RouteLevel

logger = logging.getLogger(__name__)


def is_generatable(uri: str, excluded_terms: Iterable[str] | None = None) -> bool:
    """Return True if declarations should be generated for ``uri``.

    Rejects routes ending in ``)`` (optional regex segments), routes with a
    ``<`` (path parameters), and routes containing any excluded term
    (``Settings.excluded_route_terms`` when not given).
    """
    if excluded_terms is None:
        excluded_terms = get_settings().excluded_route_terms
    if uri.endswith(")") or "<" in uri:
        return False
    return not any(term in uri for term in excluded_terms)


def post_args(route: RouteLevel) -> dict | None:
    """Return the creation-input ``args`` of a route's second endpoint, if any."""
    if len(route.endpoints) < 2:
        return None
    args = route.endpoints[1].get("args")
    # PHP serializes an empty args map as []
    return args if isinstance(args, dict) and args else None


def build_collections(
    routes: Mapping[str, RouteLevel],
    excluded_terms: Iterable[str] | None = None,
) -> list[Collection]:
    """Build the list of collections to generate declarations for.

    The first entry of the table is the namespace index route itself and is
    always skipped. An empty result is not an error.

    Args:
        routes: Route table as returned by ``WpApiClient.get_routes()``.
        excluded_terms: Substrings that disqualify a route (defaults to settings).

    Returns:
        One ``Collection`` per surviving route, in table order.
    """
    if excluded_terms is None:
        excluded_terms = get_settings().excluded_route_terms
    excluded_terms = tuple(excluded_terms)
    collections = [
        Collection(uri=uri, post_schema=post_args(route))
        for uri, route in list(routes.items())[1:]
        if is_generatable(uri, excluded_terms)
    ]
    logger.info("Discovered %d of %d routes", len(collections), len(routes))
    return collections
