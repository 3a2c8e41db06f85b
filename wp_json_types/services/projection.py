"""
Context projection for REST schemas.

A schema node that declares ``context: [...]`` is only visible in the listed
contexts. Projecting a schema onto one context removes every node whose list
excludes it, together with everything nested below that node.
"""

from typing import Any

from wp_json_types.core.models import RestContext


def project_for_context(node: dict[str, Any], context: RestContext | str) -> dict[str, Any] | None:
    """Return a copy of ``node`` containing only what is visible in ``context``.

    Nested objects are projected recursively; a nested object that is hidden
    in ``context``, or that becomes empty once projected, is removed from
    its parent. Lists and scalars are kept as-is.

    Args:
        node: A JSON-Schema-like object.
        context: The visibility context to project onto.

    Returns:
        The projected copy, or ``None`` if ``node`` itself is hidden.
    """
    declared = node.get("context")
    if isinstance(declared, list) and str(context) not in declared:
        return None

    projected: dict[str, Any] = {}
    for key, value in node.items():
        if isinstance(value, dict):
            child = project_for_context(value, context)
            # Drop children hidden in this context or emptied by projection
            if child is not None and (child or not value):
                projected[key] = child
        else:
            projected[key] = value
    return projected


def strip_required(node: Any) -> Any:
    """Return a copy of ``node`` without boolean ``required`` markers.

    Creation-input args mark fields with ``required: true/false``, which is
    not JSON Schema and is not modelled in the output. Array-valued
    ``required`` (real JSON Schema) is left alone. Applying this twice gives
    the same result as applying it once.
    """
    if isinstance(node, dict):
        return {
            key: strip_required(value)
            for key, value in node.items()
            if not (key == "required" and isinstance(value, bool))
        }
    if isinstance(node, list):
        return [strip_required(item) for item in node]
    return node
