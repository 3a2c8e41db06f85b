"""Shared pytest fixtures for the wp-json-types test suite.

Provides isolated settings rooted in ``tmp_path``, a fake declaration
generator that mimics dtsgenerator's output shape, and canned REST API
payloads.
"""

from unittest.mock import AsyncMock

import pytest

from wp_json_types.core.config import Settings
from wp_json_types.services.generator.base import BaseDeclarationGenerator

# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------


@pytest.fixture
def settings(tmp_path):
    """Settings writing into a temporary directory."""
    return Settings(
        base_url="http://wp.test/wp-json",
        namespace="/wp/v2",
        output_dir=str(tmp_path / "dist"),
        error_log_path=str(tmp_path / "error.log"),
        generator_cmd="dtsgen",
        _env_file=None,
    )


# ---------------------------------------------------------------------------
# Generator Fixtures
# ---------------------------------------------------------------------------

_TS_TYPES = {"string": "string", "integer": "number", "number": "number", "boolean": "boolean"}


def render_declarations(schema: dict) -> str:
    """Render a schema roughly the way dtsgenerator does.

    Output is wrapped in one ``declare namespace`` line and closed with a
    brace and a trailing newline. Schemas without properties render as
    ``{}``.
    """
    name = schema["id"].rsplit("/", 1)[-1]
    props = schema.get("properties") or {}
    if not props:
        return f"declare namespace Components {{\n    export interface {name} {{}}\n}}\n"

    members = []
    for prop, prop_schema in props.items():
        if "enum" in prop_schema:
            ts_type = " | ".join(f'"{value}"' for value in prop_schema["enum"])
        else:
            ts_type = _TS_TYPES.get(prop_schema.get("type"), "any")
        members.append(f"        {prop}?: {ts_type};")
    body = "\n".join(members)
    return (
        "declare namespace Components {\n"
        f"    export interface {name} {{\n{body}\n    }}\n"
        "}\n"
    )


@pytest.fixture
def fake_generator():
    """AsyncMock generator returning dtsgenerator-shaped declarations."""
    generator = AsyncMock(spec=BaseDeclarationGenerator)
    generator.generate.side_effect = render_declarations
    return generator


# ---------------------------------------------------------------------------
# REST API payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def post_schema():
    """OPTIONS schema for /wp/v2/posts."""
    return {
        "$schema": "http://json-schema.org/draft-04/schema#",
        "title": "wp_post",
        "type": "object",
        "properties": {
            "id": {"type": "integer", "context": ["view", "edit", "embed"]},
            "status": {
                "type": "string",
                "enum": ["publish", "draft"],
                "context": ["view", "edit"],
            },
            "sticky": {"type": "bool", "context": ["view", "edit"]},
        },
    }


@pytest.fixture
def route_table():
    """GET /wp/v2 body: the namespace index plus a mix of routes."""
    return {
        "namespace": "wp/v2",
        "routes": {
            "/wp/v2": {"namespace": "wp/v2", "methods": ["GET"], "endpoints": [{"args": {}}]},
            "/wp/v2/posts": {
                "namespace": "wp/v2",
                "methods": ["GET", "POST"],
                "endpoints": [
                    {"methods": ["GET"], "args": {"context": {"type": "string"}}},
                    {
                        "methods": ["POST"],
                        "args": {
                            "title": {"type": "string", "required": False},
                            "status": {
                                "type": "string",
                                "enum": ["publish", "draft"],
                                "required": True,
                            },
                        },
                    },
                ],
            },
            "/wp/v2/posts/(?P<id>[\\d]+)": {"namespace": "wp/v2", "endpoints": []},
            "/wp/v2/search": {"namespace": "wp/v2", "endpoints": [{}]},
            "/wp/v2/block-directory/search": {"namespace": "wp/v2", "endpoints": [{}]},
        },
    }
