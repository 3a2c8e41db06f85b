"""
Declaration generation and file emission for a single collection.

For every REST context the resource schema is projected, wrapped with a
deterministic ``id``/``title`` and handed to the generator; the creation
schema (if the route has one) gets the same treatment once more. All of a
collection's generations run concurrently and a failure in one never
cancels the others.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

from wp_json_types.core.config import Settings, get_settings
from wp_json_types.core.models import (
    Collection,
    EmitResult,
    ErrorLogEntry,
    OutputContext,
    RestContext,
)
from wp_json_types.core.utils import capitalize, resource_slug, resource_type_name
from wp_json_types.services.generator.base import BaseDeclarationGenerator
from wp_json_types.services.output import declaration_path
from wp_json_types.services.projection import project_for_context, strip_required

logger = logging.getLogger(__name__)

DRAFT_04 = "http://json-schema.org/draft-04/schema#"


def is_degenerate(declarations: str) -> bool:
    """True if the generator collapsed (part of) the type to an empty object."""
    return "{}" in declarations


def make_optional_required(declarations: str) -> str:
    """Turn every optional member (``name?: T``) into a required one."""
    return declarations.replace("?: ", ": ")


def context_schema(schema: dict[str, Any], context: RestContext) -> dict[str, Any]:
    """Project ``schema`` onto ``context`` and wrap it for the generator."""
    title = schema["title"]
    projected = project_for_context(schema, context) or {}
    return {
        **projected,
        "id": f"http://{context}.context/{resource_type_name(title)}",
        "title": capitalize(title),
    }


def creation_schema(title: str, post_schema: dict[str, Any]) -> dict[str, Any]:
    """Wrap a route's creation args as an object schema for the generator."""
    return {
        "$schema": DRAFT_04,
        "type": "object",
        "id": f"http://{OutputContext.create}.context/{resource_type_name(title)}",
        "title": capitalize(title),
        "properties": strip_required(post_schema),
    }


def _append_line(path: Path, line: str) -> None:
    with open(path, "a", encoding="utf-8") as f:
        f.write(line + "\n")


class DeclarationEmitter:
    """Writes per-context declaration files for collections.

    Args:
        generator: The schema-to-declaration generator.
        settings: Configuration (falls back to ``get_settings()``).
    """

    def __init__(
        self,
        generator: BaseDeclarationGenerator,
        settings: Settings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._generator = generator
        self._output_dir = Path(settings.output_dir)
        self._error_log = Path(settings.error_log_path)

    async def emit(self, collection: Collection, schema: dict[str, Any]) -> EmitResult:
        """Generate and write every declaration file for one collection.

        Args:
            collection: The route and its optional creation schema.
            schema: The route's resource schema (must carry a ``title``).

        Returns:
            What was written, skipped as degenerate, or failed.
        """
        result = EmitResult(uri=collection.uri)
        title = schema["title"]

        async with asyncio.TaskGroup() as tg:
            for context in RestContext:
                tg.create_task(
                    self._guarded(
                        result,
                        OutputContext(context.value),
                        title,
                        context_schema(schema, context),
                    )
                )
            if collection.post_schema:
                tg.create_task(
                    self._guarded(
                        result,
                        OutputContext.create,
                        title,
                        creation_schema(title, collection.post_schema),
                    )
                )
        return result

    async def _guarded(
        self,
        result: EmitResult,
        context: OutputContext,
        title: str,
        wrapped: dict[str, Any],
    ) -> None:
        """Run one generation, logging failures instead of raising them."""
        try:
            await self._emit_one(result, context, title, wrapped)
        except Exception:
            logger.exception("Failed to generate %s declarations for %s", context, title)
            result.failed.append(str(context))

    async def _emit_one(
        self,
        result: EmitResult,
        context: OutputContext,
        title: str,
        wrapped: dict[str, Any],
    ) -> None:
        declarations = await self._generator.generate(wrapped)

        slug = resource_slug(title)
        if is_degenerate(declarations):
            entry = ErrorLogEntry(context=str(context), title=slug)
            logger.warning("Empty %s type for %s; skipping", context, slug)
            await self.record_degenerate(entry)
            result.degenerate.append(entry)
            return

        if context is not OutputContext.create:
            declarations = make_optional_required(declarations)

        path = declaration_path(self._output_dir, context, slug)
        logger.debug("writing %s", path.name)
        await asyncio.to_thread(path.write_text, declarations, "utf-8")
        result.written.append(str(path))

    async def record_degenerate(self, entry: ErrorLogEntry) -> None:
        """Append ``{context, title}`` as one JSON line to the error log."""
        await asyncio.to_thread(
            _append_line, self._error_log, json.dumps(entry.model_dump())
        )
