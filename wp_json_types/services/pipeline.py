"""
End-to-end generation run.

    discover routes -> fetch schemas -> emit per-context files
      -> bundle into index.d.ts -> hoist common types into common.ts

Each run starts from an empty output directory; there is no resumption from
partial output. Route discovery and filesystem setup failures are fatal,
anything that goes wrong for a single resource is logged and skipped.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path

import httpx

from wp_json_types.core.config import Settings, get_settings
from wp_json_types.core.exceptions import SchemaFetchError
from wp_json_types.core.models import Collection, EmitResult, ErrorLogEntry
from wp_json_types.services.api_client import WpApiClient
from wp_json_types.services.bundler import bundle_output, module_declaration
from wp_json_types.services.common_types import extract_common_types
from wp_json_types.services.emitter import DeclarationEmitter
from wp_json_types.services.generator import BaseDeclarationGenerator, create_generator
from wp_json_types.services.output import COMMON_FILE, INDEX_FILE, reset_output_dir
from wp_json_types.services.routes import build_collections

logger = logging.getLogger(__name__)


@dataclass
class PipelineReport:
    """Summary of one run."""

    routes: int = 0
    written: list[str] = field(default_factory=list)
    degenerate: list[ErrorLogEntry] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    common_types: list[str] = field(default_factory=list)


async def process_collection(
    client: WpApiClient,
    emitter: DeclarationEmitter,
    collection: Collection,
) -> EmitResult:
    """Fetch one route's schema and emit its declarations, never raising."""
    try:
        schema = await client.get_schema(collection.uri)
        return await emitter.emit(collection, schema)
    except SchemaFetchError as exc:
        logger.warning("Skipping %s: %s", collection.uri, exc.detail)
    except Exception:
        logger.exception("Failed to process %s", collection.uri)
    return EmitResult(uri=collection.uri, failed=["all"])


async def run_pipeline(
    settings: Settings | None = None,
    generator: BaseDeclarationGenerator | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> PipelineReport:
    """Generate ``index.d.ts`` and ``common.ts`` for every resource route.

    Args:
        settings: Configuration (falls back to ``get_settings()``).
        generator: Declaration generator (defaults to the configured CLI).
        transport: Optional httpx transport for the API client.

    Returns:
        A ``PipelineReport`` describing what was produced.

    Raises:
        RouteDiscoveryError: If the route table cannot be fetched.
        CommonTypeCollisionError: If two hoisted types clash.
    """
    settings = settings or get_settings()
    generator = generator or create_generator(settings.generator_cmd)
    output_dir = await reset_output_dir(settings.output_dir)
    emitter = DeclarationEmitter(generator, settings)
    report = PipelineReport()

    async with WpApiClient(settings, transport=transport) as client:
        routes = await client.get_routes()
        collections = build_collections(routes, settings.excluded_route_terms)
        report.routes = len(collections)

        async with asyncio.TaskGroup() as tg:
            tasks = [
                tg.create_task(process_collection(client, emitter, collection))
                for collection in collections
            ]

    for task in tasks:
        result = task.result()
        report.written.extend(result.written)
        report.degenerate.extend(result.degenerate)
        report.failed.extend(f"{result.uri}:{ctx}" for ctx in result.failed)

    bundle = await bundle_output(output_dir, settings.module_name, settings.sort_files)
    # A collision must abort while the per-context files are still on disk
    new_bundle, common, types = extract_common_types(
        bundle, module_declaration(settings.module_name)
    )
    await reset_output_dir(output_dir, with_contexts=False)

    logger.debug("writing %s", INDEX_FILE)
    await asyncio.to_thread((output_dir / INDEX_FILE).write_text, new_bundle, "utf-8")
    await asyncio.to_thread((output_dir / COMMON_FILE).write_text, common, "utf-8")
    report.common_types = [t.name for t in types]

    logger.info(
        "Wrote %d declaration files for %d routes (%d empty, %d failed) to %s",
        len(report.written),
        report.routes,
        len(report.degenerate),
        len(report.failed),
        Path(output_dir).resolve(),
    )
    return report
