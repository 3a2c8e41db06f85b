"""
Bundle per-context declaration files into one ambient module.

Every generated file is wrapped in one fixed opening line and closes with
a brace plus a trailing newline; those lines are trimmed and the bodies are
concatenated. View declarations sit directly inside the module, the other
contexts each get their own namespace block.
"""

import asyncio
import logging
from pathlib import Path

from wp_json_types.core.models import NAMESPACED_CONTEXTS, OutputContext
from wp_json_types.services.output import context_dir

logger = logging.getLogger(__name__)


def module_declaration(module_name: str) -> str:
    return f"declare module '{module_name}' {{"


def trim_data(data: str) -> str:
    """Drop the first line and the last two lines of generated output."""
    lines = data.split("\n")
    return "\n".join(lines[1 : len(lines) - 2])


async def trim_file(path: Path) -> str:
    data = await asyncio.to_thread(path.read_text, "utf-8")
    return "\n" + trim_data(data) + "\n"


async def _read_context(output_dir: Path, context: OutputContext, sort_files: bool) -> str:
    directory = context_dir(output_dir, context)
    files = [p for p in directory.iterdir() if p.is_file()]
    if sort_files:
        files.sort(key=lambda p: p.name)
    parts = [await trim_file(path) for path in files]
    return "".join(parts)


async def bundle_output(
    output_dir: str | Path,
    module_name: str,
    sort_files: bool = True,
) -> str:
    """Concatenate all per-context files into the ``index.d.ts`` body.

    Args:
        output_dir: Output root containing the four context directories.
        module_name: Name for the ``declare module`` block.
        sort_files: Read files in name order instead of directory order.

    Returns:
        The bundled module source.
    """
    output_dir = Path(output_dir)
    final = module_declaration(module_name)
    final += await _read_context(output_dir, OutputContext.view, sort_files)

    for context in NAMESPACED_CONTEXTS:
        final += f"\nexport namespace {context.namespace} {{\n"
        final += await _read_context(output_dir, context, sort_files)
        final += "\n}\n"

    final += "\n}\n"
    logger.debug("Bundled %s into %d characters", output_dir, len(final))
    return final
