"""Output directory layout: reset the root and create per-context directories."""

import asyncio
import logging
import shutil
from pathlib import Path

from wp_json_types.core.exceptions import OutputDirError
from wp_json_types.core.models import OutputContext

logger = logging.getLogger(__name__)

INDEX_FILE = "index.d.ts"
COMMON_FILE = "common.ts"


def context_dir(output_dir: str | Path, context: OutputContext | str) -> Path:
    return Path(output_dir) / str(context)


def declaration_path(output_dir: str | Path, context: OutputContext | str, slug: str) -> Path:
    """Path of the declaration file for one (context, resource) pair."""
    return context_dir(output_dir, context) / f"{context}.{slug}.d.ts"


def ensure_deletable(output_dir: str | Path) -> Path:
    """Resolve ``output_dir`` and reject the working directory, its parents and home.

    Raises:
        OutputDirError: If resetting ``output_dir`` would delete one of those.
    """
    path = Path(output_dir).expanduser().resolve()
    cwd = Path.cwd().resolve()
    protected = {cwd, *cwd.parents, Path.home().resolve()}
    if path in protected:
        raise OutputDirError(str(path))
    return path


def _reset(output_dir: Path, with_contexts: bool) -> None:
    if output_dir.exists():
        shutil.rmtree(output_dir)
    output_dir.mkdir(parents=True)
    if with_contexts:
        for context in OutputContext:
            context_dir(output_dir, context).mkdir()


async def reset_output_dir(output_dir: str | Path, with_contexts: bool = True) -> Path:
    """Delete ``output_dir`` and recreate it empty.

    Args:
        output_dir: Output root.
        with_contexts: Also create the ``view``/``edit``/``embed``/``create`` directories.

    Returns:
        The output root as a ``Path``.

    Raises:
        OutputDirError: If ``output_dir`` is the working directory, a parent of it, or home.
    """
    path = Path(output_dir)
    ensure_deletable(path)
    await asyncio.to_thread(_reset, path, with_contexts)
    logger.debug("Reset output directory %s", path)
    return path
