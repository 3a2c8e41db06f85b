"""
dtsgenerator CLI provider.

Runs the ``dtsgen`` command (from the ``dtsgenerator`` npm package) as a
subprocess. Each schema is written to a temporary file and the declarations
are read back from stdout, so generations for different schemas can run
concurrently.
"""

import asyncio
import json
import logging
import shlex
import shutil
import tempfile
from pathlib import Path
from typing import Any

from wp_json_types.core.config import get_settings
from wp_json_types.core.exceptions import GenerationError
from wp_json_types.services.generator.base import BaseDeclarationGenerator

logger = logging.getLogger(__name__)


class DtsgenGenerator(BaseDeclarationGenerator):
    """Generate declarations with the external ``dtsgen`` command."""

    def __init__(self, command: str | None = None) -> None:
        """Initialize the generator.

        Args:
            command: Command line to run, e.g. ``"npx dtsgen"`` (falls back to settings).
        """
        self._command = shlex.split(command or get_settings().generator_cmd)
        if not self._command:
            raise ValueError("Generator command must not be empty")

    async def generate(self, schema: dict[str, Any]) -> str:
        tmp = Path(await asyncio.to_thread(tempfile.mkdtemp, prefix="wp-json-types-"))
        try:
            schema_path = tmp / "schema.json"
            await asyncio.to_thread(schema_path.write_text, json.dumps(schema), "utf-8")
            return await self._run(str(schema_path), schema.get("id", ""))
        finally:
            await asyncio.to_thread(shutil.rmtree, tmp, True)

    async def _run(self, schema_path: str, schema_id: str) -> str:
        try:
            proc = await asyncio.create_subprocess_exec(
                *self._command,
                schema_path,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise GenerationError(f"Could not launch {self._command[0]}: {exc}") from exc

        stdout, stderr = await proc.communicate()
        if proc.returncode != 0:
            logger.debug("dtsgen stderr for %s: %s", schema_id, stderr.decode(errors="replace"))
            raise GenerationError(
                f"{self._command[0]} exited with {proc.returncode} for {schema_id}: "
                f"{stderr.decode(errors='replace').strip()[:200]}"
            )
        return stdout.decode("utf-8")
