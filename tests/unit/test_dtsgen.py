"""Unit tests for the dtsgenerator subprocess provider."""

import json
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from wp_json_types.core.exceptions import GenerationError
from wp_json_types.services.generator import BaseDeclarationGenerator, create_generator
from wp_json_types.services.generator.dtsgen import DtsgenGenerator

SCHEMA = {"id": "http://view.context/WpPost", "title": "Wp_post", "properties": {}}


def _process(stdout: bytes = b"", stderr: bytes = b"", returncode: int = 0):
    proc = MagicMock()
    proc.communicate = AsyncMock(return_value=(stdout, stderr))
    proc.returncode = returncode
    return proc


class TestDtsgenInit:
    def test_command_from_settings(self):
        with patch(
            "wp_json_types.services.generator.dtsgen.get_settings",
            return_value=SimpleNamespace(generator_cmd="npx dtsgen"),
        ):
            generator = DtsgenGenerator()

        assert generator._command == ["npx", "dtsgen"]

    def test_explicit_command(self):
        assert DtsgenGenerator("node_modules/.bin/dtsgen --foo")._command == [
            "node_modules/.bin/dtsgen",
            "--foo",
        ]

    def test_factory(self):
        generator = create_generator("dtsgen")

        assert isinstance(generator, BaseDeclarationGenerator)


class TestDtsgenGenerate:
    """Running the CLI and reading declarations from stdout."""

    async def test_returns_stdout_and_passes_schema_file(self):
        seen = {}

        async def fake_exec(*args, **kwargs):
            seen["args"] = args
            with open(args[-1]) as f:
                seen["schema"] = json.load(f)
            return _process(stdout=b"declare namespace A {\n}\n")

        with patch(
            "wp_json_types.services.generator.dtsgen.asyncio.create_subprocess_exec",
            side_effect=fake_exec,
        ):
            out = await DtsgenGenerator("dtsgen").generate(SCHEMA)

        assert out == "declare namespace A {\n}\n"
        assert seen["args"][0] == "dtsgen"
        assert seen["args"][-1].endswith("schema.json")
        assert seen["schema"] == SCHEMA

    async def test_nonzero_exit_raises(self):
        with patch(
            "wp_json_types.services.generator.dtsgen.asyncio.create_subprocess_exec",
            AsyncMock(return_value=_process(stderr=b"bad schema", returncode=1)),
        ):
            with pytest.raises(GenerationError, match="bad schema"):
                await DtsgenGenerator("dtsgen").generate(SCHEMA)

    async def test_missing_executable_raises(self):
        with patch(
            "wp_json_types.services.generator.dtsgen.asyncio.create_subprocess_exec",
            AsyncMock(side_effect=FileNotFoundError("dtsgen")),
        ):
            with pytest.raises(GenerationError, match="Could not launch"):
                await DtsgenGenerator("dtsgen").generate(SCHEMA)

    async def test_temporary_schema_dir_is_removed(self):
        seen = {}

        async def fake_exec(*args, **kwargs):
            seen["dir"] = Path(args[-1]).parent
            assert seen["dir"].is_dir()
            return _process(stdout=b"declare namespace A {\n}\n")

        with patch(
            "wp_json_types.services.generator.dtsgen.asyncio.create_subprocess_exec",
            side_effect=fake_exec,
        ):
            await DtsgenGenerator("dtsgen").generate(SCHEMA)

        assert not seen["dir"].exists()

    async def test_temporary_schema_dir_is_removed_on_failure(self):
        seen = {}

        async def fake_exec(*args, **kwargs):
            seen["dir"] = Path(args[-1]).parent
            return _process(stderr=b"bad", returncode=2)

        with patch(
            "wp_json_types.services.generator.dtsgen.asyncio.create_subprocess_exec",
            side_effect=fake_exec,
        ):
            with pytest.raises(GenerationError):
                await DtsgenGenerator("dtsgen").generate(SCHEMA)

        assert not seen["dir"].exists()
