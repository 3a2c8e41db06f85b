"""Unit tests for output directory handling."""

import pytest

from wp_json_types.core.exceptions import OutputDirError
from wp_json_types.services.output import ensure_deletable, reset_output_dir


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run inside ``tmp_path/work`` with HOME pointing at ``tmp_path/home``."""
    work = tmp_path / "work"
    home = tmp_path / "home"
    work.mkdir()
    home.mkdir()
    monkeypatch.chdir(work)
    monkeypatch.setenv("HOME", str(home))
    (work / "keep.txt").write_text("keep")
    return work


@pytest.mark.parametrize("target", [".", "..", "./"])
async def test_refuses_working_directory_and_parents(workdir, target):
    with pytest.raises(OutputDirError):
        await reset_output_dir(target)

    assert (workdir / "keep.txt").read_text() == "keep"


async def test_refuses_home_directory(workdir, tmp_path):
    with pytest.raises(OutputDirError):
        await reset_output_dir("~")

    assert (tmp_path / "home").is_dir()


async def test_resets_subdirectory(workdir):
    stale = workdir / "dist" / "stale.txt"
    stale.parent.mkdir()
    stale.write_text("old")

    path = await reset_output_dir("dist")

    assert not stale.exists()
    assert sorted(p.name for p in path.iterdir()) == ["create", "edit", "embed", "view"]
    assert (workdir / "keep.txt").exists()


def test_ensure_deletable_returns_resolved_path(workdir):
    assert ensure_deletable("dist") == (workdir / "dist").resolve()
