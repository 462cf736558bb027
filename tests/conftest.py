"""Shared test fixtures and configuration for kts-runner tests."""

import os
import stat
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from kts_runner.core.config import RunnerConfig, ToolchainConfig

PROBE_GUARD = 'if [ "$1" = "-version" ]; then exit 0; fi\n'


@pytest.fixture
def make_tool(tmp_path: Path) -> Callable[..., Path]:
    """Create fake toolchain executables as small POSIX shell scripts.

    The generated script exits 0 silently for the ``-version`` probe and runs
    ``body`` otherwise, with ``$2`` pointing at the submitted script file.
    """

    def _make(body: str, name: str = "fake-kotlinc", directory: Path | None = None) -> Path:
        directory = directory or tmp_path / "bin"
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / name
        path.write_text("#!/bin/sh\n" + PROBE_GUARD + body + "\n", encoding="utf-8")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture
def toolchain_for() -> Callable[[Path], ToolchainConfig]:
    """Build a toolchain whose only candidate is the given fake tool."""

    def _toolchain(tool: Path) -> ToolchainConfig:
        return ToolchainConfig(
            tool_name="kts-runner-tool-that-is-not-on-path",
            candidate_paths=[str(tool)],
        )

    return _toolchain


@pytest.fixture
def runner_config(tmp_path: Path) -> RunnerConfig:
    """Runner configuration writing scripts into a private temp directory."""
    scripts = tmp_path / "scripts"
    scripts.mkdir()
    return RunnerConfig(temp_dir=str(scripts))


@pytest.fixture
def empty_dir(tmp_path: Path) -> Path:
    """Directory with nothing in it, usable as a PATH that finds nothing."""
    path = tmp_path / "empty"
    path.mkdir()
    return path


@pytest.fixture
def clean_environ() -> Generator[dict[str, str], None, None]:
    """Snapshot of os.environ restored after the test."""
    snapshot = dict(os.environ)
    yield snapshot
    os.environ.clear()
    os.environ.update(snapshot)
