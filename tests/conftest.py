"""Shared pytest fixtures for demo_build tests.

Every fixture builds an isolated project tree under tmp_path so tests
never touch a real checkout.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from demo_build.config import Settings, resolve_paths
from demo_build.types import BuildPaths

DEFAULT_OUTPUT = {"index.html": "<html>demo</html>", "assets/app.js": "console.log(1)"}


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    """Settings rooted at an empty temporary project."""
    return Settings(project_root=tmp_path)


@pytest.fixture
def paths(settings: Settings) -> BuildPaths:
    """Resolved paths for the temporary project."""
    return resolve_paths(settings)


@pytest.fixture
def submodule(paths: BuildPaths) -> BuildPaths:
    """Temporary project with an initialized submodule checkout."""
    paths.init_marker_dir.mkdir(parents=True)
    paths.tooling_dir.mkdir(parents=True)
    return paths


@pytest.fixture
def write_build_output() -> Callable[..., None]:
    """Return a helper that populates the intermediate build output."""

    def _write(paths: BuildPaths, files: dict[str, str] | None = None) -> None:
        for name, content in (files or DEFAULT_OUTPUT).items():
            target = paths.build_output_dir / name
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content)

    return _write
