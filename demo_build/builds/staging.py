"""Staging of build output into the public directory.

This module handles:
- Clearing stale intermediate output before a build
- Replacing the public directory with a copy of the fresh output
- Summarizing the staged tree

The public directory is owned by this tool and may be cleared freely.
The intermediate output is copied, never moved.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import TYPE_CHECKING

from demo_build.errors import StagingError
from demo_build.types import StagedTree

if TYPE_CHECKING:
    from demo_build.types import BuildPaths

logger = logging.getLogger(__name__)


def summarize_tree(root: Path) -> StagedTree:
    """Count files and bytes under a directory.

    Args:
        root: Directory to walk.

    Returns:
        StagedTree summary (empty if root does not exist).
    """
    file_count = 0
    total_bytes = 0
    if not root.exists():
        return StagedTree(file_count=0, total_bytes=0)

    for path in root.rglob("*"):
        if path.is_file():
            file_count += 1
            total_bytes += path.stat().st_size

    return StagedTree(file_count=file_count, total_bytes=total_bytes)


def clean_build_output(paths: BuildPaths) -> None:
    """Remove the previous intermediate build output, if any.

    Args:
        paths: Resolved build paths.

    Raises:
        StagingError: If the directory cannot be removed.
    """
    out_dir = paths.build_output_dir
    if not out_dir.exists():
        return

    logger.info("Removing previous build output: %s", out_dir)
    try:
        shutil.rmtree(out_dir)
    except OSError as e:
        raise StagingError(
            f"Failed to remove previous build output {out_dir}: {e}"
        ) from e


def stage_artifacts(paths: BuildPaths) -> StagedTree:
    """Replace the public directory with a copy of the build output.

    Args:
        paths: Resolved build paths.

    Returns:
        Summary of the staged tree.

    Raises:
        StagingError: If the build output is missing or copying fails.
    """
    source = paths.build_output_dir
    dest = paths.public_dir

    if not source.is_dir():
        raise StagingError(f"Build output directory does not exist: {source}")

    logger.info("Copying %s to %s", source, dest)
    try:
        if dest.exists():
            shutil.rmtree(dest)
        dest.mkdir(parents=True, exist_ok=True)
        shutil.copytree(source, dest, dirs_exist_ok=True)
    except (OSError, shutil.Error) as e:
        # Never leave a partial tree behind
        shutil.rmtree(dest, ignore_errors=True)
        raise StagingError(f"Failed to stage build output to {dest}: {e}") from e

    staged = summarize_tree(dest)
    logger.info(
        "Staged %d file(s), %d bytes into %s",
        staged.file_count,
        staged.total_bytes,
        dest,
    )
    return staged


__all__ = ["clean_build_output", "stage_artifacts", "summarize_tree"]
