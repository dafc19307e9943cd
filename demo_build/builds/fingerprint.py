"""Submodule fingerprint reading and caching.

This module handles:
- Checking that the submodule working copy is initialized
- Reading the current submodule commit with `git rev-parse HEAD`
- Reading and writing the cached fingerprint of the last successful build

A missing or unreadable cache file is a normal first-run condition and is
reported as None, never as an error.
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from typing import TYPE_CHECKING

from demo_build.errors import (
    CacheWriteError,
    FingerprintQueryError,
    SubmoduleUnavailableError,
)

if TYPE_CHECKING:
    from demo_build.types import BuildPaths

logger = logging.getLogger(__name__)

# Number of characters shown when printing a fingerprint
SHORT_FINGERPRINT_LENGTH = 8


def short_fingerprint(
    fingerprint: str | None,
    length: int = SHORT_FINGERPRINT_LENGTH,
) -> str:
    """Abbreviate a fingerprint for display.

    Args:
        fingerprint: Full fingerprint, or None when absent.
        length: Number of leading characters to keep.

    Returns:
        Abbreviated fingerprint, or "(none)".
    """
    if not fingerprint:
        return "(none)"
    return fingerprint[:length]


def ensure_submodule(paths: BuildPaths) -> None:
    """Verify the submodule working copy is present and initialized.

    Args:
        paths: Resolved build paths.

    Raises:
        SubmoduleUnavailableError: If the init marker directory is missing.
    """
    if not paths.init_marker_dir.is_dir():
        raise SubmoduleUnavailableError(
            f"Submodule not found at {paths.submodule_dir}"
        )


def current_fingerprint(paths: BuildPaths) -> str:
    """Return the commit currently checked out in the submodule.

    Args:
        paths: Resolved build paths.

    Returns:
        Commit identifier with surrounding whitespace removed.

    Raises:
        SubmoduleUnavailableError: If the submodule directory does not exist.
        FingerprintQueryError: If git fails or prints nothing.
    """
    if not paths.submodule_dir.is_dir():
        raise SubmoduleUnavailableError(
            f"Submodule not found at {paths.submodule_dir}"
        )

    cmd = [paths.git_executable, "rev-parse", "HEAD"]
    logger.debug("Reading submodule commit in %s", paths.submodule_dir)

    try:
        result = subprocess.run(
            cmd,
            cwd=paths.submodule_dir,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise FingerprintQueryError(
            f"Failed to get submodule hash (exit code {e.returncode}): {stderr}"
        ) from e
    except OSError as e:
        raise FingerprintQueryError(f"Failed to run git: {e}") from e

    fingerprint = result.stdout.strip()
    if not fingerprint:
        raise FingerprintQueryError("git rev-parse HEAD returned no commit")

    return fingerprint


def cached_fingerprint(paths: BuildPaths) -> str | None:
    """Return the fingerprint of the last successful build.

    Args:
        paths: Resolved build paths.

    Returns:
        Cached fingerprint, or None if there is no usable cache record.
    """
    cache_file = paths.cache_file
    if not cache_file.exists():
        return None

    try:
        fingerprint = cache_file.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Ignoring unreadable fingerprint cache %s: %s", cache_file, e)
        return None

    return fingerprint or None


def save_fingerprint(paths: BuildPaths, fingerprint: str) -> None:
    """Persist the fingerprint of a successful build.

    The record is written to a temporary file and moved into place, so a
    reader never sees a partial value.

    Args:
        paths: Resolved build paths.
        fingerprint: Commit identifier that was just built.

    Raises:
        CacheWriteError: If the cache directory or file cannot be written.
    """
    cache_file = paths.cache_file
    try:
        cache_file.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{cache_file.name}.", dir=cache_file.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(fingerprint)
            os.replace(tmp_name, cache_file)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise
    except OSError as e:
        raise CacheWriteError(
            f"Failed to write fingerprint cache {cache_file}: {e}"
        ) from e

    logger.debug("Saved fingerprint %s to %s", fingerprint, cache_file)


__all__ = [
    "SHORT_FINGERPRINT_LENGTH",
    "cached_fingerprint",
    "current_fingerprint",
    "ensure_submodule",
    "save_fingerprint",
    "short_fingerprint",
]
