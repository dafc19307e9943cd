"""Build service module.

This module provides the high-level build API:
- build_if_changed(): Main entry point - rebuild only when the submodule moved
- evaluate(): The same decision without side effects
- rebuild(): Clean, run the build script, stage its output

Steps run strictly in order and each step's success gates the next. The
fingerprint cache is written only after the output is staged, so a failed
build never records a stale success.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from demo_build.builds.decision import artifact_exists, decide
from demo_build.builds.fingerprint import (
    cached_fingerprint,
    current_fingerprint,
    ensure_submodule,
    save_fingerprint,
    short_fingerprint,
)
from demo_build.builds.runner import run_build_script
from demo_build.builds.staging import clean_build_output, stage_artifacts
from demo_build.errors import CacheWriteError
from demo_build.types import BuildOutcome, RebuildReason

if TYPE_CHECKING:
    from demo_build.types import BuildPaths, Decision, StagedTree

logger = logging.getLogger(__name__)


def evaluate(paths: BuildPaths, force: bool = False) -> Decision:
    """Compute the skip/rebuild decision for the current checkout.

    Args:
        paths: Resolved build paths.
        force: Rebuild regardless of the cache state.

    Returns:
        Decision for the current state.

    Raises:
        SubmoduleUnavailableError: If the submodule is not initialized.
        FingerprintQueryError: If the submodule commit cannot be read.
    """
    ensure_submodule(paths)

    current = current_fingerprint(paths)
    cached = cached_fingerprint(paths)
    present = artifact_exists(paths)

    return decide(current, cached, present, force=force)


def rebuild(paths: BuildPaths) -> tuple[StagedTree, float]:
    """Run a clean build and stage its output.

    Args:
        paths: Resolved build paths.

    Returns:
        Tuple of (staged tree summary, build script duration in seconds).

    Raises:
        StagingError: If cleaning or staging fails.
        ExternalBuildError: If the build script fails.
    """
    clean_build_output(paths)

    logger.info("Running gsworkspace offline build script...")
    result = run_build_script(paths)

    staged = stage_artifacts(paths)
    return staged, result.duration_seconds


def build_if_changed(paths: BuildPaths, force: bool = False) -> BuildOutcome:
    """Build the demo if the submodule changed or the output is missing.

    Args:
        paths: Resolved build paths.
        force: Rebuild even if the cache is current.

    Returns:
        BuildOutcome describing what happened.

    Raises:
        SubmoduleUnavailableError: If the submodule is not initialized.
        FingerprintQueryError: If the submodule commit cannot be read.
        ExternalBuildError: If the build script fails.
        StagingError: If the output cannot be staged.
    """
    decision = evaluate(paths, force=force)

    logger.info("Current submodule: %s", short_fingerprint(decision.current))
    logger.info("Cached hash:       %s", short_fingerprint(decision.cached))
    logger.info("Demo exists:       %s", decision.artifact_exists)

    if not decision.should_rebuild:
        logger.info("Demo is up to date, skipping build.")
        return BuildOutcome(decision=decision)

    if decision.reason is RebuildReason.FORCED:
        logger.info("Forced rebuild requested, rebuilding...")
    elif decision.reason is RebuildReason.FINGERPRINT_CHANGED:
        logger.info("Submodule has changed, rebuilding...")
    else:
        logger.info("Demo files missing, rebuilding...")

    staged, duration = rebuild(paths)

    cache_updated = True
    try:
        save_fingerprint(paths, decision.current)
    except CacheWriteError as e:
        cache_updated = False
        logger.warning("%s; the next run will rebuild again", e)

    return BuildOutcome(
        decision=decision,
        rebuilt=True,
        cache_updated=cache_updated,
        staged=staged,
        duration_seconds=duration,
    )


__all__ = ["build_if_changed", "evaluate", "rebuild"]
