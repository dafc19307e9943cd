"""Skip-or-rebuild decision.

A build is satisfied when the cached fingerprint equals the current one
and the public directory still holds its completion marker. Anything else
triggers a rebuild.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from demo_build.types import Decision, DecisionAction, RebuildReason

if TYPE_CHECKING:
    from demo_build.types import BuildPaths

logger = logging.getLogger(__name__)


def artifact_exists(paths: BuildPaths) -> bool:
    """Check whether the public directory holds a completed build.

    Args:
        paths: Resolved build paths.

    Returns:
        True if the completion marker file is present.
    """
    return paths.marker_path.is_file()


def decide(
    current: str,
    cached: str | None,
    artifact_present: bool,
    force: bool = False,
) -> Decision:
    """Decide whether the demo must be rebuilt.

    Args:
        current: Fingerprint of the submodule as checked out now.
        cached: Fingerprint of the last successful build, or None.
        artifact_present: Whether the completion marker exists.
        force: Rebuild regardless of the cache state.

    Returns:
        Decision describing the action and its reason.
    """
    if force:
        action, reason = DecisionAction.REBUILD, RebuildReason.FORCED
    elif current == cached and artifact_present:
        action, reason = DecisionAction.SKIP, None
    elif current != cached:
        action, reason = DecisionAction.REBUILD, RebuildReason.FINGERPRINT_CHANGED
    else:
        action, reason = DecisionAction.REBUILD, RebuildReason.ARTIFACT_MISSING

    decision = Decision(
        action=action,
        current=current,
        cached=cached,
        artifact_exists=artifact_present,
        reason=reason,
    )
    logger.debug(
        "Decision: %s (reason=%s, current=%s, cached=%s, artifact=%s)",
        action.value,
        reason.value if reason else None,
        current,
        cached,
        artifact_present,
    )
    return decision


__all__ = ["artifact_exists", "decide"]
