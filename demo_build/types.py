"""Shared type definitions for demo_build.

This module contains dataclasses and enums shared across subpackages
to avoid circular imports.
"""

from dataclasses import asdict, dataclass
from enum import Enum
from pathlib import Path
from typing import Any


class DecisionAction(str, Enum):
    """What a build run will do."""

    SKIP = "skip"
    REBUILD = "rebuild"


class RebuildReason(str, Enum):
    """Why a rebuild was chosen."""

    FINGERPRINT_CHANGED = "fingerprint_changed"
    ARTIFACT_MISSING = "artifact_missing"
    FORCED = "forced"


@dataclass(frozen=True)
class BuildPaths:
    """Filesystem locations and tools a build operates on.

    Attributes:
        submodule_dir: Working copy of the nested project.
        init_marker_dir: Directory that must exist for the submodule to count
            as initialized.
        tooling_dir: Working directory for the build script.
        build_output_dir: Intermediate output produced by the build script.
        build_script: Build script name, relative to tooling_dir.
        shell: Interpreter used to run the build script.
        git_executable: Git executable for fingerprint queries.
        public_dir: Publicly served directory the output is staged into.
        artifact_marker: File name inside public_dir marking a completed build.
        cache_file: File holding the fingerprint of the last successful build.
        build_timeout: Build script timeout in seconds (None = no timeout).
    """

    submodule_dir: Path
    init_marker_dir: Path
    tooling_dir: Path
    build_output_dir: Path
    build_script: str
    shell: str
    git_executable: str
    public_dir: Path
    artifact_marker: str
    cache_file: Path
    build_timeout: int | None = None

    @property
    def marker_path(self) -> Path:
        """Path of the completion marker inside the public directory."""
        return self.public_dir / self.artifact_marker


@dataclass(frozen=True)
class Decision:
    """Outcome of comparing the current and cached fingerprints."""

    action: DecisionAction
    current: str
    cached: str | None
    artifact_exists: bool
    reason: RebuildReason | None = None

    @property
    def should_rebuild(self) -> bool:
        return self.action is DecisionAction.REBUILD


@dataclass
class StagedTree:
    """Summary of a directory tree staged into the public directory."""

    file_count: int
    total_bytes: int


@dataclass
class BuildOutcome:
    """Result of a complete build run.

    Attributes:
        decision: The skip/rebuild decision that was taken.
        rebuilt: Whether the build script ran and its output was staged.
        cache_updated: Whether the fingerprint cache was written by this run.
        staged: Summary of the staged tree (rebuilds only).
        duration_seconds: Build script wall time (rebuilds only).
    """

    decision: Decision
    rebuilt: bool = False
    cache_updated: bool = False
    staged: StagedTree | None = None
    duration_seconds: float | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        data = asdict(self)
        data["decision"]["action"] = self.decision.action.value
        data["decision"]["reason"] = (
            self.decision.reason.value if self.decision.reason else None
        )
        return data


__all__ = [
    "BuildOutcome",
    "BuildPaths",
    "Decision",
    "DecisionAction",
    "RebuildReason",
    "StagedTree",
]
