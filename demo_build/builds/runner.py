"""Build runner for the gsworkspace offline build script.

This module handles:
- Composing the build script command
- Executing it with the caller's terminal attached so progress is visible
- Translating failures into ExternalBuildError

The script is treated as opaque: it is expected to populate the
intermediate output directory and exit 0.
"""

from __future__ import annotations

import logging
import shlex
import subprocess
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING

from demo_build.errors import BUILD_TIMEOUT, EXECUTION_ERROR, ExternalBuildError

if TYPE_CHECKING:
    from demo_build.types import BuildPaths

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Result of a successful build script run.

    Attributes:
        exit_code: Process exit code.
        command: The command that was executed.
        started_at: Build start time.
        finished_at: Build finish time.
    """

    exit_code: int
    command: str
    started_at: datetime
    finished_at: datetime

    @property
    def duration_seconds(self) -> float:
        return (self.finished_at - self.started_at).total_seconds()


def compose_build_command(paths: BuildPaths) -> list[str]:
    """Compose the build script command.

    Args:
        paths: Resolved build paths.

    Returns:
        Command as list of strings suitable for subprocess.
    """
    return [paths.shell, paths.build_script]


def run_build_script(paths: BuildPaths) -> BuildResult:
    """Run the offline build script and wait for it to finish.

    stdin, stdout and stderr are inherited from the caller.

    Args:
        paths: Resolved build paths.

    Returns:
        BuildResult for the completed run.

    Raises:
        ExternalBuildError: If the script exits non-zero, times out or
            cannot be started.
    """
    cmd = compose_build_command(paths)
    cmd_str = shlex.join(cmd)
    logger.info("Executing build: %s", cmd_str)
    logger.info("Working directory: %s", paths.tooling_dir)

    started_at = datetime.now(timezone.utc)

    try:
        result = subprocess.run(
            cmd,
            cwd=paths.tooling_dir,
            timeout=paths.build_timeout,
            check=False,
        )
    except subprocess.TimeoutExpired as e:
        message = f"Build timed out after {paths.build_timeout} seconds"
        logger.error(message)
        raise ExternalBuildError(message, exit_code=-1, code=BUILD_TIMEOUT) from e
    except OSError as e:
        message = f"Failed to execute build: {e}"
        logger.error(message)
        raise ExternalBuildError(message, code=EXECUTION_ERROR) from e

    finished_at = datetime.now(timezone.utc)

    if result.returncode != 0:
        message = f"Build failed with exit code {result.returncode}"
        logger.error("%s: %s", message, cmd_str)
        raise ExternalBuildError(message, exit_code=result.returncode)

    build_result = BuildResult(
        exit_code=result.returncode,
        command=cmd_str,
        started_at=started_at,
        finished_at=finished_at,
    )
    logger.info("Build script finished in %.1fs", build_result.duration_seconds)
    return build_result


__all__ = ["BuildResult", "compose_build_command", "run_build_script"]
