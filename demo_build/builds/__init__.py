"""Build orchestration module.

This module handles:
- Reading the current and cached submodule fingerprints
- Deciding between skipping and rebuilding
- Running the offline build script
- Staging its output into the public directory
"""

from demo_build.builds.service import build_if_changed, evaluate, rebuild

__all__ = ["build_if_changed", "evaluate", "rebuild"]
