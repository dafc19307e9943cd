"""Configuration settings for demo_build.

Uses pydantic-settings for config parsing from environment variables
and defaults. Configuration precedence: CLI flags > env vars > defaults.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from demo_build.types import BuildPaths


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the DEMO_BUILD_ prefix.
    Relative paths are resolved against ``project_root``.
    """

    model_config = SettingsConfigDict(
        env_prefix="DEMO_BUILD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Layout
    project_root: Path = Field(
        default_factory=Path.cwd,
        description="Project root all relative paths resolve against",
    )
    submodule_dir: Path = Field(
        default=Path(".gsworkspace"),
        description="Working copy of the nested project",
    )
    init_marker: str = Field(
        default="frontend",
        description="Submodule subdirectory whose presence means it is initialized",
    )
    tooling_subdir: Path = Field(
        default=Path("install/offline"),
        description="Build tooling directory inside the submodule",
    )
    build_output_subdir: Path = Field(
        default=Path("install/offline/dist"),
        description="Intermediate build output inside the submodule",
    )
    public_dir: Path = Field(
        default=Path("public/demo"),
        description="Publicly served demo directory",
    )
    artifact_marker: str = Field(
        default="index.html",
        description="File whose presence in public_dir marks a completed build",
    )
    cache_dir: Path = Field(
        default=Path("node_modules/.cache/gsworkspace-demo"),
        description="Directory holding the fingerprint cache",
    )
    cache_file_name: str = Field(
        default="commit-hash",
        description="Name of the fingerprint cache file",
    )

    # External tools
    build_script: str = Field(
        default="build-linux.sh",
        description="Offline build script run from the tooling directory",
    )
    shell: str = Field(
        default="bash",
        description="Interpreter used to run the build script",
    )
    git_executable: str = Field(
        default="git",
        description="Git executable used to read the submodule commit",
    )
    build_timeout: int | None = Field(
        default=None,
        ge=60,
        description="Timeout for the build script in seconds (no timeout if not set)",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    return settings.model_dump_json(indent=2)


def resolve_paths(settings: Settings | None = None) -> BuildPaths:
    """Resolve settings into the absolute paths a build operates on.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        BuildPaths with every location anchored at the project root.
    """
    if settings is None:
        settings = get_settings()

    root = settings.project_root.expanduser().resolve()
    submodule = root / settings.submodule_dir
    cache_dir = root / settings.cache_dir

    return BuildPaths(
        submodule_dir=submodule,
        init_marker_dir=submodule / settings.init_marker,
        tooling_dir=submodule / settings.tooling_subdir,
        build_output_dir=submodule / settings.build_output_subdir,
        build_script=settings.build_script,
        shell=settings.shell,
        git_executable=settings.git_executable,
        public_dir=root / settings.public_dir,
        artifact_marker=settings.artifact_marker,
        cache_file=cache_dir / settings.cache_file_name,
        build_timeout=settings.build_timeout,
    )


__all__ = ["Settings", "get_settings", "print_settings_json", "resolve_paths"]
