"""Thin CLI wrapper for demo_build.

This module provides the command-line interface using Typer.
All business logic is delegated to core modules.

Running `demo-build` without a subcommand performs a cached build.
"""

import json
import logging
from enum import Enum
from typing import Annotated, Any, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from demo_build import __version__
from demo_build.builds.fingerprint import short_fingerprint
from demo_build.builds.service import build_if_changed, evaluate
from demo_build.config import Settings, get_settings, print_settings_json, resolve_paths
from demo_build.errors import DemoBuildError
from demo_build.types import Decision

app = typer.Typer(
    name="demo-build",
    help="Demo Build - rebuild the gsworkspace offline demo when the submodule changes",
    no_args_is_help=False,
)
console = Console()
err_console = Console(stderr=True)


class LogLevel(str, Enum):
    """Log levels accepted by --log-level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


def configure_logging(level: str) -> None:
    """Route log records to stderr through Rich."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"demo-build version {__version__}")
        raise typer.Exit()


def _settings(ctx: typer.Context) -> Settings:
    settings: Settings = ctx.obj
    return settings


def _print_json(data: Any) -> None:
    console.print(
        json.dumps(data, indent=2),
        markup=False,
        highlight=False,
        soft_wrap=True,
    )


def _fail(error: DemoBuildError) -> NoReturn:
    """Report a fatal error and exit with status 1."""
    err_console.print(f"[red]{escape(error.message)}[/red]")
    if error.remediation:
        err_console.print(f"Run: {escape(error.remediation)}")
    raise typer.Exit(code=1)


def _print_decision(decision: Decision) -> None:
    console.print(f"Current submodule: {short_fingerprint(decision.current)}")
    console.print(f"Cached hash:       {short_fingerprint(decision.cached)}")
    console.print(f"Demo exists:       {decision.artifact_exists}")
    console.print()


def _run_build(settings: Settings, force: bool, json_output: bool) -> None:
    paths = resolve_paths(settings)

    if not json_output:
        console.print("[bold]=== gsworkspace Demo Build ===[/bold]")
        console.print()

    try:
        outcome = build_if_changed(paths, force=force)
    except DemoBuildError as e:
        _fail(e)

    if json_output:
        _print_json(outcome.to_dict())
        return

    if not outcome.rebuilt:
        return

    if outcome.staged is not None:
        console.print(
            f"Staged {outcome.staged.file_count} file(s) into {paths.public_dir}"
        )
    console.print("[green]Demo build complete![/green]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            help="Show version and exit",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    log_level: Annotated[
        LogLevel | None,
        typer.Option(
            "--log-level",
            help="Override the configured log level",
            case_sensitive=False,
        ),
    ] = None,
) -> None:
    """Demo Build - rebuild the gsworkspace offline demo when the submodule changes.

    Without a subcommand, builds the demo if needed.
    """
    settings = get_settings()
    if log_level is not None:
        settings = settings.model_copy(update={"log_level": log_level.value})
    configure_logging(settings.log_level)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        _run_build(settings, force=False, json_output=False)


@app.command()
def build(
    ctx: typer.Context,
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Force rebuild even if cached"),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Build the demo if the submodule changed or the output is missing."""
    _run_build(_settings(ctx), force=force, json_output=json_output)


@app.command()
def status(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show fingerprints and what a build would do, without building."""
    paths = resolve_paths(_settings(ctx))

    try:
        decision = evaluate(paths)
    except DemoBuildError as e:
        _fail(e)

    if json_output:
        _print_json(
            {
                "current": decision.current,
                "cached": decision.cached,
                "artifact_exists": decision.artifact_exists,
                "action": decision.action.value,
                "reason": decision.reason.value if decision.reason else None,
            }
        )
        return

    _print_decision(decision)
    if decision.should_rebuild:
        reason = decision.reason.value if decision.reason else "unknown"
        console.print(f"[yellow]Rebuild needed ({reason})[/yellow]")
    else:
        console.print("[green]Demo is up to date[/green]")


@app.command()
def config(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON"),
    ] = False,
) -> None:
    """Show effective configuration."""
    settings = _settings(ctx)
    if json_output:
        console.print(
            print_settings_json(settings),
            markup=False,
            highlight=False,
            soft_wrap=True,
        )
        return

    paths = resolve_paths(settings)
    timeout_display = (
        f"{settings.build_timeout}s" if settings.build_timeout else "(none)"
    )
    console.print("[bold]Effective Configuration:[/bold]")
    console.print()
    console.print("[bold]Paths:[/bold]")
    console.print(f"  Submodule:           {paths.submodule_dir}")
    console.print(f"  Build tooling:       {paths.tooling_dir}")
    console.print(f"  Build output:        {paths.build_output_dir}")
    console.print(f"  Public directory:    {paths.public_dir}")
    console.print(f"  Cache file:          {paths.cache_file}")
    console.print()
    console.print("[bold]Build:[/bold]")
    console.print(f"  Command:             {settings.shell} {settings.build_script}")
    console.print(f"  Artifact marker:     {settings.artifact_marker}")
    console.print(f"  Build timeout:       {timeout_display}")
    console.print(f"  Log level:           {settings.log_level}")
