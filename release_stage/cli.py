"""Command-line interface for release-stage.

Provides commands for:
- stage: Resolve the release stage for a list of build commands
- version: Print the version the build would publish
- plan: Show the per-module build plan
- init-license: Write the default license header
- init-config: Generate configuration
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from release_stage import __version__
from release_stage.config.defaults import write_default_config
from release_stage.config.loader import load_config
from release_stage.config.models import ReleaseConfig
from release_stage.config.properties import parse_assignments
from release_stage.exceptions import ReleaseError
from release_stage.license import prepare_license_header
from release_stage.log import configure_logging
from release_stage.project import BuildPlan, plan_build
from release_stage.stage import resolve_stage
from release_stage.versioning import infer_version, read_repository_state

app = typer.Typer(
    name="release-stage",
    help="Release stage and version resolution for multi-module Java builds",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        console.print(f"release-stage version {__version__}")
        raise typer.Exit()


def fail(error: ReleaseError) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(str(error))}", highlight=False, soft_wrap=True)
    return typer.Exit(code=error.exit_code)


def load(project_dir: Path, config: Path | None, properties: list[str] | None) -> ReleaseConfig:
    return load_config(
        config,
        project_root=project_dir,
        properties=parse_assignments(properties or []),
    )


def display_plan(plan: BuildPlan) -> None:
    """Display a build plan as a summary table plus one row per module."""
    summary = Table(title="Release Plan")
    summary.add_column("Property", style="cyan")
    summary.add_column("Value", style="green")
    summary.add_row("Project", plan.project_name)
    summary.add_row("Stage", plan.stage.label)
    summary.add_row("Status", plan.status or "-")
    summary.add_row("Version", plan.version or "-")
    summary.add_row(
        "GitHub",
        f"{plan.remote.org}/{plan.remote.project}" if plan.remote.matched else "[yellow]none[/yellow]",
    )
    console.print(summary)

    modules = Table(title="Modules")
    modules.add_column("Module", style="cyan")
    modules.add_column("Plugins")
    modules.add_column("release.stage")
    for module_plan in plan.modules:
        name = module_plan.module.name or f"{plan.project_name} (root)"
        modules.add_row(
            name,
            ", ".join(module_plan.plugins) or "-",
            module_plan.properties.get("release.stage", "-"),
        )
    console.print(modules)


@app.callback()
def main(
    version: bool = typer.Option(  # noqa: B008
        False,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False,
        "--verbose",
        "-v",
        help="Show debug logging",
    ),
) -> None:
    """Release stage and version resolution for multi-module Java builds.

    Pass the same command names given to the build tool, e.g.
    'release-stage version build final'.
    """
    configure_logging(verbose=verbose)


@app.command()
def stage(
    commands: list[str] | None = typer.Argument(  # noqa: B008
        None,
        help="Build commands of the invocation (e.g. build candidate)",
    ),
) -> None:
    """Resolve the release stage and publication status."""
    try:
        resolved = resolve_stage(commands or [])
    except ReleaseError as e:
        raise fail(e) from None

    console.print(f"stage: {resolved.label}", highlight=False, soft_wrap=True)
    console.print(f"status: {resolved.status or '-'}", highlight=False)


@app.command()
def version(
    commands: list[str] | None = typer.Argument(  # noqa: B008
        None,
        help="Build commands of the invocation (e.g. build final)",
    ),
    properties: list[str] = typer.Option(  # noqa: B008
        [],
        "--property",
        "-P",
        help="Build property override, e.g. -P release.useLastTag=true",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
    project_dir: Path = typer.Option(  # noqa: B008
        Path("."),
        "--project-dir",
        "-p",
        help="Root project directory",
    ),
) -> None:
    """Print the version string for the invocation.

    Examples:
        release-stage version final              # 0.2.0.RELEASE
        release-stage version candidate          # 0.2.0-rc.1
        release-stage version final -P release.useLastTag=true
    """
    try:
        cfg = load(project_dir, config, properties)
        resolved = resolve_stage(commands or [])
        state = read_repository_state(project_dir)
        typer.echo(infer_version(cfg.release, resolved, state))
    except ReleaseError as e:
        raise fail(e) from None


@app.command()
def plan(
    commands: list[str] | None = typer.Argument(  # noqa: B008
        None,
        help="Build commands of the invocation",
    ),
    properties: list[str] = typer.Option(  # noqa: B008
        [],
        "--property",
        "-P",
        help="Build property override, e.g. -P release.version=1.0.0.RELEASE",
    ),
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
    project_dir: Path = typer.Option(  # noqa: B008
        Path("."),
        "--project-dir",
        "-p",
        help="Root project directory",
    ),
    as_json: bool = typer.Option(  # noqa: B008
        False,
        "--json",
        help="Print the plan as JSON",
    ),
) -> None:
    """Show stage, version and the plugins configured for every module.

    Release features are left disabled when the repository has no GitHub
    remote.
    """
    try:
        cfg = load(project_dir, config, properties)
        build_plan = plan_build(project_dir, commands or [], cfg)
    except ReleaseError as e:
        raise fail(e) from None

    if as_json:
        typer.echo(json.dumps(build_plan.to_dict(), indent=2))
    else:
        display_plan(build_plan)


@app.command(name="init-license")
def init_license(
    config: Path | None = typer.Option(  # noqa: B008
        None,
        "--config",
        "-c",
        help="Path to configuration file",
    ),
    project_dir: Path = typer.Option(  # noqa: B008
        Path("."),
        "--project-dir",
        "-p",
        help="Root project directory",
    ),
) -> None:
    """Write the default license header unless the project has one."""
    try:
        cfg = load(project_dir, config, None)
        path = prepare_license_header(project_dir, cfg.license)
    except ReleaseError as e:
        raise fail(e) from None

    console.print(f"[green]License header:[/green] {path}")


@app.command(name="init-config")
def init_config(
    output: Path = typer.Option(  # noqa: B008
        Path("config/release_stage.yml"),
        "--output",
        "-o",
        help="Output path for configuration file",
    ),
    force: bool = typer.Option(  # noqa: B008
        False,
        "--force",
        "-f",
        help="Overwrite existing configuration",
    ),
) -> None:
    """Generate a release-stage configuration file."""
    if output.exists() and not force:
        err_console.print(f"[red]Configuration already exists:[/red] {output}")
        err_console.print("Use --force to overwrite")
        raise typer.Exit(code=1)

    try:
        write_default_config(output)
    except ReleaseError as e:
        raise fail(e) from None

    console.print(f"[green]Configuration written to:[/green] {output}")


if __name__ == "__main__":
    app()
