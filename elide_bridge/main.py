"""
Elide build bridge — CLI entrypoint.

Usage:
    python -m elide_bridge.main --help
    python -m elide_bridge.main locate
    python -m elide_bridge.main plan path/to/project -P elide.builder.install.enable=true
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from elide_bridge import __version__
from elide_bridge.core.errors import BridgeError
from elide_bridge.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="elide-bridge")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to elide.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Elide build bridge — delegate javac and dependency install to Elide."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("ELIDE_BRIDGE_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("ELIDE_BRIDGE_LOG_FILE"),
        log_file_level=os.environ.get("ELIDE_BRIDGE_LOG_FILE_LEVEL"),
    )


def _fail(error: Exception) -> None:
    click.secho(f"❌ {error}", fg="red", err=True)
    sys.exit(1)


def _session(ctx: click.Context, start_dir: Path | None = None, offline: bool = False):
    from elide_bridge.core.config.loader import load_settings
    from elide_bridge.core.use_cases.configure import BuildSession

    settings = load_settings(ctx.obj.get("config_path"), start_dir=start_dir)
    return BuildSession(settings=settings, offline=offline)


def _project(
    project_dir: Path,
    root_dir: Path | None,
    properties: tuple[str, ...],
    java: bool,
):
    from elide_bridge.adapters.memory import InMemoryProject
    from elide_bridge.core.config.loader import build_property_source, parse_cli_properties

    root = (root_dir or project_dir).resolve()
    project_dir = project_dir.resolve()
    source = build_property_source(project_dir, root, parse_cli_properties(properties))
    return InMemoryProject(
        name=project_dir.name,
        directory=project_dir,
        root_directory=root,
        properties=source,
        plugins={"java"} if java else set(),
    )


_project_options = [
    click.argument(
        "project_dir",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=".",
    ),
    click.option(
        "--root",
        "root_dir",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        default=None,
        help="Root project directory (default: the project directory).",
    ),
    click.option(
        "--property", "-P", "properties", multiple=True,
        help="Build property override, key=value (repeatable).",
    ),
]


def project_options(fn):
    for option in reversed(_project_options):
        fn = option(fn)
    return fn


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def locate(ctx: click.Context, as_json: bool) -> None:
    """Show which Elide binary the bridge would use."""
    try:
        tool = _session(ctx).tool
    except BridgeError as e:
        _fail(e)
        return

    if as_json:
        click.echo(json.dumps(tool.model_dump(mode="json"), indent=2))
        return
    click.echo(f"{tool.path}  ({tool.source})")


@cli.command()
@click.pass_context
def version(ctx: click.Context) -> None:
    """Run `elide --version` through the bridge."""
    try:
        session = _session(ctx)
        session.start()
    except BridgeError as e:
        _fail(e)
        return

    if session.version is None:
        click.secho("⚠️  Could not determine the Elide version (see log).", fg="yellow")
        sys.exit(1)
    click.echo(f"Using Elide {session.version}")


@cli.command()
@project_options
@click.option("--no-java", is_flag=True, help="Treat the project as having no Java plugin.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def plan(
    ctx: click.Context,
    project_dir: Path,
    root_dir: Path | None,
    properties: tuple[str, ...],
    no_java: bool,
    as_json: bool,
) -> None:
    """Show the decisions and actions for a project (dry run, no changes)."""
    from elide_bridge.adapters.base import CompileStep, DocStep
    from elide_bridge.core.services.orchestration import JAVA_PLUGIN_ID, OrchestrationPlanner
    from elide_bridge.core.services.policy_resolver import resolve

    try:
        session = _session(ctx, start_dir=project_dir)
        project = _project(project_dir, root_dir, properties, java=not no_java)
        config = resolve(
            session.settings, project.properties, project.directory, project.root_directory,
            session.probe,
        )
        planner = OrchestrationPlanner(session.tool, session.runner, session.probe)
        prep = planner.plan(
            config,
            project.tasks.find_tasks_of_kind(CompileStep),
            project.has_plugin(JAVA_PLUGIN_ID),
            project.tasks.find_tasks_of_kind(DocStep),
        )
    except BridgeError as e:
        _fail(e)
        return

    if as_json:
        click.echo(json.dumps({"config": config.to_dict(), "plan": prep.to_dict()}, indent=2))
        return

    click.secho(f"\n📋 {project.name}", fg="cyan", bold=True)
    flags = {
        "install": config.install_enabled,
        "javac shim": config.javac_shim_enabled,
        "javadoc shim": config.javadoc_shim_enabled,
        "maven integration": config.maven_integration_enabled,
        "maven installer": config.maven_installer_active,
        "manifest present": config.manifest_present,
    }
    for label, value in flags.items():
        click.echo(f"   {label:<18} {'yes' if value else 'no'}")
    click.echo(f"   {'shim path':<18} {config.shim_path or '-'}")

    click.echo()
    if prep.is_empty:
        click.echo("   No preparatory actions.")
    for action in prep.actions:
        after = f"  (after {', '.join(action.depends_on)})" if action.depends_on else ""
        click.echo(f"   • {action.kind}: {action.name}{after}")
    if prep.compile_steps:
        names = ", ".join(s.name for s in prep.compile_steps)
        click.echo(f"   Compile steps via shim: {names}")
    if prep.doc_steps:
        names = ", ".join(s.name for s in prep.doc_steps)
        click.echo(f"   Javadoc steps via shim: {names}")
    click.echo()


@cli.command()
@click.option(
    "--java-home",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Java installation to place the shim in (default: JAVA_HOME).",
)
@click.pass_context
def shim(ctx: click.Context, java_home: Path | None) -> None:
    """Create (or repair) the elide-javac shim."""
    from elide_bridge.core.services.shim_installer import default_shim_path, ensure_shim

    try:
        session = _session(ctx)
        tool = session.tool
    except BridgeError as e:
        _fail(e)
        return

    home = java_home or session.settings.java_home or session.probe.java_home()
    result = ensure_shim(tool, default_shim_path(home), session.probe)
    if not result.ok:
        click.secho(f"⚠️  {result.message}", fg="yellow")
        if result.remediation:
            click.echo(f"   → {result.remediation}")
        sys.exit(1)
    click.secho(f"✅ Shim {result.status}: {result.path}", fg="green")


@cli.command()
@project_options
@click.option("--offline", is_flag=True, help="Skip quietly when no Elide binary is available.")
@click.pass_context
def install(
    ctx: click.Context,
    project_dir: Path,
    root_dir: Path | None,
    properties: tuple[str, ...],
    offline: bool,
) -> None:
    """Configure a project and run `elide install` if its policy asks for it."""
    from elide_bridge.core.services.orchestration import INSTALL_TASK

    try:
        session = _session(ctx, start_dir=project_dir, offline=offline)
        project = _project(project_dir, root_dir, properties, java=True)
        result = session.configure(project)
        if result.skipped:
            click.echo("Skipped: elide is not installed and the build is offline.")
            return
        if INSTALL_TASK not in project.tasks:
            click.echo("Nothing to install: install is disabled and no manifest was found.")
            return
        project.tasks.run(INSTALL_TASK)
    except BridgeError as e:
        _fail(e)
        return

    if not ctx.obj.get("quiet"):
        ran = ", ".join(result.plan.action_names)
        click.secho(f"✅ Ran {ran}", fg="green")


if __name__ == "__main__":
    cli()
