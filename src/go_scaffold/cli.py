"""
go-scaffold Command Line Interface

Main entry point for the go-scaffold CLI.
"""

import logging
import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from rich.console import Console
from rich.table import Table

from go_scaffold.wizard.exceptions import ScaffoldError, get_error_code
from go_scaffold.wizard.features import DEPENDENCY_GRAPH, FEATURE_CATALOG, FEATURE_IDS

console = Console()

# Accept either the display name or the template directory name
FEATURE_CHOICES = [name for name, _ in FEATURE_CATALOG] + list(FEATURE_IDS.values())


def _feature_name(choice: str) -> str:
    for name, feature_id in FEATURE_IDS.items():
        if choice.lower() in (name.lower(), feature_id):
            return name
    return choice


def _load(config_path: Optional[str], template_dir: Optional[str], **overrides):
    from go_scaffold.config import load_config

    if template_dir:
        overrides["template_dir"] = Path(template_dir)
    return load_config(Path(config_path) if config_path else None, overrides)


def _fail(error: Exception):
    console.print(f"[red]Error:[/red] {error}")
    sys.exit(get_error_code(error))


@click.group(invoke_without_command=True)
@click.version_option(package_name="go-scaffold")
@click.pass_context
def main(ctx: click.Context):
    """go-scaffold: create Go platform projects from a template"""
    if ctx.invoked_subcommand is None:
        ctx.invoke(init)


@main.command()
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML config file")
@click.option("--template-dir", type=click.Path(exists=True, file_okay=False), help="Template tree with base/ and features/")
@click.option("--verbose", "-v", is_flag=True, help="Log debug output (to --log-file)")
@click.option("--log-file", type=click.Path(dir_okay=False), help="Write logs to this file")
def init(config_path: Optional[str], template_dir: Optional[str], verbose: bool, log_file: Optional[str]):
    """Create a new project with the interactive wizard.

    Examples:
        go-scaffold                        # Start the wizard
        go-scaffold init --log-file x.log  # Keep a log of the run
    """
    from go_scaffold.wizard.logging_config import setup_logging
    from go_scaffold.wizard.orchestrator import WizardOrchestrator

    try:
        config = _load(config_path, template_dir, log_file=Path(log_file) if log_file else None)
    except ScaffoldError as e:
        _fail(e)

    # Console logging would draw over the live screen
    setup_logging(
        level=logging.DEBUG if verbose or config.debug else None,
        log_file=config.log_file,
        quiet=True
    )

    if not sys.stdin.isatty():
        console.print("[red]Error:[/red] the wizard needs an interactive terminal")
        console.print("[dim]Use 'go-scaffold new PROJECT_NAME' for non-interactive use[/dim]")
        sys.exit(1)

    wizard = WizardOrchestrator(config, console=console)
    try:
        sys.exit(wizard.run())
    except KeyboardInterrupt:
        sys.exit(130)


@main.command()
@click.argument("project_name")
@click.argument("module_name", required=False)
@click.option("--path", "target_path", default="..", show_default=True, help="Directory to create the project in")
@click.option(
    "--feature", "-f", "feature_choices",
    multiple=True,
    type=click.Choice(FEATURE_CHOICES, case_sensitive=False),
    help="Feature to include (repeatable; default: all)"
)
@click.option("--no-git", is_flag=True, help="Skip git repository setup")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="YAML config file")
@click.option("--template-dir", type=click.Path(exists=True, file_okay=False), help="Template tree with base/ and features/")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
def new(
    project_name: str,
    module_name: Optional[str],
    target_path: str,
    feature_choices: Tuple[str, ...],
    no_git: bool,
    config_path: Optional[str],
    template_dir: Optional[str],
    verbose: bool
):
    """Create a project without the wizard.

    Every template feature is copied unless --feature narrows the set;
    required features are added automatically.

    Examples:
        go-scaffold new my-api
        go-scaffold new my-api github.com/acme/my-api --path .
        go-scaffold new my-api -f database -f docker --no-git
    """
    from go_scaffold.generator.materializer import OVERLAY_COPY, Materializer, ProjectSpec
    from go_scaffold.wizard.features import DependencyResolver, default_features
    from go_scaffold.wizard.logging_config import setup_logging
    from go_scaffold.wizard.ui import WizardUI
    from go_scaffold.wizard.validators import (
        default_module_name,
        is_script_module_name,
        is_script_project_name,
    )

    ui = WizardUI(console)

    if not is_script_project_name(project_name):
        ui.print_error("Project name must contain only lowercase letters, numbers, hyphens, and underscores")
        sys.exit(1)

    module_name = module_name or default_module_name(project_name)
    if not is_script_module_name(module_name):
        ui.print_error("Module name must contain only lowercase letters, numbers, dots, slashes, hyphens, and underscores")
        sys.exit(1)

    try:
        config = _load(config_path, template_dir, git_enabled=False if no_git else None)
    except ScaffoldError as e:
        _fail(e)

    setup_logging(level=logging.DEBUG if verbose or config.debug else logging.WARNING, log_file=config.log_file)

    catalog = default_features()
    if feature_choices:
        for feature in catalog:
            feature.selected = False
    resolver = DependencyResolver(catalog)
    for choice in feature_choices:
        resolver.on_select(_feature_name(choice))

    spec = ProjectSpec(
        project_name=project_name,
        module_name=module_name,
        target_path=target_path,
        selected_features=frozenset(resolver.selected_names()),
    )

    ui.print_header()
    ui.print_info(f"Project:  {project_name}")
    ui.print_info(f"Module:   {module_name}")
    ui.print_info(f"Location: {spec.display_path()}")
    ui.print_info(f"Features: {', '.join(n for n, _ in FEATURE_CATALOG if n in spec.selected_features) or '(none)'}")
    console.print()

    try:
        message = Materializer(config, overlay=OVERLAY_COPY).materialize(spec)
    except ScaffoldError as e:
        _fail(e)

    ui.print_success(message)
    console.print()
    console.print("[bold]Next steps:[/bold]")
    console.print(f"  cd {spec.display_path()}")
    console.print("  cp .env.example .env")
    console.print("  make dev-d")


@main.command()
def features():
    """List the template features and what they require."""
    table = Table(title="Template Features", border_style="blue")
    table.add_column("Feature", style="cyan")
    table.add_column("Directory")
    table.add_column("Description")
    table.add_column("Requires", style="yellow")

    for name, description in FEATURE_CATALOG:
        requires = ", ".join(DEPENDENCY_GRAPH.get(name, [])) or "-"
        table.add_row(name, FEATURE_IDS[name], description, requires)

    console.print(table)


@main.command("help")
@click.argument("topic", required=False)
def help_topic(topic: str):
    """Show detailed help for a topic.

    Topics: keyboard, workflow, features, config, troubleshoot

    Examples:
        go-scaffold help            # List all topics
        go-scaffold help workflow   # Show how projects are created
    """
    from rich.panel import Panel
    from go_scaffold.help_topics import get_help_content, list_topics, get_topic_names

    if not topic:
        console.print("[bold blue]go-scaffold Help Topics[/bold blue]")
        console.print()
        for topic_name, description in list_topics():
            console.print(f"  [cyan]{topic_name}[/cyan] - {description}")
        console.print()
        console.print("[dim]Run 'go-scaffold help <topic>' for details[/dim]")
        return

    content = get_help_content(topic.lower())
    if content:
        console.print(Panel(content, border_style="blue", title=f"Help: {topic}"))
    else:
        console.print(f"[red]Unknown topic: {topic}[/red]")
        console.print(f"[dim]Available topics: {', '.join(get_topic_names())}[/dim]")
        sys.exit(1)


if __name__ == "__main__":
    main()
