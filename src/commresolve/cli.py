"""Command-line interface for CommResolve."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path

import click
from rich.console import Console as RichConsole
from rich.logging import RichHandler

from commresolve import __version__
from commresolve.config import (
    ProjectConfig,
    find_project_root,
    load_config,
    save_config,
    set_config_value,
)
from commresolve.exceptions import CommResolveError
from commresolve.resolver import (
    CommunicationProblemResolver,
    RecordingSink,
    SimpleProblemContext,
    ValidationPolicy,
)
from commresolve.topology.scenario import Scenario, load_scenario
from commresolve.ui.console import Console

console = Console()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        handlers=[RichHandler(console=RichConsole(stderr=True), show_path=False)],
        force=True,
    )


def _get_project_root(path: str | None = None) -> Path:
    """Find the project root or error."""
    if path:
        root = Path(path).resolve()
        if not root.exists():
            console.error(f"Path does not exist: {path}")
            sys.exit(1)
        return root

    root = find_project_root()
    if root is None:
        console.error(
            "No CommResolve project found. Run 'commresolve init' first, "
            "or specify a path with --path."
        )
        sys.exit(1)
    return root


def _load_config_or_exit(path: str | None) -> ProjectConfig:
    """Project config if one can be found, defaults otherwise."""
    root = Path(path).resolve() if path else find_project_root()
    if root is None:
        return ProjectConfig()
    try:
        return load_config(root)
    except CommResolveError as e:
        console.error(str(e))
        sys.exit(1)


def _configure_logging(ctx: click.Context, config: ProjectConfig, quiet: bool = False) -> None:
    if ctx.obj.get("verbose"):
        _setup_logging("DEBUG")
    else:
        _setup_logging("ERROR" if quiet else config.logging.level)


def _load_scenario(scenario_path: str) -> Scenario:
    try:
        return load_scenario(scenario_path)
    except CommResolveError as e:
        console.error(str(e))
        sys.exit(1)


@click.group()
@click.version_option(version=__version__, prog_name="commresolve")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, verbose: bool):
    """CommResolve - decide which nodes to evict when a cluster splits."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


@main.command()
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option(
    "--policy",
    type=click.Choice([p.value for p in ValidationPolicy]),
    default=None,
    help="Connectivity validation policy.",
)
def init(path: str | None, policy: str | None):
    """Initialize a CommResolve project directory."""
    root = Path(path or ".").resolve()
    if not root.exists():
        console.error(f"Path does not exist: {root}")
        sys.exit(1)

    console.banner()
    console.info(f"Initializing CommResolve for: {root}")

    try:
        config = load_config(root)
    except CommResolveError as e:
        console.error(str(e))
        sys.exit(1)
    config.name = root.name
    if policy:
        config.resolver.validation_policy = ValidationPolicy(policy)

    save_config(root, config)
    console.success("Configuration saved")


@main.command()
@click.argument("scenario", type=click.Path(dir_okay=False))
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.pass_context
def components(ctx: click.Context, scenario: str, path: str | None):
    """Show the connected components of a scenario."""
    _configure_logging(ctx, _load_config_or_exit(path))

    from commresolve.resolver import find_components, pick_largest
    from commresolve.resolver.engine import summarize_component

    sc = _load_scenario(scenario)
    found = find_components(sc.snapshot, sc.oracle())
    selected = pick_largest(found)

    console.info(f"Scenario: {sc.name}")
    console.show_stats(sc.get_stats())
    console.show_components(
        [summarize_component(c, sc.snapshot) for c in found],
        summarize_component(selected, sc.snapshot),
    )


@main.command()
@click.argument("scenario", type=click.Path(dir_okay=False))
@click.option("--path", "-p", default=None, help="Path to the project root.")
@click.option(
    "--policy",
    type=click.Choice([p.value for p in ValidationPolicy]),
    default=None,
    help="Override the configured validation policy.",
)
@click.option(
    "--apply/--dry-run",
    "apply",
    default=None,
    help="Dispatch evictions to the sink, or only report the plan.",
)
@click.option("--json", "as_json", is_flag=True, help="Output the result as JSON.")
@click.pass_context
def resolve(
    ctx: click.Context,
    scenario: str,
    path: str | None,
    policy: str | None,
    apply: bool | None,
    as_json: bool,
):
    """Run a resolution pass over a scenario file."""
    config = _load_config_or_exit(path)
    # JSON output must stay parseable
    _configure_logging(ctx, config, quiet=as_json)

    if policy:
        config.resolver.validation_policy = ValidationPolicy(policy)
    if apply is not None:
        config.resolver.dry_run = not apply

    sc = _load_scenario(scenario)
    sink = RecordingSink()
    resolver = CommunicationProblemResolver.from_config(config.resolver)

    try:
        result = resolver.resolve(SimpleProblemContext(sc.snapshot, sc.oracle(), sink))
    except CommResolveError as e:
        console.error(str(e))
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    console.info(f"Scenario: {sc.name}")
    console.show_resolution(result)
    if sink.evicted:
        console.success(f"Evicted {len(sink.evicted)} node(s)")
    elif result.evictions:
        console.info("Dry run: no evictions dispatched")
    elif not result.fully_connected:
        console.warning("Selected cluster is not fully connected; nothing evicted this round")


@main.command("config")
@click.argument("action", type=click.Choice(["set", "get", "show"]))
@click.argument("key", required=False)
@click.argument("value", required=False)
@click.option("--path", "-p", default=None, help="Path to the project root.")
def config_cmd(action: str, key: str | None, value: str | None, path: str | None):
    """Manage CommResolve configuration."""
    root = _get_project_root(path)
    try:
        config = load_config(root)
    except CommResolveError as e:
        console.error(str(e))
        sys.exit(1)

    if action == "show":
        console.console.print_json(json.dumps(config.model_dump(mode="json"), indent=2))
    elif action == "get":
        if not key:
            console.error("Usage: commresolve config get <key>")
            sys.exit(1)
        data = config.model_dump(mode="json")
        for part in key.split("."):
            if isinstance(data, dict) and part in data:
                data = data[part]
            else:
                console.error(f"Unknown key: {key}")
                sys.exit(1)
        console.console.print(f"{key} = {data}")
    elif action == "set":
        if not key or value is None:
            console.error("Usage: commresolve config set <key> <value>")
            sys.exit(1)
        try:
            # Try to parse as JSON for non-string values
            try:
                parsed_value = json.loads(value)
            except json.JSONDecodeError:
                parsed_value = value

            config = set_config_value(config, key, parsed_value)
            save_config(root, config)
            console.success(f"Set {key} = {parsed_value}")
        except KeyError:
            console.error(f"Unknown config key: {key}")
            sys.exit(1)
        except CommResolveError as e:
            console.error(str(e))
            sys.exit(1)


if __name__ == "__main__":
    main()
