"""Entry point for actlog."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from actlog import __version__
from actlog.commands import config as config_commands
from actlog.commands.batch import batch_command
from actlog.commands.parse import parse_command
from actlog.commands.rules import rules_command
from actlog.core.classify import classification_rules_from_config
from actlog.core.config import ConfigError, default_config_path, load_config, resolve_min_confidence
from actlog.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Log fitness and health activities from plain text",
    invoke_without_command=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output JSON where available"),
    plain_output: bool = typer.Option(
        False,
        "--plain",
        help="Output plain text (no rich formatting/tables)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Initialize global CLI state."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
        min_confidence = resolve_min_confidence(cfg)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    console = Console(
        quiet=quiet,
        no_color=plain_output,
        log_time=False,
        log_path=False,
    )
    ctx.obj = CLIState(
        json_output=(json_output and not plain_output),
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=cfg_path,
        config=cfg,
        console=console,
        rules=classification_rules_from_config(cfg),
        min_confidence=min_confidence,
    )
    ctx.obj.debug(f"config: {cfg_path}{'' if cfg_path.exists() else ' (defaults)'}")

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


# Top-level commands
app.command("parse")(parse_command)
app.command("batch")(batch_command)
app.command("rules")(rules_command)
app.add_typer(config_commands.app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
