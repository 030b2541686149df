"""Configuration commands."""

from __future__ import annotations

import typer

from actlog.commands.common import get_state, print_json_payload
from actlog.core.config import DEFAULT_CONFIG, save_config

app = typer.Typer(help="Inspect or create the configuration file")


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Print the merged configuration."""
    state = get_state(ctx)
    payload = {"config_path": str(state.config_path), "config": state.config}

    if state.json_output or state.plain_output:
        print_json_payload(state, payload)
        return

    state.console.print(f"Config file: {state.config_path}")
    state.console.print_json(data=state.config)


@app.command("init")
def init_command(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Write the default configuration to the config path."""
    state = get_state(ctx)

    if state.config_path.exists() and not force:
        message = f"Config file already exists: {state.config_path} (use --force to overwrite)"
        if state.json_output:
            print_json_payload(state, {"status": "exists", "path": str(state.config_path)})
        else:
            typer.echo(message)
        raise typer.Exit(code=1)

    path = save_config(DEFAULT_CONFIG, state.config_path)

    if state.json_output:
        print_json_payload(state, {"status": "created", "path": str(path)})
        return
    if state.plain_output:
        typer.echo("status\tcreated")
        typer.echo(f"path\t{path}")
        return
    state.console.print(f"Wrote default config to {path}")
