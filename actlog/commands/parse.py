"""Single-entry parse command."""

from __future__ import annotations

import json
from typing import List

import typer
from rich.table import Table

from actlog.commands.common import classification_payload, classify_entries, get_state, print_json_payload
from actlog.core.constants import TYPE_LABELS
from actlog.utils.formatting import format_confidence, format_extracted


def parse_command(
    ctx: typer.Context,
    text: List[str] = typer.Argument(..., help="Free-text entry, e.g. 'ran 5k in 25 minutes'"),
    strict: bool = typer.Option(False, "--strict", help="Exit with code 1 when the entry needs clarification"),
) -> None:
    """Classify one free-text activity entry."""
    state = get_state(ctx)
    entry = " ".join(text)

    result = classify_entries(state, [entry])[0]
    payload = classification_payload(result, state.min_confidence)

    if state.json_output:
        print_json_payload(state, payload)
    elif state.plain_output:
        typer.echo(f"type\t{result.type.value}")
        typer.echo(f"confidence\t{result.confidence}")
        typer.echo(f"extracted\t{json.dumps(result.extracted, separators=(',', ':'))}")
        typer.echo(f"message\t{payload['message']}")
    else:
        table = Table(title=f'"{entry}"', show_header=False)
        table.add_column("Field")
        table.add_column("Value")
        table.add_row("Type", TYPE_LABELS.get(result.type.value, result.type.value))
        table.add_row("Confidence", format_confidence(result.confidence))
        table.add_row("Extracted", format_extracted(result.extracted))
        state.console.print(table)
        state.console.print(payload["message"])

    if strict and payload["needsClarification"]:
        raise typer.Exit(code=1)
