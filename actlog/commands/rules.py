"""Rule inspection command."""

from __future__ import annotations

import typer
from rich.table import Table

from actlog.commands.common import get_state, print_json_payload
from actlog.core.classify import describe_rules, keyword_overrides_from_config
from actlog.core.constants import TYPE_LABELS


def rules_command(ctx: typer.Context) -> None:
    """Show rule priority, confidence and trigger words."""
    state = get_state(ctx)
    rows = describe_rules(keyword_overrides_from_config(state.config))

    if state.json_output:
        print_json_payload(state, {"rules": rows})
        return

    if state.plain_output:
        typer.echo("order\ttype\tconfidence\ttriggers")
        for index, row in enumerate(rows, start=1):
            confidence = ",".join(str(value) for value in row["confidence"])
            typer.echo(f"{index}\t{row['type']}\t{confidence}\t{','.join(row['triggers'])}")
        return

    table = Table(title="Classification rules (first match wins)")
    table.add_column("#")
    table.add_column("Type")
    table.add_column("Confidence")
    table.add_column("Triggers")
    for index, row in enumerate(rows, start=1):
        table.add_row(
            str(index),
            TYPE_LABELS.get(row["type"], row["type"]),
            " / ".join(str(value) for value in row["confidence"]),
            ", ".join(row["triggers"]) or "(fallback)",
        )
    state.console.print(table)
