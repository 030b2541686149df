"""Batch classification command."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.table import Table

from actlog.commands.common import (
    classification_payload,
    classify_entries,
    get_state,
    print_json_payload,
    summarize,
)
from actlog.core.config import resolve_output_dir
from actlog.exporters.csv_export import write_csv
from actlog.exporters.json_export import write_json
from actlog.utils.formatting import format_confidence, format_extracted
from actlog.utils.parsing import InputError, load_entries


def batch_command(
    ctx: typer.Context,
    file: Optional[Path] = typer.Option(None, help="Text, JSON or YAML file with entries"),
    stdin: bool = typer.Option(False, "--stdin", help="Read entries from stdin"),
    activity_type: Optional[str] = typer.Option(None, "--type", help="Only keep entries of this type"),
    output: Optional[Path] = typer.Option(None, help="Export file (relative paths go to the export directory)"),
    export_format: Optional[str] = typer.Option(None, "--format", help="Export format: json|csv"),
) -> None:
    """Classify many entries and optionally export the results."""
    state = get_state(ctx)

    fmt = (export_format or state.config.get("export", {}).get("format") or "json").lower()
    if fmt not in {"json", "csv"}:
        raise typer.BadParameter("--format must be one of: json, csv")

    stdin_text = sys.stdin.read() if stdin else ""
    try:
        entries = load_entries(file_path=file, read_stdin=stdin, stdin_text=stdin_text)
    except InputError as exc:
        raise typer.BadParameter(str(exc)) from exc

    if not entries:
        raise typer.BadParameter("Provide --file or --stdin with at least one entry")
    state.debug(f"loaded {len(entries)} entries")

    results = classify_entries(state, entries, type_filter=activity_type)
    summary = summarize(results)

    export_path: Optional[Path] = None
    if output is not None:
        export_path = output if output.is_absolute() else resolve_output_dir(state.config) / output
        if fmt == "csv":
            write_csv(export_path, results)
        else:
            write_json(export_path, results, summary)

    if state.json_output:
        print_json_payload(
            state,
            {
                "entries": [classification_payload(result, state.min_confidence) for result in results],
                "summary": summary,
                "export": str(export_path) if export_path else None,
            },
        )
        return

    if state.plain_output:
        typer.echo("type\tconfidence\ttext\textracted")
        for result in results:
            typer.echo(
                "\t".join(
                    [
                        result.type.value,
                        str(result.confidence),
                        result.raw_text,
                        format_extracted(result.extracted),
                    ]
                )
            )
        typer.echo(f"total\t{summary['total']}")
        if export_path:
            typer.echo(f"export\t{export_path}")
        return

    table = Table(title=f"Entries ({summary['total']} total)")
    table.add_column("Text")
    table.add_column("Type")
    table.add_column("Confidence")
    table.add_column("Extracted")
    for result in results:
        table.add_row(
            result.raw_text,
            result.type.value,
            format_confidence(result.confidence),
            format_extracted(result.extracted),
        )
    state.console.print(table)

    breakdown = ", ".join(f"{key}: {count}" for key, count in sorted(summary["by_type"].items()))
    state.console.print(f"Classified {summary['total']} entries ({breakdown or 'none'})")
    if summary["unknown"]:
        state.console.print(f"{summary['unknown']} entries were not recognized")
    if export_path:
        state.console.print(f"Exported to: {export_path}")
