"""Output formatting for CLI results."""

from __future__ import annotations

import csv
import json
import sys
from enum import Enum
from typing import Any

from rich.console import Console
from rich.table import Table

console = Console(stderr=True)


class OutputFormat(str, Enum):
    TABLE = "table"
    JSON = "json"
    CSV = "csv"
    TEXT = "text"


def print_output(
    data: list[dict[str, Any]] | dict[str, Any],
    fmt: OutputFormat = OutputFormat.TABLE,
    columns: list[str] | None = None,
    title: str | None = None,
) -> None:
    """Print data in the requested format.

    Args:
        data: Rows to display (list of dicts or a single dict).
        fmt: Output format.
        columns: Which columns to show in table/csv/text mode. None = all.
        title: Optional title for table output.
    """
    rows = [data] if isinstance(data, dict) else data

    if fmt == OutputFormat.JSON:
        print_json(data)
    elif fmt == OutputFormat.CSV:
        print_csv(rows, columns)
    elif fmt == OutputFormat.TEXT:
        print_lines(rows, columns)
    else:
        print_table(rows, columns, title)


def print_json(data: Any) -> None:
    """Print data as formatted JSON to stdout."""
    json.dump(data, sys.stdout, indent=2, ensure_ascii=False, default=str)
    sys.stdout.write("\n")


def print_table(
    rows: list[dict[str, Any]],
    columns: list[str] | None = None,
    title: str | None = None,
) -> None:
    """Print rows as a Rich table on stderr."""
    if not rows:
        console.print("[dim]No results.[/dim]")
        return

    columns = columns or list(rows[0].keys())
    table = Table(title=title, show_lines=False)
    for col in columns:
        table.add_column(col, overflow="fold")
    for row in rows:
        table.add_row(*[str(row.get(col, "")) for col in columns])

    console.print(table)


def print_csv(rows: list[dict[str, Any]], columns: list[str] | None = None) -> None:
    """Print rows as CSV to stdout."""
    if not rows:
        return

    columns = columns or list(rows[0].keys())
    writer = csv.DictWriter(sys.stdout, fieldnames=columns, extrasaction="ignore", lineterminator="\n")
    writer.writeheader()
    for row in rows:
        writer.writerow({k: row.get(k, "") for k in columns})


def print_lines(rows: list[dict[str, Any]], columns: list[str] | None = None) -> None:
    """Print one key=value line per row to stdout."""
    for row in rows:
        keys = columns or list(row.keys())
        sys.stdout.write(" ".join(f"{k}={row.get(k, '')}" for k in keys) + "\n")
