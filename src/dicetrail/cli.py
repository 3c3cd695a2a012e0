# src/dicetrail/cli.py
"""
dicetrail Command Line Interface (CLI).

This module implements the terminal interface using `typer` and `rich`. It
reads an explanation tree from a JSON file (see :mod:`dicetrail.core.codec`
for the shape) and prints it in one of several forms.

Features
--------
- **Text**: the one-line breakdown, e.g. ``3d6: 12  =  3 + 4 + 5 (d6)``.
- **Table**: flattened records rendered as a Rich table, indented by depth.
- **JSON**: flattened records for templates or other tools.
- **Depth**: minimum/maximum depth of further explanation.

Usage
-----
    $ dicetrail explain samples/attack.json
    $ dicetrail explain samples/attack.json --format table --order depth
    $ dicetrail depth samples/attack.json
"""

from __future__ import annotations

import json
import traceback
from enum import Enum
from pathlib import Path
from typing import Annotated

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dicetrail.core.codec import read_tree
from dicetrail.core.contracts.node import ExplanationNode
from dicetrail.core.errors import ExplanationError
from dicetrail.core.explain.depth import depth_range
from dicetrail.core.explain.flatten import FlatRecord, flatten
from dicetrail.core.explain.text import standard_text
from dicetrail.core.settings import get_logger, load_settings

# Ensure env vars (like LOG_LEVEL) are loaded before any logic runs
load_dotenv()

app = typer.Typer(
    help="dicetrail: explain how a dice result was calculated.",
    rich_markup_mode="markdown",
)
console = Console()
logger = get_logger(__name__)


class OutputFormat(str, Enum):
    text = "text"
    table = "table"
    json = "json"


class TraversalOrder(str, Enum):
    breadth = "breadth"
    depth = "depth"


# --------------------------------------------------------------------------- #
# Helpers
# --------------------------------------------------------------------------- #


def _load(file: Path, verbose: bool) -> ExplanationNode:
    """Read ``file`` into a tree, or print the problem and exit with code 1."""
    try:
        return read_tree(file)
    except (ExplanationError, ValidationError, json.JSONDecodeError) as e:
        console.print(f"[bold red]Invalid explanation:[/bold red] {escape(str(e))}")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(code=1) from e


def _render_table(records: list[FlatRecord], title: str) -> None:
    """Render flattened records as a Rich table."""
    table = Table(title=title)
    table.add_column("depth", justify="right")
    table.add_column("label")
    table.add_column("number", justify="right")
    table.add_column("cause")
    table.add_column("index", justify="right")
    table.add_column("position")
    table.add_column("parent")

    for rec in records:
        position = ",".join(k for k in ("first", "last", "only") if rec[k]) or "-"
        table.add_row(
            str(rec["depth"]),
            "  " * rec["depth"] + escape(str(rec["label"])),
            str(rec["number"]),
            str(rec["cause"]),
            str(rec["index"]),
            position,
            escape(str(rec.get("parent_label", ""))),
        )
    console.print(table)


# --------------------------------------------------------------------------- #
# Commands
# --------------------------------------------------------------------------- #


@app.command()  # type: ignore[misc]
def explain(
    file: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to a JSON explanation tree.",
        ),
    ],
    output_format: Annotated[
        OutputFormat,
        typer.Option("--format", "-f", help="Print as text, a table, or JSON records."),
    ] = OutputFormat.text,
    order: Annotated[
        TraversalOrder | None,
        typer.Option("--order", "-o", help="Record order for table/JSON output."),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
    ] = False,
) -> None:
    """
    Explain the number described by a JSON tree file.

    Text output always follows the breadth-first breakdown; `--order` only
    affects the table and JSON forms.
    """
    root = _load(file, verbose)

    if output_format is OutputFormat.text:
        typer.echo(standard_text(root))
        return

    chosen = order.value if order is not None else load_settings().default_order
    records = flatten(root, chosen)
    logger.debug("Explaining %s with %d %s-first records", file, len(records), chosen)

    if output_format is OutputFormat.json:
        typer.echo(json.dumps(records, indent=2))
    else:
        _render_table(records, title=f"{root.label} ({chosen}-first)")


@app.command()  # type: ignore[misc]
def depth(
    file: Annotated[
        Path,
        typer.Argument(
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
            help="Path to a JSON explanation tree.",
        ),
    ],
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show full error tracebacks for debugging."),
    ] = False,
) -> None:
    """Print the minimum and maximum depth of further explanation."""
    root = _load(file, verbose)
    low, high = depth_range(root)
    body = f"[bold]{escape(root.label)}[/bold] = {root.number}\n"
    console.print(
        Panel.fit(
            body + f"min depth: {low}\nmax depth: {high}",
            title="Depth",
            border_style="cyan",
        )
    )


if __name__ == "__main__":
    app()
