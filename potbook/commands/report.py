"""History report: per-month, per-pot totals."""

import sys
from dataclasses import asdict
from pathlib import Path

import pandas as pd
from rich.console import Console
from rich.table import Table

from potbook.dates import month_label
from potbook.domain.report import build_history, format_money
from potbook.errors import PotbookError
from potbook.ledger import Ledger

console = Console()

COLUMNS = ["month", "pot_id", "pot_name", "starting_budget", "spent", "remaining"]


def history_frame(ledger: Ledger) -> pd.DataFrame:
    """Build a DataFrame with one row per month and pot."""
    rows = build_history(ledger.document.months)
    return pd.DataFrame([asdict(row) for row in rows], columns=COLUMNS)


def report_command(ledger: Ledger, symbol: str, csv_path: str | None = None) -> None:
    """Show starting budget, spent and remaining for every month and pot.

    Args:
        ledger: Open ledger.
        symbol: Currency symbol for display.
        csv_path: If given, also write the table as CSV to this path.
    """
    try:
        ledger.month_keys()
        frame = history_frame(ledger)
    except PotbookError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    if csv_path:
        output = Path(csv_path).expanduser()
        try:
            frame.to_csv(output, index=False)
        except OSError as e:
            console.print(f"[red]Could not write {output}: {e}[/red]", style="bold")
            sys.exit(1)
        console.print(f"[green]✓[/green] Report written to: {output}")

    table = Table(title="Monthly history")
    table.add_column("Month", style="cyan")
    table.add_column("Pot", style="magenta")
    table.add_column("Start", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")

    for record in frame.itertuples(index=False):
        remaining = format_money(record.remaining, symbol)
        if record.remaining < 0:
            remaining = f"[red]{remaining}[/red]"
        table.add_row(
            month_label(record.month),
            record.pot_name,
            format_money(record.starting_budget, symbol),
            format_money(record.spent, symbol),
            remaining,
        )

    console.print(table)

    spent_by_month = frame.groupby("month", sort=True)["spent"].sum()
    if not spent_by_month.empty:
        console.print(f"[dim]Average spent per month: {format_money(float(spent_by_month.mean()), symbol)}[/dim]")
