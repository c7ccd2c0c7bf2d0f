"""Expense commands (add, delete, list)."""

import sys

import pandas as pd
from rich.console import Console
from rich.table import Table

from potbook.dates import month_label
from potbook.domain.budget import display_pot_name
from potbook.domain.report import format_money
from potbook.errors import PotbookError
from potbook.ledger import Ledger

console = Console()


def format_timestamp(date_iso: str) -> str:
    """Render an ISO timestamp in local time (DD.MM.YYYY HH:MM)."""
    stamp = pd.to_datetime(date_iso, utc=True, errors="coerce")
    if pd.isna(stamp):
        return date_iso
    return stamp.to_pydatetime().astimezone().strftime("%d.%m.%Y %H:%M")


def add_command(ledger: Ledger, amount: str, note: str | None, symbol: str, pot_id: str | None = None) -> None:
    """Add an expense to the active month.

    Args:
        ledger: Open ledger.
        amount: Amount as typed (decimal comma accepted).
        note: Optional note.
        symbol: Currency symbol for display.
        pot_id: Target pot. If None, uses the active pot.
    """
    try:
        txn = ledger.add_expense(amount, note, pot_id=pot_id)
    except PotbookError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    totals = ledger.totals(pot_id=txn.pot_id)
    console.print(f"[green]✓[/green] Added {format_money(txn.amount, symbol)} '{txn.note}' [dim]({txn.id})[/dim]")
    style = "red" if totals.overspent else "green"
    console.print(f"Remaining: [{style}]{format_money(totals.remaining, symbol)}[/{style}]")


def delete_command(ledger: Ledger, transaction_id: str) -> None:
    """Delete an expense from the active month."""
    try:
        removed = ledger.remove_transaction(transaction_id)
    except PotbookError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    if removed:
        console.print(f"[green]✓[/green] Expense {transaction_id} deleted")
    else:
        console.print(f"[yellow]No expense {transaction_id} in this month[/yellow]")


def list_command(ledger: Ledger, symbol: str) -> None:
    """List the active pot's expenses, newest first."""
    try:
        transactions = ledger.active_transactions()
        pot = ledger.active_pot()
    except PotbookError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    document = ledger.document
    name = display_pot_name(pot, document.active_pot_id)

    if not transactions:
        console.print(f"[yellow]No expenses in {name} for {month_label(document.active_month)}[/yellow]")
        return

    table = Table(title=f"{name} · {month_label(document.active_month)} ({len(transactions)})")
    table.add_column("Date", style="cyan")
    table.add_column("Note", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("ID", style="dim")

    for txn in transactions:
        table.add_row(format_timestamp(txn.date_iso), txn.note, format_money(txn.amount, symbol), txn.id)

    console.print(table)
