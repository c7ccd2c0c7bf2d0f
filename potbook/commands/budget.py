"""Pot and month commands: status, selection, renaming, budgets and resets."""

import sys

import typer
from rich.console import Console
from rich.table import Table

from potbook.dates import month_label
from potbook.domain.budget import display_pot_name
from potbook.domain.report import format_money
from potbook.errors import PotbookError
from potbook.ledger import Ledger, validate_month_key, validate_pot_id

console = Console()


def fail(error: PotbookError) -> None:
    """Print an error and exit with status 1."""
    console.print(f"[red]{error}[/red]", style="bold")
    sys.exit(1)


def render_status(ledger: Ledger, symbol: str) -> None:
    """Print the active pot and the month summary."""
    document = ledger.document
    month = ledger.active_month_data()
    pot_id = document.active_pot_id
    totals = ledger.totals()

    name = display_pot_name(month.pots[pot_id], pot_id)
    remaining_style = "red" if totals.overspent else "green"
    console.print(f"\n[bold]{name}[/bold] [dim]({pot_id}) · {month_label(document.active_month)}[/dim]")
    console.print(f"Remaining: [{remaining_style}]{format_money(totals.remaining, symbol)}[/{remaining_style}]")
    console.print(f"[dim]Spent: {format_money(totals.spent, symbol)}[/dim]\n")

    table = Table(title=f"Summary {month_label(document.active_month)}")
    table.add_column("Pot", style="cyan")
    table.add_column("Start", justify="right")
    table.add_column("Spent", justify="right")
    table.add_column("Remaining", justify="right")

    for summary_pot_id, summary in ledger.month_summary().items():
        marker = " [yellow]●[/yellow]" if summary_pot_id == pot_id else ""
        remaining = format_money(summary.remaining, symbol)
        if summary.overspent:
            remaining = f"[red]{remaining}[/red]"
        table.add_row(
            f"{display_pot_name(month.pots[summary_pot_id], summary_pot_id)}{marker}",
            format_money(summary.starting_budget, symbol),
            format_money(summary.spent, symbol),
            remaining,
        )

    console.print(table)


def status_command(ledger: Ledger, symbol: str) -> None:
    """Show the active pot and month summary."""
    try:
        render_status(ledger, symbol)
    except PotbookError as e:
        fail(e)


def pot_command(ledger: Ledger, pot_id: str, symbol: str) -> None:
    """Switch the active pot."""
    try:
        ledger.select_pot(pot_id)
        render_status(ledger, symbol)
    except PotbookError as e:
        fail(e)


def month_command(
    ledger: Ledger,
    symbol: str,
    select: str | None = None,
    advance: bool = False,
    list_months: bool = False,
) -> None:
    """Select a month, advance to the next one, or list months."""
    try:
        if select and advance:
            console.print("[red]Use either --select or --next, not both[/red]")
            sys.exit(1)

        if select:
            key = ledger.select_month(select)
            console.print(f"[green]✓[/green] Switched to {month_label(key)}")
        elif advance:
            key = ledger.create_next_month()
            console.print(f"[green]✓[/green] Now on {month_label(key)}")

        if list_months:
            for key in ledger.month_keys():
                marker = "[yellow]●[/yellow]" if key == ledger.document.active_month else " "
                console.print(f"{marker} {key}  [dim]{month_label(key)}[/dim]")
            return

        render_status(ledger, symbol)
    except PotbookError as e:
        fail(e)


def rename_command(ledger: Ledger, name: str, pot_id: str | None = None, month: str | None = None) -> None:
    """Rename a pot in one month."""
    try:
        pot = ledger.rename_pot(name, key=month, pot_id=pot_id)
        target = pot_id or ledger.document.active_pot_id
        console.print(f"[green]✓[/green] {target} is now called '{display_pot_name(pot, target)}'")
    except PotbookError as e:
        fail(e)


def set_budget_command(
    ledger: Ledger,
    value: str,
    symbol: str,
    pot_id: str | None = None,
    month: str | None = None,
) -> None:
    """Set the starting budget of a pot in one month."""
    try:
        pot = ledger.set_starting_budget(value, key=month, pot_id=pot_id)
        console.print(f"[green]✓[/green] Starting budget set to {format_money(pot.starting_budget, symbol)}")
    except PotbookError as e:
        fail(e)


def reset_command(ledger: Ledger, yes: bool = False, pot_id: str | None = None, month: str | None = None) -> None:
    """Delete all expenses of a pot in a month after confirmation."""
    try:
        target = validate_pot_id(pot_id) if pot_id else ledger.document.active_pot_id
        key = validate_month_key(month) if month else ledger.document.active_month
        name = display_pot_name(ledger.ensure_month(key).pots[target], target)

        if not yes and not typer.confirm(f"Really delete all expenses in '{name}' for {month_label(key)}?"):
            console.print("[dim]Cancelled[/dim]")
            return

        removed = ledger.reset_pot(key=key, pot_id=target)
        console.print(f"[green]✓[/green] Removed {removed} expense(s) from {name}")
    except PotbookError as e:
        fail(e)
