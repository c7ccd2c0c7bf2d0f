"""CLI entry point for potbook."""

import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler

from potbook.commands.admin import export_command, import_command, init_command
from potbook.commands.budget import (
    month_command,
    pot_command,
    rename_command,
    reset_command,
    set_budget_command,
    status_command,
)
from potbook.commands.report import report_command
from potbook.commands.transactions import add_command, delete_command, list_command
from potbook.config import Settings, load_settings
from potbook.errors import PotbookError
from potbook.ledger import Ledger, open_ledger

app = typer.Typer(
    name="potbook",
    help="Potbook - monthly spending pots",
    add_completion=False,
)

err_console = Console(stderr=True)


@dataclass
class AppOptions:
    """Global options shared by all commands."""

    db_path: Path | None = None
    config_path: Path | None = None


def setup_logging(verbose: bool) -> None:
    """Route library logging through rich."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def open_app(ctx: typer.Context) -> tuple[Ledger, Settings]:
    """Open the ledger for a command, exiting with status 1 on failure."""
    options: AppOptions = ctx.obj or AppOptions()
    try:
        settings = load_settings(options.config_path)
        ledger = open_ledger(options.db_path, settings)
    except PotbookError as e:
        err_console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    return ledger, settings


@app.callback()
def main(
    ctx: typer.Context,
    db: Path = typer.Option(None, "--db", help="Database file (default: ~/.local/share/potbook/potbook.db)"),
    config: Path = typer.Option(None, "--config", help="Config file (default: ~/.config/potbook/config.toml)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Potbook - monthly spending pots."""
    setup_logging(verbose)
    ctx.obj = AppOptions(db_path=db, config_path=config)


@app.command(name="init")
def init(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing ledger and config"),
) -> None:
    """Initialize potbook database and configuration."""
    options: AppOptions = ctx.obj or AppOptions()
    try:
        settings = load_settings(options.config_path)
    except PotbookError as e:
        err_console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    init_command(force, options.db_path, options.config_path, settings.storage_key)


@app.command()
def status(ctx: typer.Context) -> None:
    """Show the active pot and this month's summary."""
    ledger, settings = open_app(ctx)
    status_command(ledger, settings.currency_symbol)


@app.command()
def pot(ctx: typer.Context, pot_id: str = typer.Argument(..., help="potA or potB")) -> None:
    """Switch the active pot."""
    ledger, settings = open_app(ctx)
    pot_command(ledger, pot_id, settings.currency_symbol)


@app.command()
def month(
    ctx: typer.Context,
    select: str = typer.Option(None, "--select", "-s", help="Switch to month (YYYY-MM)"),
    advance: bool = typer.Option(False, "--next", "-n", help="Create and switch to the next month"),
    list_months: bool = typer.Option(False, "--list", "-l", help="List all months"),
) -> None:
    """Switch months or create the next one."""
    ledger, settings = open_app(ctx)
    month_command(ledger, settings.currency_symbol, select, advance, list_months)


@app.command()
def add(
    ctx: typer.Context,
    amount: str = typer.Argument(..., help="Amount (e.g. 12.50 or 12,50)"),
    note: str = typer.Argument(None, help="What was it for?"),
    pot_id: str = typer.Option(None, "--pot", "-p", help="Pot (default: active pot)"),
) -> None:
    """Add an expense to the active month."""
    ledger, settings = open_app(ctx)
    add_command(ledger, amount, note, settings.currency_symbol, pot_id)


@app.command()
def delete(ctx: typer.Context, transaction_id: str = typer.Argument(..., help="Expense ID")) -> None:
    """Delete an expense from the active month."""
    ledger, _ = open_app(ctx)
    delete_command(ledger, transaction_id)


@app.command(name="list")
def list_expenses(ctx: typer.Context) -> None:
    """List the active pot's expenses, newest first."""
    ledger, settings = open_app(ctx)
    list_command(ledger, settings.currency_symbol)


@app.command()
def reset(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
    pot_id: str = typer.Option(None, "--pot", "-p", help="Pot (default: active pot)"),
    month: str = typer.Option(None, "--month", help="Month (YYYY-MM, default: active month)"),
) -> None:
    """Delete all expenses of a pot for a month."""
    ledger, _ = open_app(ctx)
    reset_command(ledger, yes, pot_id, month)


@app.command()
def rename(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="New pot name"),
    pot_id: str = typer.Option(None, "--pot", "-p", help="Pot (default: active pot)"),
    month: str = typer.Option(None, "--month", help="Month (YYYY-MM, default: active month)"),
) -> None:
    """Rename a pot for one month."""
    ledger, _ = open_app(ctx)
    rename_command(ledger, name, pot_id, month)


@app.command(name="set-budget")
def set_budget(
    ctx: typer.Context,
    value: str = typer.Argument(..., help="Starting budget"),
    pot_id: str = typer.Option(None, "--pot", "-p", help="Pot (default: active pot)"),
    month: str = typer.Option(None, "--month", help="Month (YYYY-MM, default: active month)"),
) -> None:
    """Set a pot's starting budget for one month."""
    ledger, settings = open_app(ctx)
    set_budget_command(ledger, value, settings.currency_symbol, pot_id, month)


@app.command()
def report(
    ctx: typer.Context,
    csv_path: str = typer.Option(None, "--csv", help="Also write the report as CSV"),
) -> None:
    """Show starting budget, spent and remaining per month and pot."""
    ledger, settings = open_app(ctx)
    report_command(ledger, settings.currency_symbol, csv_path)


@app.command(name="export")
def export(
    ctx: typer.Context,
    output: str = typer.Option(None, "--output", "-o", help="Backup file or directory (default: current directory)"),
) -> None:
    """Export the whole ledger as a JSON backup."""
    ledger, _ = open_app(ctx)
    export_command(ledger, output)


@app.command(name="import")
def import_(ctx: typer.Context, path: str = typer.Argument(..., help="JSON backup to import")) -> None:
    """Replace the ledger with a JSON backup."""
    ledger, _ = open_app(ctx)
    import_command(ledger, path)


if __name__ == "__main__":
    app()
