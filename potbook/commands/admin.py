"""Admin commands for init, export and import."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from potbook.config import create_default_config, get_config_path
from potbook.dates import month_label
from potbook.errors import ImportMalformedError, PotbookError
from potbook.exchange import export_filename
from potbook.ledger import Ledger
from potbook.store.queries import delete_value
from potbook.store.schema import database_exists, get_db_path, init_database

console = Console()


def init_command(
    force: bool = False,
    db_path: Path | None = None,
    config_path: Path | None = None,
    storage_key: str | None = None,
) -> None:
    """Initialize potbook database and configuration.

    With force, an existing ledger record is wiped and the config rewritten.
    """
    db_path = db_path or get_db_path()
    config_path = config_path or get_config_path()

    db_exists = database_exists(db_path)
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'potbook init --force' to overwrite[/yellow]")
            sys.exit(1)

        console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
        init_database(db_path)
        if force and storage_key:
            delete_value(storage_key, db_path)
        console.print("[green]✓[/green] Database initialized")

        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")

        console.print("\n[green]Initialization complete![/green]", style="bold")
        console.print(f"[dim]Database: {db_path}[/dim]")
        console.print(f"[dim]Config: {config_path}[/dim]")

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def export_command(ledger: Ledger, output: str | None = None) -> None:
    """Write a JSON backup of the whole ledger.

    Args:
        ledger: Open ledger.
        output: Target file or directory. Defaults to the current directory
            with a budget-backup-YYYY-MM.json filename.
    """
    target = Path(output).expanduser() if output else Path.cwd()
    if target.is_dir():
        target = target / export_filename()

    try:
        target.write_bytes(ledger.export_bytes())
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Backup written to: {target}")


def import_command(ledger: Ledger, path: str) -> None:
    """Replace the ledger with the contents of a JSON backup."""
    source = Path(path).expanduser()
    try:
        payload = source.read_bytes()
    except OSError as e:
        console.print(f"[red]Could not read {source}: {e}[/red]", style="bold")
        sys.exit(1)

    try:
        document = ledger.import_bytes(payload)
    except ImportMalformedError as e:
        console.print(f"[red]❌ Import failed. {e}[/red]", style="bold")
        sys.exit(1)
    except PotbookError as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✅ Import successful![/green] {len(document.months)} month(s)")
    console.print(f"[dim]Active month: {month_label(document.active_month)}[/dim]")
