"""Key-value query functions."""

import sqlite3
from pathlib import Path

from potbook.store.schema import get_db_path


def _connect(db_path: Path | None = None) -> sqlite3.Connection:
    """Create a database connection.

    Args:
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Database connection.
    """
    if db_path is None:
        db_path = get_db_path()
    return sqlite3.connect(db_path)


def get_value(key: str, db_path: Path | None = None) -> str | None:
    """Read a stored value.

    Args:
        key: Record key.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        Stored text, or None if the key is absent.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    conn = _connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute("SELECT value FROM kv WHERE key = ?", (key,))
        row = cursor.fetchone()
        return row[0] if row else None
    finally:
        conn.close()


def set_value(key: str, value: str, db_path: Path | None = None) -> None:
    """Insert or overwrite a stored value.

    Args:
        key: Record key.
        value: Text to store.
        db_path: Path to the database file. If None, uses default location.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    conn = _connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute(
            """
            INSERT INTO kv (key, value, updated_at) VALUES (?, ?, datetime('now'))
            ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
            """,
            (key, value),
        )
        conn.commit()
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()


def delete_value(key: str, db_path: Path | None = None) -> bool:
    """Remove a stored value.

    Args:
        key: Record key.
        db_path: Path to the database file. If None, uses default location.

    Returns:
        True if a record was removed.

    Raises:
        sqlite3.Error: If database operation fails.
    """
    conn = _connect(db_path)
    try:
        cursor = conn.cursor()
        cursor.execute("DELETE FROM kv WHERE key = ?", (key,))
        conn.commit()
        return cursor.rowcount > 0
    except sqlite3.Error:
        conn.rollback()
        raise
    finally:
        conn.close()
