"""Store layer - provides persistence for the application.

This module re-exports the public store functions for easy importing.
"""

from potbook.store.ledger_store import LedgerStore, bootstrap_document, decode_document, encode_document
from potbook.store.queries import delete_value, get_value, set_value
from potbook.store.schema import database_exists, get_db_path, init_database

__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Queries
    "delete_value",
    "get_value",
    "set_value",
    # Ledger
    "LedgerStore",
    "bootstrap_document",
    "decode_document",
    "encode_document",
]
