"""Ledger persistence: one JSON document under one key-value record."""

import json
import logging
import sqlite3
from collections.abc import Mapping
from pathlib import Path

from potbook.config import DEFAULT_STORAGE_KEY
from potbook.dates import month_key
from potbook.domain.document import parse_document
from potbook.domain.models import POT_A, POT_B, LedgerDocument, MonthKey, Pot, PotId
from potbook.domain.provisioning import default_month, default_pots
from potbook.errors import StorageCorruptError, StorageWriteError
from potbook.store.queries import get_value, set_value
from potbook.store.schema import get_db_path, init_database

logger = logging.getLogger(__name__)

DEFAULT_BUDGETS: dict[PotId, float] = {POT_A: 300.0, POT_B: 200.0}


def bootstrap_document(pots: Mapping[PotId, Pot] | None = None, current: MonthKey | None = None) -> LedgerDocument:
    """Build a fresh ledger with one month keyed by the current month.

    Args:
        pots: Pot configuration of the bootstrap month. If None, the built-in
            example pots are used.
        current: Month key of the bootstrap month. If None, uses the current month.

    Returns:
        New document with potA selected and no transactions.
    """
    key = current or month_key()
    month = default_month(pots or default_pots(DEFAULT_BUDGETS))
    return LedgerDocument(active_month=key, active_pot_id=POT_A, months={key: month})


def decode_document(raw: str) -> LedgerDocument:
    """Parse the persisted text form of a ledger.

    Raises:
        StorageCorruptError: If the text is not a valid ledger document.
    """
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageCorruptError(f"Stored ledger is not valid JSON: {e}") from e
    document, error = parse_document(payload)
    if error or document is None:
        raise StorageCorruptError(f"Stored ledger is invalid: {error}")
    return document


def encode_document(document: LedgerDocument) -> str:
    """Serialize a ledger to its persisted text form."""
    return json.dumps(document.to_dict(), ensure_ascii=False)


class LedgerStore:
    """Owns the live ledger document and keeps it synchronized with storage.

    The document is loaded once on construction. Every mutation made through
    potbook.ledger.Ledger is followed by save(), so no unsaved state survives
    a completed operation.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        key: str = DEFAULT_STORAGE_KEY,
        bootstrap_pots: Mapping[PotId, Pot] | None = None,
    ) -> None:
        self.db_path = db_path or get_db_path()
        self.key = key
        self.bootstrap_pots = dict(bootstrap_pots) if bootstrap_pots else None
        self._document = self.load()

    @property
    def document(self) -> LedgerDocument:
        return self._document

    def load(self) -> LedgerDocument:
        """Read the persisted ledger, falling back to a fresh one.

        A missing record or a corrupt one both yield the bootstrap document.
        Corruption is logged, not raised.
        """
        try:
            init_database(self.db_path)
            raw = get_value(self.key, self.db_path)
        except sqlite3.DatabaseError as e:
            logger.warning("Could not read ledger from %s (%s); starting fresh", self.db_path, e)
            raw = None
        else:
            if raw is not None:
                try:
                    return decode_document(raw)
                except StorageCorruptError as e:
                    logger.warning("%s; starting fresh", e)

        logger.debug("No usable ledger under key %r; creating bootstrap document", self.key)
        return bootstrap_document(self.bootstrap_pots)

    def save(self, document: LedgerDocument | None = None) -> None:
        """Write the full document.

        Args:
            document: Document to write. If None, writes the live document.

        Raises:
            StorageWriteError: If the backend rejects the write.
        """
        if document is None:
            document = self._document
        try:
            set_value(self.key, encode_document(document), self.db_path)
        except (sqlite3.Error, OSError) as e:
            logger.error("Failed to save ledger to %s: %s", self.db_path, e)
            raise StorageWriteError(f"Could not save ledger to {self.db_path}: {e}") from e

    def replace(self, document: LedgerDocument) -> None:
        """Substitute the live document wholesale, then save it."""
        self._document = document
        self.save()
