"""Ledger operations used by the presentation layer.

Ledger is the only way to change the document owned by a LedgerStore. Every
public method runs under one lock and persists before returning, so two
mutations never interleave and a finished call leaves memory and storage in
sync (unless the write itself fails, see StorageWriteError).
"""

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path

from potbook.config import Settings, load_settings
from potbook.dates import month_key, next_month, parse_month
from potbook.domain.budget import PotTotals, compute_month_summary, compute_pot_totals, transactions_for_pot
from potbook.domain.ids import new_unique_id
from potbook.domain.models import POT_IDS, LedgerDocument, MonthData, MonthKey, Pot, PotId, Transaction
from potbook.domain.provisioning import clone_month_template, provision_month
from potbook.domain.transactions import coerce_budget, normalize_note, parse_amount
from potbook.errors import ValidationError
from potbook.exchange import export_document, import_document
from potbook.store.ledger_store import LedgerStore

logger = logging.getLogger(__name__)


def _now() -> datetime:
    return datetime.now().astimezone()


def isoformat_utc(dt: datetime) -> str:
    """Return an ISO 8601 string with millisecond precision and a trailing Z."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    else:
        dt = dt.astimezone(timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def validate_pot_id(pot_id: str) -> PotId:
    """Check that pot_id is one of the fixed pots.

    Raises:
        ValidationError: If the pot id is unknown.
    """
    if pot_id not in POT_IDS:
        raise ValidationError(f"Unknown pot '{pot_id}'. Expected one of: {', '.join(POT_IDS)}")
    return PotId(pot_id)


def validate_month_key(key: str) -> MonthKey:
    """Check user-supplied month keys.

    Raises:
        ValidationError: If the key is not YYYY-MM.
    """
    try:
        parse_month(MonthKey(key))
    except ValueError as e:
        raise ValidationError(f"Invalid month '{key}'. Expected YYYY-MM") from e
    return MonthKey(key)


class Ledger:
    """Presentation-facing API over a LedgerStore."""

    def __init__(self, store: LedgerStore, clock: Callable[[], datetime] = _now) -> None:
        self._store = store
        self._clock = clock
        self._lock = threading.RLock()

    @property
    def document(self) -> LedgerDocument:
        return self._store.document

    # Provisioning -----------------------------------------------------------
    def ensure_month(self, key: MonthKey) -> MonthData:
        """Return the data of month key, creating it if needed.

        A new month copies the pots of the latest existing month (by calendar
        order) and starts with no transactions. Idempotent.

        Raises:
            ValueError: If key is not a valid month key.
        """
        parse_month(key)
        with self._lock:
            months = self.document.months
            existing = months.get(key)
            if existing is not None:
                return existing
            month = provision_month(months)
            months[key] = month
            logger.info("Provisioned month %s", key)
            self._store.save()
            return month

    # Selection --------------------------------------------------------------
    def select_pot(self, pot_id: str) -> PotId:
        with self._lock:
            valid = validate_pot_id(pot_id)
            self.document.active_pot_id = valid
            self._store.save()
            return valid

    def select_month(self, key: str) -> MonthKey:
        """Make key the active month, provisioning it if needed."""
        with self._lock:
            valid = validate_month_key(key)
            self.ensure_month(valid)
            self.document.active_month = valid
            self._store.save()
            return valid

    def create_next_month(self) -> MonthKey:
        """Advance to the month after the active one.

        If it does not exist yet it is cloned from the active month's pots.
        """
        with self._lock:
            current = self.active_month_data()
            try:
                following = next_month(self.document.active_month)
            except ValueError as e:
                raise ValidationError(str(e)) from e
            if following not in self.document.months:
                self.document.months[following] = clone_month_template(current)
                logger.info("Created month %s from %s", following, self.document.active_month)
            self.document.active_month = following
            self._store.save()
            return following

    def month_keys(self) -> list[MonthKey]:
        """List all months ascending, ensuring the current month exists."""
        with self._lock:
            self.ensure_month(month_key(self._clock()))
            return sorted(self.document.months)

    # Queries ----------------------------------------------------------------
    def active_month_data(self) -> MonthData:
        with self._lock:
            return self.ensure_month(self.document.active_month)

    def active_pot(self) -> Pot:
        with self._lock:
            return self.active_month_data().pots[self.document.active_pot_id]

    def active_transactions(self) -> list[Transaction]:
        """Transactions of the active pot in the active month, newest first."""
        with self._lock:
            return transactions_for_pot(self.active_month_data(), self.document.active_pot_id)

    def totals(self, pot_id: str | None = None, key: str | None = None) -> PotTotals:
        with self._lock:
            month = self._month_for(key)
            return compute_pot_totals(month, self._pot_for(pot_id))

    def month_summary(self, key: str | None = None) -> dict[PotId, PotTotals]:
        with self._lock:
            return compute_month_summary(self._month_for(key))

    # Transactions -----------------------------------------------------------
    def add_expense(self, amount: object, note: str | None = None, pot_id: str | None = None) -> Transaction:
        """Book an expense in the active month.

        Args:
            amount: Number or user string ("12,50" accepted); must be > 0.
            note: Free text; blank becomes the default note.
            pot_id: Target pot. If None, uses the active pot.

        Returns:
            The new transaction.

        Raises:
            ValidationError: If the amount is not a finite number > 0 or the pot is unknown.
        """
        with self._lock:
            parsed = parse_amount(amount)
            if parsed is None:
                raise ValidationError("Please enter an amount greater than 0")
            target = self._pot_for(pot_id)
            month = self.active_month_data()
            txn = Transaction(
                id=new_unique_id({t.id for m in self.document.months.values() for t in m.transactions}),
                pot_id=target,
                amount=parsed,
                note=normalize_note(note),
                date_iso=isoformat_utc(self._clock()),
            )
            month.transactions.append(txn)
            self._store.save()
            return txn

    def remove_transaction(self, transaction_id: str) -> bool:
        """Delete a transaction from the active month.

        Returns:
            True if it was removed, False if no such transaction exists.
        """
        with self._lock:
            month = self.active_month_data()
            remaining = [txn for txn in month.transactions if txn.id != transaction_id]
            removed = len(remaining) != len(month.transactions)
            month.transactions = remaining
            self._store.save()
            return removed

    def reset_pot(self, key: str | None = None, pot_id: str | None = None) -> int:
        """Delete every transaction of a pot in a month.

        Confirmation is up to the caller; this deletes unconditionally.

        Returns:
            Number of transactions removed.
        """
        with self._lock:
            month = self._month_for(key)
            target = self._pot_for(pot_id)
            remaining = [txn for txn in month.transactions if txn.pot_id != target]
            removed = len(month.transactions) - len(remaining)
            month.transactions = remaining
            self._store.save()
            logger.info("Reset pot %s: removed %d transactions", target, removed)
            return removed

    # Pot configuration ------------------------------------------------------
    def rename_pot(self, name: str, key: str | None = None, pot_id: str | None = None) -> Pot:
        """Rename a pot in one month only. Empty names are stored as given."""
        with self._lock:
            pot = self._month_for(key).pots[self._pot_for(pot_id)]
            pot.name = name
            self._store.save()
            return pot

    def set_starting_budget(self, value: object, key: str | None = None, pot_id: str | None = None) -> Pot:
        """Set a pot's starting budget in one month only.

        Non-finite or non-numeric values become 0. Past months may be edited.
        """
        with self._lock:
            pot = self._month_for(key).pots[self._pot_for(pot_id)]
            pot.starting_budget = coerce_budget(value)
            self._store.save()
            return pot

    # Import / export --------------------------------------------------------
    def export_bytes(self) -> bytes:
        with self._lock:
            return export_document(self.document)

    def import_bytes(self, payload: bytes | str) -> LedgerDocument:
        """Replace the whole ledger with an exported one.

        Raises:
            ImportMalformedError: If the payload is rejected. Nothing changes then.
        """
        with self._lock:
            document = import_document(payload)
            self._store.replace(document)
            logger.info("Imported ledger with %d months", len(document.months))
            return document

    # Internal helpers -------------------------------------------------------
    def _month_for(self, key: str | None) -> MonthData:
        if key is None:
            return self.active_month_data()
        return self.ensure_month(validate_month_key(key))

    def _pot_for(self, pot_id: str | None) -> PotId:
        if pot_id is None:
            return self.document.active_pot_id
        return validate_pot_id(pot_id)


def open_ledger(db_path: Path | None = None, settings: Settings | None = None) -> Ledger:
    """Load the persisted ledger and make sure the active month exists.

    Args:
        db_path: Database file. If None, uses default location.
        settings: Resolved configuration. If None, loads it from the default location.

    Returns:
        Ledger ready for use.

    Raises:
        StorageWriteError: If the initial save fails.
    """
    if settings is None:
        settings = load_settings()
    store = LedgerStore(db_path=db_path, key=settings.storage_key, bootstrap_pots=settings.bootstrap_pots())
    ledger = Ledger(store)
    ledger.active_month_data()
    store.save()
    return ledger
