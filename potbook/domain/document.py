"""Schema validation and migration for ledger documents.

Persisted records and imported backups share one JSON shape. Documents
written before versioning was introduced carry no "version" field and are
treated as version 1.

Functions return (result, error_message) tuples instead of raising, so the
store and the import gateway can decide how to report a rejected document.
"""

import math
from typing import Any

from potbook.dates import month_key, parse_month
from potbook.domain.models import (
    DOCUMENT_VERSION,
    POT_A,
    POT_IDS,
    LedgerDocument,
    MonthData,
    MonthKey,
    Pot,
    PotId,
    Transaction,
    TransactionId,
)
from potbook.domain.provisioning import latest_month_key


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def migrate_document(payload: dict[str, Any]) -> tuple[dict[str, Any] | None, str | None]:
    """Bring a raw document up to the current version.

    Args:
        payload: Decoded JSON object.

    Returns:
        Tuple of (migrated_payload, error_message).
    """
    version = payload.get("version", 1)
    if not isinstance(version, int) or isinstance(version, bool) or version < 1:
        return None, f"Invalid document version: {version!r}"
    if version > DOCUMENT_VERSION:
        return None, f"Unsupported document version {version} (newest supported is {DOCUMENT_VERSION})"
    # Version 1 is the current shape
    return payload, None


def parse_pot(raw: Any, where: str) -> tuple[Pot | None, str | None]:
    """Validate a pot record."""
    if not isinstance(raw, dict):
        return None, f"{where}: pot must be an object"
    name = raw.get("name", "")
    if not isinstance(name, str):
        return None, f"{where}: pot name must be a string"
    budget = raw.get("startingBudget", 0)
    if not _is_number(budget):
        return None, f"{where}: startingBudget must be a number"
    if not math.isfinite(budget):
        budget = 0.0
    return Pot(name=name, starting_budget=budget), None


def parse_transaction(raw: Any, where: str) -> tuple[Transaction | None, str | None]:
    """Validate a transaction record."""
    if not isinstance(raw, dict):
        return None, f"{where}: transaction must be an object"
    for key in ("id", "potId", "note", "dateISO"):
        if not isinstance(raw.get(key), str):
            return None, f"{where}: transaction field '{key}' must be a string"
    if raw["potId"] not in POT_IDS:
        return None, f"{where}: unknown pot '{raw['potId']}'"
    amount = raw.get("amount")
    if not _is_number(amount) or not math.isfinite(amount):
        return None, f"{where}: transaction amount must be a finite number"
    return (
        Transaction(
            id=TransactionId(raw["id"]),
            pot_id=PotId(raw["potId"]),
            amount=amount,
            note=raw["note"],
            date_iso=raw["dateISO"],
        ),
        None,
    )


def parse_month_data(raw: Any, key: str) -> tuple[MonthData | None, str | None]:
    """Validate the data of one month, including both fixed pots."""
    if not isinstance(raw, dict):
        return None, f"Month {key}: must be an object"
    raw_pots = raw.get("pots")
    if not isinstance(raw_pots, dict):
        return None, f"Month {key}: missing 'pots'"

    pots: dict[PotId, Pot] = {}
    for pot_id in POT_IDS:
        if pot_id not in raw_pots:
            return None, f"Month {key}: missing pot '{pot_id}'"
        pot, error = parse_pot(raw_pots[pot_id], f"Month {key}, pot {pot_id}")
        if error or pot is None:
            return None, error
        pots[pot_id] = pot

    raw_transactions = raw.get("transactions", [])
    if not isinstance(raw_transactions, list):
        return None, f"Month {key}: 'transactions' must be a list"

    transactions: list[Transaction] = []
    for index, raw_txn in enumerate(raw_transactions):
        txn, error = parse_transaction(raw_txn, f"Month {key}, transaction {index}")
        if error or txn is None:
            return None, error
        transactions.append(txn)

    return MonthData(pots=pots, transactions=transactions), None


def parse_document(payload: Any) -> tuple[LedgerDocument | None, str | None]:
    """Validate a decoded JSON value and build a LedgerDocument.

    Args:
        payload: Decoded JSON value.

    Returns:
        Tuple of (document, error_message). Exactly one of them is None.
    """
    if not isinstance(payload, dict):
        return None, "Document must be a JSON object"
    if "months" not in payload:
        return None, "Document has no 'months' field"

    migrated, error = migrate_document(payload)
    if error or migrated is None:
        return None, error

    raw_months = migrated["months"]
    if not isinstance(raw_months, dict):
        return None, "'months' must be an object"

    months: dict[MonthKey, MonthData] = {}
    for key, raw_month in raw_months.items():
        try:
            parse_month(MonthKey(key))
        except ValueError:
            return None, f"Invalid month key: {key!r}"
        month, error = parse_month_data(raw_month, key)
        if error or month is None:
            return None, error
        months[MonthKey(key)] = month

    active_month = migrated.get("activeMonth")
    if isinstance(active_month, str):
        try:
            parse_month(MonthKey(active_month))
        except ValueError:
            active_month = None
    else:
        active_month = None
    if active_month is None:
        active_month = latest_month_key(months) or month_key()

    active_pot_id = migrated.get("activePotId")
    if active_pot_id not in POT_IDS:
        active_pot_id = POT_A

    return LedgerDocument(active_month=MonthKey(active_month), active_pot_id=PotId(active_pot_id), months=months), None
