"""Backup export and import of the whole ledger document."""

import json
from datetime import date

from potbook.dates import month_key
from potbook.domain.document import parse_document
from potbook.domain.models import LedgerDocument
from potbook.errors import ImportMalformedError


def export_document(document: LedgerDocument) -> bytes:
    """Serialize the full ledger to pretty-printed UTF-8 JSON.

    The shape is the same as the persisted record.
    """
    return json.dumps(document.to_dict(), indent=2, ensure_ascii=False).encode("utf-8")


def export_filename(when: date | None = None) -> str:
    """Suggest a backup filename embedding the current month key."""
    return f"budget-backup-{month_key(when)}.json"


def import_document(payload: bytes | str) -> LedgerDocument:
    """Parse and validate an exported ledger.

    Args:
        payload: File contents.

    Returns:
        The imported document.

    Raises:
        ImportMalformedError: If the payload is not JSON or not a ledger document.
    """
    try:
        if isinstance(payload, bytes):
            payload = payload.decode("utf-8")
        data = json.loads(payload)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ImportMalformedError(f"Import file is not valid JSON: {e}") from e

    document, error = parse_document(data)
    if error or document is None:
        raise ImportMalformedError(f"Import file does not look like a valid backup: {error}")
    return document
