"""Transaction identifier generation."""

from collections.abc import Container
from uuid import uuid4

from potbook.domain.models import TransactionId


def new_id() -> TransactionId:
    """Return a random identifier (UUID4 string)."""
    return TransactionId(str(uuid4()))


def new_unique_id(existing: Container[str]) -> TransactionId:
    """Return an identifier that does not occur in existing.

    Args:
        existing: Identifiers already in use.

    Returns:
        A fresh identifier.
    """
    candidate = new_id()
    while candidate in existing:
        candidate = new_id()
    return candidate
