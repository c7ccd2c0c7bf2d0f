"""Pure functions for parsing expense input.

The add-expense boundary accepts user-typed amounts such as "12,50" and
optional notes. Nothing here touches the ledger.
"""

import math

DEFAULT_NOTE = "Ausgabe"


def parse_amount(raw: object) -> float | None:
    """Parse an expense amount.

    Args:
        raw: Number or string. Strings are trimmed and a decimal comma is accepted.

    Returns:
        The amount as float, or None if it is not a finite number greater than zero.
    """
    if isinstance(raw, bool):
        return None
    if isinstance(raw, str):
        raw = raw.strip().replace(",", ".", 1)
    try:
        amount = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None
    if not math.isfinite(amount) or amount <= 0:
        return None
    return amount


def normalize_note(note: str | None) -> str:
    """Trim a note, falling back to the default placeholder when blank."""
    if note is None:
        return DEFAULT_NOTE
    return note.strip() or DEFAULT_NOTE


def coerce_budget(raw: object) -> float:
    """Coerce a starting budget, mapping non-finite or non-numeric input to 0.

    Negative budgets are allowed.
    """
    if isinstance(raw, bool):
        return 0.0
    if isinstance(raw, str):
        raw = raw.strip().replace(",", ".", 1)
        if not raw:
            return 0.0
    try:
        value = float(raw)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0
