"""Domain models and types for potbook.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from potbook.domain.models import (
    POT_A,
    POT_B,
    POT_IDS,
    LedgerDocument,
    MonthData,
    MonthKey,
    Pot,
    PotId,
    Transaction,
    TransactionId,
)

__all__ = [
    "POT_A",
    "POT_B",
    "POT_IDS",
    "LedgerDocument",
    "MonthData",
    "MonthKey",
    "Pot",
    "PotId",
    "Transaction",
    "TransactionId",
]
