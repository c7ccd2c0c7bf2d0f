"""Domain types and record schemas for potbook.

The NewTypes provide semantic clarity:
- MonthKey: Month in YYYY-MM format
- PotId: One of the two fixed pot ids ("potA", "potB")
- TransactionId: Opaque transaction identifier

The records mirror the persisted JSON document. Amounts are plain floats in the
display currency, exactly as they appear in backups.
"""

import copy
from dataclasses import dataclass, field
from typing import Any, NewType

# Month is always in YYYY-MM format (e.g., "2026-01")
MonthKey = NewType("MonthKey", str)

PotId = NewType("PotId", str)

TransactionId = NewType("TransactionId", str)

POT_A = PotId("potA")
POT_B = PotId("potB")
POT_IDS: tuple[PotId, PotId] = (POT_A, POT_B)

DEFAULT_POT_LABELS: dict[PotId, str] = {POT_A: "Topf A", POT_B: "Topf B"}

DOCUMENT_VERSION = 1


@dataclass
class Pot:
    """A named spending envelope with its monthly starting budget."""

    name: str
    starting_budget: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "startingBudget": self.starting_budget}


@dataclass(frozen=True)
class Transaction:
    """Immutable expense booked against one pot."""

    id: TransactionId
    pot_id: PotId
    amount: float
    note: str
    date_iso: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "potId": self.pot_id,
            "amount": self.amount,
            "note": self.note,
            "dateISO": self.date_iso,
        }


@dataclass
class MonthData:
    """Pot configuration and expenses of one calendar month."""

    pots: dict[PotId, Pot]
    transactions: list[Transaction] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "pots": {pot_id: pot.to_dict() for pot_id, pot in self.pots.items()},
            "transactions": [txn.to_dict() for txn in self.transactions],
        }


@dataclass
class LedgerDocument:
    """The complete persisted state: months plus the current selection."""

    active_month: MonthKey
    active_pot_id: PotId
    months: dict[MonthKey, MonthData] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": DOCUMENT_VERSION,
            "activePotId": self.active_pot_id,
            "activeMonth": self.active_month,
            "months": {key: month.to_dict() for key, month in self.months.items()},
        }

    def copy(self) -> "LedgerDocument":
        return copy.deepcopy(self)
