"""Pure functions for pot totals.

This module contains the functional core for budget calculations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
"""

import math
from dataclasses import dataclass

from potbook.domain.models import DEFAULT_POT_LABELS, POT_IDS, MonthData, Pot, PotId, Transaction


@dataclass(frozen=True)
class PotTotals:
    """Immutable totals for one pot in one month."""

    starting_budget: float
    spent: float
    remaining: float  # Negative when overspent

    @property
    def overspent(self) -> bool:
        return self.remaining < 0


def calculate_spent(transactions: list[Transaction], pot_id: PotId) -> float:
    """Sum the amounts booked against a pot.

    Args:
        transactions: Transactions of a month, in any order. The sum is
            correctly rounded, so the order never changes the result.
        pot_id: Pot to sum.

    Returns:
        Total spent (0 if there are no matching transactions).
    """
    return math.fsum(float(txn.amount) for txn in transactions if txn.pot_id == pot_id)


def compute_pot_totals(month: MonthData, pot_id: PotId) -> PotTotals:
    """Compute starting budget, spent and remaining for a pot.

    Args:
        month: Month data.
        pot_id: Pot to compute.

    Returns:
        PotTotals where remaining = starting_budget - spent.
    """
    starting_budget = float(month.pots[pot_id].starting_budget)
    spent = calculate_spent(month.transactions, pot_id)
    return PotTotals(starting_budget=starting_budget, spent=spent, remaining=starting_budget - spent)


def compute_month_summary(month: MonthData) -> dict[PotId, PotTotals]:
    """Compute totals for both pots of a month."""
    return {pot_id: compute_pot_totals(month, pot_id) for pot_id in POT_IDS}


def transactions_for_pot(month: MonthData, pot_id: PotId) -> list[Transaction]:
    """Return the transactions of a pot, newest first.

    Display order is derived here on every call; storage order carries no meaning.
    """
    matching = [txn for txn in month.transactions if txn.pot_id == pot_id]
    return sorted(matching, key=lambda txn: txn.date_iso, reverse=True)


def display_pot_name(pot: Pot, pot_id: PotId) -> str:
    """Return the pot name, or its default label when the name is blank."""
    return pot.name.strip() or DEFAULT_POT_LABELS[pot_id]
