"""Pure functions for report rows and money formatting.

This module contains the functional core for reporting operations:
- No I/O operations (no database, no console, no files)
- No side effects
- Pure data transformations
"""

from collections.abc import Mapping
from dataclasses import dataclass

from potbook.domain.budget import compute_month_summary, display_pot_name
from potbook.domain.models import MonthData, MonthKey, PotId


@dataclass(frozen=True)
class MonthPotRow:
    """Immutable totals of one pot in one month."""

    month: MonthKey
    pot_id: PotId
    pot_name: str
    starting_budget: float
    spent: float
    remaining: float


def build_history(months: Mapping[MonthKey, MonthData]) -> list[MonthPotRow]:
    """Build one row per month and pot, months ascending.

    Args:
        months: All months of the ledger.

    Returns:
        List of MonthPotRow ordered by month, then pot id.
    """
    rows: list[MonthPotRow] = []
    for key in sorted(months):
        month = months[key]
        for pot_id, totals in compute_month_summary(month).items():
            rows.append(
                MonthPotRow(
                    month=key,
                    pot_id=pot_id,
                    pot_name=display_pot_name(month.pots[pot_id], pot_id),
                    starting_budget=totals.starting_budget,
                    spent=totals.spent,
                    remaining=totals.remaining,
                )
            )
    return rows


def format_money(value: float, symbol: str = "€") -> str:
    """Format an amount the German way (e.g., "1.234,50 €").

    Args:
        value: Amount in the display currency.
        symbol: Currency symbol appended after the number.

    Returns:
        Formatted string. Negative amounts keep their sign.
    """
    text = f"{value:,.2f}"
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{text} {symbol}"
