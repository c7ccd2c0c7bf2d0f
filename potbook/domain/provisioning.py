"""Pure functions for provisioning month data.

A new month copies the pot configuration (names and starting budgets) of a
template month but never its transactions. This is how recurring monthly
budgets roll over without carrying forward prior spending.
"""

from collections.abc import Mapping

from potbook.domain.models import (
    DEFAULT_POT_LABELS,
    POT_IDS,
    MonthData,
    MonthKey,
    Pot,
    PotId,
)


def default_pots(budgets: Mapping[PotId, float] | None = None) -> dict[PotId, Pot]:
    """Build the built-in pot configuration.

    Args:
        budgets: Starting budget per pot. Missing pots start at zero.

    Returns:
        Dictionary with both fixed pots.
    """
    budgets = budgets or {}
    return {
        pot_id: Pot(name=DEFAULT_POT_LABELS[pot_id], starting_budget=float(budgets.get(pot_id, 0)))
        for pot_id in POT_IDS
    }


def default_month(pots: Mapping[PotId, Pot] | None = None) -> MonthData:
    """Build a month from the given pots (zero budgets if None)."""
    return clone_month_template(MonthData(pots=dict(pots) if pots else default_pots()))


def clone_month_template(template: MonthData) -> MonthData:
    """Copy the pots of template into a new month with no transactions."""
    return MonthData(
        pots={pot_id: Pot(name=pot.name, starting_budget=pot.starting_budget) for pot_id, pot in template.pots.items()},
        transactions=[],
    )


def latest_month_key(months: Mapping[MonthKey, MonthData]) -> MonthKey | None:
    """Return the chronologically latest month key, or None if there are none.

    Zero-padded YYYY-MM keys sort chronologically as strings.
    """
    if not months:
        return None
    return max(months)


def provision_month(months: Mapping[MonthKey, MonthData]) -> MonthData:
    """Create month data for a month that does not exist yet.

    Args:
        months: Existing months.

    Returns:
        New MonthData cloned from the latest existing month by calendar order
        (not insertion order), with an empty transaction list. With no
        months at all, the built-in pots with zero budgets are used.
    """
    latest = latest_month_key(months)
    if latest is not None:
        return clone_month_template(months[latest])
    return default_month()
