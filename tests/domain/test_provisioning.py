"""Tests for potbook.domain.provisioning pure functions."""

from potbook.domain.models import POT_A, POT_B, MonthData, MonthKey, Pot, Transaction, TransactionId
from potbook.domain.provisioning import (
    clone_month_template,
    default_month,
    default_pots,
    latest_month_key,
    provision_month,
)


def month(budget_a: float, budget_b: float, name_a: str = "Topf A") -> MonthData:
    return MonthData(
        pots={POT_A: Pot(name_a, budget_a), POT_B: Pot("Topf B", budget_b)},
        transactions=[
            Transaction(
                id=TransactionId("t1"),
                pot_id=POT_A,
                amount=5,
                note="Kaffee",
                date_iso="2026-01-02T09:00:00.000Z",
            )
        ],
    )


class TestCloneMonthTemplate:
    """Tests for clone_month_template."""

    def test_copies_pots_without_transactions(self) -> None:
        """Should keep names and budgets but drop spending."""
        template = month(300, 200, name_a="Food")

        clone = clone_month_template(template)

        assert clone.pots == template.pots
        assert clone.transactions == []

    def test_clone_is_independent(self) -> None:
        """Should deep copy pots so later edits do not cascade."""
        template = month(300, 200)

        clone = clone_month_template(template)
        clone.pots[POT_A].starting_budget = 999

        assert template.pots[POT_A].starting_budget == 300


class TestLatestMonthKey:
    """Tests for latest_month_key."""

    def test_empty(self) -> None:
        assert latest_month_key({}) is None

    def test_uses_calendar_order_not_insertion_order(self) -> None:
        """Should pick the chronologically latest key."""
        months = {
            MonthKey("2026-05"): month(1, 1),
            MonthKey("2025-12"): month(2, 2),
            MonthKey("2026-02"): month(3, 3),
        }

        assert latest_month_key(months) == "2026-05"


class TestProvisionMonth:
    """Tests for provision_month."""

    def test_clones_latest_existing_month(self) -> None:
        """Should copy pots from the latest month when creating 2026-03 after 2026-01."""
        months = {MonthKey("2026-01"): month(300, 200)}

        created = provision_month(months)

        assert created.pots[POT_A] == Pot("Topf A", 300)
        assert created.pots[POT_B] == Pot("Topf B", 200)
        assert created.transactions == []

    def test_future_month_inserted_first_is_template(self) -> None:
        """Should use the latest by calendar order even if it was created before earlier months."""
        months = {MonthKey("2026-06"): month(600, 60), MonthKey("2026-01"): month(100, 10)}

        created = provision_month(months)

        assert created.pots[POT_A].starting_budget == 600

    def test_empty_months_use_zero_defaults(self) -> None:
        """Should fall back to built-in pots with zero budgets."""
        created = provision_month({})

        assert created.pots == {POT_A: Pot("Topf A", 0.0), POT_B: Pot("Topf B", 0.0)}
        assert created.transactions == []


class TestDefaultMonth:
    """Tests for default_month."""

    def test_given_pots_are_copied(self) -> None:
        pots = {POT_A: Pot("A", 1), POT_B: Pot("B", 2)}

        created = default_month(pots)
        pots[POT_A].name = "changed"

        assert created.pots[POT_A].name == "A"


class TestDefaultPots:
    """Tests for default_pots."""

    def test_missing_budgets_start_at_zero(self) -> None:
        """Should label both pots and default absent budgets to 0."""
        pots = default_pots({POT_A: 50})

        assert pots == {POT_A: Pot("Topf A", 50.0), POT_B: Pot("Topf B", 0.0)}
