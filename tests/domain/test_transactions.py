"""Tests for potbook.domain.transactions and potbook.domain.ids."""

import pytest

from potbook.domain.ids import new_id, new_unique_id
from potbook.domain.transactions import DEFAULT_NOTE, coerce_budget, normalize_note, parse_amount


class TestParseAmount:
    """Tests for parse_amount."""

    def test_float(self) -> None:
        assert parse_amount(12.50) == 12.5

    def test_string_with_decimal_point(self) -> None:
        assert parse_amount(" 12.50 ") == 12.5

    def test_string_with_decimal_comma(self) -> None:
        """Should accept the German decimal comma."""
        assert parse_amount("12,50") == 12.5

    @pytest.mark.parametrize("raw", [0, -5, "0", "-5", "", "abc", None, "nan", "inf", float("inf"), True])
    def test_rejects_invalid_amounts(self, raw: object) -> None:
        """Should reject zero, negative, non-numeric and non-finite amounts."""
        assert parse_amount(raw) is None


class TestNormalizeNote:
    """Tests for normalize_note."""

    def test_trims(self) -> None:
        assert normalize_note("  Kaffee ") == "Kaffee"

    @pytest.mark.parametrize("note", [None, "", "   "])
    def test_blank_uses_placeholder(self, note: str | None) -> None:
        assert normalize_note(note) == DEFAULT_NOTE


class TestCoerceBudget:
    """Tests for coerce_budget."""

    def test_number(self) -> None:
        assert coerce_budget(250) == 250.0

    def test_negative_allowed(self) -> None:
        assert coerce_budget("-20") == -20.0

    def test_decimal_comma(self) -> None:
        assert coerce_budget("99,90") == 99.9

    @pytest.mark.parametrize("raw", ["", "abc", None, float("nan"), float("inf"), "inf"])
    def test_invalid_becomes_zero(self, raw: object) -> None:
        """Should coerce invalid values to zero instead of rejecting them."""
        assert coerce_budget(raw) == 0.0


class TestIds:
    """Tests for identifier generation."""

    def test_ids_are_distinct(self) -> None:
        assert len({new_id() for _ in range(1000)}) == 1000

    def test_unique_id_avoids_existing(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should draw again when the first candidate collides."""
        candidates = iter(["taken", "taken", "fresh"])
        monkeypatch.setattr("potbook.domain.ids.new_id", lambda: next(candidates))

        assert new_unique_id({"taken"}) == "fresh"
