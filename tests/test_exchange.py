"""Tests for potbook.exchange backup export and import."""

import json
from datetime import date

import pytest

from potbook.domain.models import MonthKey
from potbook.errors import ImportMalformedError
from potbook.exchange import export_document, export_filename, import_document
from potbook.store.ledger_store import bootstrap_document


class TestExport:
    """Tests for export_document and export_filename."""

    def test_export_is_readable_json(self) -> None:
        document = bootstrap_document(current=MonthKey("2026-01"))

        payload = json.loads(export_document(document))

        assert payload["version"] == 1
        assert payload["activeMonth"] == "2026-01"
        assert payload["activePotId"] == "potA"
        assert payload["months"]["2026-01"]["pots"]["potA"] == {"name": "Topf A", "startingBudget": 300.0}
        assert payload["months"]["2026-01"]["transactions"] == []

    def test_filename_embeds_month_key(self) -> None:
        assert export_filename(date(2026, 3, 9)) == "budget-backup-2026-03.json"


class TestImport:
    """Tests for import_document."""

    def test_round_trip(self) -> None:
        document = bootstrap_document(current=MonthKey("2026-01"))

        assert import_document(export_document(document)) == document

    def test_accepts_text(self) -> None:
        document = bootstrap_document(current=MonthKey("2025-07"))

        assert import_document(export_document(document).decode("utf-8")) == document

    @pytest.mark.parametrize(
        "payload",
        [
            b"",
            b"\xff\xfe garbage",
            b"null",
            b'"months"',
            b'{"activePotId": "potA"}',
            b'{"months": []}',
        ],
    )
    def test_rejects_malformed(self, payload: bytes) -> None:
        with pytest.raises(ImportMalformedError):
            import_document(payload)
