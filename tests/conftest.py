"""Shared fixtures: temporary databases and a ledger with a fixed clock."""

from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

from potbook.ledger import Ledger
from potbook.store.ledger_store import LedgerStore


class FakeClock:
    """Clock that advances one minute per call, starting at a fixed instant."""

    def __init__(self, start: datetime) -> None:
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current += timedelta(minutes=1)
        return value


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    return tmp_path / "potbook.db"


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def make_ledger(db_path: Path, clock: FakeClock) -> Callable[[], Ledger]:
    """Open a fresh Ledger over the temporary database (reloads from disk each call)."""

    def factory() -> Ledger:
        return Ledger(LedgerStore(db_path=db_path), clock=clock)

    return factory


@pytest.fixture
def ledger(make_ledger: Callable[[], Ledger]) -> Ledger:
    return make_ledger()
