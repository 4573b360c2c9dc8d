"""Shared fixtures: a controllable clock and pre-wired ledger components."""

import pytest

from fincalc.audit import AuditLogger
from fincalc.config import get_settings
from fincalc.orchestrator import LedgerSession, LedgerStore
from fincalc.services.storage import InMemoryAuditStorage, InMemoryTransactionStorage
from fincalc.validation import TransactionValidator
from tests.helpers import FrozenClock


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Isolate every test from FINCALC_* variables and the settings cache."""
    for name in ("FINCALC_DEFAULT_PERIOD", "FINCALC_LOCALE", "FINCALC_CURRENCY",
                 "FINCALC_LARGE_AMOUNT_WARNING", "FINCALC_LOG_LEVEL",
                 "FINCALC_LOG_JSON_OUTPUT"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def clock():
    return FrozenClock()


@pytest.fixture
def audit_storage():
    return InMemoryAuditStorage()


@pytest.fixture
def audit_logger(audit_storage):
    return AuditLogger(audit_storage)


@pytest.fixture
def store(clock, audit_logger):
    return LedgerStore(
        storage=InMemoryTransactionStorage(),
        validator=TransactionValidator(),
        audit_logger=audit_logger,
        clock=clock,
    )


@pytest.fixture
def session(store, clock, audit_logger):
    return LedgerSession(store, period="month", locale="en", audit_logger=audit_logger, clock=clock)
