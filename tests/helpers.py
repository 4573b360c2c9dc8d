"""Builders shared by the test modules."""

from datetime import datetime, timedelta, timezone

from fincalc.models import TransactionCandidate, TransactionType


NOW = datetime(2024, 12, 15, 12, 0, tzinfo=timezone.utc)


class FrozenClock:
    """Callable time source that only moves when told to."""

    def __init__(self, now: datetime = NOW):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


def income(title="Salary", amount="50000", category="Salary", **kwargs):
    return TransactionCandidate(
        title=title, amount=amount, type=TransactionType.INCOME, category=category, **kwargs
    )


def expense(title="Groceries", amount="12000", category="Groceries", **kwargs):
    return TransactionCandidate(
        title=title, amount=amount, type=TransactionType.EXPENSE, category=category, **kwargs
    )
