"""
Enumerations shared by the category vocabulary and the ledger models.
"""

from datetime import timedelta
from enum import Enum


class TransactionType(str, Enum):
    """
    Direction of a transaction.

    The amount of a transaction is always positive; whether it is a
    credit or a debit is carried here and nowhere else.
    """
    INCOME = "income"
    EXPENSE = "expense"


class Period(str, Enum):
    """
    Look-back window used to filter the ledger.

    DESIGN DECISION: Windows are fixed elapsed durations counted back
    from "now", not calendar periods. A month is always 30 days and a
    year is always 365 days (no month-length or leap-year handling).
    """
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"

    @property
    def duration(self) -> timedelta:
        return _PERIOD_DURATIONS[self]


_PERIOD_DURATIONS = {
    Period.DAY: timedelta(hours=24),
    Period.WEEK: timedelta(days=7),
    Period.MONTH: timedelta(days=30),
    Period.YEAR: timedelta(days=365),
}
