"""
Look-back Window Filter

DESIGN DECISION: A window is "everything that happened within N hours
before now", not a calendar period. Day, week, month and year are fixed
durations (24h, 7d, 30d, 365d). This keeps the check O(1) per record and
free of timezone, DST and month-length edge cases; callers must read a
"month" as "the last 30 days".

Records dated in the future have a negative elapsed time and are always
inside every window. This is intentional.
"""

from datetime import datetime
from typing import Iterable, Union

from fincalc.constants.enums import Period
from fincalc.models.transaction import Transaction, ensure_aware


def coerce_period(period: Union[Period, str]) -> Period:
    """
    Accept a Period or its string value.

    Raises:
        ValueError: If the value is not one of day/week/month/year
    """
    if isinstance(period, Period):
        return period
    try:
        return Period(str(period).strip().lower())
    except ValueError:
        allowed = ", ".join(p.value for p in Period)
        raise ValueError(f"Unknown period: {period!r}. Allowed: {allowed}")


def is_within(
    record: Transaction,
    now: datetime,
    period: Union[Period, str],
) -> bool:
    """True when the record happened no longer than the period's duration before now."""
    elapsed = ensure_aware(now) - record.date
    return elapsed <= coerce_period(period).duration


def filter_by_period(
    records: Iterable[Transaction],
    now: datetime,
    period: Union[Period, str],
) -> list[Transaction]:
    """Stable filter: matching records in their original relative order."""
    period = coerce_period(period)
    now = ensure_aware(now)
    return [record for record in records if is_within(record, now, period)]
