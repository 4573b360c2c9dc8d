"""Tests for window filtering and aggregation."""

import pytest
from datetime import datetime, timedelta
from decimal import Decimal

from fincalc.models import Period, Summary, Transaction, TransactionType
from fincalc.queries import (
    category_breakdown,
    category_shares,
    coerce_period,
    filter_by_period,
    is_within,
    summarize,
)
from tests.helpers import NOW


def txn(amount, txn_type=TransactionType.EXPENSE, category=None, age=timedelta(0), **kwargs):
    if category is None:
        category = "Salary" if txn_type == TransactionType.INCOME else "Groceries"
    return Transaction(
        title=kwargs.pop("title", category),
        amount=Decimal(amount),
        type=txn_type,
        category=category,
        date=NOW - age,
        **kwargs,
    )


PERIODS = [Period.DAY, Period.WEEK, Period.MONTH, Period.YEAR]


class TestCoercePeriod:
    """Tests for coerce_period."""

    def test_accepts_enum_and_text(self):
        assert coerce_period(Period.WEEK) is Period.WEEK
        assert coerce_period("year") is Period.YEAR
        assert coerce_period(" Month ") is Period.MONTH

    @pytest.mark.parametrize("value", ["all", "quarter", ""])
    def test_rejects_unknown(self, value):
        with pytest.raises(ValueError, match="Unknown period"):
            coerce_period(value)


class TestWindow:
    """Tests for is_within and filter_by_period."""

    @pytest.mark.parametrize("period", PERIODS)
    def test_boundary_is_inclusive(self, period):
        """Test a record exactly one duration old is still inside."""
        on_edge = txn("1", age=period.duration)
        past_edge = txn("1", age=period.duration + timedelta(microseconds=1))

        assert is_within(on_edge, NOW, period) is True
        assert is_within(past_edge, NOW, period) is False

    @pytest.mark.parametrize("period", PERIODS)
    def test_future_records_always_inside(self, period):
        future = txn("1", age=-timedelta(days=400))
        assert is_within(future, NOW, period) is True

    def test_windows_are_nested(self):
        """Test day ⊆ week ⊆ month ⊆ year for any ledger."""
        records = [
            txn("1", age=timedelta(hours=h))
            for h in (0, 5, 23, 24, 25, 24 * 6, 24 * 8, 24 * 29, 24 * 31, 24 * 364, 24 * 366)
        ]

        ids = [
            {r.id for r in filter_by_period(records, NOW, period)}
            for period in PERIODS
        ]

        assert ids[0] <= ids[1] <= ids[2] <= ids[3]
        assert [len(s) for s in ids] == [4, 6, 8, 10]

    def test_filter_is_stable(self):
        records = [
            txn("1", age=timedelta(hours=1)),
            txn("2", age=timedelta(days=10)),
            txn("3", age=timedelta(hours=3)),
            txn("4", age=timedelta(hours=2)),
        ]

        visible = filter_by_period(records, NOW, Period.DAY)

        assert [r.amount for r in visible] == [Decimal("1"), Decimal("3"), Decimal("4")]

    def test_naive_now_is_utc(self):
        record = txn("1", age=timedelta(hours=1))
        naive_now = datetime(2024, 12, 15, 12, 0)
        assert filter_by_period([record], naive_now, "day") == [record]

    def test_old_record_month_vs_year(self):
        record = txn("1", age=timedelta(days=40))
        assert filter_by_period([record], NOW, Period.MONTH) == []
        assert filter_by_period([record], NOW, Period.YEAR) == [record]

    def test_empty_input(self):
        assert filter_by_period([], NOW, Period.WEEK) == []


class TestSummarize:
    """Tests for summarize."""

    def test_empty(self):
        assert summarize([]) == Summary(income=Decimal("0"), expense=Decimal("0"))

    def test_totals(self):
        summary = summarize([
            txn("50000", TransactionType.INCOME),
            txn("12000"),
            txn("500", category="Transport"),
        ])

        assert summary.income == Decimal("50000")
        assert summary.expense == Decimal("12500")
        assert summary.balance == Decimal("37500")

    def test_negative_balance(self):
        summary = summarize([txn("10", TransactionType.INCOME), txn("25")])
        assert summary.balance == Decimal("-15")

    def test_decimal_is_exact(self):
        """Test cents add up without float drift."""
        summary = summarize([txn("0.1"), txn("0.2")])
        assert summary.expense == Decimal("0.3")

        many = summarize([txn("0.01") for _ in range(1000)])
        assert many.expense == Decimal("10.00")

    def test_largest_amounts_stay_exact(self):
        """Test totals of maximum-size amounts keep every cent."""
        summary = summarize(
            [txn("999999999999999.99", TransactionType.INCOME) for _ in range(3)]
            + [txn("0.01", TransactionType.INCOME)]
        )
        assert summary.income == Decimal("2999999999999999.98")

        big = summarize([txn("999999999999999", TransactionType.INCOME) for _ in range(10000)])
        assert big.income == Decimal("9999999999999990000")

    @pytest.mark.parametrize("amount", [
        "9E+999999",
        "1000000000000000000000000000",
        "0.001",
    ])
    def test_unbounded_amounts_never_reach_totals(self, amount):
        """Test records that could overflow or round a total cannot be built."""
        with pytest.raises(ValueError):
            txn(amount, TransactionType.INCOME)

    def test_accepts_generator(self):
        summary = summarize(txn("1", TransactionType.INCOME) for _ in range(3))
        assert summary.income == Decimal("3")


class TestCategoryBreakdown:
    """Tests for category_breakdown."""

    def test_first_seen_order(self):
        records = [
            txn("100", category="Transport"),
            txn("200", category="Groceries"),
            txn("300", category="Transport"),
            txn("1000", TransactionType.INCOME),
            txn("50", category="Health"),
        ]

        breakdown = category_breakdown(records, TransactionType.EXPENSE)

        assert list(breakdown) == ["Transport", "Groceries", "Health"]
        assert breakdown == {
            "Transport": Decimal("400"),
            "Groceries": Decimal("200"),
            "Health": Decimal("50"),
        }

    def test_sums_match_summary(self):
        """Test the per-category totals add up to the summary totals."""
        records = [
            txn("10.50", category="Transport"),
            txn("20.25", category="Groceries"),
            txn("5000", TransactionType.INCOME, category="Freelance"),
            txn("700", TransactionType.INCOME, category="Gifts"),
            txn("0.25", category="Transport"),
        ]
        summary = summarize(records)

        assert sum(category_breakdown(records, TransactionType.INCOME).values()) == summary.income
        assert sum(category_breakdown(records, TransactionType.EXPENSE).values()) == summary.expense

    def test_types_do_not_mix(self):
        """Test 'Other' income and 'Other' expense are kept apart."""
        records = [
            txn("5", TransactionType.INCOME, category="Other"),
            txn("7", category="Other"),
        ]

        assert category_breakdown(records, TransactionType.INCOME) == {"Other": Decimal("5")}
        assert category_breakdown(records, "expense") == {"Other": Decimal("7")}

    def test_empty(self):
        assert category_breakdown([txn("1", TransactionType.INCOME)], TransactionType.EXPENSE) == {}


class TestCategoryShares:
    """Tests for category_shares."""

    def test_shares(self):
        records = [
            txn("75", category="Housing"),
            txn("25", category="Transport"),
        ]

        shares = category_shares(records, TransactionType.EXPENSE)

        assert [(s.name, s.share) for s in shares] == [
            ("Housing", Decimal("75.00")),
            ("Transport", Decimal("25.00")),
        ]

    def test_rounding_per_slice(self):
        """Test each slice is rounded half-up on its own."""
        records = [txn("1", category=c) for c in ("Housing", "Transport", "Health")]

        shares = category_shares(records, TransactionType.EXPENSE)

        assert [s.share for s in shares] == [Decimal("33.33")] * 3

    def test_localized_labels(self):
        shares = category_shares([txn("10", category="Housing")], TransactionType.EXPENSE, "ru")

        assert shares[0].name == "Housing"
        assert shares[0].label == "Жильё"
        assert shares[0].share == Decimal("100.00")

    def test_empty(self):
        assert category_shares([], TransactionType.INCOME) == []
