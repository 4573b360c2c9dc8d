"""Tests for money and percentage display formatting."""

import pytest
from decimal import Decimal

from fincalc.models import Period, Summary, Transaction, TransactionType
from fincalc.queries import (
    build_report_display,
    category_shares,
    format_amount,
    format_share,
)


class TestFormatAmount:
    """Tests for format_amount."""

    @pytest.mark.parametrize("amount,locale,expected", [
        (Decimal("50000"), "ru", "50 000,00 ₽"),
        (Decimal("1234.5"), "ru", "1 234,50 ₽"),
        (Decimal("-38000"), "ru", "-38 000,00 ₽"),
        (Decimal("50000"), "en", "₽50,000.00"),
        (Decimal("0.1"), "en", "₽0.10"),
        (Decimal("-12.34"), "en", "-₽12.34"),
        (Decimal("0"), "en", "₽0.00"),
    ])
    def test_rub(self, amount, locale, expected):
        assert format_amount(amount, locale, "RUB") == expected

    def test_explicit_sign(self):
        """Test history rows show the direction of every amount."""
        assert format_amount(Decimal("500"), "ru", "RUB", explicit_sign=True) == "+500,00 ₽"
        assert format_amount(Decimal("-500"), "ru", "RUB", explicit_sign=True) == "-500,00 ₽"
        assert format_amount(Decimal("0"), "ru", "RUB", explicit_sign=True) == "0,00 ₽"

    def test_other_currencies(self):
        assert format_amount(Decimal("10"), "en", "usd") == "$10.00"
        assert format_amount(Decimal("10"), "ru", "EUR") == "10,00 €"
        assert format_amount(Decimal("10"), "en", "CHF") == "CHF10.00"

    def test_large_amount_keeps_cents(self):
        assert format_amount(Decimal("999999999999999.99"), "en", "RUB") == (
            "₽999,999,999,999,999.99"
        )

    def test_unknown_locale_uses_english_layout(self):
        assert format_amount(Decimal("1000"), "de", "RUB") == "₽1,000.00"


class TestFormatShare:
    """Tests for format_share."""

    def test_locales(self):
        assert format_share(Decimal("33.33"), "en") == "33.33%"
        assert format_share(Decimal("33.33"), "ru") == "33,33 %"
        assert format_share(Decimal("100"), "en") == "100.00%"


class TestReportDisplay:
    """Tests for build_report_display and the share display fields."""

    def _txn(self, amount, txn_type, category):
        return Transaction(title=category, amount=Decimal(amount), type=txn_type, category=category)

    def test_totals_and_history(self):
        records = [
            self._txn("12000", TransactionType.EXPENSE, "Groceries"),
            self._txn("50000", TransactionType.INCOME, "Salary"),
        ]
        summary = Summary(income=Decimal("50000"), expense=Decimal("12000"))

        display = build_report_display(
            Period.MONTH,
            summary,
            records,
            category_shares(records, TransactionType.INCOME, "ru"),
            category_shares(records, TransactionType.EXPENSE, "ru"),
            "ru",
            "RUB",
        )

        assert display.period_label == "Месяц"
        assert display.income == "50 000,00 ₽"
        assert display.expense == "12 000,00 ₽"
        assert display.balance == "38 000,00 ₽"
        assert display.transaction_amounts == ["-12 000,00 ₽", "+50 000,00 ₽"]
        assert display.history_message is None
        assert display.income_chart_message is None
        assert display.expense_chart_message is None

    def test_empty_placeholders(self):
        display = build_report_display(Period.DAY, Summary(), [], [], [], "en", "RUB")

        assert display.period_label == "Day"
        assert display.balance == "₽0.00"
        assert display.history_message == "No transactions for the selected period"
        assert display.income_chart_message == "No data"
        assert display.expense_chart_message == "No data"

    def test_share_display_fields(self):
        records = [
            self._txn("1", TransactionType.EXPENSE, "Housing"),
            self._txn("2", TransactionType.EXPENSE, "Transport"),
        ]

        shares = category_shares(records, TransactionType.EXPENSE, "ru", "RUB")

        assert [(s.label, s.display_amount, s.display_share) for s in shares] == [
            ("Жильё", "1,00 ₽", "33,33 %"),
            ("Транспорт", "2,00 ₽", "66,67 %"),
        ]
