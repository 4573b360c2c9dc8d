"""
Display formatting for money and percentages.

Amounts are formatted from Decimal without passing through float. Two
layouts are supported: "en" puts the currency symbol in front with comma
grouping ("₽50,000.00"), "ru" follows ru-RU with space grouping, a decimal
comma and the symbol last ("50 000,00 ₽"). Unknown locales use "en".
"""

from decimal import Decimal
from typing import Sequence

from fincalc.constants.categories import DEFAULT_CURRENCY, DEFAULT_LOCALE, period_label
from fincalc.constants.enums import Period
from fincalc.constants.messages import get_message
from fincalc.models.transaction import CategoryShare, ReportDisplay, Summary, Transaction


CURRENCY_SYMBOLS = {
    "RUB": "₽",
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
}


def _localize_number(text: str, locale: str) -> str:
    if locale == "ru":
        return text.replace(",", " ").replace(".", ",")
    return text


def format_amount(
    amount: Decimal,
    locale: str = DEFAULT_LOCALE,
    currency: str = DEFAULT_CURRENCY,
    explicit_sign: bool = False,
) -> str:
    """
    Format a money amount with two decimals and the currency symbol.

    Negative amounts get a leading "-". With explicit_sign, positive
    amounts get a leading "+" (history rows show direction this way).
    Currencies without a known symbol show their code.
    """
    symbol = CURRENCY_SYMBOLS.get(currency.upper(), currency.upper())
    number = _localize_number(f"{abs(amount):,.2f}", locale)

    if amount < 0:
        sign = "-"
    elif explicit_sign and amount > 0:
        sign = "+"
    else:
        sign = ""

    if locale == "ru":
        return f"{sign}{number} {symbol}"
    return f"{sign}{symbol}{number}"


def format_share(share: Decimal, locale: str = DEFAULT_LOCALE) -> str:
    number = _localize_number(f"{share:.2f}", locale)
    if locale == "ru":
        return f"{number} %"
    return f"{number}%"


def build_report_display(
    period: Period,
    summary: Summary,
    transactions: Sequence[Transaction],
    income_shares: Sequence[CategoryShare],
    expense_shares: Sequence[CategoryShare],
    locale: str = DEFAULT_LOCALE,
    currency: str = DEFAULT_CURRENCY,
) -> ReportDisplay:
    """Render the totals, history amounts and empty-state placeholders of a report."""
    return ReportDisplay(
        locale=locale,
        currency=currency,
        period_label=period_label(period, locale),
        income=format_amount(summary.income, locale, currency),
        expense=format_amount(summary.expense, locale, currency),
        balance=format_amount(summary.balance, locale, currency),
        transaction_amounts=[
            format_amount(txn.signed_amount, locale, currency, explicit_sign=True)
            for txn in transactions
        ],
        history_message=None if transactions else get_message("no_transactions", locale),
        income_chart_message=None if income_shares else get_message("no_data", locale),
        expense_chart_message=None if expense_shares else get_message("no_data", locale),
    )
