"""
Aggregation Engine

DESIGN DECISION: Aggregation is DETERMINISTIC and PURE.
Every function here takes an already filtered sequence of transactions
and returns new values; nothing is cached and nothing is remembered
between calls.

Money is summed as Decimal. Float accumulation drifts over many small
amounts (0.1 + 0.2 != 0.3) and the totals here are displayed and
compared as exact currency.

The aggregator trusts its input: category membership was enforced when
the transactions were stored.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from fincalc.constants.categories import DEFAULT_CURRENCY, DEFAULT_LOCALE, category_label
from fincalc.constants.enums import TransactionType
from fincalc.models.transaction import ZERO, CategoryShare, Summary, Transaction
from fincalc.queries.formatting import format_amount, format_share


PERCENT_QUANTUM = Decimal("0.01")
HUNDRED = Decimal("100")


def summarize(records: Iterable[Transaction]) -> Summary:
    """
    Income, expense and balance totals.

    An empty input gives an all-zero summary. Balance is always exactly
    income minus expense.
    """
    income = ZERO
    expense = ZERO
    for record in records:
        if record.type == TransactionType.INCOME:
            income += record.amount
        else:
            expense += record.amount
    return Summary(income=income, expense=expense)


def category_breakdown(
    records: Iterable[Transaction],
    txn_type: TransactionType,
) -> dict[str, Decimal]:
    """
    Sum amounts per category for one transaction type.

    Only categories with at least one matching record appear. Keys come
    out in first-seen order, so the result is stable for a given input.
    """
    txn_type = TransactionType(txn_type)
    totals: dict[str, Decimal] = {}
    for record in records:
        if record.type != txn_type:
            continue
        totals[record.category] = totals.get(record.category, ZERO) + record.amount
    return totals


def category_shares(
    records: Iterable[Transaction],
    txn_type: TransactionType,
    locale: str = DEFAULT_LOCALE,
    currency: str = DEFAULT_CURRENCY,
) -> list[CategoryShare]:
    """
    Category breakdown with each slice's percentage of the type total.

    Percentages are rounded half-up to 2 places independently, so they
    may not add up to exactly 100. Labels, amounts and percentages are
    also rendered for the locale and currency.
    """
    txn_type = TransactionType(txn_type)
    breakdown = category_breakdown(records, txn_type)
    total = sum(breakdown.values(), ZERO)

    shares = []
    for name, amount in breakdown.items():
        # total > 0 whenever breakdown is non-empty (amounts are positive)
        share = (amount * HUNDRED / total).quantize(PERCENT_QUANTUM, rounding=ROUND_HALF_UP)
        shares.append(CategoryShare(
            name=name,
            label=category_label(txn_type, name, locale),
            amount=amount,
            share=share,
            display_amount=format_amount(amount, locale, currency),
            display_share=format_share(share, locale),
        ))
    return shares
