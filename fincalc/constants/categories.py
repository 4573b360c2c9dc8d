"""
Centralized category vocabulary for income and expense transactions.

The canonical (English) names are the identity of a category; localized
labels are display strings only. Lists are ordered: position is part of
the identity, so every locale must list the same categories in the same
order.
"""

from typing import Optional

from fincalc.constants.enums import Period, TransactionType


DEFAULT_LOCALE = "en"
DEFAULT_CURRENCY = "RUB"

# Transaction Categories - Income
INCOME_CATEGORIES = [
    "Salary",
    "Freelance",
    "Investments",
    "Gifts",
    "Other",
]

# Transaction Categories - Expenses
EXPENSE_CATEGORIES = [
    "Groceries",
    "Transport",
    "Housing",
    "Entertainment",
    "Health",
    "Education",
    "Other",
]

CATEGORIES: dict[TransactionType, list[str]] = {
    TransactionType.INCOME: INCOME_CATEGORIES,
    TransactionType.EXPENSE: EXPENSE_CATEGORIES,
}

# Localized labels, positionally aligned with the canonical lists above
CATEGORY_LABELS: dict[str, dict[TransactionType, list[str]]] = {
    "en": CATEGORIES,
    "ru": {
        TransactionType.INCOME: [
            "Зарплата",
            "Фриланс",
            "Инвестиции",
            "Подарки",
            "Другое",
        ],
        TransactionType.EXPENSE: [
            "Продукты",
            "Транспорт",
            "Жильё",
            "Развлечения",
            "Здоровье",
            "Образование",
            "Другое",
        ],
    },
}

PERIOD_LABELS: dict[str, dict[Period, str]] = {
    "en": {
        Period.DAY: "Day",
        Period.WEEK: "Week",
        Period.MONTH: "Month",
        Period.YEAR: "Year",
    },
    "ru": {
        Period.DAY: "День",
        Period.WEEK: "Неделя",
        Period.MONTH: "Месяц",
        Period.YEAR: "Год",
    },
}

TYPE_LABELS: dict[str, dict[TransactionType, str]] = {
    "en": {
        TransactionType.INCOME: "Income",
        TransactionType.EXPENSE: "Expense",
    },
    "ru": {
        TransactionType.INCOME: "Доход",
        TransactionType.EXPENSE: "Расход",
    },
}

SUPPORTED_LOCALES = tuple(CATEGORY_LABELS)


def categories_for(txn_type: TransactionType) -> list[str]:
    """Return the canonical category names allowed for a transaction type."""
    return list(CATEGORIES[TransactionType(txn_type)])


def is_known_category(txn_type: TransactionType, category: str) -> bool:
    return category in CATEGORIES[TransactionType(txn_type)]


def resolve_category(txn_type: TransactionType, value: str) -> Optional[str]:
    """
    Map user input to a canonical category name.

    Accepts the canonical name or a label from any supported locale,
    compared case-insensitively after stripping whitespace. Returns None
    when the value does not belong to the type's vocabulary.
    """
    txn_type = TransactionType(txn_type)
    wanted = (value or "").strip().casefold()
    if not wanted:
        return None

    canonical = CATEGORIES[txn_type]
    for labels in CATEGORY_LABELS.values():
        for index, label in enumerate(labels[txn_type]):
            if label.casefold() == wanted:
                return canonical[index]
    return None


def category_label(
    txn_type: TransactionType,
    category: str,
    locale: str = DEFAULT_LOCALE,
) -> str:
    """Localized display label for a canonical category name."""
    txn_type = TransactionType(txn_type)
    labels = CATEGORY_LABELS.get(locale, CATEGORY_LABELS[DEFAULT_LOCALE])
    try:
        index = CATEGORIES[txn_type].index(category)
    except ValueError:
        # Unknown names are shown as-is
        return category
    return labels[txn_type][index]


def period_label(period: Period, locale: str = DEFAULT_LOCALE) -> str:
    labels = PERIOD_LABELS.get(locale, PERIOD_LABELS[DEFAULT_LOCALE])
    return labels[Period(period)]


def type_label(txn_type: TransactionType, locale: str = DEFAULT_LOCALE) -> str:
    labels = TYPE_LABELS.get(locale, TYPE_LABELS[DEFAULT_LOCALE])
    return labels[TransactionType(txn_type)]
