"""Category vocabulary, enums and user-facing messages."""

from fincalc.constants.enums import Period, TransactionType
from fincalc.constants.categories import (
    CATEGORIES,
    CATEGORY_LABELS,
    DEFAULT_CURRENCY,
    DEFAULT_LOCALE,
    EXPENSE_CATEGORIES,
    INCOME_CATEGORIES,
    SUPPORTED_LOCALES,
    categories_for,
    category_label,
    is_known_category,
    period_label,
    resolve_category,
    type_label,
)
from fincalc.constants.messages import MESSAGES, get_message

__all__ = [
    "CATEGORIES",
    "CATEGORY_LABELS",
    "DEFAULT_CURRENCY",
    "DEFAULT_LOCALE",
    "EXPENSE_CATEGORIES",
    "INCOME_CATEGORIES",
    "MESSAGES",
    "Period",
    "SUPPORTED_LOCALES",
    "TransactionType",
    "categories_for",
    "category_label",
    "get_message",
    "is_known_category",
    "period_label",
    "resolve_category",
    "type_label",
]
