"""
User-facing messages returned by the session boundary.

Keys are stable identifiers; texts are per locale. Unknown locales fall
back to English.
"""

from fincalc.constants.categories import DEFAULT_LOCALE


MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "fill_all_fields": "Please fill in all fields",
        "invalid_amount": "Please enter a valid amount",
        "invalid_category": "Please choose a category from the list",
        "transaction_added": "Transaction added",
        "transaction_updated": "Transaction updated",
        "transaction_removed": "Transaction deleted",
        "transaction_not_found": "Transaction not found",
        "no_data": "No data",
        "no_transactions": "No transactions for the selected period",
    },
    "ru": {
        "fill_all_fields": "Заполните все поля",
        "invalid_amount": "Введите корректную сумму",
        "invalid_category": "Выберите категорию из списка",
        "transaction_added": "Операция добавлена",
        "transaction_updated": "Операция обновлена",
        "transaction_removed": "Операция удалена",
        "transaction_not_found": "Операция не найдена",
        "no_data": "Нет данных",
        "no_transactions": "Нет операций за выбранный период",
    },
}


def get_message(key: str, locale: str = DEFAULT_LOCALE) -> str:
    catalog = MESSAGES.get(locale, MESSAGES[DEFAULT_LOCALE])
    return catalog.get(key, MESSAGES[DEFAULT_LOCALE][key])
