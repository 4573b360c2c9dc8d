"""
Transaction Validation

DESIGN DECISION: Every add and every edit goes through the same checks,
before anything in the ledger changes:

ERRORS (block the command):
- Title is empty
- Amount is empty, not a plain decimal number, or not positive
- Amount has more than 15 integer digits or more than 2 decimal places
- Category is empty or not part of the vocabulary for the chosen type

WARNINGS (reported, never block):
- Amount is above the configured "unusually large" threshold

The validator also normalizes what it checked: the amount text becomes a
Decimal and the category (which may be typed as a localized label)
becomes its canonical name. The store only ever sees normalized values.

IMPORTANT: Validation NEVER silently fixes issues that change meaning.
Whitespace and a decimal comma are the only things it forgives.
"""

import re
from decimal import Decimal
from typing import Optional

from fincalc.config import LedgerSettings, get_settings
from fincalc.constants.categories import DEFAULT_LOCALE, resolve_category
from fincalc.constants.messages import get_message
from fincalc.models.transaction import (
    MAX_INTEGER_DIGITS,
    MINOR_UNIT_DIGITS,
    TransactionCandidate,
    ValidationIssue,
    ValidationResult,
)


class InvalidAmountError(ValueError):
    """Amount text could not be turned into a positive Decimal."""

    def __init__(self, raw: str, issue_type: str, message: str):
        self.raw = raw
        self.issue_type = issue_type
        super().__init__(message)


class ValidationError(Exception):
    """
    A ledger command was rejected because its data did not validate.

    Carries the full ValidationResult so callers can show every issue,
    not just the first one.
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        messages = "; ".join(
            issue.message for issue in result.issues if issue.severity == "error"
        )
        super().__init__(f"Validation failed: {messages}")

    @property
    def issues(self) -> list[ValidationIssue]:
        return self.result.issues


AMOUNT_PATTERN = re.compile(r"^[+-]?(?P<whole>\d+)(?:\.(?P<fraction>\d+))?$")


def parse_amount(raw: str) -> Decimal:
    """
    Parse user-typed amount text into a positive Decimal.

    Accepts surrounding and grouping whitespace ("50 000") and a comma as
    the decimal separator when the text has no dot ("12,50"). Only plain
    digits are numbers here: exponents ("1e3"), NaN and Infinity are not.

    Raises:
        InvalidAmountError: with issue_type 'missing', 'not_numeric',
            'not_positive', 'too_large' or 'too_precise'
    """
    text = "".join((raw or "").split())
    if not text:
        raise InvalidAmountError(raw, "missing", "Amount is required")

    if "," in text and "." not in text:
        text = text.replace(",", ".")

    match = AMOUNT_PATTERN.match(text)
    if match is None:
        raise InvalidAmountError(raw, "not_numeric", f"Amount '{raw}' is not a number")

    value = Decimal(text)
    if value <= 0:
        raise InvalidAmountError(raw, "not_positive", "Amount must be greater than zero")

    if len(match.group("whole").lstrip("0")) > MAX_INTEGER_DIGITS:
        raise InvalidAmountError(
            raw, "too_large",
            f"Amount must have at most {MAX_INTEGER_DIGITS} digits before the decimal point",
        )
    if len(match.group("fraction") or "") > MINOR_UNIT_DIGITS:
        raise InvalidAmountError(
            raw, "too_precise",
            f"Amount must have at most {MINOR_UNIT_DIGITS} digits after the decimal point",
        )

    return value


class TransactionValidator:
    """Validates and normalizes transaction form data."""

    def __init__(self, settings: Optional[LedgerSettings] = None):
        self._settings = settings or get_settings().ledger

    def _check_title(self, candidate: TransactionCandidate) -> list[ValidationIssue]:
        if candidate.title:
            return []
        return [ValidationIssue(
            field="title",
            issue_type="missing",
            message="Title is required",
            severity="error",
            suggested_fix="Describe the transaction, e.g. 'Weekly groceries'",
        )]

    def _check_amount(
        self,
        candidate: TransactionCandidate,
    ) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        try:
            amount = parse_amount(candidate.amount)
        except InvalidAmountError as e:
            return None, [ValidationIssue(
                field="amount",
                issue_type=e.issue_type,
                message=str(e),
                severity="error",
                suggested_fix="Enter a positive number, e.g. 1250.50",
            )]

        issues = []
        threshold = self._settings.large_amount_warning
        if amount > threshold:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="suspicious_value",
                message=f"Amount ({amount:,}) seems unusually high",
                severity="warning",
                suggested_fix="Please verify this amount is correct",
            ))
        return amount, issues

    def _check_category(
        self,
        candidate: TransactionCandidate,
    ) -> tuple[Optional[str], list[ValidationIssue]]:
        if not candidate.category:
            return None, [ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required",
                severity="error",
                suggested_fix="Pick a category from the list",
            )]

        category = resolve_category(candidate.type, candidate.category)
        if category is None:
            return None, [ValidationIssue(
                field="category",
                issue_type="not_in_vocabulary",
                message=(
                    f"Category '{candidate.category}' is not valid "
                    f"for {candidate.type.value} transactions"
                ),
                severity="error",
                suggested_fix="Pick a category from the list for this type",
            )]
        return category, []

    def validate(self, candidate: TransactionCandidate) -> ValidationResult:
        """
        Run every check and collect all issues.

        Returns:
            ValidationResult; amount and category are filled in only
            when the command can proceed.
        """
        all_issues = self._check_title(candidate)

        amount, amount_issues = self._check_amount(candidate)
        all_issues.extend(amount_issues)

        category, category_issues = self._check_category(candidate)
        all_issues.extend(category_issues)

        warnings = [i.message for i in all_issues if i.severity == "warning"]
        is_valid = not any(i.severity == "error" for i in all_issues)

        return ValidationResult(
            is_valid=is_valid,
            issues=all_issues,
            warnings=warnings,
            amount=amount if is_valid else None,
            category=category if is_valid else None,
        )

    def validate_or_raise(self, candidate: TransactionCandidate) -> ValidationResult:
        """
        Validate, raising instead of returning a failed result.

        Raises:
            ValidationError: If any error-level issue was found
        """
        result = self.validate(candidate)
        if not result.is_valid:
            raise ValidationError(result)
        return result

    def get_user_friendly_summary(
        self,
        result: ValidationResult,
        locale: str = DEFAULT_LOCALE,
    ) -> str:
        """
        Pick the one message a form should show for a failed validation.

        Missing fields win over malformed ones, the same order a user
        fixes them in.
        """
        errors = [i for i in result.issues if i.severity == "error"]
        if not errors:
            return ""
        if any(i.issue_type == "missing" for i in errors):
            return get_message("fill_all_fields", locale)
        if any(i.field == "amount" for i in errors):
            return get_message("invalid_amount", locale)
        return get_message("invalid_category", locale)
