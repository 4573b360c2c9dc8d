"""
Core Data Models for fincalc

These models define the strict schemas for all data flowing through the
ledger engine. They are designed to:
1. Enforce type safety at runtime
2. Keep money in Decimal from input to output
3. Be immutable once stored, so snapshots can be shared freely
4. Be serializable for logging and the audit trail

DESIGN DECISION: We use Pydantic v2. The form payload coming from the
user (TransactionCandidate) is deliberately loose: everything is text.
The stored record (Transaction) is strict and frozen. The validator sits
between the two.
"""

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Optional
from uuid import UUID, uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_validator,
    model_validator,
)

from fincalc.constants.categories import is_known_category
from fincalc.constants.enums import Period, TransactionType


ZERO = Decimal("0")

# Amounts have at most 15 integer digits and 2 decimal places; ledger totals
# then stay exact in the default 28-digit decimal context.
MAX_INTEGER_DIGITS = 15
MINOR_UNIT_DIGITS = 2


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_aware(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC so all comparisons are well defined."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# =============================================================================
# INPUT MODEL
# =============================================================================

class TransactionCandidate(BaseModel):
    """
    Raw transaction form data, as typed by the user.

    This is PROPOSED data, NOT validated. The amount is still a string
    because parsing it is part of validation. An empty category means the
    user has not picked one yet (for example right after switching type).
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = ""
    amount: str = ""
    type: TransactionType = TransactionType.INCOME
    category: str = ""

    # Only honoured by an edit, when the user explicitly changes the date
    date: Optional[datetime] = None

    @field_validator('amount', mode='before')
    @classmethod
    def coerce_amount_to_text(cls, v: object) -> object:
        """Accept numbers from programmatic callers; parsing stays in the validator."""
        if isinstance(v, (int, Decimal)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator('date')
    @classmethod
    def normalize_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return ensure_aware(v) if v is not None else None


# =============================================================================
# CORE LEDGER MODEL
# =============================================================================

class Transaction(BaseModel):
    """
    One recorded monetary event.

    CRITICAL: Transactions are immutable. An edit replaces the stored
    record with a copy; the id and (unless explicitly changed) the date
    survive the edit.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    # Identity
    id: UUID = Field(
        default_factory=uuid4,
        description="Unique transaction ID, never reused"
    )

    title: str = Field(
        ...,
        min_length=1,
        description="Free-text label"
    )
    amount: Annotated[
        Decimal,
        Field(
            gt=0,
            max_digits=MAX_INTEGER_DIGITS + MINOR_UNIT_DIGITS,
            decimal_places=MINOR_UNIT_DIGITS,
            description="Monetary magnitude; direction comes from type",
        )
    ]
    type: TransactionType = Field(
        ...,
        description="Income or expense"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Canonical category name from the type's vocabulary"
    )
    date: datetime = Field(
        default_factory=utcnow,
        description="When the event is considered to have occurred"
    )

    @field_validator('date')
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return ensure_aware(v)

    @model_validator(mode='after')
    def validate_category(self) -> 'Transaction':
        """The category must belong to the vocabulary of the current type."""
        if not is_known_category(self.type, self.category):
            raise ValueError(
                f"Category '{self.category}' is not valid for {self.type.value} transactions"
            )
        return self

    @property
    def signed_amount(self) -> Decimal:
        """Amount with sign for balance calculations and history display."""
        return self.amount if self.type == TransactionType.INCOME else -self.amount


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'not_numeric', 'not_positive')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a TransactionCandidate.

    When validation passes, the parsed amount and the canonical category
    name are carried along so the store never parses input twice.
    """

    validated_at: datetime = Field(
        default_factory=utcnow
    )
    is_valid: bool = Field(
        ...,
        description="Overall validation result"
    )
    issues: list[ValidationIssue] = Field(
        default_factory=list,
        description="All validation issues found"
    )

    # Warnings don't block but should be shown
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    # Normalized values (None when the field did not validate)
    amount: Optional[Decimal] = None
    category: Optional[str] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def error_fields(self) -> list[str]:
        return [issue.field for issue in self.issues if issue.severity == "error"]


# =============================================================================
# DERIVED (READ) MODELS
# =============================================================================

class Summary(BaseModel):
    """Income, expense and balance totals over a set of transactions."""
    model_config = ConfigDict(frozen=True)

    income: Decimal = ZERO
    expense: Decimal = ZERO

    @computed_field
    @property
    def balance(self) -> Decimal:
        return self.income - self.expense


class CategoryShare(BaseModel):
    """One slice of a category distribution."""
    model_config = ConfigDict(frozen=True)

    name: str
    label: str
    amount: Decimal
    share: Decimal = Field(
        ...,
        ge=0,
        le=100,
        description="Percentage of the type total, rounded to 2 places"
    )
    display_amount: str = Field(
        ...,
        description="Amount formatted for the session's locale and currency"
    )
    display_share: str = Field(
        ...,
        description="Share formatted as a localized percentage"
    )


class ReportDisplay(BaseModel):
    """
    Localized strings for one report, ready to render.

    The *_message fields are set only when the matching part of the
    report is empty; they hold the placeholder to show instead.
    """
    model_config = ConfigDict(frozen=True)

    locale: str
    currency: str
    period_label: str
    income: str
    expense: str
    balance: str
    transaction_amounts: list[str] = Field(
        default_factory=list,
        description="Signed amount of each report transaction, same order"
    )
    history_message: Optional[str] = None
    income_chart_message: Optional[str] = None
    expense_chart_message: Optional[str] = None


class LedgerReport(BaseModel):
    """
    Everything a presentation layer needs for one rendering pass.

    All parts are computed from the same snapshot and the same "now",
    so totals, breakdowns and the history list always agree.
    """

    period: Period
    generated_at: datetime
    summary: Summary
    income_breakdown: dict[str, Decimal] = Field(default_factory=dict)
    expense_breakdown: dict[str, Decimal] = Field(default_factory=dict)
    income_shares: list[CategoryShare] = Field(default_factory=list)
    expense_shares: list[CategoryShare] = Field(default_factory=list)
    transactions: list[Transaction] = Field(
        default_factory=list,
        description="Transactions inside the window, newest first"
    )
    display: Optional[ReportDisplay] = None

    @property
    def transaction_count(self) -> int:
        return len(self.transactions)
