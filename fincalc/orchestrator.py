"""
Main Orchestrator for fincalc

This module ties together all the components and defines the two sides
of the ledger engine:
1. Commands (candidate → validate → store) in LedgerStore
2. Reads (snapshot → window → aggregate) in LedgerSession

DESIGN DECISION: The orchestrator enforces the boundaries:
- Nothing is stored without passing validation
- A rejected command leaves the ledger exactly as it was
- Derived views are recomputed on every read, never cached
- Every command is audited

The store holds no reference to the session and the session holds no
reference to whoever renders its output.
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Union
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError

from fincalc.audit import AuditLogger, configure_logging, create_correlation_id
from fincalc.config import get_settings
from fincalc.constants.categories import (
    categories_for,
    category_label,
    period_label,
    type_label,
)
from fincalc.constants.enums import Period, TransactionType
from fincalc.constants.messages import get_message
from fincalc.models.transaction import (
    CategoryShare,
    LedgerReport,
    Summary,
    Transaction,
    TransactionCandidate,
    ValidationIssue,
    ValidationResult,
    ensure_aware,
    utcnow,
)
from fincalc.queries import (
    build_report_display,
    category_breakdown,
    category_shares,
    coerce_period,
    filter_by_period,
    format_amount,
    summarize,
)
from fincalc.services.storage import (
    InMemoryAuditStorage,
    InMemoryTransactionStorage,
    NotFoundError,
    StorageError,
    TransactionStorageInterface,
)
from fincalc.validation import TransactionValidator, ValidationError


Clock = Callable[[], datetime]

AUDITED_FIELDS = ("title", "amount", "type", "category", "date")


class LedgerStore:
    """
    Owns the authoritative, ordered collection of transactions.

    Commands:
    1. add(candidate) → validate → new id + timestamp → prepend
    2. update(id, patch) → must exist → validate → replace fields
    3. remove(id) → must exist → delete

    Every command validates before it touches storage, so a failure
    never leaves a half-applied change behind.
    """

    def __init__(
        self,
        storage: Optional[TransactionStorageInterface] = None,
        validator: Optional[TransactionValidator] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Clock] = None,
    ):
        self._storage = storage or InMemoryTransactionStorage()
        self._validator = validator or TransactionValidator()
        self._audit_logger = audit_logger
        self._clock = clock or utcnow

    @property
    def validator(self) -> TransactionValidator:
        return self._validator

    def _validate(
        self,
        command: str,
        candidate: TransactionCandidate,
        transaction_id: Optional[UUID],
        correlation_id: Optional[UUID],
    ) -> ValidationResult:
        try:
            return self._validator.validate_or_raise(candidate)
        except ValidationError as e:
            if self._audit_logger:
                self._audit_logger.log_validation_failed(
                    command=command,
                    issues=[
                        {"field": i.field, "type": i.issue_type, "message": i.message}
                        for i in e.issues
                    ],
                    transaction_id=transaction_id,
                    correlation_id=correlation_id,
                )
            raise

    def _build(self, **fields) -> Transaction:
        """Construct a Transaction, reporting model errors as ValidationError."""
        try:
            return Transaction(**fields)
        except PydanticValidationError as e:
            issues = [
                ValidationIssue(
                    field=".".join(str(part) for part in err["loc"]) or "transaction",
                    issue_type=err["type"],
                    message=err["msg"],
                    severity="error",
                )
                for err in e.errors()
            ]
            raise ValidationError(ValidationResult(is_valid=False, issues=issues))

    def _not_found(
        self,
        command: str,
        transaction_id: UUID,
        correlation_id: Optional[UUID],
    ) -> NotFoundError:
        if self._audit_logger:
            self._audit_logger.log_not_found(
                command=command,
                transaction_id=transaction_id,
                correlation_id=correlation_id,
            )
        return NotFoundError(transaction_id)

    def _storage_failed(
        self,
        command: str,
        error: StorageError,
        transaction_id: Optional[UUID],
        correlation_id: Optional[UUID],
    ) -> None:
        if self._audit_logger:
            self._audit_logger.log_error(
                error_type=type(error).__name__,
                error_message=str(error),
                details={
                    "command": command,
                    "transaction_id": str(transaction_id) if transaction_id else None,
                },
                correlation_id=correlation_id,
            )

    def add(
        self,
        candidate: TransactionCandidate,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Validate a candidate and store it as a new transaction.

        The new transaction gets a fresh id and the current time. A date
        on the candidate is ignored here; dates only change through update.

        Raises:
            ValidationError: If the candidate does not validate
            StorageError: If the backend fails; audited as a system error
        """
        result = self._validate("add", candidate, None, correlation_id)

        transaction = self._build(
            title=candidate.title,
            amount=result.amount,
            type=candidate.type,
            category=result.category,
            date=self._clock(),
        )
        try:
            self._storage.insert(transaction)
        except StorageError as e:
            self._storage_failed("add", e, transaction.id, correlation_id)
            raise

        if self._audit_logger:
            self._audit_logger.log_transaction_added(
                transaction_id=transaction.id,
                txn_type=transaction.type.value,
                category=transaction.category,
                amount=str(transaction.amount),
                correlation_id=correlation_id,
            )

        return transaction

    def update(
        self,
        transaction_id: UUID,
        patch: TransactionCandidate,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Replace title, amount, type and category of an existing transaction.

        The id never changes. The date is kept unless the patch sets one.

        Raises:
            NotFoundError: If no transaction has this id
            ValidationError: If the patch does not validate
        """
        existing = self._storage.get(transaction_id)
        if existing is None:
            raise self._not_found("update", transaction_id, correlation_id)

        result = self._validate("update", patch, transaction_id, correlation_id)

        updated = self._build(
            id=existing.id,
            title=patch.title,
            amount=result.amount,
            type=patch.type,
            category=result.category,
            date=patch.date or existing.date,
        )
        try:
            self._storage.replace(updated)
        except StorageError as e:
            self._storage_failed("update", e, transaction_id, correlation_id)
            raise

        if self._audit_logger:
            changed = [
                name for name in AUDITED_FIELDS
                if getattr(existing, name) != getattr(updated, name)
            ]
            self._audit_logger.log_transaction_updated(
                transaction_id=updated.id,
                changed_fields=changed,
                correlation_id=correlation_id,
            )

        return updated

    def remove(
        self,
        transaction_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> Transaction:
        """
        Delete a transaction.

        Removing an unknown id is an error, not a no-op.

        Returns:
            The removed transaction

        Raises:
            NotFoundError: If no transaction has this id
        """
        try:
            removed = self._storage.delete(transaction_id)
        except NotFoundError:
            raise self._not_found("remove", transaction_id, correlation_id)
        except StorageError as e:
            self._storage_failed("remove", e, transaction_id, correlation_id)
            raise

        if self._audit_logger:
            self._audit_logger.log_transaction_removed(
                transaction_id=transaction_id,
                correlation_id=correlation_id,
            )

        return removed

    def get(self, transaction_id: UUID) -> Transaction:
        """
        Raises:
            NotFoundError: If no transaction has this id
        """
        transaction = self._storage.get(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_id)
        return transaction

    def snapshot(self) -> tuple[Transaction, ...]:
        """All transactions, newest first, as an immutable point-in-time copy."""
        return self._storage.list_all()

    def __len__(self) -> int:
        return self._storage.count()


class LedgerSession:
    """
    The presentation-facing side of the engine.

    Holds the active look-back period and answers every read by pulling
    a fresh snapshot from the store, filtering it to the window and
    aggregating the result.

    submit() and delete() are the boundary where ledger errors are
    turned into user-facing messages: they never raise for
    ValidationError or NotFoundError.
    """

    def __init__(
        self,
        store: LedgerStore,
        period: Optional[Union[Period, str]] = None,
        locale: Optional[str] = None,
        currency: Optional[str] = None,
        audit_logger: Optional[AuditLogger] = None,
        clock: Optional[Clock] = None,
    ):
        settings = get_settings().ledger
        self._store = store
        self._period = coerce_period(period or settings.default_period)
        self._locale = locale or settings.locale
        self._currency = (currency or settings.currency).upper()
        self._audit_logger = audit_logger
        self._clock = clock or utcnow

    @property
    def store(self) -> LedgerStore:
        return self._store

    @property
    def period(self) -> Period:
        return self._period

    @property
    def locale(self) -> str:
        return self._locale

    @property
    def currency(self) -> str:
        return self._currency

    def set_period(self, period: Union[Period, str]) -> Period:
        """
        Select the window used by subsequent reads.

        Raises:
            ValueError: If the period is not day/week/month/year
        """
        new_period = coerce_period(period)
        old_period = self._period
        self._period = new_period

        if self._audit_logger and new_period != old_period:
            self._audit_logger.log_period_changed(
                old_period=old_period.value,
                new_period=new_period.value,
            )

        return new_period

    def _now(self, now: Optional[datetime]) -> datetime:
        return ensure_aware(now) if now is not None else self._clock()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def snapshot(self) -> tuple[Transaction, ...]:
        """The full ledger, regardless of the active window."""
        return self._store.snapshot()

    def visible_transactions(self, now: Optional[datetime] = None) -> list[Transaction]:
        """Transactions inside the active window, newest first."""
        return filter_by_period(self._store.snapshot(), self._now(now), self._period)

    def summary(self, now: Optional[datetime] = None) -> Summary:
        return summarize(self.visible_transactions(now))

    def category_breakdown(
        self,
        txn_type: TransactionType,
        now: Optional[datetime] = None,
    ) -> dict[str, Decimal]:
        return category_breakdown(self.visible_transactions(now), txn_type)

    def category_shares(
        self,
        txn_type: TransactionType,
        now: Optional[datetime] = None,
    ) -> list[CategoryShare]:
        return category_shares(
            self.visible_transactions(now), txn_type, self._locale, self._currency
        )

    def category_options(self, txn_type: TransactionType) -> list[tuple[str, str]]:
        """(canonical name, localized label) pairs for a category picker."""
        return [
            (name, category_label(txn_type, name, self._locale))
            for name in categories_for(txn_type)
        ]

    def type_options(self) -> list[tuple[TransactionType, str]]:
        """(type, localized label) pairs for the income/expense switch."""
        return [(t, type_label(t, self._locale)) for t in TransactionType]

    def period_options(self) -> list[tuple[Period, str]]:
        """(period, localized label) pairs for the period selector."""
        return [(p, period_label(p, self._locale)) for p in Period]

    def format_amount(self, amount: Decimal, explicit_sign: bool = False) -> str:
        return format_amount(amount, self._locale, self._currency, explicit_sign)

    def report(self, now: Optional[datetime] = None) -> LedgerReport:
        """
        Compute the whole read model from one snapshot and one "now".

        Use this when totals, breakdowns and the history list are shown
        together and must agree with each other.
        """
        now = self._now(now)
        visible = filter_by_period(self._store.snapshot(), now, self._period)
        summary = summarize(visible)
        income_shares = category_shares(
            visible, TransactionType.INCOME, self._locale, self._currency
        )
        expense_shares = category_shares(
            visible, TransactionType.EXPENSE, self._locale, self._currency
        )

        report = LedgerReport(
            period=self._period,
            generated_at=now,
            summary=summary,
            income_breakdown=category_breakdown(visible, TransactionType.INCOME),
            expense_breakdown=category_breakdown(visible, TransactionType.EXPENSE),
            income_shares=income_shares,
            expense_shares=expense_shares,
            transactions=visible,
            display=build_report_display(
                self._period,
                summary,
                visible,
                income_shares,
                expense_shares,
                self._locale,
                self._currency,
            ),
        )

        if self._audit_logger:
            self._audit_logger.log_report_generated(
                period=self._period.value,
                transaction_count=report.transaction_count,
                balance=str(report.summary.balance),
            )

        return report

    # -------------------------------------------------------------------------
    # Commands (error boundary)
    # -------------------------------------------------------------------------

    def submit(
        self,
        candidate: TransactionCandidate,
        editing_id: Optional[UUID] = None,
    ) -> tuple[Optional[Transaction], bool, str]:
        """
        Save a form: add when editing_id is None, update otherwise.

        Returns:
            (transaction, ok, message)

        If ok is False, transaction is None and the ledger is unchanged;
        message tells the user what to fix.
        """
        correlation_id = create_correlation_id()

        try:
            if editing_id is None:
                transaction = self._store.add(candidate, correlation_id=correlation_id)
                message_key = "transaction_added"
            else:
                transaction = self._store.update(
                    editing_id, candidate, correlation_id=correlation_id
                )
                message_key = "transaction_updated"
        except ValidationError as e:
            message = self._store.validator.get_user_friendly_summary(e.result, self._locale)
            return None, False, message
        except NotFoundError:
            return None, False, get_message("transaction_not_found", self._locale)

        return transaction, True, get_message(message_key, self._locale)

    def delete(self, transaction_id: UUID) -> tuple[bool, str]:
        """
        Delete a transaction.

        Returns:
            (ok, message)
        """
        try:
            self._store.remove(transaction_id, correlation_id=create_correlation_id())
        except NotFoundError:
            return False, get_message("transaction_not_found", self._locale)
        return True, get_message("transaction_removed", self._locale)

    def edit_form(self, transaction_id: UUID) -> TransactionCandidate:
        """
        Pre-fill a form with an existing transaction for editing.

        Raises:
            NotFoundError: If no transaction has this id
        """
        transaction = self._store.get(transaction_id)
        return TransactionCandidate(
            title=transaction.title,
            amount=str(transaction.amount),
            type=transaction.type,
            category=transaction.category,
        )


def create_app_components(
    with_audit_storage: bool = True,
    clock: Optional[Clock] = None,
) -> tuple[LedgerStore, LedgerSession, AuditLogger]:
    """
    Factory function to create all application components.

    Args:
        with_audit_storage: Keep an in-memory audit trail in addition to
                    the structured log.
        clock: Time source shared by store and session (defaults to UTC now).

    Returns:
        (ledger_store, ledger_session, audit_logger)
    """
    configure_logging()

    audit_logger = AuditLogger(InMemoryAuditStorage() if with_audit_storage else None)

    store = LedgerStore(
        storage=InMemoryTransactionStorage(),
        validator=TransactionValidator(),
        audit_logger=audit_logger,
        clock=clock,
    )

    session = LedgerSession(
        store=store,
        audit_logger=audit_logger,
        clock=clock,
    )

    return store, session, audit_logger
