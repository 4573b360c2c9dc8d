"""
Audit Logger

DESIGN DECISION: Every ledger command is logged.
This provides:
1. Traceability of how the ledger reached its current state
2. Debugging capability when a command is rejected
3. A history the user can inspect

The audit logger:
- Is synchronous, like the rest of the engine
- Gracefully handles storage failures (never breaks a ledger command)
- Supports correlation IDs to trace related events
"""

import logging
import sys
from typing import Optional
from uuid import UUID, uuid4

import structlog

from fincalc.config import LoggingSettings, get_settings
from fincalc.models.audit import AuditEvent, AuditEventBuilder, AuditSeverity
from fincalc.services.storage import AuditStorageInterface, StorageError


def configure_logging(settings: Optional[LoggingSettings] = None) -> None:
    """
    Configure structlog on top of the standard library logger.

    Call once at process start (create_app_components does). Safe to
    call again, e.g. from tests, to pick up changed settings.
    """
    settings = settings or get_settings().logging

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=getattr(logging, settings.level),
        force=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if settings.json_output
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. Audit storage, when one is configured (for the history view)
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for the audit trail.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("fincalc.audit")

    @property
    def storage(self) -> Optional[AuditStorageInterface]:
        return self._storage

    def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity in (AuditSeverity.ERROR, AuditSeverity.CRITICAL):
            self._logger.error("audit_event", **log_dict)
        elif event.severity == AuditSeverity.WARNING:
            self._logger.warning("audit_event", **log_dict)
        elif event.severity == AuditSeverity.DEBUG:
            self._logger.debug("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return self._storage.append_event(event)
            except StorageError as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    def log_transaction_added(
        self,
        transaction_id: UUID,
        txn_type: str,
        category: str,
        amount: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a successful add."""
        event = AuditEventBuilder.transaction_added(
            transaction_id=transaction_id,
            txn_type=txn_type,
            category=category,
            amount=amount,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_transaction_updated(
        self,
        transaction_id: UUID,
        changed_fields: list[str],
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a successful edit."""
        event = AuditEventBuilder.transaction_updated(
            transaction_id=transaction_id,
            changed_fields=changed_fields,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_transaction_removed(
        self,
        transaction_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a successful delete."""
        event = AuditEventBuilder.transaction_removed(
            transaction_id=transaction_id,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_validation_failed(
        self,
        command: str,
        issues: list[dict],
        transaction_id: Optional[UUID] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a command rejected by validation."""
        event = AuditEventBuilder.validation_failed(
            command=command,
            issues=issues,
            transaction_id=transaction_id,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_not_found(
        self,
        command: str,
        transaction_id: UUID,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log a command aimed at an unknown transaction."""
        event = AuditEventBuilder.transaction_not_found(
            command=command,
            transaction_id=transaction_id,
            correlation_id=correlation_id,
        )
        self.log(event)

    def log_period_changed(self, old_period: str, new_period: str) -> None:
        event = AuditEventBuilder.period_changed(
            old_period=old_period,
            new_period=new_period,
        )
        self.log(event)

    def log_report_generated(
        self,
        period: str,
        transaction_count: int,
        balance: str,
    ) -> None:
        event = AuditEventBuilder.report_generated(
            period=period,
            transaction_count=transaction_count,
            balance=balance,
        )
        self.log(event)

    def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        event = AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        )
        self.log(event)


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., one form submit).
    Pass it through all subsequent operations.
    """
    return uuid4()
