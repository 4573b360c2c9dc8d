"""
Data Models Package

This package contains all Pydantic models used by the ledger engine.
All data flowing through the system must conform to these schemas.
"""

from fincalc.constants.enums import Period, TransactionType
from fincalc.models.transaction import (
    CategoryShare,
    LedgerReport,
    ReportDisplay,
    Summary,
    Transaction,
    TransactionCandidate,
    ValidationIssue,
    ValidationResult,
    ensure_aware,
    utcnow,
)
from fincalc.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Ledger models
    "CategoryShare",
    "LedgerReport",
    "Period",
    "ReportDisplay",
    "Summary",
    "Transaction",
    "TransactionCandidate",
    "TransactionType",
    "ValidationIssue",
    "ValidationResult",
    "ensure_aware",
    "utcnow",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]
