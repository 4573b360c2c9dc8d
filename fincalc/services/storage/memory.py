"""
In-Memory Storage Implementation

DESIGN DECISION: The ledger lives in process memory. Durability across
restarts is out of scope, so the simplest faithful backend is a list.

TRADEOFFS:
- Lookups by id are linear (we're fine for a personal ledger)
- Nothing survives a restart
- Not safe for concurrent writers (there is exactly one writer)

The implementation follows the abstract interface, so a database-backed
store can replace it without changing business logic.
"""

from typing import Optional
from uuid import UUID

from fincalc.models.audit import AuditEvent
from fincalc.models.transaction import Transaction
from fincalc.services.storage.interface import (
    AuditStorageInterface,
    DuplicateError,
    NotFoundError,
    TransactionStorageInterface,
)


class InMemoryTransactionStorage(TransactionStorageInterface):
    """
    List-backed transaction storage, newest first.

    Transactions are frozen models, so handing out a tuple of them is a
    safe point-in-time snapshot without deep copies.
    """

    def __init__(self, transactions: Optional[list[Transaction]] = None):
        self._transactions: list[Transaction] = list(transactions or [])

    def _index_of(self, transaction_id: UUID) -> int:
        for idx, txn in enumerate(self._transactions):
            if txn.id == transaction_id:
                return idx
        raise NotFoundError(transaction_id)

    def insert(self, transaction: Transaction) -> Transaction:
        """Prepend a transaction."""
        if self.get(transaction.id) is not None:
            raise DuplicateError(f"Transaction already exists: {transaction.id}")
        self._transactions.insert(0, transaction)
        return transaction

    def get(self, transaction_id: UUID) -> Optional[Transaction]:
        for txn in self._transactions:
            if txn.id == transaction_id:
                return txn
        return None

    def replace(self, transaction: Transaction) -> Transaction:
        """Swap in the new version at the same position."""
        idx = self._index_of(transaction.id)
        self._transactions[idx] = transaction
        return transaction

    def delete(self, transaction_id: UUID) -> Transaction:
        idx = self._index_of(transaction_id)
        return self._transactions.pop(idx)

    def list_all(self) -> tuple[Transaction, ...]:
        return tuple(self._transactions)

    def count(self) -> int:
        return len(self._transactions)


class InMemoryAuditStorage(AuditStorageInterface):
    """Append-only audit log kept in a list, oldest first."""

    def __init__(self):
        self._events: list[AuditEvent] = []

    def append_event(self, event: AuditEvent) -> bool:
        self._events.append(event)
        return True

    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        events = [e for e in self._events if e.correlation_id == correlation_id]
        events.sort(key=lambda e: e.timestamp)
        return events

    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[AuditEvent]:
        events = [
            e for e in self._events
            if e.entity_type == entity_type and e.entity_id == entity_id
        ]
        events.sort(key=lambda e: e.timestamp)
        return events

    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        # Newest first; reversed() keeps same-timestamp events in append order
        return list(reversed(self._events))[:limit]
