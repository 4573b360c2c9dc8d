"""
Abstract Storage Interface

DESIGN DECISION: We define an abstract interface for storage operations.
This allows us to:
1. Keep the ledger in memory today (persistence is not a feature yet)
2. Swap in a real database later without touching the ledger rules
3. Use throwaway storage in tests

The interface is intentionally dumb: it stores and returns validated
Transaction objects in order. Validation, id assignment and timestamps
belong to the LedgerStore, not to storage.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from fincalc.models.audit import AuditEvent
from fincalc.models.transaction import Transaction


class TransactionStorageInterface(ABC):
    """
    Abstract interface for the ordered transaction collection.

    Order is newest-first by insertion: insert() puts a record in front
    of every existing record, replace() keeps the record's position.
    """

    @abstractmethod
    def insert(self, transaction: Transaction) -> Transaction:
        """
        Put a transaction at the front of the collection.

        Args:
            transaction: The validated transaction to store

        Returns:
            The stored transaction

        Raises:
            DuplicateError: If a transaction with the same id exists
        """
        pass

    @abstractmethod
    def get(self, transaction_id: UUID) -> Optional[Transaction]:
        """
        Retrieve a transaction by its ID.

        Returns:
            The transaction if found, None otherwise
        """
        pass

    @abstractmethod
    def replace(self, transaction: Transaction) -> Transaction:
        """
        Replace the stored transaction that has the same id.

        Args:
            transaction: The transaction with updated fields

        Returns:
            The stored transaction

        Raises:
            NotFoundError: If no transaction has this id
        """
        pass

    @abstractmethod
    def delete(self, transaction_id: UUID) -> Transaction:
        """
        Delete a transaction by ID.

        Returns:
            The deleted transaction

        Raises:
            NotFoundError: If no transaction has this id
        """
        pass

    @abstractmethod
    def list_all(self) -> tuple[Transaction, ...]:
        """
        Return every stored transaction, newest first.

        The result is a point-in-time copy: later writes do not show up
        in it and callers cannot change the store through it.
        """
        pass

    def count(self) -> int:
        return len(self.list_all())


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a correlation ID (e.g., one form submission).

        Returns:
            List of related events in chronological order
        """
        pass

    @abstractmethod
    def get_events_by_entity(
        self,
        entity_type: str,
        entity_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for a specific entity.

        Args:
            entity_type: Type of entity (e.g., 'transaction')
            entity_id: The entity's ID

        Returns:
            List of events in chronological order
        """
        pass

    @abstractmethod
    def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events.

        Returns:
            List of recent events (newest first)
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""

    def __init__(self, entity_id: UUID, entity_type: str = "Transaction"):
        self.entity_id = entity_id
        self.entity_type = entity_type
        super().__init__(f"{entity_type} not found: {entity_id}")


class DuplicateError(StorageError):
    """Attempted to insert a duplicate entity."""
    pass
