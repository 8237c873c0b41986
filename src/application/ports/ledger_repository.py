"""Port for the persistence collaborator of the ledger."""

from typing import Any, Protocol

from src.domain.models import Counterparty, Transaction, TransactionDraft


class LedgerRepositoryPort(Protocol):
    """Port exposing user-scoped storage of counterparties and transactions.

    Implementations raise ``LedgerRepositoryError`` on storage failures and
    ``RecordNotFoundError`` for unknown ids.
    """

    def fetch_counterparties(self, user_id: str) -> list[Counterparty]:
        """Return every counterparty owned by the user."""

    def fetch_transactions(
        self,
        user_id: str,
        counterparty_id: str | None = None,
    ) -> list[Transaction]:
        """Return the user's transactions, newest first."""

    def add_counterparty(self, user_id: str, name: str) -> Counterparty:
        """Store a new counterparty and return it with its id."""

    def update_counterparty(
        self,
        user_id: str,
        counterparty_id: str,
        name: str,
    ) -> Counterparty:
        """Rename a counterparty."""

    def delete_counterparty(self, user_id: str, counterparty_id: str) -> None:
        """Delete a counterparty and every transaction recorded against it."""

    def add_transaction(
        self,
        user_id: str,
        draft: TransactionDraft,
    ) -> Transaction:
        """Store a new transaction and return it with its id."""

    def update_transaction(
        self,
        user_id: str,
        transaction_id: str,
        changes: dict[str, Any],
    ) -> Transaction:
        """Apply field changes to a transaction and return the result."""

    def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        """Delete a transaction."""


__all__ = ["LedgerRepositoryPort"]
