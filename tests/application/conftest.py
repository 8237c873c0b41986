"""Fixtures for application use case tests."""

from dataclasses import replace
from datetime import datetime
from unittest.mock import MagicMock

import pytest

from src.domain.exceptions import LedgerRepositoryError, RecordNotFoundError
from src.domain.models import Counterparty, Transaction


class InMemoryLedgerRepository:
    """Dict-backed stand-in for the ledger repository port."""

    def __init__(self) -> None:
        self.counterparties: dict[str, Counterparty] = {}
        self.transactions: dict[str, Transaction] = {}
        self.fail_on: set[str] = set()
        self._next_id = 0

    def _new_id(self, prefix: str) -> str:
        self._next_id += 1
        return f"{prefix}-{self._next_id}"

    def _check(self, operation: str) -> None:
        if operation in self.fail_on:
            raise LedgerRepositoryError(f"{operation} failed")

    def fetch_counterparties(self, user_id):
        self._check("fetch_counterparties")
        return [c for c in self.counterparties.values() if c.owner_user_id == user_id]

    def fetch_transactions(self, user_id, counterparty_id=None):
        self._check("fetch_transactions")
        rows = [
            t
            for t in self.transactions.values()
            if t.owner_user_id == user_id
            and (counterparty_id is None or t.counterparty_id == counterparty_id)
        ]
        return sorted(rows, key=lambda t: t.date, reverse=True)

    def add_counterparty(self, user_id, name):
        self._check("add_counterparty")
        counterparty = Counterparty(
            id=self._new_id("friend"), name=name, owner_user_id=user_id
        )
        self.counterparties[counterparty.id] = counterparty
        return counterparty

    def update_counterparty(self, user_id, counterparty_id, name):
        self._check("update_counterparty")
        if counterparty_id not in self.counterparties:
            raise RecordNotFoundError(counterparty_id)
        updated = replace(self.counterparties[counterparty_id], name=name)
        self.counterparties[counterparty_id] = updated
        return updated

    def delete_counterparty(self, user_id, counterparty_id):
        self._check("delete_counterparty")
        if self.counterparties.pop(counterparty_id, None) is None:
            raise RecordNotFoundError(counterparty_id)
        self.transactions = {
            key: t
            for key, t in self.transactions.items()
            if t.counterparty_id != counterparty_id
        }

    def add_transaction(self, user_id, draft):
        self._check("add_transaction")
        transaction = Transaction.from_draft(
            draft,
            id=self._new_id("tx"),
            owner_user_id=user_id,
            created_at=datetime(2024, 1, 1),
        )
        self.transactions[transaction.id] = transaction
        return transaction

    def update_transaction(self, user_id, transaction_id, changes):
        self._check("update_transaction")
        if transaction_id not in self.transactions:
            raise RecordNotFoundError(transaction_id)
        updated = replace(self.transactions[transaction_id], **changes)
        self.transactions[transaction_id] = updated
        return updated

    def delete_transaction(self, user_id, transaction_id):
        self._check("delete_transaction")
        if self.transactions.pop(transaction_id, None) is None:
            raise RecordNotFoundError(transaction_id)


@pytest.fixture
def repository() -> InMemoryLedgerRepository:
    return InMemoryLedgerRepository()


@pytest.fixture
def logger() -> MagicMock:
    return MagicMock()
