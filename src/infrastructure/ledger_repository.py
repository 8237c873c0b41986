"""SQLAlchemy-backed repository for counterparties and transactions."""

import json
from collections.abc import Callable
from datetime import datetime
from typing import Any, TypeVar
from uuid import uuid4

from sqlalchemy import text
from sqlalchemy.engine import Row
from sqlalchemy.exc import SQLAlchemyError

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.constants import TransactionCategory, TransactionType
from src.domain.exceptions import LedgerRepositoryError, RecordNotFoundError
from src.domain.models import Counterparty, Transaction, TransactionDraft
from src.domain.services.validation import apply_transaction_changes
from src.infrastructure.json_codec import recurrence_from_dict, recurrence_to_dict
from src.utils.date_utils import coerce_datetime
from src.utils.decimal_utils import coerce_decimal

T = TypeVar("T")

CREATE_COUNTERPARTIES_SQL = """
CREATE TABLE IF NOT EXISTS counterparties (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    owner_user_id TEXT NOT NULL
)
"""

CREATE_TRANSACTIONS_SQL = """
CREATE TABLE IF NOT EXISTS transactions (
    id TEXT PRIMARY KEY,
    owner_user_id TEXT NOT NULL,
    counterparty_id TEXT,
    amount TEXT NOT NULL,
    description TEXT NOT NULL,
    date TEXT NOT NULL,
    type TEXT NOT NULL,
    category TEXT,
    original_debt_id TEXT,
    parent_transaction_id TEXT,
    recurring TEXT,
    created_at TEXT
)
"""

SELECT_COUNTERPARTIES_SQL = text(
    """
    SELECT id, name, owner_user_id
    FROM counterparties
    WHERE owner_user_id = :user_id
    ORDER BY name
    """
)

SELECT_COUNTERPARTY_SQL = text(
    """
    SELECT id, name, owner_user_id
    FROM counterparties
    WHERE owner_user_id = :user_id AND id = :id
    """
)

INSERT_COUNTERPARTY_SQL = text(
    """
    INSERT INTO counterparties (id, name, owner_user_id)
    VALUES (:id, :name, :owner_user_id)
    """
)

UPDATE_COUNTERPARTY_SQL = text(
    """
    UPDATE counterparties
    SET name = :name
    WHERE owner_user_id = :user_id AND id = :id
    """
)

DELETE_COUNTERPARTY_SQL = text(
    """
    DELETE FROM counterparties
    WHERE owner_user_id = :user_id AND id = :id
    """
)

DELETE_COUNTERPARTY_TRANSACTIONS_SQL = text(
    """
    DELETE FROM transactions
    WHERE owner_user_id = :user_id AND counterparty_id = :counterparty_id
    """
)

_TRANSACTION_COLUMNS = """
    id, owner_user_id, counterparty_id, amount, description, date, type,
    category, original_debt_id, parent_transaction_id, recurring, created_at
"""

SELECT_TRANSACTIONS_SQL = text(
    f"""
    SELECT {_TRANSACTION_COLUMNS}
    FROM transactions
    WHERE owner_user_id = :user_id
    ORDER BY date DESC
    """
)

SELECT_COUNTERPARTY_TRANSACTIONS_SQL = text(
    f"""
    SELECT {_TRANSACTION_COLUMNS}
    FROM transactions
    WHERE owner_user_id = :user_id AND counterparty_id = :counterparty_id
    ORDER BY date DESC
    """
)

SELECT_TRANSACTION_SQL = text(
    f"""
    SELECT {_TRANSACTION_COLUMNS}
    FROM transactions
    WHERE owner_user_id = :user_id AND id = :id
    """
)

INSERT_TRANSACTION_SQL = text(
    """
    INSERT INTO transactions (
        id,
        owner_user_id,
        counterparty_id,
        amount,
        description,
        date,
        type,
        category,
        original_debt_id,
        parent_transaction_id,
        recurring,
        created_at
    )
    VALUES (
        :id,
        :owner_user_id,
        :counterparty_id,
        :amount,
        :description,
        :date,
        :type,
        :category,
        :original_debt_id,
        :parent_transaction_id,
        :recurring,
        :created_at
    )
    """
)

UPDATE_TRANSACTION_SQL = text(
    """
    UPDATE transactions
    SET counterparty_id = :counterparty_id,
        amount = :amount,
        description = :description,
        date = :date,
        type = :type,
        category = :category,
        original_debt_id = :original_debt_id,
        parent_transaction_id = :parent_transaction_id,
        recurring = :recurring
    WHERE owner_user_id = :owner_user_id AND id = :id
    """
)

DELETE_TRANSACTION_SQL = text(
    """
    DELETE FROM transactions
    WHERE owner_user_id = :user_id AND id = :id
    """
)


def _new_id() -> str:
    return uuid4().hex


def _row_to_counterparty(row: Row) -> Counterparty:
    return Counterparty(
        id=row.id,
        name=row.name,
        owner_user_id=row.owner_user_id,
    )


def _row_to_transaction(row: Row) -> Transaction:
    recurring = json.loads(row.recurring) if row.recurring else None
    return Transaction(
        id=row.id,
        owner_user_id=row.owner_user_id,
        counterparty_id=row.counterparty_id,
        amount=coerce_decimal(row.amount),
        description=row.description,
        date=coerce_datetime(row.date),
        type=TransactionType(row.type),
        category=TransactionCategory(row.category) if row.category else None,
        original_debt_id=row.original_debt_id,
        parent_transaction_id=row.parent_transaction_id,
        recurring=recurrence_from_dict(recurring),
        created_at=coerce_datetime(row.created_at) if row.created_at else None,
    )


def _transaction_params(transaction: Transaction) -> dict[str, Any]:
    recurring = (
        json.dumps(recurrence_to_dict(transaction.recurring))
        if transaction.recurring
        else None
    )
    return {
        "id": transaction.id,
        "owner_user_id": transaction.owner_user_id,
        "counterparty_id": transaction.counterparty_id,
        "amount": str(transaction.amount),
        "description": transaction.description,
        "date": transaction.date.isoformat(),
        "type": transaction.type.value,
        "category": transaction.category.value if transaction.category else None,
        "original_debt_id": transaction.original_debt_id,
        "parent_transaction_id": transaction.parent_transaction_id,
        "recurring": recurring,
        "created_at": (
            transaction.created_at.isoformat() if transaction.created_at else None
        ),
    }


class SqlAlchemyLedgerRepository(LedgerRepositoryPort):
    """Ledger storage backed by SQLAlchemy.

    Every query is scoped to the owning user. Amounts are stored as text so
    no precision is lost between writes and reads.
    """

    def __init__(
        self,
        db_port: DatabaseEnginePort,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the ledger engine.
            clock: Source of ``created_at`` timestamps.
        """
        self._db_port = db_port
        self._clock = clock
        self._schema_ready = False

    def prepare_storage(self) -> None:
        """Ensure the ledger tables exist."""
        engine = self._db_port.get_ledger_engine()
        with engine.begin() as conn:
            conn.exec_driver_sql(CREATE_COUNTERPARTIES_SQL)
            conn.exec_driver_sql(CREATE_TRANSACTIONS_SQL)
        self._schema_ready = True

    def _run(self, action: str, operation: Callable[[], T]) -> T:
        try:
            if not self._schema_ready:
                self.prepare_storage()
            return operation()
        except SQLAlchemyError as exc:
            raise LedgerRepositoryError(f"Failed to {action}: {exc}") from exc

    def fetch_counterparties(self, user_id: str) -> list[Counterparty]:
        """Return the user's counterparties ordered by name."""

        def operation() -> list[Counterparty]:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                rows = conn.execute(
                    SELECT_COUNTERPARTIES_SQL, {"user_id": user_id}
                ).all()
            return [_row_to_counterparty(row) for row in rows]

        return self._run("fetch counterparties", operation)

    def fetch_transactions(
        self,
        user_id: str,
        counterparty_id: str | None = None,
    ) -> list[Transaction]:
        """Return the user's transactions, newest first.

        Args:
            user_id: Owner of the transactions.
            counterparty_id: Restrict the result to one counterparty.
        """

        def operation() -> list[Transaction]:
            engine = self._db_port.get_ledger_engine()
            with engine.connect() as conn:
                if counterparty_id is None:
                    rows = conn.execute(
                        SELECT_TRANSACTIONS_SQL, {"user_id": user_id}
                    ).all()
                else:
                    rows = conn.execute(
                        SELECT_COUNTERPARTY_TRANSACTIONS_SQL,
                        {"user_id": user_id, "counterparty_id": counterparty_id},
                    ).all()
            return [_row_to_transaction(row) for row in rows]

        return self._run("fetch transactions", operation)

    def add_counterparty(self, user_id: str, name: str) -> Counterparty:
        counterparty = Counterparty(id=_new_id(), name=name, owner_user_id=user_id)

        def operation() -> Counterparty:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                conn.execute(
                    INSERT_COUNTERPARTY_SQL,
                    {
                        "id": counterparty.id,
                        "name": counterparty.name,
                        "owner_user_id": counterparty.owner_user_id,
                    },
                )
            return counterparty

        return self._run("add counterparty", operation)

    def update_counterparty(
        self,
        user_id: str,
        counterparty_id: str,
        name: str,
    ) -> Counterparty:
        """Rename a counterparty.

        Raises:
            RecordNotFoundError: If the user has no such counterparty.
        """

        def operation() -> Counterparty:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                result = conn.execute(
                    UPDATE_COUNTERPARTY_SQL,
                    {"user_id": user_id, "id": counterparty_id, "name": name},
                )
                if result.rowcount == 0:
                    raise RecordNotFoundError(
                        f"Counterparty not found: {counterparty_id}"
                    )
                row = conn.execute(
                    SELECT_COUNTERPARTY_SQL,
                    {"user_id": user_id, "id": counterparty_id},
                ).one()
            return _row_to_counterparty(row)

        return self._run("update counterparty", operation)

    def delete_counterparty(self, user_id: str, counterparty_id: str) -> None:
        """Delete a counterparty together with its transactions.

        Both deletes run in one transaction.

        Raises:
            RecordNotFoundError: If the user has no such counterparty.
        """

        def operation() -> None:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                result = conn.execute(
                    DELETE_COUNTERPARTY_SQL,
                    {"user_id": user_id, "id": counterparty_id},
                )
                if result.rowcount == 0:
                    raise RecordNotFoundError(
                        f"Counterparty not found: {counterparty_id}"
                    )
                conn.execute(
                    DELETE_COUNTERPARTY_TRANSACTIONS_SQL,
                    {"user_id": user_id, "counterparty_id": counterparty_id},
                )

        self._run("delete counterparty", operation)

    def add_transaction(
        self,
        user_id: str,
        draft: TransactionDraft,
    ) -> Transaction:
        transaction = Transaction.from_draft(
            draft,
            id=_new_id(),
            owner_user_id=user_id,
            created_at=self._clock(),
        )

        def operation() -> Transaction:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                conn.execute(INSERT_TRANSACTION_SQL, _transaction_params(transaction))
            return transaction

        return self._run("add transaction", operation)

    def update_transaction(
        self,
        user_id: str,
        transaction_id: str,
        changes: dict[str, Any],
    ) -> Transaction:
        """Apply field changes to a stored transaction.

        Args:
            user_id: Owner of the transaction.
            transaction_id: Id of the transaction to change.
            changes: Mapping of ``Transaction`` field names to new values.

        Returns:
            Transaction: The stored transaction after the update.

        Raises:
            LedgerValidationError: If a change targets an unknown or
                read-only field, or leaves the transaction invalid.
            RecordNotFoundError: If the user has no such transaction.
        """

        def operation() -> Transaction:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                row = conn.execute(
                    SELECT_TRANSACTION_SQL,
                    {"user_id": user_id, "id": transaction_id},
                ).first()
                if row is None:
                    raise RecordNotFoundError(
                        f"Transaction not found: {transaction_id}"
                    )
                updated = apply_transaction_changes(
                    _row_to_transaction(row), changes
                )
                conn.execute(UPDATE_TRANSACTION_SQL, _transaction_params(updated))
            return updated

        return self._run("update transaction", operation)

    def delete_transaction(self, user_id: str, transaction_id: str) -> None:
        """Delete a transaction.

        Partial payments that referenced it are left in place.

        Raises:
            RecordNotFoundError: If the user has no such transaction.
        """

        def operation() -> None:
            engine = self._db_port.get_ledger_engine()
            with engine.begin() as conn:
                result = conn.execute(
                    DELETE_TRANSACTION_SQL,
                    {"user_id": user_id, "id": transaction_id},
                )
                if result.rowcount == 0:
                    raise RecordNotFoundError(
                        f"Transaction not found: {transaction_id}"
                    )

        self._run("delete transaction", operation)


__all__ = ["SqlAlchemyLedgerRepository"]
