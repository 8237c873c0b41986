"""Domain models for ledger records."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.domain.constants import (
    DEBT_TYPES,
    RecurrenceInterval,
    TransactionCategory,
    TransactionType,
)


@dataclass(frozen=True)
class Counterparty:
    """Person the user tracks debts against.

    Attributes:
        id: Opaque identifier assigned by the persistence collaborator.
        name: Display name, the only mutable field.
        owner_user_id: Identifier of the owning user.
    """

    id: str
    name: str
    owner_user_id: str


@dataclass(frozen=True)
class RecurrenceRule:
    """Schedule attached to a recurring template."""

    is_recurring: bool
    interval: RecurrenceInterval
    start_date: datetime
    end_date: datetime | None = None
    last_processed_date: datetime | None = None


@dataclass(frozen=True)
class TransactionDraft:
    """Transaction content before the collaborator assigns identity."""

    counterparty_id: str | None
    amount: Decimal
    description: str
    date: datetime
    type: TransactionType
    category: TransactionCategory | None = None
    original_debt_id: str | None = None
    parent_transaction_id: str | None = None
    recurring: RecurrenceRule | None = None


@dataclass(frozen=True)
class Transaction:
    """Immutable financial event owned by one user.

    Attributes:
        id: Opaque identifier.
        owner_user_id: Identifier of the owning user.
        counterparty_id: Counterparty, absent only for expenses.
        amount: Positive amount.
        description: Free text description.
        date: Timestamp of the event.
        type: Kind of event.
        category: Optional spending category.
        original_debt_id: Debt settled by a partial payment.
        parent_transaction_id: Template an instance was materialized from.
        recurring: Schedule when the record is a recurring template.
        created_at: Timestamp the record was stored.
    """

    id: str
    owner_user_id: str
    counterparty_id: str | None
    amount: Decimal
    description: str
    date: datetime
    type: TransactionType
    category: TransactionCategory | None = None
    original_debt_id: str | None = None
    parent_transaction_id: str | None = None
    recurring: RecurrenceRule | None = None
    created_at: datetime | None = None

    @property
    def is_debt(self) -> bool:
        """Return True for borrowed and lent transactions."""
        return self.type in DEBT_TYPES

    @property
    def is_template(self) -> bool:
        """Return True for recurring templates, not their instances."""
        return (
            self.recurring is not None
            and self.recurring.is_recurring
            and not self.parent_transaction_id
        )

    @classmethod
    def from_draft(
        cls,
        draft: TransactionDraft,
        *,
        id: str,
        owner_user_id: str,
        created_at: datetime | None = None,
    ) -> "Transaction":
        """Build a stored transaction from a draft and its identity."""
        return cls(
            id=id,
            owner_user_id=owner_user_id,
            counterparty_id=draft.counterparty_id,
            amount=draft.amount,
            description=draft.description,
            date=draft.date,
            type=draft.type,
            category=draft.category,
            original_debt_id=draft.original_debt_id,
            parent_transaction_id=draft.parent_transaction_id,
            recurring=draft.recurring,
            created_at=created_at,
        )


__all__ = [
    "Counterparty",
    "RecurrenceRule",
    "TransactionDraft",
    "Transaction",
]
