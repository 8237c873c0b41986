"""Derived debt view models. Recomputed on every read, never stored."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from src.domain.models.ledger import Transaction


@dataclass(frozen=True)
class DebtSummary:
    """Per-counterparty totals.

    Attributes:
        counterparty_id: Counterparty identifier.
        counterparty_name: Counterparty display name.
        total_borrowed: Sum of borrowed amounts.
        total_lent: Sum of lent amounts.
        total_payments: Sum of payment amounts.
        balance: Positive when the counterparty owes the user.
        transactions: Every transaction of the counterparty.
    """

    counterparty_id: str
    counterparty_name: str
    total_borrowed: Decimal
    total_lent: Decimal
    total_payments: Decimal
    balance: Decimal
    transactions: list[Transaction]


@dataclass(frozen=True)
class DebtDetail:
    """One debt thread: the originating transaction and its partial payments."""

    id: str
    original_transaction: Transaction
    original_amount: Decimal
    remaining_balance: Decimal
    partial_payments: list[Transaction]
    created_date: datetime
    is_fully_paid: bool
    last_payment_date: datetime | None = None

    @property
    def paid_amount(self) -> Decimal:
        """Return the amount already settled, capped at the original."""
        return self.original_amount - self.remaining_balance


@dataclass(frozen=True)
class ExtendedDebtSummary(DebtSummary):
    """Debt summary with per-debt details and partial payments applied."""

    outstanding_debts: list[DebtDetail]
    total_outstanding_amount: Decimal
    total_partial_payments: Decimal


@dataclass(frozen=True)
class OutstandingDebts:
    """Resolved debts with the partial payments that matched none of them."""

    debts: list[DebtDetail]
    orphan_payments: list[Transaction]


@dataclass(frozen=True)
class TotalDebt:
    """Totals across every counterparty."""

    total_owed: Decimal
    total_owing: Decimal
    net_balance: Decimal


__all__ = [
    "DebtSummary",
    "DebtDetail",
    "ExtendedDebtSummary",
    "OutstandingDebts",
    "TotalDebt",
]
