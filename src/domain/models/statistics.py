"""Domain models for windowed ledger statistics."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.domain.constants import TransactionCategory


@dataclass(frozen=True)
class MonthlyStats:
    """Totals for one calendar month."""

    month_start: date
    label: str
    total_borrowed: Decimal
    total_lent: Decimal
    total_payments: Decimal
    total_expenses: Decimal
    net_balance: Decimal


@dataclass(frozen=True)
class FriendMonthlyStats:
    """Totals for one counterparty over one calendar month."""

    counterparty_id: str
    counterparty_name: str
    total_borrowed: Decimal
    total_lent: Decimal
    total_payments: Decimal
    net_balance: Decimal


@dataclass(frozen=True)
class CategoryStats:
    """Aggregate of the transactions in one category.

    Attributes:
        category: Category of the bucket.
        count: Number of transactions in the bucket.
        borrowed_amount: Sum of borrowed amounts.
        lent_amount: Sum of lent amounts.
        expense_amount: Sum of expense amounts.
        total_amount: Borrowed minus lent and expenses.
        percentage: Share of ``abs(total_amount)`` across all buckets.
    """

    category: TransactionCategory
    count: int
    borrowed_amount: Decimal
    lent_amount: Decimal
    expense_amount: Decimal
    total_amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class ExpenseCategoryAmount:
    """Expense total for one category."""

    category: TransactionCategory
    amount: Decimal
    percentage: Decimal


@dataclass(frozen=True)
class ExpenseSummary:
    """Expense totals with a per-category breakdown."""

    total_expenses: Decimal
    by_category: list[ExpenseCategoryAmount]


__all__ = [
    "MonthlyStats",
    "FriendMonthlyStats",
    "CategoryStats",
    "ExpenseCategoryAmount",
    "ExpenseSummary",
]
