"""Domain models package."""

from .debts import (
    DebtDetail,
    DebtSummary,
    ExtendedDebtSummary,
    OutstandingDebts,
    TotalDebt,
)
from .ledger import (
    Counterparty,
    RecurrenceRule,
    Transaction,
    TransactionDraft,
)
from .statistics import (
    CategoryStats,
    ExpenseCategoryAmount,
    ExpenseSummary,
    FriendMonthlyStats,
    MonthlyStats,
)

__all__ = [
    "Counterparty",
    "RecurrenceRule",
    "Transaction",
    "TransactionDraft",
    "DebtSummary",
    "DebtDetail",
    "ExtendedDebtSummary",
    "OutstandingDebts",
    "TotalDebt",
    "MonthlyStats",
    "FriendMonthlyStats",
    "CategoryStats",
    "ExpenseCategoryAmount",
    "ExpenseSummary",
]
