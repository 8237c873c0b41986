"""Domain package for the debt ledger engine and its models."""

from .constants import (
    RecurrenceInterval,
    TransactionCategory,
    TransactionType,
    category_label,
    recurrence_label,
)
from .exceptions import (
    LedgerError,
    LedgerRepositoryError,
    LedgerValidationError,
    RecordNotFoundError,
)
from .models import (
    CategoryStats,
    Counterparty,
    DebtDetail,
    DebtSummary,
    ExpenseSummary,
    ExtendedDebtSummary,
    FriendMonthlyStats,
    MonthlyStats,
    RecurrenceRule,
    TotalDebt,
    Transaction,
    TransactionDraft,
)
from .policies import is_valid_counterparty_name
from .services import (
    compute_extended_summary,
    compute_summaries,
    get_category_statistics,
    get_expense_summary,
    get_friend_statistics_by_month,
    get_monthly_statistics,
    get_total_debt,
    is_transaction_due,
    materialize_instance,
    resolve_debt_detail,
    resolve_outstanding,
)

__all__ = [
    "RecurrenceInterval",
    "TransactionCategory",
    "TransactionType",
    "category_label",
    "recurrence_label",
    "LedgerError",
    "LedgerRepositoryError",
    "LedgerValidationError",
    "RecordNotFoundError",
    "CategoryStats",
    "Counterparty",
    "DebtDetail",
    "DebtSummary",
    "ExpenseSummary",
    "ExtendedDebtSummary",
    "FriendMonthlyStats",
    "MonthlyStats",
    "RecurrenceRule",
    "TotalDebt",
    "Transaction",
    "TransactionDraft",
    "is_valid_counterparty_name",
    "compute_extended_summary",
    "compute_summaries",
    "get_category_statistics",
    "get_expense_summary",
    "get_friend_statistics_by_month",
    "get_monthly_statistics",
    "get_total_debt",
    "is_transaction_due",
    "materialize_instance",
    "resolve_debt_detail",
    "resolve_outstanding",
]
