"""JSON codec for ledger records and view models.

Payloads mirror the camelCase bodies exchanged with web clients
(``friendId``, ``originalDebtId``, ``recurring.lastProcessedDate``...).
Amounts are emitted as decimal strings so no digit is lost, and parsed
back into ``Decimal`` from strings or numbers.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from src.domain.constants import (
    RecurrenceInterval,
    TransactionCategory,
    TransactionType,
)
from src.domain.models import (
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
from src.utils.date_utils import coerce_datetime
from src.utils.decimal_utils import coerce_decimal


def _amount(value: Decimal) -> str:
    return str(value)


def _timestamp(value: date | None) -> str | None:
    return value.isoformat() if value is not None else None


def _optional_datetime(value) -> datetime | None:
    return coerce_datetime(value) if value else None


def counterparty_to_dict(counterparty: Counterparty) -> dict[str, Any]:
    return {
        "id": counterparty.id,
        "name": counterparty.name,
        "userId": counterparty.owner_user_id,
    }


def counterparty_from_dict(payload: dict[str, Any]) -> Counterparty:
    return Counterparty(
        id=payload["id"],
        name=payload["name"],
        owner_user_id=payload["userId"],
    )


def recurrence_to_dict(rule: RecurrenceRule) -> dict[str, Any]:
    return {
        "isRecurring": rule.is_recurring,
        "interval": rule.interval.value,
        "startDate": _timestamp(rule.start_date),
        "endDate": _timestamp(rule.end_date),
        "lastProcessedDate": _timestamp(rule.last_processed_date),
    }


def recurrence_from_dict(payload: dict[str, Any] | None) -> RecurrenceRule | None:
    """Parse a recurrence rule.

    Raises:
        ValueError: If the interval or a date is invalid.
        KeyError: If the interval or start date is missing.
    """
    if not payload:
        return None
    return RecurrenceRule(
        is_recurring=bool(payload.get("isRecurring", False)),
        interval=RecurrenceInterval(payload["interval"]),
        start_date=coerce_datetime(payload["startDate"]),
        end_date=_optional_datetime(payload.get("endDate")),
        last_processed_date=_optional_datetime(payload.get("lastProcessedDate")),
    )


def _category(value: str | None) -> TransactionCategory | None:
    return TransactionCategory(value) if value else None


def draft_from_dict(payload: dict[str, Any]) -> TransactionDraft:
    """Parse a create-transaction request body.

    Args:
        payload: Decoded JSON body.

    Returns:
        TransactionDraft: Draft ready for validation.

    Raises:
        ValueError: If the type, category, interval or a date is invalid.
        KeyError: If amount, type or date is missing.
    """
    return TransactionDraft(
        counterparty_id=payload.get("friendId") or None,
        amount=coerce_decimal(payload["amount"]),
        description=payload.get("description") or "",
        date=coerce_datetime(payload["date"]),
        type=TransactionType(payload["type"]),
        category=_category(payload.get("category")),
        original_debt_id=payload.get("originalDebtId") or None,
        parent_transaction_id=payload.get("parentTransactionId") or None,
        recurring=recurrence_from_dict(payload.get("recurring")),
    )


def transaction_to_dict(transaction: Transaction) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "id": transaction.id,
        "userId": transaction.owner_user_id,
        "friendId": transaction.counterparty_id,
        "amount": _amount(transaction.amount),
        "description": transaction.description,
        "date": _timestamp(transaction.date),
        "type": transaction.type.value,
        "category": transaction.category.value if transaction.category else None,
        "originalDebtId": transaction.original_debt_id,
        "parentTransactionId": transaction.parent_transaction_id,
        "recurring": (
            recurrence_to_dict(transaction.recurring)
            if transaction.recurring
            else None
        ),
        "createdAt": _timestamp(transaction.created_at),
    }
    return {key: value for key, value in payload.items() if value is not None}


def transaction_from_dict(payload: dict[str, Any]) -> Transaction:
    """Parse a stored transaction document."""
    draft = draft_from_dict(payload)
    return Transaction.from_draft(
        draft,
        id=payload["id"],
        owner_user_id=payload["userId"],
        created_at=_optional_datetime(payload.get("createdAt")),
    )


def debt_summary_to_dict(summary: DebtSummary) -> dict[str, Any]:
    return {
        "friendId": summary.counterparty_id,
        "friendName": summary.counterparty_name,
        "balance": _amount(summary.balance),
        "totalBorrowed": _amount(summary.total_borrowed),
        "totalLent": _amount(summary.total_lent),
        "totalPayments": _amount(summary.total_payments),
        "transactions": [transaction_to_dict(t) for t in summary.transactions],
    }


def debt_detail_to_dict(detail: DebtDetail) -> dict[str, Any]:
    return {
        "id": detail.id,
        "originalTransaction": transaction_to_dict(detail.original_transaction),
        "originalAmount": _amount(detail.original_amount),
        "remainingBalance": _amount(detail.remaining_balance),
        "partialPayments": [
            transaction_to_dict(payment) for payment in detail.partial_payments
        ],
        "createdDate": _timestamp(detail.created_date),
        "lastPaymentDate": _timestamp(detail.last_payment_date),
        "isFullyPaid": detail.is_fully_paid,
    }


def extended_summary_to_dict(summary: ExtendedDebtSummary) -> dict[str, Any]:
    payload = debt_summary_to_dict(summary)
    payload["outstandingDebts"] = [
        debt_detail_to_dict(detail) for detail in summary.outstanding_debts
    ]
    payload["totalOutstandingAmount"] = _amount(summary.total_outstanding_amount)
    payload["totalPartialPayments"] = _amount(summary.total_partial_payments)
    return payload


def total_debt_to_dict(totals: TotalDebt) -> dict[str, Any]:
    return {
        "totalOwed": _amount(totals.total_owed),
        "totalOwing": _amount(totals.total_owing),
        "netBalance": _amount(totals.net_balance),
    }


def monthly_stats_to_dict(stats: MonthlyStats) -> dict[str, Any]:
    return {
        "month": stats.label,
        "monthStart": stats.month_start.isoformat(),
        "totalBorrowed": _amount(stats.total_borrowed),
        "totalLent": _amount(stats.total_lent),
        "totalPayments": _amount(stats.total_payments),
        "totalExpenses": _amount(stats.total_expenses),
        "netBalance": _amount(stats.net_balance),
    }


def friend_monthly_stats_to_dict(stats: FriendMonthlyStats) -> dict[str, Any]:
    return {
        "friendId": stats.counterparty_id,
        "friendName": stats.counterparty_name,
        "totalBorrowed": _amount(stats.total_borrowed),
        "totalLent": _amount(stats.total_lent),
        "totalPayments": _amount(stats.total_payments),
        "netBalance": _amount(stats.net_balance),
    }


def category_stats_to_dict(stats: CategoryStats) -> dict[str, Any]:
    return {
        "category": stats.category.value,
        "totalAmount": _amount(stats.total_amount),
        "borrowedAmount": _amount(stats.borrowed_amount),
        "lentAmount": _amount(stats.lent_amount),
        "expenseAmount": _amount(stats.expense_amount),
        "count": stats.count,
        "percentage": _amount(stats.percentage),
    }


def expense_summary_to_dict(summary: ExpenseSummary) -> dict[str, Any]:
    return {
        "totalExpenses": _amount(summary.total_expenses),
        "byCategory": [
            {
                "category": row.category.value,
                "amount": _amount(row.amount),
                "percentage": _amount(row.percentage),
            }
            for row in summary.by_category
        ],
    }


__all__ = [
    "counterparty_to_dict",
    "counterparty_from_dict",
    "recurrence_to_dict",
    "recurrence_from_dict",
    "draft_from_dict",
    "transaction_to_dict",
    "transaction_from_dict",
    "debt_summary_to_dict",
    "debt_detail_to_dict",
    "extended_summary_to_dict",
    "total_debt_to_dict",
    "monthly_stats_to_dict",
    "friend_monthly_stats_to_dict",
    "category_stats_to_dict",
    "expense_summary_to_dict",
]
