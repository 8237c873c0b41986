"""Domain services for windowed ledger statistics.

Every function recomputes from the full transaction list it receives and is
deterministic for a given reference ``today``.
"""

from collections.abc import Iterable
from datetime import date, datetime

from src.domain.constants import TransactionCategory, TransactionType
from src.domain.models import (
    CategoryStats,
    Counterparty,
    DebtSummary,
    ExpenseCategoryAmount,
    ExpenseSummary,
    FriendMonthlyStats,
    MonthlyStats,
    TotalDebt,
    Transaction,
)
from src.domain.services.debts import sum_by_type, transactions_for
from src.utils.date_utils import (
    add_months,
    end_of_month,
    is_within,
    month_label,
    start_of_month,
    to_day,
)
from src.utils.decimal_utils import ZERO, percentage_of, sum_amounts

DEFAULT_MONTHS_BACK = 6


def _resolve_today(today: date | None) -> date:
    return to_day(today) if today is not None else date.today()


def _in_month(
    transactions: Iterable[Transaction],
    month: date,
) -> list[Transaction]:
    start = start_of_month(month)
    end = end_of_month(month)
    return [
        transaction
        for transaction in transactions
        if is_within(transaction.date, start, end)
    ]


def _in_window(
    transactions: Iterable[Transaction],
    start_date: date | datetime | None,
    end_date: date | datetime | None,
) -> list[Transaction]:
    start = to_day(start_date) if start_date is not None else date.min
    end = to_day(end_date) if end_date is not None else date.max
    return [
        transaction
        for transaction in transactions
        if is_within(transaction.date, start, end)
    ]


def get_monthly_statistics(
    transactions: Iterable[Transaction],
    months_back: int = DEFAULT_MONTHS_BACK,
    today: date | None = None,
) -> list[MonthlyStats]:
    """Compute per-month totals, current month first.

    Args:
        transactions: Full transaction list of the user.
        months_back: Number of calendar months to report.
        today: Reference date, defaults to the current date.

    Returns:
        list[MonthlyStats]: ``months_back`` entries, index 0 is the current
        month and the last entry the oldest one.
    """
    all_transactions = list(transactions)
    reference = start_of_month(_resolve_today(today))
    stats: list[MonthlyStats] = []
    for offset in range(months_back):
        month = add_months(reference, -offset)
        totals = sum_by_type(_in_month(all_transactions, month))
        borrowed = totals[TransactionType.BORROWED]
        lent = totals[TransactionType.LENT]
        payments = totals[TransactionType.PAYMENT]
        stats.append(
            MonthlyStats(
                month_start=month,
                label=month_label(month),
                total_borrowed=borrowed,
                total_lent=lent,
                total_payments=payments,
                total_expenses=totals[TransactionType.EXPENSE],
                net_balance=borrowed - lent - payments,
            )
        )
    return stats


def get_friend_statistics_by_month(
    transactions: Iterable[Transaction],
    counterparties: Iterable[Counterparty],
    month: date,
) -> list[FriendMonthlyStats]:
    """Compute per-counterparty totals for one calendar month.

    Args:
        transactions: Full transaction list of the user.
        counterparties: Counterparties to report, in output order.
        month: Any day of the month to report.

    Returns:
        list[FriendMonthlyStats]: One row per counterparty, zero rows kept.
    """
    monthly = _in_month(transactions, to_day(month))
    rows: list[FriendMonthlyStats] = []
    for counterparty in counterparties:
        totals = sum_by_type(transactions_for(counterparty.id, monthly))
        borrowed = totals[TransactionType.BORROWED]
        lent = totals[TransactionType.LENT]
        payments = totals[TransactionType.PAYMENT]
        rows.append(
            FriendMonthlyStats(
                counterparty_id=counterparty.id,
                counterparty_name=counterparty.name,
                total_borrowed=borrowed,
                total_lent=lent,
                total_payments=payments,
                net_balance=borrowed - lent - payments,
            )
        )
    return rows


def get_current_month_transactions(
    transactions: Iterable[Transaction],
    today: date | None = None,
) -> list[Transaction]:
    """Return the transactions dated in the current calendar month."""
    return _in_month(transactions, _resolve_today(today))


def get_category_statistics(
    transactions: Iterable[Transaction],
    transaction_type: TransactionType | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
) -> list[CategoryStats]:
    """Group transactions by category.

    Borrowed amounts add to ``total_amount`` while lent amounts and expenses
    subtract from it. Transactions without a category count as ``other``.
    Every category is reported, unused ones with zero totals.

    Args:
        transactions: Full transaction list of the user.
        transaction_type: Optional type restriction.
        start_date: Optional inclusive lower bound, applied with end_date.
        end_date: Optional inclusive upper bound, applied with start_date.

    Returns:
        list[CategoryStats]: Sorted by absolute total amount, descending.
    """
    filtered = list(transactions)
    if start_date is not None and end_date is not None:
        filtered = _in_window(filtered, start_date, end_date)
    if transaction_type is not None:
        wanted = TransactionType(transaction_type)
        filtered = [t for t in filtered if t.type == wanted]

    buckets = {
        category: {
            "count": 0,
            "borrowed": ZERO,
            "lent": ZERO,
            "expense": ZERO,
            "total": ZERO,
        }
        for category in TransactionCategory
    }
    for transaction in filtered:
        bucket = buckets[transaction.category or TransactionCategory.OTHER]
        if transaction.type == TransactionType.BORROWED:
            bucket["borrowed"] += transaction.amount
            bucket["total"] += transaction.amount
        elif transaction.type == TransactionType.LENT:
            bucket["lent"] += transaction.amount
            bucket["total"] -= transaction.amount
        elif transaction.type == TransactionType.EXPENSE:
            bucket["expense"] += transaction.amount
            bucket["total"] -= transaction.amount
        bucket["count"] += 1

    absolute_total = sum_amounts(abs(b["total"]) for b in buckets.values())
    stats = [
        CategoryStats(
            category=category,
            count=bucket["count"],
            borrowed_amount=bucket["borrowed"],
            lent_amount=bucket["lent"],
            expense_amount=bucket["expense"],
            total_amount=bucket["total"],
            percentage=percentage_of(abs(bucket["total"]), absolute_total),
        )
        for category, bucket in buckets.items()
    ]
    return sorted(stats, key=lambda row: abs(row.total_amount), reverse=True)


def get_expense_summary(
    transactions: Iterable[Transaction],
    start_date: date | None = None,
    end_date: date | None = None,
) -> ExpenseSummary:
    """Summarize expenses by category.

    Args:
        transactions: Full transaction list of the user.
        start_date: Optional inclusive lower bound.
        end_date: Optional inclusive upper bound.

    Returns:
        ExpenseSummary: Total and non-empty categories, largest first.
    """
    expenses = [
        transaction
        for transaction in transactions
        if transaction.type == TransactionType.EXPENSE
    ]
    if start_date is not None or end_date is not None:
        expenses = _in_window(expenses, start_date, end_date)

    total = sum_amounts(expense.amount for expense in expenses)
    amounts = {category: ZERO for category in TransactionCategory}
    for expense in expenses:
        amounts[expense.category or TransactionCategory.OTHER] += expense.amount

    by_category = [
        ExpenseCategoryAmount(
            category=category,
            amount=amount,
            percentage=percentage_of(amount, total),
        )
        for category, amount in amounts.items()
        if amount > 0
    ]
    by_category.sort(key=lambda row: row.amount, reverse=True)
    return ExpenseSummary(total_expenses=total, by_category=by_category)


def get_total_debt(summaries: Iterable[DebtSummary]) -> TotalDebt:
    """Split summary balances into owed and owing totals.

    Args:
        summaries: Debt summaries, basic or extended.

    Returns:
        TotalDebt: Positive balances as owed, negative ones as owing.
    """
    total_owed = ZERO
    total_owing = ZERO
    for summary in summaries:
        if summary.balance > 0:
            total_owed += summary.balance
        elif summary.balance < 0:
            total_owing += abs(summary.balance)
    return TotalDebt(
        total_owed=total_owed,
        total_owing=total_owing,
        net_balance=total_owed - total_owing,
    )


__all__ = [
    "DEFAULT_MONTHS_BACK",
    "get_monthly_statistics",
    "get_friend_statistics_by_month",
    "get_current_month_transactions",
    "get_category_statistics",
    "get_expense_summary",
    "get_total_debt",
]
