"""Domain services for per-counterparty debt aggregation."""

from collections.abc import Iterable
from decimal import Decimal

from src.domain.constants import TransactionType
from src.domain.models import Counterparty, DebtSummary, Transaction
from src.utils.decimal_utils import ZERO


def sum_by_type(
    transactions: Iterable[Transaction],
) -> dict[TransactionType, Decimal]:
    """Sum transaction amounts per transaction type.

    Args:
        transactions: Transactions to total.

    Returns:
        dict[TransactionType, Decimal]: Total for every type, zero when unused.
    """
    totals = {transaction_type: ZERO for transaction_type in TransactionType}
    for transaction in transactions:
        totals[transaction.type] += transaction.amount
    return totals


def transactions_for(
    counterparty_id: str,
    transactions: Iterable[Transaction],
) -> list[Transaction]:
    """Return the transactions recorded against one counterparty."""
    return [
        transaction
        for transaction in transactions
        if transaction.counterparty_id == counterparty_id
    ]


def compute_summary(
    counterparty: Counterparty,
    transactions: Iterable[Transaction],
) -> DebtSummary:
    """Compute the basic debt summary of one counterparty.

    Partial payments and expenses do not move this balance; partial payments
    are only applied by the extended summary.

    Args:
        counterparty: Counterparty to summarize.
        transactions: Full transaction list of the user.

    Returns:
        DebtSummary: Totals with ``balance = borrowed - lent - payments``.
    """
    own = transactions_for(counterparty.id, transactions)
    totals = sum_by_type(own)
    total_borrowed = totals[TransactionType.BORROWED]
    total_lent = totals[TransactionType.LENT]
    total_payments = totals[TransactionType.PAYMENT]
    return DebtSummary(
        counterparty_id=counterparty.id,
        counterparty_name=counterparty.name,
        total_borrowed=total_borrowed,
        total_lent=total_lent,
        total_payments=total_payments,
        balance=total_borrowed - total_lent - total_payments,
        transactions=own,
    )


def compute_summaries(
    counterparties: Iterable[Counterparty],
    transactions: Iterable[Transaction],
) -> list[DebtSummary]:
    """Compute basic debt summaries in counterparty order.

    Args:
        counterparties: Counterparties of the user.
        transactions: Full transaction list of the user.

    Returns:
        list[DebtSummary]: One summary per counterparty.
    """
    all_transactions = list(transactions)
    return [
        compute_summary(counterparty, all_transactions)
        for counterparty in counterparties
    ]


__all__ = [
    "sum_by_type",
    "transactions_for",
    "compute_summary",
    "compute_summaries",
]
