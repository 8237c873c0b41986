"""Domain services resolving debt threads from partial payments.

A debt thread is a ``borrowed`` or ``lent`` transaction together with the
``partial-payment`` transactions that reference it through
``original_debt_id``. Partial payments pointing at an unknown debt are never
raised on; they are left out of every thread and reported separately.
"""

from collections.abc import Iterable
from datetime import datetime
from decimal import Decimal

from src.domain.constants import TransactionType
from src.domain.models import (
    Counterparty,
    DebtDetail,
    ExtendedDebtSummary,
    OutstandingDebts,
    Transaction,
    TransactionDraft,
)
from src.domain.services.debts import sum_by_type, transactions_for
from src.utils.decimal_utils import ZERO, sum_amounts

DEFAULT_PARTIAL_PAYMENT_DESCRIPTION = "Kısmi ödeme"


def _partial_payments_for(
    debt: Transaction,
    all_transactions: Iterable[Transaction],
) -> list[Transaction]:
    payments = [
        transaction
        for transaction in all_transactions
        if transaction.type == TransactionType.PARTIAL_PAYMENT
        and transaction.original_debt_id == debt.id
    ]
    return sorted(payments, key=lambda payment: payment.date)


def resolve_debt_detail(
    debt: Transaction,
    all_transactions: Iterable[Transaction],
) -> DebtDetail:
    """Rebuild the running state of one debt from its partial payments.

    Args:
        debt: Originating borrowed or lent transaction.
        all_transactions: Full transaction list of the user.

    Returns:
        DebtDetail: Remaining balance floored at zero, chronological payments.
    """
    payments = _partial_payments_for(debt, all_transactions)
    total_paid = sum_amounts(payment.amount for payment in payments)
    remaining = debt.amount - total_paid
    return DebtDetail(
        id=debt.id,
        original_transaction=debt,
        original_amount=debt.amount,
        remaining_balance=max(ZERO, remaining),
        partial_payments=payments,
        created_date=debt.date,
        is_fully_paid=remaining <= 0,
        last_payment_date=payments[-1].date if payments else None,
    )


def remaining_balance(
    debt: Transaction,
    all_transactions: Iterable[Transaction],
) -> Decimal:
    """Return the unpaid part of a debt, never negative."""
    return resolve_debt_detail(debt, all_transactions).remaining_balance


def _sort_debts(details: list[DebtDetail]) -> list[DebtDetail]:
    # Unpaid first, newest first inside each group.
    newest_first = sorted(
        details,
        key=lambda detail: detail.created_date,
        reverse=True,
    )
    return sorted(newest_first, key=lambda detail: detail.is_fully_paid)


def resolve_outstanding(
    counterparty_id: str,
    all_transactions: Iterable[Transaction],
) -> list[DebtDetail]:
    """Resolve every debt thread of a counterparty.

    Args:
        counterparty_id: Counterparty whose debts are resolved.
        all_transactions: Full transaction list of the user.

    Returns:
        list[DebtDetail]: Unpaid debts first, then paid ones, each group
        ordered by creation date, newest first.
    """
    return resolve_outstanding_with_orphans(
        counterparty_id,
        all_transactions,
    ).debts


def resolve_outstanding_with_orphans(
    counterparty_id: str,
    all_transactions: Iterable[Transaction],
) -> OutstandingDebts:
    """Resolve debt threads and collect unmatched partial payments.

    Args:
        counterparty_id: Counterparty whose debts are resolved.
        all_transactions: Full transaction list of the user.

    Returns:
        OutstandingDebts: Ordered debt details and the counterparty's partial
        payments that reference none of its debts.
    """
    transactions = list(all_transactions)
    debts = [
        transaction
        for transaction in transactions_for(counterparty_id, transactions)
        if transaction.is_debt
    ]
    details = [resolve_debt_detail(debt, transactions) for debt in debts]
    debt_ids = {debt.id for debt in debts}
    orphans = [
        transaction
        for transaction in transactions_for(counterparty_id, transactions)
        if transaction.type == TransactionType.PARTIAL_PAYMENT
        and transaction.original_debt_id not in debt_ids
    ]
    return OutstandingDebts(debts=_sort_debts(details), orphan_payments=orphans)


def find_orphan_partial_payments(
    all_transactions: Iterable[Transaction],
) -> list[Transaction]:
    """Return partial payments whose original debt does not exist.

    Args:
        all_transactions: Full transaction list of the user.

    Returns:
        list[Transaction]: Partial payments excluded from every debt thread.
    """
    transactions = list(all_transactions)
    debt_ids = {
        transaction.id for transaction in transactions if transaction.is_debt
    }
    return [
        transaction
        for transaction in transactions
        if transaction.type == TransactionType.PARTIAL_PAYMENT
        and transaction.original_debt_id not in debt_ids
    ]


def compute_extended_summary(
    counterparty: Counterparty,
    all_transactions: Iterable[Transaction],
) -> ExtendedDebtSummary:
    """Compute a counterparty summary with partial payments applied.

    Unlike :func:`compute_summary`, partial payments reduce the balance:
    ``balance = borrowed - lent - payments - partial payments``.

    Args:
        counterparty: Counterparty to summarize.
        all_transactions: Full transaction list of the user.

    Returns:
        ExtendedDebtSummary: Totals, debt threads and outstanding amount.
    """
    transactions = list(all_transactions)
    own = transactions_for(counterparty.id, transactions)
    totals = sum_by_type(own)
    total_borrowed = totals[TransactionType.BORROWED]
    total_lent = totals[TransactionType.LENT]
    total_payments = totals[TransactionType.PAYMENT]
    total_partial = totals[TransactionType.PARTIAL_PAYMENT]
    outstanding = resolve_outstanding(counterparty.id, transactions)
    total_outstanding = sum_amounts(
        detail.remaining_balance
        for detail in outstanding
        if not detail.is_fully_paid
    )
    return ExtendedDebtSummary(
        counterparty_id=counterparty.id,
        counterparty_name=counterparty.name,
        total_borrowed=total_borrowed,
        total_lent=total_lent,
        total_payments=total_payments,
        balance=total_borrowed - total_lent - total_payments - total_partial,
        transactions=own,
        outstanding_debts=outstanding,
        total_outstanding_amount=total_outstanding,
        total_partial_payments=total_partial,
    )


def build_partial_payment(
    debt: Transaction,
    amount: Decimal,
    description: str | None = None,
    paid_at: datetime | None = None,
) -> TransactionDraft:
    """Draft a partial payment settling part of ``debt``.

    Args:
        debt: Borrowed or lent transaction being settled.
        amount: Amount paid.
        description: Optional description, defaults to "Kısmi ödeme".
        paid_at: Payment timestamp, defaults to now.

    Returns:
        TransactionDraft: Partial payment for the debt's counterparty.
    """
    return TransactionDraft(
        counterparty_id=debt.counterparty_id,
        amount=amount,
        description=description or DEFAULT_PARTIAL_PAYMENT_DESCRIPTION,
        date=paid_at or datetime.now(),
        type=TransactionType.PARTIAL_PAYMENT,
        original_debt_id=debt.id,
    )


__all__ = [
    "DEFAULT_PARTIAL_PAYMENT_DESCRIPTION",
    "resolve_debt_detail",
    "remaining_balance",
    "resolve_outstanding",
    "resolve_outstanding_with_orphans",
    "find_orphan_partial_payments",
    "compute_extended_summary",
    "build_partial_payment",
]
