"""Domain services deciding when recurring templates produce instances.

A pass materializes at most one instance per template, dated on the pass
day, however many intervals elapsed since the template was last processed.
Missed occurrences are not back-filled.
"""

from collections.abc import Iterable
from dataclasses import replace
from datetime import date, datetime, timedelta
from enum import Enum

from src.domain.constants import RecurrenceInterval, recurrence_label
from src.domain.models import Transaction, TransactionDraft
from src.utils.date_utils import add_months, coerce_datetime, to_day

_DAY_STEPS = {
    RecurrenceInterval.DAILY: 1,
    RecurrenceInterval.WEEKLY: 7,
    RecurrenceInterval.BIWEEKLY: 14,
}

_MONTH_STEPS = {
    RecurrenceInterval.MONTHLY: 1,
    RecurrenceInterval.QUARTERLY: 3,
    RecurrenceInterval.YEARLY: 12,
}


class RecurrenceState(str, Enum):
    """Scheduling state of a transaction on a given day."""

    NOT_RECURRING = "not-recurring"
    NOT_DUE = "not-due"
    DUE = "due"
    EXPIRED = "expired"


def calculate_next_date(current, interval: RecurrenceInterval):
    """Return the occurrence following ``current``.

    Args:
        current: ``date`` or ``datetime`` of the previous occurrence.
        interval: Recurrence interval.

    Returns:
        Same type as ``current``. Month based intervals keep the day of
        month, clamped to the length of the target month.
    """
    interval = RecurrenceInterval(interval)
    if interval in _DAY_STEPS:
        return current + timedelta(days=_DAY_STEPS[interval])
    return add_months(current, _MONTH_STEPS[interval])


def recurrence_state(
    transaction: Transaction,
    today: date | None = None,
) -> RecurrenceState:
    """Classify a transaction for the scheduling pass of ``today``.

    Args:
        transaction: Candidate template.
        today: Day of the pass, defaults to the current date.

    Returns:
        RecurrenceState: ``EXPIRED`` once the end date is before today,
        otherwise ``DUE`` when the next occurrence after the last processed
        date (or the start date) is on or before today.
    """
    rule = transaction.recurring
    if rule is None or not rule.is_recurring:
        return RecurrenceState.NOT_RECURRING
    day = to_day(today) if today is not None else date.today()
    if rule.end_date is not None and to_day(rule.end_date) < day:
        return RecurrenceState.EXPIRED
    anchor = to_day(rule.last_processed_date or rule.start_date)
    next_due = calculate_next_date(anchor, rule.interval)
    if next_due <= day:
        return RecurrenceState.DUE
    return RecurrenceState.NOT_DUE


def is_transaction_due(
    transaction: Transaction,
    today: date | None = None,
) -> bool:
    """Return True when the template must produce an instance today."""
    return recurrence_state(transaction, today) is RecurrenceState.DUE


def select_templates(transactions: Iterable[Transaction]) -> list[Transaction]:
    """Return the recurring templates, leaving their instances out."""
    return [transaction for transaction in transactions if transaction.is_template]


def materialize_instance(
    template: Transaction,
    occurrence_date: date | datetime,
) -> TransactionDraft:
    """Build the concrete transaction produced by a template.

    Args:
        template: Recurring template.
        occurrence_date: Date of the new instance.

    Returns:
        TransactionDraft: Ordinary transaction pointing back at the template,
        without a recurrence rule of its own.
    """
    return TransactionDraft(
        counterparty_id=template.counterparty_id,
        amount=template.amount,
        description=template.description,
        date=coerce_datetime(occurrence_date),
        type=template.type,
        category=template.category,
        parent_transaction_id=template.id,
    )


def advance_template(
    template: Transaction,
    occurrence_date: date | datetime,
) -> Transaction:
    """Return the template with its last processed date moved forward."""
    if template.recurring is None:
        raise ValueError(f"Transaction {template.id} has no recurrence rule")
    rule = replace(
        template.recurring,
        last_processed_date=coerce_datetime(occurrence_date),
    )
    return replace(template, recurring=rule)


def describe_recurrence(transaction: Transaction) -> str:
    """Return a readable description of a transaction's schedule."""
    rule = transaction.recurring
    if rule is None or not rule.is_recurring:
        return "Tek seferlik işlem"
    start = to_day(rule.start_date).strftime("%d.%m.%Y")
    description = f"{recurrence_label(rule.interval)}, {start} tarihinden itibaren"
    if rule.end_date is not None:
        end = to_day(rule.end_date).strftime("%d.%m.%Y")
        return f"{description} {end} tarihine kadar"
    return f"{description} süresiz olarak"


__all__ = [
    "RecurrenceState",
    "calculate_next_date",
    "recurrence_state",
    "is_transaction_due",
    "select_templates",
    "materialize_instance",
    "advance_template",
    "describe_recurrence",
]
