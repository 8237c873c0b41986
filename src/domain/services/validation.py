"""Domain validation for writes entering the ledger."""

from collections.abc import Callable, Iterable
from dataclasses import replace
from decimal import Decimal, InvalidOperation
from typing import Any

from src.domain.constants import TransactionCategory, TransactionType
from src.domain.exceptions import LedgerValidationError
from src.domain.models import RecurrenceRule, Transaction, TransactionDraft
from src.domain.services.partial_payments import remaining_balance
from src.utils.date_utils import coerce_datetime, to_day
from src.utils.decimal_utils import coerce_decimal


def validate_transaction_draft(draft: TransactionDraft) -> None:
    """Reject drafts the ledger cannot store.

    Args:
        draft: Transaction about to be persisted.

    Raises:
        LedgerValidationError: If the amount is not positive, a counterparty
            or original debt reference is missing, or the recurrence rule is
            incomplete.
    """
    if draft.amount is None or draft.amount <= 0:
        raise LedgerValidationError("Amount must be greater than zero")
    if draft.type != TransactionType.EXPENSE and not draft.counterparty_id:
        raise LedgerValidationError(
            "Counterparty is required for non-expense transactions"
        )
    if draft.type == TransactionType.PARTIAL_PAYMENT and not draft.original_debt_id:
        raise LedgerValidationError(
            "Original debt ID is required for partial payments"
        )
    rule = draft.recurring
    if rule is not None and rule.is_recurring:
        if rule.interval is None or rule.start_date is None:
            raise LedgerValidationError(
                "Recurring transactions need an interval and a start date"
            )
        if rule.end_date is not None and to_day(rule.end_date) < to_day(
            rule.start_date
        ):
            raise LedgerValidationError(
                "Recurrence end date cannot be before its start date"
            )


def validate_partial_payment(
    debt: Transaction | None,
    amount: Decimal,
    all_transactions: Iterable[Transaction],
) -> None:
    """Reject a partial payment the debt cannot absorb.

    Args:
        debt: Target debt, ``None`` when the id matched nothing.
        amount: Amount being paid.
        all_transactions: Full transaction list of the user.

    Raises:
        LedgerValidationError: If the debt is missing or not a debt, the
            amount is not positive, or it exceeds the remaining balance.
    """
    if debt is None or not debt.is_debt:
        raise LedgerValidationError("Original debt transaction not found")
    if not debt.counterparty_id:
        raise LedgerValidationError("Invalid debt transaction")
    if amount <= 0:
        raise LedgerValidationError("Amount must be greater than zero")
    remaining = remaining_balance(debt, all_transactions)
    if amount > remaining:
        raise LedgerValidationError(
            f"Payment of {amount} exceeds the remaining balance {remaining}"
        )


def _optional(convert: Callable[[Any], Any]) -> Callable[[Any], Any]:
    return lambda value: convert(value) if value not in (None, "") else None


def _recurrence(value: Any) -> RecurrenceRule | None:
    if value is None or isinstance(value, RecurrenceRule):
        return value
    raise TypeError(f"Expected a RecurrenceRule, got {type(value).__name__}")


def _text(value: Any) -> str:
    if not isinstance(value, str):
        raise TypeError(f"Expected text, got {type(value).__name__}")
    return value


_CHANGE_CONVERTERS: dict[str, Callable[[Any], Any]] = {
    "counterparty_id": _optional(_text),
    "amount": coerce_decimal,
    "description": _text,
    "date": coerce_datetime,
    "type": TransactionType,
    "category": _optional(TransactionCategory),
    "original_debt_id": _optional(_text),
    "parent_transaction_id": _optional(_text),
    "recurring": _recurrence,
}


def apply_transaction_changes(
    transaction: Transaction,
    changes: dict[str, Any],
) -> Transaction:
    """Return ``transaction`` with ``changes`` applied and validated.

    Raw values are converted to the field types first (``"lent"`` becomes
    ``TransactionType.LENT``, ``"12.5"`` a ``Decimal``...). The result must
    pass the same checks as a new transaction.

    Args:
        transaction: Stored transaction being edited.
        changes: Mapping of editable field names to new values.

    Returns:
        Transaction: Updated copy; ``id``, owner and ``created_at`` unchanged.

    Raises:
        LedgerValidationError: If a field is unknown or read-only, a value
            cannot be converted, or the edited transaction is invalid.
    """
    invalid = sorted(set(changes) - set(_CHANGE_CONVERTERS))
    if invalid:
        raise LedgerValidationError(
            f"Cannot update transaction fields: {', '.join(invalid)}"
        )
    converted = {}
    for name, value in changes.items():
        try:
            converted[name] = _CHANGE_CONVERTERS[name](value)
        except (ValueError, TypeError, InvalidOperation) as exc:
            raise LedgerValidationError(
                f"Invalid value for {name}: {value!r}"
            ) from exc
    updated = replace(transaction, **converted)
    validate_transaction_draft(
        TransactionDraft(
            counterparty_id=updated.counterparty_id,
            amount=updated.amount,
            description=updated.description,
            date=updated.date,
            type=updated.type,
            category=updated.category,
            original_debt_id=updated.original_debt_id,
            parent_transaction_id=updated.parent_transaction_id,
            recurring=updated.recurring,
        )
    )
    return updated


__all__ = [
    "validate_transaction_draft",
    "validate_partial_payment",
    "apply_transaction_changes",
]
