"""Domain services package."""

from .debts import compute_summaries, compute_summary
from .partial_payments import (
    build_partial_payment,
    compute_extended_summary,
    find_orphan_partial_payments,
    remaining_balance,
    resolve_debt_detail,
    resolve_outstanding,
    resolve_outstanding_with_orphans,
)
from .recurrence import (
    RecurrenceState,
    advance_template,
    calculate_next_date,
    describe_recurrence,
    is_transaction_due,
    materialize_instance,
    recurrence_state,
    select_templates,
)
from .statistics import (
    get_category_statistics,
    get_current_month_transactions,
    get_expense_summary,
    get_friend_statistics_by_month,
    get_monthly_statistics,
    get_total_debt,
)
from .validation import (
    apply_transaction_changes,
    validate_partial_payment,
    validate_transaction_draft,
)

__all__ = [
    "compute_summaries",
    "compute_summary",
    "build_partial_payment",
    "compute_extended_summary",
    "find_orphan_partial_payments",
    "remaining_balance",
    "resolve_debt_detail",
    "resolve_outstanding",
    "resolve_outstanding_with_orphans",
    "RecurrenceState",
    "advance_template",
    "calculate_next_date",
    "describe_recurrence",
    "is_transaction_due",
    "materialize_instance",
    "recurrence_state",
    "select_templates",
    "get_category_statistics",
    "get_current_month_transactions",
    "get_expense_summary",
    "get_friend_statistics_by_month",
    "get_monthly_statistics",
    "get_total_debt",
    "apply_transaction_changes",
    "validate_partial_payment",
    "validate_transaction_draft",
]
