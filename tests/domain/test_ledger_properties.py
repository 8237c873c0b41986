"""Cross-cutting properties of the aggregation engine."""

from datetime import date, datetime
from decimal import Decimal

from src.domain.constants import (
    RecurrenceInterval,
    TransactionCategory,
    TransactionType,
)
from src.domain.models import Counterparty, RecurrenceRule
from src.domain.services import (
    advance_template,
    compute_summaries,
    get_category_statistics,
    get_expense_summary,
    get_monthly_statistics,
    get_total_debt,
    is_transaction_due,
    materialize_instance,
    resolve_debt_detail,
    resolve_outstanding,
)


def _ledger(make_transaction):
    return [
        make_transaction(TransactionType.BORROWED, "120", counterparty_id="a"),
        make_transaction(TransactionType.LENT, "300", counterparty_id="b"),
        make_transaction(TransactionType.PAYMENT, "20", counterparty_id="a"),
        make_transaction(TransactionType.LENT, "15", counterparty_id="c"),
        make_transaction(TransactionType.BORROWED, "15", counterparty_id="c"),
        make_transaction(
            TransactionType.EXPENSE,
            "42",
            counterparty_id=None,
            category=TransactionCategory.TRAVEL,
        ),
    ]


def _people():
    return [
        Counterparty(id=key, name=key.upper(), owner_user_id="user-1")
        for key in ("a", "b", "c", "d")
    ]


def test_total_debt_reconciles_with_summary_balances(make_transaction):
    summaries = compute_summaries(_people(), _ledger(make_transaction))

    totals = get_total_debt(summaries)

    assert totals.total_owed - totals.total_owing == sum(
        (s.balance for s in summaries), Decimal("0")
    )
    assert totals.total_owed == Decimal("100")
    assert totals.total_owing == Decimal("300")
    untouched = summaries[-1]
    assert untouched.balance == Decimal("0")
    assert untouched.total_borrowed == untouched.total_lent == Decimal("0")


def test_aggregations_are_idempotent(make_transaction):
    transactions = _ledger(make_transaction)
    snapshot = list(transactions)

    for compute in (
        lambda: compute_summaries(_people(), transactions),
        lambda: get_monthly_statistics(transactions, 3, today=date(2024, 1, 20)),
        lambda: get_category_statistics(transactions),
        lambda: get_expense_summary(transactions),
    ):
        assert compute() == compute()
    assert transactions == snapshot


def test_partial_payments_floor_remaining_balance(make_transaction):
    debt = make_transaction(TransactionType.BORROWED, "100", id="debt")
    payments = [
        make_transaction(
            TransactionType.PARTIAL_PAYMENT, amount, original_debt_id="debt"
        )
        for amount in ("30", "40")
    ]

    detail = resolve_debt_detail(debt, [debt, *payments])
    assert detail.remaining_balance == Decimal("30")
    assert detail.is_fully_paid is False

    extra = make_transaction(
        TransactionType.PARTIAL_PAYMENT, "40", original_debt_id="debt"
    )
    detail = resolve_debt_detail(debt, [debt, *payments, extra])
    assert detail.remaining_balance == Decimal("0")
    assert detail.is_fully_paid is True


def test_monthly_template_materializes_once(make_transaction):
    template = make_transaction(
        id="template",
        recurring=RecurrenceRule(
            is_recurring=True,
            interval=RecurrenceInterval.MONTHLY,
            start_date=datetime(2024, 1, 15),
        ),
    )
    today = date(2024, 2, 20)

    assert is_transaction_due(template, today) is True
    instance = materialize_instance(template, today)
    assert instance.date == datetime(2024, 2, 20)
    assert instance.parent_transaction_id == "template"

    advanced = advance_template(template, today)
    assert is_transaction_due(advanced, today) is False


def test_monthly_statistics_window_length_and_order():
    stats = get_monthly_statistics([], 3, today=date(2024, 5, 9))

    assert len(stats) == 3
    assert stats[0].label == "Mayıs 2024"
    assert stats[2].label == "Mart 2024"


def test_expense_percentages(make_transaction):
    transactions = [
        make_transaction(
            TransactionType.EXPENSE, "60", category=TransactionCategory.FOOD
        ),
        make_transaction(
            TransactionType.EXPENSE, "40", category=TransactionCategory.RENT
        ),
    ]

    summary = get_expense_summary(transactions)

    assert summary.total_expenses == Decimal("100")
    assert [
        (row.category, row.amount, row.percentage) for row in summary.by_category
    ] == [
        (TransactionCategory.FOOD, Decimal("60"), Decimal("60")),
        (TransactionCategory.RENT, Decimal("40"), Decimal("40")),
    ]


def test_unpaid_debt_precedes_older_paid_debt(make_transaction):
    paid = make_transaction(
        TransactionType.BORROWED, "10", id="paid", date=datetime(2024, 1, 1)
    )
    unpaid = make_transaction(
        TransactionType.BORROWED, "10", id="unpaid", date=datetime(2024, 2, 1)
    )
    settle = make_transaction(
        TransactionType.PARTIAL_PAYMENT, "10", original_debt_id="paid"
    )

    details = resolve_outstanding("friend-1", [paid, unpaid, settle])

    assert [d.id for d in details] == ["unpaid", "paid"]
