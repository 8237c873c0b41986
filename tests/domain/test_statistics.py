"""Tests for windowed ledger statistics."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from src.domain.constants import TransactionCategory, TransactionType
from src.domain.models import DebtSummary
from src.domain.services.statistics import (
    get_category_statistics,
    get_current_month_transactions,
    get_expense_summary,
    get_friend_statistics_by_month,
    get_monthly_statistics,
    get_total_debt,
)


def test_monthly_statistics_start_with_current_month(make_transaction):
    """Index 0 is the month of ``today`` and entries go back in time."""
    transactions = [
        make_transaction(TransactionType.BORROWED, "100", date=datetime(2024, 3, 1)),
        make_transaction(TransactionType.LENT, "40", date=datetime(2024, 2, 29)),
        make_transaction(TransactionType.PAYMENT, "10", date=datetime(2024, 3, 31, 23)),
        make_transaction(TransactionType.EXPENSE, "15", date=datetime(2024, 1, 2)),
        make_transaction(TransactionType.BORROWED, "999", date=datetime(2023, 12, 31)),
    ]

    stats = get_monthly_statistics(transactions, 3, today=date(2024, 3, 10))

    assert [s.label for s in stats] == ["Mart 2024", "Şubat 2024", "Ocak 2024"]
    assert stats[0].month_start == date(2024, 3, 1)
    assert stats[0].total_borrowed == Decimal("100")
    assert stats[0].total_payments == Decimal("10")
    assert stats[0].net_balance == Decimal("90")
    assert stats[1].total_lent == Decimal("40")
    assert stats[1].net_balance == Decimal("-40")
    assert stats[2].total_expenses == Decimal("15")
    assert stats[2].net_balance == Decimal("0")


def test_monthly_statistics_cross_year_boundary():
    stats = get_monthly_statistics([], 2, today=date(2024, 1, 31))

    assert [s.label for s in stats] == ["Ocak 2024", "Aralık 2023"]
    assert all(s.total_borrowed == Decimal("0") for s in stats)


def test_monthly_statistics_default_to_six_months():
    assert len(get_monthly_statistics([], today=date(2024, 6, 1))) == 6


def test_friend_statistics_keep_every_counterparty(make_transaction, friends):
    transactions = [
        make_transaction(TransactionType.BORROWED, "50", date=datetime(2024, 5, 3)),
        make_transaction(TransactionType.PAYMENT, "20", date=datetime(2024, 5, 9)),
        make_transaction(TransactionType.BORROWED, "70", date=datetime(2024, 4, 30)),
    ]

    rows = get_friend_statistics_by_month(transactions, friends, date(2024, 5, 20))

    assert [r.counterparty_name for r in rows] == ["Ayşe", "Mehmet"]
    assert rows[0].total_borrowed == Decimal("50")
    assert rows[0].net_balance == Decimal("30")
    assert rows[1].net_balance == Decimal("0")


def test_current_month_transactions(make_transaction):
    inside = make_transaction(date=datetime(2024, 2, 1))
    outside = make_transaction(date=datetime(2024, 1, 31, 23, 59))

    result = get_current_month_transactions([inside, outside], date(2024, 2, 14))

    assert result == [inside]


def test_category_statistics_sign_and_percentage(make_transaction):
    """Borrowed adds, lent and expense subtract; shares use absolute totals."""
    transactions = [
        make_transaction(
            TransactionType.BORROWED, "100", category=TransactionCategory.FOOD
        ),
        make_transaction(TransactionType.LENT, "30", category=TransactionCategory.FOOD),
        make_transaction(
            TransactionType.EXPENSE, "50", category=TransactionCategory.RENT
        ),
        make_transaction(TransactionType.BORROWED, "20"),
        make_transaction(TransactionType.PAYMENT, "5", category=TransactionCategory.RENT),
    ]

    stats = get_category_statistics(transactions)

    assert len(stats) == len(TransactionCategory)
    food, rent, other = stats[:3]
    assert food.category == TransactionCategory.FOOD
    assert food.total_amount == Decimal("70")
    assert food.borrowed_amount == Decimal("100")
    assert food.lent_amount == Decimal("30")
    assert food.count == 2
    assert food.percentage == Decimal("50")
    assert rent.category == TransactionCategory.RENT
    assert rent.total_amount == Decimal("-50")
    assert rent.expense_amount == Decimal("50")
    assert rent.count == 2
    assert other.category == TransactionCategory.OTHER
    assert other.total_amount == Decimal("20")
    assert sum(s.percentage for s in stats) == pytest.approx(Decimal("100"))
    assert all(s.total_amount == 0 and s.count == 0 for s in stats[3:])


def test_category_statistics_without_activity_report_zero_percentages():
    stats = get_category_statistics([])

    assert {s.category for s in stats} == set(TransactionCategory)
    assert all(s.percentage == Decimal("0") for s in stats)


def test_category_statistics_filter_by_type(make_transaction):
    transactions = [
        make_transaction(TransactionType.BORROWED, "10", category=TransactionCategory.TRAVEL),
        make_transaction(TransactionType.EXPENSE, "10", category=TransactionCategory.TRAVEL),
    ]

    stats = get_category_statistics(transactions, TransactionType.EXPENSE)

    assert stats[0].category == TransactionCategory.TRAVEL
    assert stats[0].count == 1
    assert stats[0].total_amount == Decimal("-10")


def test_category_statistics_window_requires_both_bounds(make_transaction):
    january = make_transaction(
        TransactionType.BORROWED,
        "10",
        date=datetime(2024, 1, 10),
        category=TransactionCategory.SHOPPING,
    )
    march = make_transaction(
        TransactionType.BORROWED,
        "10",
        date=datetime(2024, 3, 10),
        category=TransactionCategory.SHOPPING,
    )

    windowed = get_category_statistics(
        [january, march],
        start_date=date(2024, 1, 1),
        end_date=date(2024, 1, 31),
    )
    half_open = get_category_statistics([january, march], start_date=date(2024, 2, 1))

    assert windowed[0].count == 1
    assert half_open[0].count == 2


def test_expense_summary_omits_empty_categories(make_transaction):
    transactions = [
        make_transaction(TransactionType.EXPENSE, "30", category=TransactionCategory.FOOD),
        make_transaction(TransactionType.EXPENSE, "60", category=TransactionCategory.RENT),
        make_transaction(TransactionType.EXPENSE, "10", counterparty_id=None),
        make_transaction(TransactionType.BORROWED, "500", category=TransactionCategory.FOOD),
    ]

    summary = get_expense_summary(transactions)

    assert summary.total_expenses == Decimal("100")
    assert [row.category for row in summary.by_category] == [
        TransactionCategory.RENT,
        TransactionCategory.FOOD,
        TransactionCategory.OTHER,
    ]
    assert summary.by_category[0].percentage == Decimal("60")


def test_expense_summary_respects_date_window(make_transaction):
    transactions = [
        make_transaction(TransactionType.EXPENSE, "30", date=datetime(2024, 1, 5)),
        make_transaction(TransactionType.EXPENSE, "70", date=datetime(2024, 2, 5)),
    ]

    summary = get_expense_summary(transactions, start_date=date(2024, 2, 1))

    assert summary.total_expenses == Decimal("70")


def test_expense_summary_of_nothing_is_empty():
    summary = get_expense_summary([])

    assert summary.total_expenses == Decimal("0")
    assert summary.by_category == []


def _summary(balance: str) -> DebtSummary:
    return DebtSummary(
        counterparty_id="x",
        counterparty_name="x",
        total_borrowed=Decimal("0"),
        total_lent=Decimal("0"),
        total_payments=Decimal("0"),
        balance=Decimal(balance),
        transactions=[],
    )


def test_total_debt_splits_positive_and_negative_balances():
    totals = get_total_debt([_summary("50"), _summary("-20"), _summary("0")])

    assert totals.total_owed == Decimal("50")
    assert totals.total_owing == Decimal("20")
    assert totals.net_balance == Decimal("30")
