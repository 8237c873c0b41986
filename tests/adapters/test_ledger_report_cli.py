"""Tests for the ledger_report_cli adapter."""

from datetime import date
from decimal import Decimal
import json
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from src.adapters import ledger_report_cli
from src.application.use_cases.get_ledger_report import LedgerReport
from src.domain.constants import TransactionCategory
from src.domain.models import (
    DebtSummary,
    ExpenseCategoryAmount,
    ExpenseSummary,
    MonthlyStats,
    TotalDebt,
)

ZERO = Decimal("0")


def _report() -> LedgerReport:
    return LedgerReport(
        summaries=[
            DebtSummary(
                counterparty_id="friend-1",
                counterparty_name="Ayşe",
                total_borrowed=Decimal("1500"),
                total_lent=ZERO,
                total_payments=ZERO,
                balance=Decimal("1500"),
                transactions=[],
            )
        ],
        totals=TotalDebt(
            total_owed=Decimal("1500"),
            total_owing=ZERO,
            net_balance=Decimal("1500"),
        ),
        monthly=[
            MonthlyStats(
                month_start=date(2024, 3, 1),
                label="Mart 2024",
                total_borrowed=Decimal("1500"),
                total_lent=ZERO,
                total_payments=ZERO,
                total_expenses=Decimal("20"),
                net_balance=Decimal("1500"),
            )
        ],
        friends_this_month=[],
        categories=[],
        expenses=ExpenseSummary(
            total_expenses=Decimal("20"),
            by_category=[
                ExpenseCategoryAmount(
                    category=TransactionCategory.FOOD,
                    amount=Decimal("20"),
                    percentage=Decimal("100"),
                )
            ],
        ),
        orphan_payments=[],
    )


@pytest.fixture
def wired(monkeypatch):
    fake_logger = MagicMock()
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = _report()
    calls = {}

    monkeypatch.setattr(ledger_report_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(
        ledger_report_cli.LedgerSettings,
        "from_env",
        classmethod(
            lambda cls: SimpleNamespace(
                user_id="user-1", months_back=3, currency_symbol="₺"
            )
        ),
    )
    monkeypatch.setattr(
        ledger_report_cli, "build_ledger_session", lambda user_id: "session"
    )

    def _fake_use_case(session, logger):
        calls["session"] = session
        return fake_use_case

    monkeypatch.setattr(ledger_report_cli, "GetLedgerReportUseCase", _fake_use_case)
    monkeypatch.delenv("LEDGER_REPORT_FORMAT", raising=False)
    monkeypatch.setenv("LEDGER_REPORT_DATE", "2024-03-15")
    return SimpleNamespace(logger=fake_logger, use_case=fake_use_case, calls=calls)


def test_main_prints_text_report(wired, capsys):
    ledger_report_cli.main()

    wired.use_case.execute.assert_called_once_with(
        months_back=3, today=date(2024, 3, 15)
    )
    assert wired.calls["session"] == "session"
    out = capsys.readouterr().out
    assert "Owed to you: 1.500,00 ₺" in out
    assert "Ayşe: 1.500,00 ₺" in out
    assert "Mart 2024" in out
    assert "Yemek: 20,00 ₺ (100,00%)" in out


def test_main_prints_json_report(wired, monkeypatch, capsys):
    monkeypatch.setenv("LEDGER_REPORT_FORMAT", "json")

    ledger_report_cli.main()

    payload = json.loads(capsys.readouterr().out)
    assert payload["totals"]["totalOwed"] == "1500"
    assert payload["monthly"][0]["month"] == "Mart 2024"
    assert payload["expenses"]["byCategory"][0]["category"] == "food"


def test_parse_date_warns_on_invalid_values():
    logger = MagicMock()

    assert ledger_report_cli._parse_date("15/03/2024", logger) is None
    assert ledger_report_cli._parse_date(None, logger) is None
    assert ledger_report_cli._parse_date("2024-03-15", logger) == date(2024, 3, 15)
    logger.warning.assert_called_once()
