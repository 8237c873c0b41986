"""Tests for the process_recurring_cli adapter."""

from types import SimpleNamespace
from unittest.mock import MagicMock

from src.adapters import process_recurring_cli
from src.application.use_cases.ledger_session import (
    RecurringFailure,
    RecurringRunResult,
)


def test_main_runs_use_case_and_prints_result(monkeypatch, capsys):
    """The CLI should wire the session into the use case and print totals."""
    fake_logger = MagicMock()
    fake_session = object()
    fake_use_case = MagicMock()
    fake_use_case.execute.return_value = RecurringRunResult(
        processed=3,
        materialized=[object(), object()],
        failures=[RecurringFailure(template_id="tpl-9", message="boom")],
    )

    monkeypatch.setattr(process_recurring_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(
        process_recurring_cli.LedgerSettings,
        "from_env",
        classmethod(lambda cls: SimpleNamespace(user_id="user-1")),
    )
    monkeypatch.setattr(
        process_recurring_cli,
        "build_ledger_session",
        lambda user_id: fake_session if user_id == "user-1" else None,
    )

    def _fake_use_case(session, logger):
        assert session is fake_session
        assert logger is fake_logger
        return fake_use_case

    monkeypatch.setattr(
        process_recurring_cli,
        "ProcessRecurringTransactionsUseCase",
        _fake_use_case,
    )

    process_recurring_cli.main()

    fake_use_case.execute.assert_called_once()
    captured = capsys.readouterr()
    assert "Processed 3 recurring templates, created 2 transactions." in captured.out
    assert "tpl-9" in captured.out


def test_main_requires_user(monkeypatch, capsys):
    fake_logger = MagicMock()
    monkeypatch.setattr(process_recurring_cli, "get_app_logger", lambda: fake_logger)
    monkeypatch.setattr(
        process_recurring_cli.LedgerSettings,
        "from_env",
        classmethod(lambda cls: SimpleNamespace(user_id=None)),
    )
    build = MagicMock()
    monkeypatch.setattr(process_recurring_cli, "build_ledger_session", build)

    process_recurring_cli.main()

    build.assert_not_called()
    fake_logger.warning.assert_called_once()
    assert capsys.readouterr().out == ""
