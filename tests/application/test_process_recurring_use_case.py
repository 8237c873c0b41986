"""Tests for the ProcessRecurringTransactionsUseCase."""

from datetime import date, datetime
from decimal import Decimal

from src.application.use_cases.ledger_session import LedgerSession
from src.application.use_cases.process_recurring_transactions import (
    ProcessRecurringTransactionsUseCase,
)
from src.domain.constants import RecurrenceInterval, TransactionType
from src.domain.models import RecurrenceRule, TransactionDraft


def _template(repository, interval=RecurrenceInterval.WEEKLY):
    return repository.add_transaction(
        "user-1",
        TransactionDraft(
            counterparty_id=None,
            amount=Decimal("12.99"),
            description="Spotify",
            date=datetime(2024, 1, 1),
            type=TransactionType.EXPENSE,
            recurring=RecurrenceRule(
                is_recurring=True,
                interval=interval,
                start_date=datetime(2024, 1, 1),
            ),
        ),
    )


def test_execute_fetches_then_materializes(repository, logger):
    template = _template(repository)
    session = LedgerSession(repository, "user-1", logger=logger)

    result = ProcessRecurringTransactionsUseCase(session, logger=logger).execute(
        today=date(2024, 3, 1)
    )

    assert result.processed == 1
    assert len(result.materialized) == 1
    assert len(repository.transactions) == 2
    assert (
        repository.transactions[template.id].recurring.last_processed_date
        == datetime(2024, 3, 1)
    )
    logger.info.assert_called()
    logger.warning.assert_not_called()


def test_execute_warns_about_failures(repository, logger):
    _template(repository)
    repository.fail_on.add("add_transaction")
    session = LedgerSession(repository, "user-1", logger=logger)

    result = ProcessRecurringTransactionsUseCase(session, logger=logger).execute(
        today=date(2024, 3, 1)
    )

    assert result.materialized == []
    assert len(result.failures) == 1
    logger.warning.assert_called_once()
