"""Application use cases package."""

from .ledger_session import LedgerSession, RecurringFailure, RecurringRunResult
from .get_ledger_report import GetLedgerReportUseCase, LedgerReport
from .process_recurring_transactions import ProcessRecurringTransactionsUseCase

__all__ = [
    "LedgerSession",
    "RecurringFailure",
    "RecurringRunResult",
    "GetLedgerReportUseCase",
    "LedgerReport",
    "ProcessRecurringTransactionsUseCase",
]
