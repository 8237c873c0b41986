"""Use case running the recurring transactions pass for one user.

The pass fetches the ledger, then for every due template stores one new
instance and advances the template's last processed date. Writes are
serialized inside the pass; callers must not run two passes for the same
user concurrently if at-most-once materialization is required.
"""

from datetime import date

from src.application.use_cases.ledger_session import (
    LedgerSession,
    RecurringRunResult,
)
from src.infrastructure.logging.logger import get_app_logger


class ProcessRecurringTransactionsUseCase:
    """Materialize due recurring templates of a user's ledger."""

    def __init__(self, session: LedgerSession, logger=None) -> None:
        """Initialize the use case.

        Args:
            session: Ledger session of the processed user.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._session = session
        self._logger = logger or get_app_logger()

    def execute(self, today: date | None = None) -> RecurringRunResult:
        """Run one recurring pass.

        Args:
            today: Day of the pass, defaults to now.

        Returns:
            RecurringRunResult: Templates inspected, instances, failures.
        """
        self._session.fetch()
        result = self._session.process_recurring_transactions(today)
        self._logger.info(
            f"Recurring pass done: templates={result.processed}, "
            f"materialized={len(result.materialized)}, "
            f"failures={len(result.failures)}"
        )
        if result.failures:
            self._logger.warning(
                f"{len(result.failures)} recurring templates failed and "
                "will be retried on the next pass"
            )
        return result


__all__ = ["ProcessRecurringTransactionsUseCase", "RecurringRunResult"]
