"""CLI adapter running the recurring transactions pass.

Meant to be scheduled once a day: every due template of the configured
user gets one new instance dated on the day of the run.
"""

from src.application.use_cases.process_recurring_transactions import (
    ProcessRecurringTransactionsUseCase,
)
from src.infrastructure.container import build_ledger_session
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


def main() -> None:
    """Run the recurring pass for LEDGER_USER_ID."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    if settings.user_id is None:
        logger.warning("LEDGER_USER_ID is required to process recurring items.")
        return

    session = build_ledger_session(settings.user_id)
    use_case = ProcessRecurringTransactionsUseCase(session, logger=logger)

    result = use_case.execute()

    print(
        f"Processed {result.processed} recurring templates, "
        f"created {len(result.materialized)} transactions."
    )
    for failure in result.failures:
        print(f"Failed {failure.template_id}: {failure.message}")


if __name__ == "__main__":  # pragma: no cover
    main()
