"""Use case to compute the full ledger report of one user."""

from dataclasses import dataclass
from datetime import date

from src.application.use_cases.ledger_session import LedgerSession
from src.domain.models import (
    CategoryStats,
    DebtSummary,
    ExpenseSummary,
    FriendMonthlyStats,
    MonthlyStats,
    TotalDebt,
    Transaction,
)
from src.domain.services.partial_payments import find_orphan_partial_payments
from src.domain.services.statistics import (
    DEFAULT_MONTHS_BACK,
    get_category_statistics,
    get_expense_summary,
    get_friend_statistics_by_month,
    get_monthly_statistics,
)
from src.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class LedgerReport:
    """Every derived view of a ledger, computed from one fetch.

    Attributes:
        summaries: Basic debt summaries per counterparty.
        totals: Owed and owing totals across counterparties.
        monthly: Monthly statistics, current month first.
        friends_this_month: Per-counterparty totals of the current month.
        categories: Category statistics over every transaction.
        expenses: Expense summary over every expense.
        orphan_payments: Partial payments referencing no existing debt.
    """

    summaries: list[DebtSummary]
    totals: TotalDebt
    monthly: list[MonthlyStats]
    friends_this_month: list[FriendMonthlyStats]
    categories: list[CategoryStats]
    expenses: ExpenseSummary
    orphan_payments: list[Transaction]


class GetLedgerReportUseCase:
    """Fetch a user's ledger and compute its report."""

    def __init__(self, session: LedgerSession, logger=None) -> None:
        """Initialize the use case.

        Args:
            session: Ledger session of the reported user.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._session = session
        self._logger = logger or get_app_logger()

    def execute(
        self,
        months_back: int = DEFAULT_MONTHS_BACK,
        today: date | None = None,
    ) -> LedgerReport:
        """Return the ledger report.

        Args:
            months_back: Number of months of monthly statistics.
            today: Reference date, defaults to the current date.

        Returns:
            LedgerReport: Derived views over freshly fetched records.
        """
        reference = today or date.today()
        self._session.fetch()
        transactions = self._session.transactions

        summaries = self._session.get_debt_summaries()
        totals = self._session.get_total_debt()
        orphans = find_orphan_partial_payments(transactions)
        if orphans:
            self._logger.warning(
                f"Ignored {len(orphans)} partial payments referencing "
                "missing debts"
            )
        self._logger.info(
            f"Ledger report computed: owed={totals.total_owed}, "
            f"owing={totals.total_owing}, net={totals.net_balance}"
        )
        return LedgerReport(
            summaries=summaries,
            totals=totals,
            monthly=get_monthly_statistics(transactions, months_back, reference),
            friends_this_month=get_friend_statistics_by_month(
                transactions,
                self._session.counterparties,
                reference,
            ),
            categories=get_category_statistics(transactions),
            expenses=get_expense_summary(transactions),
            orphan_payments=orphans,
        )


__all__ = ["GetLedgerReportUseCase", "LedgerReport"]
