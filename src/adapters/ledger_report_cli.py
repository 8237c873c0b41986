"""CLI adapter printing the ledger report of the configured user."""

from datetime import date
import json
import os

from src.application.use_cases.get_ledger_report import (
    GetLedgerReportUseCase,
    LedgerReport,
)
from src.domain.constants import category_label
from src.infrastructure.container import build_ledger_session
from src.infrastructure.json_codec import (
    category_stats_to_dict,
    debt_summary_to_dict,
    expense_summary_to_dict,
    friend_monthly_stats_to_dict,
    monthly_stats_to_dict,
    total_debt_to_dict,
    transaction_to_dict,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings
from src.utils.currency import format_currency


def _parse_date(value: str | None, logger) -> date | None:
    """Parse an ISO date string into a date.

    Args:
        value: Date string in YYYY-MM-DD format.
        logger: Logger used for warnings.

    Returns:
        date | None: Parsed date or None when invalid.
    """
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.warning(
            f"Invalid date '{value}'. Expected format YYYY-MM-DD."
        )
        return None


def report_to_dict(report: LedgerReport) -> dict:
    """Return the JSON payload of a ledger report."""
    return {
        "summaries": [debt_summary_to_dict(s) for s in report.summaries],
        "totals": total_debt_to_dict(report.totals),
        "monthly": [monthly_stats_to_dict(m) for m in report.monthly],
        "friendsThisMonth": [
            friend_monthly_stats_to_dict(f) for f in report.friends_this_month
        ],
        "categories": [category_stats_to_dict(c) for c in report.categories],
        "expenses": expense_summary_to_dict(report.expenses),
        "orphanPayments": [
            transaction_to_dict(t) for t in report.orphan_payments
        ],
    }


def render_report(report: LedgerReport, symbol: str) -> list[str]:
    """Return the text lines of a ledger report."""

    def money(value) -> str:
        return format_currency(value, include_currency=True, symbol=symbol)

    lines = [
        f"Owed to you: {money(report.totals.total_owed)}",
        f"You owe: {money(report.totals.total_owing)}",
        f"Net balance: {money(report.totals.net_balance)}",
        "",
        "Balances:",
    ]
    for summary in report.summaries:
        lines.append(f"  {summary.counterparty_name}: {money(summary.balance)}")
    lines.append("")
    lines.append("Monthly:")
    for stats in report.monthly:
        lines.append(
            f"  {stats.label}: borrowed={money(stats.total_borrowed)}, "
            f"lent={money(stats.total_lent)}, "
            f"payments={money(stats.total_payments)}, "
            f"expenses={money(stats.total_expenses)}"
        )
    if report.expenses.by_category:
        lines.append("")
        lines.append(f"Expenses: {money(report.expenses.total_expenses)}")
        for row in report.expenses.by_category:
            lines.append(
                f"  {category_label(row.category)}: {money(row.amount)} "
                f"({format_currency(row.percentage)}%)"
            )
    if report.orphan_payments:
        lines.append("")
        lines.append(
            f"Ignored partial payments: {len(report.orphan_payments)}"
        )
    return lines


def main() -> None:
    """Print the ledger report as text, or JSON when LEDGER_REPORT_FORMAT=json."""
    logger = get_app_logger()
    settings = LedgerSettings.from_env()
    if settings.user_id is None:
        logger.warning("LEDGER_USER_ID is required to build a ledger report.")
        return

    today = _parse_date(os.getenv("LEDGER_REPORT_DATE"), logger)
    session = build_ledger_session(settings.user_id)
    use_case = GetLedgerReportUseCase(session, logger=logger)
    report = use_case.execute(months_back=settings.months_back, today=today)

    if os.getenv("LEDGER_REPORT_FORMAT", "text").strip().lower() == "json":
        print(json.dumps(report_to_dict(report), ensure_ascii=False, indent=2))
        return
    for line in render_report(report, settings.currency_symbol):
        print(line)


if __name__ == "__main__":  # pragma: no cover
    main()
