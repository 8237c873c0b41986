"""Session state for one user's ledger.

The session keeps the counterparties and transactions fetched from the
persistence collaborator in memory and recomputes every derived view from
them on each read. Nothing survives the session: a new session fetches
again instead of trusting a local cache.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, TypeVar

from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.domain.exceptions import LedgerError, LedgerValidationError
from src.domain.models import (
    Counterparty,
    DebtSummary,
    ExtendedDebtSummary,
    TotalDebt,
    Transaction,
    TransactionDraft,
)
from src.domain.policies import (
    is_valid_counterparty_name,
    normalize_counterparty_name,
)
from src.domain.services.debts import compute_summaries, transactions_for
from src.domain.services.partial_payments import (
    build_partial_payment,
    compute_extended_summary,
)
from src.domain.services.recurrence import (
    advance_template,
    is_transaction_due,
    materialize_instance,
    select_templates,
)
from src.domain.services.statistics import get_total_debt
from src.domain.services.validation import (
    apply_transaction_changes,
    validate_partial_payment,
    validate_transaction_draft,
)
from src.infrastructure.logging.logger import get_app_logger
from src.utils.date_utils import coerce_datetime
from src.utils.decimal_utils import coerce_decimal

T = TypeVar("T")


@dataclass(frozen=True)
class RecurringFailure:
    """Template that could not be processed during a recurring pass."""

    template_id: str
    message: str


@dataclass(frozen=True)
class RecurringRunResult:
    """Outcome of a recurring pass.

    Attributes:
        processed: Number of templates inspected.
        materialized: Instances created during the pass.
        failures: Templates whose instance or advancement failed.
    """

    processed: int
    materialized: list[Transaction] = field(default_factory=list)
    failures: list[RecurringFailure] = field(default_factory=list)


class LedgerSession:
    """In-memory ledger of one user synchronized with the repository."""

    def __init__(
        self,
        repository: LedgerRepositoryPort,
        user_id: str,
        logger=None,
    ) -> None:
        """Initialize an empty session.

        Args:
            repository: Persistence collaborator.
            user_id: Already authenticated owner of the ledger.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._repository = repository
        self._user_id = user_id
        self._logger = logger or get_app_logger()
        self.counterparties: list[Counterparty] = []
        self.transactions: list[Transaction] = []
        self.error: str | None = None

    @property
    def user_id(self) -> str:
        return self._user_id

    def clear_error(self) -> None:
        self.error = None

    def _call(self, action: str, operation: Callable[[], T]) -> T:
        """Run a repository operation, keeping its failure message."""
        self.error = None
        try:
            return operation()
        except LedgerError as exc:
            self.error = str(exc)
            self._logger.error(f"Error {action}: {exc}")
            raise

    def fetch(self) -> None:
        """Replace the session state with a fresh copy from storage."""
        self.fetch_counterparties()
        self.fetch_transactions()

    def fetch_counterparties(self) -> list[Counterparty]:
        self.counterparties = self._call(
            "fetching counterparties",
            lambda: self._repository.fetch_counterparties(self._user_id),
        )
        return self.counterparties

    def fetch_transactions(self) -> list[Transaction]:
        self.transactions = self._call(
            "fetching transactions",
            lambda: self._repository.fetch_transactions(self._user_id),
        )
        self._logger.info(
            f"Fetched {len(self.transactions)} transactions "
            f"for user {self._user_id}"
        )
        return self.transactions

    def add_counterparty(self, name: str) -> Counterparty:
        """Create a counterparty.

        Raises:
            LedgerValidationError: If the name is blank or too long.
        """
        if not is_valid_counterparty_name(name):
            self.error = "Counterparty name is invalid"
            raise LedgerValidationError(self.error)
        normalized = normalize_counterparty_name(name)
        counterparty = self._call(
            "adding counterparty",
            lambda: self._repository.add_counterparty(self._user_id, normalized),
        )
        self.counterparties = [*self.counterparties, counterparty]
        return counterparty

    def update_counterparty(self, counterparty_id: str, name: str) -> Counterparty:
        """Rename a counterparty."""
        if not is_valid_counterparty_name(name):
            self.error = "Counterparty name is invalid"
            raise LedgerValidationError(self.error)
        normalized = normalize_counterparty_name(name)
        updated = self._call(
            "updating counterparty",
            lambda: self._repository.update_counterparty(
                self._user_id,
                counterparty_id,
                normalized,
            ),
        )
        self.counterparties = [
            updated if counterparty.id == counterparty_id else counterparty
            for counterparty in self.counterparties
        ]
        return updated

    def delete_counterparty(self, counterparty_id: str) -> None:
        """Delete a counterparty together with its transactions."""
        self._call(
            "deleting counterparty",
            lambda: self._repository.delete_counterparty(
                self._user_id,
                counterparty_id,
            ),
        )
        self.counterparties = [
            counterparty
            for counterparty in self.counterparties
            if counterparty.id != counterparty_id
        ]
        self.transactions = [
            transaction
            for transaction in self.transactions
            if transaction.counterparty_id != counterparty_id
        ]

    def add_transaction(self, draft: TransactionDraft) -> Transaction:
        """Validate and store a transaction.

        Raises:
            LedgerValidationError: If the draft is rejected.
            LedgerRepositoryError: If the collaborator fails.
        """
        try:
            validate_transaction_draft(draft)
        except LedgerValidationError as exc:
            self.error = str(exc)
            raise
        transaction = self._call(
            "adding transaction",
            lambda: self._repository.add_transaction(self._user_id, draft),
        )
        self.transactions = [*self.transactions, transaction]
        return transaction

    def update_transaction(self, transaction_id: str, **changes: Any) -> Transaction:
        """Apply field changes to a stored transaction.

        Changes to a fetched transaction are converted and validated before
        the collaborator is called.

        Raises:
            LedgerValidationError: If a field is read-only or unknown, a value
                has the wrong type, or the result would be invalid.
            LedgerRepositoryError: If the collaborator fails.
        """
        current = next(
            (t for t in self.transactions if t.id == transaction_id),
            None,
        )
        if current is not None:
            try:
                edited = apply_transaction_changes(current, changes)
            except LedgerValidationError as exc:
                self.error = str(exc)
                raise
            changes = {name: getattr(edited, name) for name in changes}
        updated = self._call(
            "updating transaction",
            lambda: self._repository.update_transaction(
                self._user_id,
                transaction_id,
                changes,
            ),
        )
        self.transactions = [
            updated if transaction.id == transaction_id else transaction
            for transaction in self.transactions
        ]
        return updated

    def delete_transaction(self, transaction_id: str) -> None:
        self._call(
            "deleting transaction",
            lambda: self._repository.delete_transaction(
                self._user_id,
                transaction_id,
            ),
        )
        self.transactions = [
            transaction
            for transaction in self.transactions
            if transaction.id != transaction_id
        ]

    def get_debt_summaries(self) -> list[DebtSummary]:
        return compute_summaries(self.counterparties, self.transactions)

    def get_total_debt(self) -> TotalDebt:
        return get_total_debt(self.get_debt_summaries())

    def get_transactions_for_counterparty(
        self,
        counterparty_id: str,
    ) -> list[Transaction]:
        return transactions_for(counterparty_id, self.transactions)

    def get_extended_debt_summary(
        self,
        counterparty_id: str,
    ) -> ExtendedDebtSummary | None:
        """Return the extended summary, or None for an unknown counterparty."""
        counterparty = next(
            (c for c in self.counterparties if c.id == counterparty_id),
            None,
        )
        if counterparty is None:
            return None
        return compute_extended_summary(counterparty, self.transactions)

    def get_recurring_templates(self) -> list[Transaction]:
        return select_templates(self.transactions)

    def make_partial_payment(
        self,
        original_debt_id: str,
        amount: Decimal,
        description: str | None = None,
        paid_at: datetime | None = None,
    ) -> Transaction:
        """Record a partial payment against one debt.

        Args:
            original_debt_id: Id of the borrowed or lent transaction.
            amount: Amount paid, at most the remaining balance.
            description: Optional description.
            paid_at: Payment timestamp, defaults to now.

        Returns:
            Transaction: Stored partial payment.

        Raises:
            LedgerValidationError: If the debt is unknown or the amount is
                not positive or exceeds the remaining balance.
        """
        amount = coerce_decimal(amount)
        debt = next(
            (t for t in self.transactions if t.id == original_debt_id),
            None,
        )
        try:
            validate_partial_payment(debt, amount, self.transactions)
        except LedgerValidationError as exc:
            self.error = str(exc)
            raise
        draft = build_partial_payment(debt, amount, description, paid_at)
        return self.add_transaction(draft)

    def process_recurring_transactions(
        self,
        today: date | None = None,
    ) -> RecurringRunResult:
        """Materialize one instance for every due recurring template.

        Each due template is stored as a new instance first and then advanced
        to the occurrence date. A failure on one template is logged and
        recorded without stopping the others; if only the advancement fails
        the next pass materializes the same occurrence again.

        Args:
            today: Day of the pass, defaults to now.

        Returns:
            RecurringRunResult: Templates inspected, instances, failures.
        """
        occurrence = coerce_datetime(today) if today is not None else datetime.now()
        templates = self.get_recurring_templates()
        materialized: list[Transaction] = []
        failures: list[RecurringFailure] = []
        for template in templates:
            if not is_transaction_due(template, occurrence.date()):
                continue
            try:
                instance = self.add_transaction(
                    materialize_instance(template, occurrence)
                )
                materialized.append(instance)
                advanced = advance_template(template, occurrence)
                self.update_transaction(template.id, recurring=advanced.recurring)
            except LedgerError as exc:
                self._logger.error(
                    f"Failed to process recurring transaction {template.id}: {exc}"
                )
                failures.append(
                    RecurringFailure(template_id=template.id, message=str(exc))
                )
        return RecurringRunResult(
            processed=len(templates),
            materialized=materialized,
            failures=failures,
        )


__all__ = [
    "LedgerSession",
    "RecurringFailure",
    "RecurringRunResult",
]
