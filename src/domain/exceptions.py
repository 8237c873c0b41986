"""Domain exceptions for the debt ledger."""


class LedgerError(Exception):
    """Base exception for all ledger errors."""


class LedgerValidationError(LedgerError):
    """A write was rejected at the ledger boundary."""


class LedgerRepositoryError(LedgerError):
    """The persistence collaborator failed to read or write records."""


class RecordNotFoundError(LedgerRepositoryError):
    """The requested counterparty or transaction does not exist."""


__all__ = [
    "LedgerError",
    "LedgerValidationError",
    "LedgerRepositoryError",
    "RecordNotFoundError",
]
