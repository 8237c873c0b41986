"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.ledger_repository import LedgerRepositoryPort
from src.application.use_cases.ledger_session import LedgerSession
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.ledger_repository import SqlAlchemyLedgerRepository
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import LedgerSettings


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_ledger_repository(
    db_port: DatabaseEnginePort | None = None,
) -> LedgerRepositoryPort:
    """Return the SQL ledger repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyLedgerRepository(resolved_db)


def build_ledger_session(
    user_id: str | None = None,
    repository: LedgerRepositoryPort | None = None,
) -> LedgerSession:
    """Return a ledger session for the given or configured user.

    Raises:
        RuntimeError: If no user id is given and LEDGER_USER_ID is unset.
    """
    resolved_user = user_id or LedgerSettings.from_env().user_id
    if not resolved_user:
        raise RuntimeError("A ledger session requires LEDGER_USER_ID.")
    return LedgerSession(
        repository or build_ledger_repository(),
        resolved_user,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_ledger_repository",
    "build_ledger_session",
]
