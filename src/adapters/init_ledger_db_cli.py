"""CLI to validate the ledger database connection and create its tables.

This adapter is meant for local operations: it instantiates the concrete
database adapter from the infrastructure layer, runs a basic health check
and makes sure the ledger tables exist.
"""

from src.infrastructure.container import (
    build_database_adapter,
    build_ledger_repository,
)
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Check connectivity and prepare the ledger storage."""
    adapter = build_database_adapter()
    logger = get_app_logger()

    engine = adapter.get_ledger_engine()
    logger.info(f"Ledger DB: {engine.url}")

    with engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")

    build_ledger_repository(adapter).prepare_storage()
    logger.info("Ledger connection is working and tables are ready.")


if __name__ == "__main__":
    main()
