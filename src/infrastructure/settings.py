"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
import os

import dotenv

from src.domain.services.statistics import DEFAULT_MONTHS_BACK
from src.infrastructure.logging.logger import get_app_logger
from src.utils.currency import DEFAULT_CURRENCY_SYMBOL


@dataclass(frozen=True)
class LedgerSettings:
    """Settings for the ledger command line adapters.

    Attributes:
        user_id: Owner of the ledger processed by the adapters.
        months_back: Number of months reported by monthly statistics.
        currency_symbol: Symbol appended to formatted amounts.
    """

    user_id: str | None = None
    months_back: int = DEFAULT_MONTHS_BACK
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL

    @classmethod
    def from_env(cls) -> "LedgerSettings":
        """Build settings from environment variables.

        Returns:
            LedgerSettings: Settings sourced from environment variables.
        """
        dotenv.load_dotenv()
        logger = get_app_logger()
        user_id = (os.getenv("LEDGER_USER_ID") or "").strip() or None
        months_back = cls._parse_months_back(
            os.getenv("LEDGER_MONTHS_BACK"),
            logger=logger,
        )
        currency_symbol = (
            os.getenv("LEDGER_CURRENCY_SYMBOL") or DEFAULT_CURRENCY_SYMBOL
        )
        return cls(
            user_id=user_id,
            months_back=months_back,
            currency_symbol=currency_symbol,
        )

    @staticmethod
    def _parse_months_back(raw_value: str | None, logger) -> int:
        """Parse the number of reported months.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            int: Parsed positive value, or the default when invalid.
        """
        if not raw_value:
            return DEFAULT_MONTHS_BACK
        try:
            value = int(raw_value)
        except ValueError:
            logger.warning(
                f"Invalid LEDGER_MONTHS_BACK '{raw_value}'. "
                f"Using {DEFAULT_MONTHS_BACK}."
            )
            return DEFAULT_MONTHS_BACK
        if value < 1:
            logger.warning(
                f"LEDGER_MONTHS_BACK must be positive, got {value}. "
                f"Using {DEFAULT_MONTHS_BACK}."
            )
            return DEFAULT_MONTHS_BACK
        return value


__all__ = ["LedgerSettings"]
