"""Domain policies package."""

from .counterparty_names import (
    is_valid_counterparty_name,
    normalize_counterparty_name,
)

__all__ = ["is_valid_counterparty_name", "normalize_counterparty_name"]
