"""Naming policy for counterparties."""

MAX_NAME_LENGTH = 100


def normalize_counterparty_name(name: str) -> str:
    """Collapse inner whitespace and strip the ends of a name."""
    return " ".join(name.split())


def is_valid_counterparty_name(name: str) -> bool:
    """Return True when the name can be stored.

    Args:
        name: Raw name entered by the user.

    Returns:
        bool: True for non-blank names within the length limit.
    """
    candidate = normalize_counterparty_name(name)
    return 0 < len(candidate) <= MAX_NAME_LENGTH
