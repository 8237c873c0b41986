"""Currency display helpers."""

from decimal import ROUND_HALF_UP, Decimal

from src.utils.decimal_utils import coerce_decimal

DEFAULT_CURRENCY_SYMBOL = "₺"


def format_currency(
    amount,
    include_currency: bool = False,
    symbol: str = DEFAULT_CURRENCY_SYMBOL,
) -> str:
    """Format an amount with Turkish separators.

    Args:
        amount: Numeric value or numeric string. Invalid strings format as 0.
        include_currency: Whether to append the currency symbol.
        symbol: Currency symbol appended when requested.

    Returns:
        str: Value such as ``1.234,50`` or ``1.234,50 ₺``.
    """
    try:
        value = coerce_decimal(amount)
    except ArithmeticError:
        value = Decimal("0")
    if not value.is_finite():
        value = Decimal("0")
    quantized = value.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    english = f"{quantized:,.2f}"
    formatted = (
        english.replace(",", "_").replace(".", ",").replace("_", ".")
    )
    return f"{formatted} {symbol}" if include_currency else formatted


__all__ = ["DEFAULT_CURRENCY_SYMBOL", "format_currency"]
