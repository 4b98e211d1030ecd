"""Display formatting for BRL amounts and percentages."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

CENTS = Decimal("0.01")
TENTHS = Decimal("0.1")


def format_currency(value: Decimal) -> str:
    """Format a value as Brazilian reais, e.g. "R$ 1.234,56"."""
    rounded = Decimal(value).quantize(CENTS, rounding=ROUND_HALF_UP)
    sign = "-" if rounded < 0 else ""
    # Build en-US grouping, then swap separators to pt-BR.
    text = f"{abs(rounded):,.2f}".replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {text}"


def format_compact(value: Decimal) -> str:
    """Abbreviate large amounts, e.g. "R$ 1.5K" or "R$ 2.3M"."""
    value = Decimal(value)
    if value >= 1_000_000:
        return f"R$ {(value / 1_000_000).quantize(TENTHS, rounding=ROUND_HALF_UP)}M"
    if value >= 1000:
        return f"R$ {(value / 1000).quantize(TENTHS, rounding=ROUND_HALF_UP)}K"
    return format_currency(value)


def format_percent(value: Optional[Decimal], show_sign: bool = True) -> str:
    """Format a percentage with one decimal, e.g. "+12.5%"."""
    if value is None:
        return "n/a"
    rounded = Decimal(value).quantize(TENTHS, rounding=ROUND_HALF_UP)
    sign = "+" if show_sign and rounded > 0 else ""
    return f"{sign}{rounded}%"


def margin_percentage(profit: Decimal, gross: Decimal) -> Decimal:
    """Net margin as a percentage of gross revenue; 0 without revenue."""
    if gross > 0:
        return profit / gross * 100
    return Decimal("0")
