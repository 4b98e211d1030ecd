"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def _normalize_separators(amount_str: str) -> str:
    """Rewrite thousands/decimal separators to plain "1234.56" form.

    When both separators appear, the right-most one is the decimal mark.
    A lone comma is a decimal mark (pt-BR), and repeated dots or commas are
    thousands separators.
    """
    has_comma = "," in amount_str
    has_dot = "." in amount_str

    if has_comma and has_dot:
        if amount_str.rfind(",") > amount_str.rfind("."):
            return amount_str.replace(".", "").replace(",", ".")
        return amount_str.replace(",", "")

    if has_comma:
        if amount_str.count(",") == 1:
            return amount_str.replace(",", ".")
        return amount_str.replace(",", "")

    if amount_str.count(".") > 1:
        return amount_str.replace(".", "")

    return amount_str


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "123,45"
    - "R$ 1.234,56"
    - "-R$ 123,45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    # Remove whitespace
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Remove currency symbols
    amount_str = re.sub(r"R\$|[$€£¥]", "", amount_str)
    amount_str = re.sub(r"\s+", "", amount_str)
    amount_str = _normalize_separators(amount_str)

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}': {e}")

    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}': not a finite number")

    if is_negative:
        amount = -amount
    return amount
