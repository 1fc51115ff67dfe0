"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re


def _normalize_separators(amount_str: str) -> str:
    """Turn "1.234,56" / "1,234.56" / "12,5" into "1234.56" / "1234.56" / "12.5"."""
    has_dot = "." in amount_str
    has_comma = "," in amount_str

    if has_dot and has_comma:
        # Whichever separator comes last is the decimal one
        if amount_str.rfind(",") > amount_str.rfind("."):
            return amount_str.replace(".", "").replace(",", ".")
        return amount_str.replace(",", "")

    if has_comma:
        whole, _, fraction = amount_str.rpartition(",")
        if len(fraction) in (1, 2) and amount_str.count(",") == 1:
            return f"{whole}.{fraction}"
        return amount_str.replace(",", "")

    return amount_str


def parse_amount(amount_str: str, allow_negative: bool = False) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "€123.45" / "123,45 EUR"
    - "1.234,56" (comma decimal separator)
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string
        allow_negative: If False, negative amounts are rejected

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed or is negative when
            negatives are not allowed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥]|EUR|USD|GBP", "", amount_str, flags=re.IGNORECASE)
    amount_str = amount_str.replace(" ", "").strip()
    amount_str = _normalize_separators(amount_str)

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValueError(f"Could not parse amount '{amount_str}'")

    if is_negative:
        amount = -amount
    if amount < 0 and not allow_negative:
        raise ValueError(f"Amount must not be negative, got {amount}")
    return amount
