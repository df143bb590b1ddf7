"""Amount parsing utilities."""

import re
from decimal import Decimal, InvalidOperation

CURRENCY_SYMBOLS = re.compile(r"(₹|Rs\.?|INR|\$|€|£|¥)", re.IGNORECASE)


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles formats such as:
    - "123.45"
    - "₹1,23,456.78" / "Rs. 500" / "INR 500"
    - "-$123.45"
    - "(123.45)" (negative in parentheses)

    Grouping commas are dropped wherever they appear, so both western and
    Indian (lakh) grouping parse.

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    text = amount_str.strip()
    negative = text.startswith("(") and text.endswith(")")
    if negative:
        text = text[1:-1]

    text = CURRENCY_SYMBOLS.sub("", text).replace(",", "").replace(" ", "")

    try:
        amount = Decimal(text)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{amount_str}'") from e
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{amount_str}'")
    return -amount if negative else amount
