"""Indian rupee formatting (lakh/crore digit grouping)."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Optional, Union

RUPEE = "₹"


def format_indian_number(amount: Union[Decimal, int, float, None]) -> str:
    """Format a number with Indian grouping and two decimals.

    The last three integer digits form one group, every group before that
    has two: 12345678.9 -> "1,23,45,678.90". ``None`` formats as "0.00".
    """
    if amount is None:
        amount = Decimal("0")
    value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

    sign = "-" if value < 0 else ""
    integer_part, _, fraction = f"{abs(value):.2f}".partition(".")

    if len(integer_part) > 3:
        head, tail = integer_part[:-3], integer_part[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        integer_part = ",".join(groups + [tail])

    return f"{sign}{integer_part}.{fraction}"


def format_indian_rupee(amount: Optional[Decimal]) -> str:
    """Format an amount as rupees, e.g. ``₹1,00,000.00`` or ``-₹250.00``."""
    formatted = format_indian_number(amount)
    if formatted.startswith("-"):
        return f"-{RUPEE}{formatted[1:]}"
    return f"{RUPEE}{formatted}"
