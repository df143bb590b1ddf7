"""Investment return rate calculation."""

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Optional

from fintracker.domain.entities import Investment
from fintracker.domain.errors import ValidationError

DAYS_PER_YEAR = Decimal("365")
# Holdings longer than this many years (about one month) are annualized
ANNUALIZE_AFTER_YEARS = Decimal("0.0833")

_HUNDRED = Decimal("100")
_CENTS = Decimal("0.01")


def _days_between(start: datetime, end: datetime) -> int:
    """Whole days from ``start`` to ``end``, truncated toward zero."""
    delta = end - start
    if delta.days >= 0:
        return delta.days
    return -((-delta).days)


def calculate_return_rate(
    initial_amount: Decimal,
    current_value: Optional[Decimal],
    start_date: datetime,
    now: datetime,
) -> Decimal:
    """Return the percentage return of a holding, rounded to 2 places.

    Holdings older than about a month get the annualized rate
    ``((current / initial) ** (1 / years) - 1) * 100``; younger ones get the
    simple rate ``(current - initial) / initial * 100``. Years are a plain
    day count divided by 365.

    Returns ``Decimal("0")`` when there is no current value or the initial
    amount is zero.

    Raises:
        ValidationError: If an annualized rate is requested for a negative
            value ratio
    """
    if current_value is None or initial_amount == 0:
        return Decimal("0")

    total_return = current_value - initial_amount
    return_pct = (
        total_return / initial_amount
    ).quantize(Decimal("0.0001"), rounding=ROUND_HALF_UP) * _HUNDRED

    years = (Decimal(_days_between(start_date, now)) / DAYS_PER_YEAR).quantize(
        Decimal("0.0001"), rounding=ROUND_HALF_UP
    )

    if years > ANNUALIZE_AFTER_YEARS:
        ratio = (current_value / initial_amount).quantize(
            Decimal("0.00000001"), rounding=ROUND_HALF_UP
        )
        if ratio < 0:
            raise ValidationError("Cannot annualize a return with a negative value ratio")
        # Float exponentiation; precision loss at the edges is accepted
        annualized = Decimal(repr(float(ratio) ** (1.0 / float(years)) - 1)) * _HUNDRED
        return annualized.quantize(_CENTS, rounding=ROUND_HALF_UP)

    return return_pct.quantize(_CENTS, rounding=ROUND_HALF_UP)


def investment_return_rate(investment: Investment, now: datetime) -> Decimal:
    """Return rate for a stored investment at ``now``."""
    return calculate_return_rate(
        initial_amount=investment.initial_amount,
        current_value=investment.current_value,
        start_date=investment.start_date,
        now=now,
    )
