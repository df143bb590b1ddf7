"""Domain model entities for fintracker.

These are pure data classes representing business concepts, independent of
database schema. Services receive and return these; the database layer maps
its ORM rows onto them.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional


class TransactionType(str, Enum):
    """Kinds of money movement.

    TRANSFER is a recognized value with no balance effect.
    """

    EXPENSE = "EXPENSE"
    INCOME = "INCOME"
    TRANSFER = "TRANSFER"


class CategoryType(str, Enum):
    """Category classification."""

    EXPENSE = "EXPENSE"
    INCOME = "INCOME"


class Frequency(str, Enum):
    """Recurrence units understood by the scheduler."""

    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    YEARLY = "YEARLY"


def enum_value(value):
    """Return the plain string behind an enum member, or the value unchanged.

    Type and frequency columns are free-form strings so that values outside
    the enums can still be stored and read back.
    """
    if isinstance(value, Enum):
        return value.value
    return value


CENT = Decimal("0.01")


def round_to_cents(amount) -> Decimal:
    """Round a money amount half-up to the two places stored for it.

    Balances move by exactly the amount that gets stored, so every amount
    is rounded before it is validated or booked.
    """
    return Decimal(amount).quantize(CENT, rounding=ROUND_HALF_UP)


@dataclass(frozen=True)
class User:
    """User domain entity. ``password_hash`` is a bcrypt hash."""

    id: int
    username: str
    password_hash: str
    full_name: Optional[str]
    email: str
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Balance-bearing account owned by a user."""

    id: int
    name: str
    account_type: str
    balance: Decimal
    user_id: int
    created_at: datetime


@dataclass(frozen=True)
class Category:
    """Category domain entity with optional parent."""

    id: int
    name: str
    category_type: str
    description: Optional[str]
    parent_id: Optional[int]
    created_at: datetime


@dataclass(frozen=True)
class CategoryTreeNode:
    """Category with nested children for hierarchical display."""

    id: int
    name: str
    category_type: str
    parent_id: Optional[int]
    children: tuple["CategoryTreeNode", ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Transaction:
    """Posted transaction. ``amount`` is always a positive magnitude."""

    id: int
    description: Optional[str]
    amount: Decimal
    transaction_date: datetime
    transaction_type: str
    account_id: int
    category_id: int
    created_by_id: int
    scheduled_transaction_id: Optional[int]
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class ScheduledTransaction:
    """Template that materializes a Transaction every ``frequency``."""

    id: int
    description: str
    amount: Decimal
    frequency: str
    next_due_date: datetime
    transaction_type: str
    account_id: int
    category_id: int
    created_by_id: int
    notes: Optional[str]
    active: bool
    created_at: datetime


@dataclass(frozen=True)
class Investment:
    """Investment holding tracked by value over time."""

    id: int
    name: str
    investment_type: str
    initial_amount: Decimal
    current_value: Optional[Decimal]
    start_date: datetime
    end_date: Optional[datetime]
    expected_return_rate: Optional[Decimal]
    user_id: int
    notes: Optional[str]
    ticker: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class BalanceEffect:
    """The effect a booked transaction has on one account.

    ``amount`` is the positive magnitude stored on the transaction; the sign
    is derived from ``transaction_type`` when the effect is applied.
    """

    account_id: int
    amount: Decimal
    transaction_type: str

    @property
    def signed_amount(self) -> Decimal:
        """+amount for INCOME, -amount for EXPENSE, zero for anything else."""
        transaction_type = enum_value(self.transaction_type)
        if transaction_type == TransactionType.INCOME.value:
            return self.amount
        if transaction_type == TransactionType.EXPENSE.value:
            return -self.amount
        return Decimal("0")

    def reversed(self) -> "BalanceEffect":
        """Return the effect that undoes this one on the same account."""
        return BalanceEffect(
            account_id=self.account_id,
            amount=-self.amount,
            transaction_type=self.transaction_type,
        )
