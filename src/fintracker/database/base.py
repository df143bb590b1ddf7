"""Abstract database interface."""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Optional
from datetime import datetime
from decimal import Decimal

# Import entities directly to avoid circular import through domain/__init__.py
from fintracker.domain.entities import (
    User,
    Account,
    Category,
    Transaction,
    ScheduledTransaction,
    Investment,
)


class Database(ABC):
    """Abstract database interface for fintracker (the ledger store)."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    @abstractmethod
    def unit_of_work(self) -> AbstractContextManager["Database"]:
        """Group writes into one atomic unit.

        Writes made inside the block commit together when the outermost block
        exits normally and are all rolled back if it raises. Nested blocks
        join the outermost one.
        """
        pass

    # User operations
    @abstractmethod
    def create_user(
        self, username: str, password_hash: str, email: str, full_name: Optional[str] = None
    ) -> int:
        """Create a user. Returns user ID."""
        pass

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        pass

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]:
        """Get user by username."""
        pass

    @abstractmethod
    def list_users(self) -> list[User]:
        """List all users."""
        pass

    @abstractmethod
    def username_exists(self, username: str) -> bool:
        """Check whether a username is taken."""
        pass

    @abstractmethod
    def email_exists(self, email: str) -> bool:
        """Check whether an email is taken."""
        pass

    @abstractmethod
    def update_user(
        self,
        user_id: int,
        username: str,
        email: str,
        full_name: Optional[str] = None,
        password_hash: Optional[str] = None,
    ) -> None:
        """Update user fields. ``password_hash`` is only written when given."""
        pass

    @abstractmethod
    def delete_user(self, user_id: int) -> None:
        """Delete a user."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self, name: str, account_type: str, user_id: int, balance: Decimal = Decimal("0")
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(self, user_id: Optional[int] = None) -> list[Account]:
        """List accounts, optionally filtered by owning user."""
        pass

    @abstractmethod
    def update_account(self, account_id: int, name: str, account_type: str) -> None:
        """Update account name and type."""
        pass

    @abstractmethod
    def adjust_account_balance(self, account_id: int, delta: Decimal) -> Account:
        """Atomically add ``delta`` to an account balance.

        Returns the account as stored after the change.
        """
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    # Category operations
    @abstractmethod
    def create_category(
        self,
        name: str,
        category_type: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
    ) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]:
        """Get category by ID."""
        pass

    @abstractmethod
    def get_category_by_name_and_type(self, name: str, category_type: str) -> Optional[Category]:
        """Get the first category with the given name and type."""
        pass

    @abstractmethod
    def list_categories(self, category_type: Optional[str] = None) -> list[Category]:
        """List categories, optionally filtered by type."""
        pass

    @abstractmethod
    def list_root_categories(self) -> list[Category]:
        """List categories without a parent."""
        pass

    @abstractmethod
    def list_subcategories(self, parent_id: int) -> list[Category]:
        """List immediate children of a category."""
        pass

    @abstractmethod
    def update_category(
        self,
        category_id: int,
        name: str,
        category_type: str,
        description: Optional[str] = None,
        parent_id: Optional[int] = None,
    ) -> None:
        """Update category fields."""
        pass

    @abstractmethod
    def delete_category(self, category_id: int) -> None:
        """Delete a category."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        amount: Decimal,
        transaction_date: datetime,
        transaction_type: str,
        account_id: int,
        category_id: int,
        created_by_id: int,
        description: Optional[str] = None,
        notes: Optional[str] = None,
        scheduled_transaction_id: Optional[int] = None,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        created_by_id: Optional[int] = None,
        user_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
        scheduled_transaction_id: Optional[int] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        Args:
            account_id: Only transactions booked against this account
            category_id: Only transactions in this category
            created_by_id: Only transactions created by this user
            user_id: Only transactions on accounts owned by this user
            start_date: Inclusive lower bound on transaction date
            end_date: Inclusive upper bound on transaction date
            scheduled_transaction_id: Only transactions spawned by this schedule
        """
        pass

    @abstractmethod
    def update_transaction(
        self,
        transaction_id: int,
        amount: Decimal,
        transaction_date: datetime,
        transaction_type: str,
        account_id: int,
        category_id: int,
        description: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Overwrite transaction fields."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    # Scheduled transaction operations
    @abstractmethod
    def create_scheduled_transaction(
        self,
        description: str,
        amount: Decimal,
        frequency: str,
        next_due_date: datetime,
        transaction_type: str,
        account_id: int,
        category_id: int,
        created_by_id: int,
        notes: Optional[str] = None,
        active: bool = True,
    ) -> int:
        """Create a scheduled transaction. Returns its ID."""
        pass

    @abstractmethod
    def get_scheduled_transaction(self, scheduled_id: int) -> Optional[ScheduledTransaction]:
        """Get scheduled transaction by ID."""
        pass

    @abstractmethod
    def list_scheduled_transactions(
        self,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        created_by_id: Optional[int] = None,
        due_before: Optional[datetime] = None,
        active: Optional[bool] = None,
    ) -> list[ScheduledTransaction]:
        """List scheduled transactions with optional filters.

        ``due_before`` is exclusive: only items whose next due date is
        strictly earlier are returned.
        """
        pass

    @abstractmethod
    def update_scheduled_transaction(
        self,
        scheduled_id: int,
        description: str,
        amount: Decimal,
        frequency: str,
        next_due_date: datetime,
        transaction_type: str,
        account_id: int,
        category_id: int,
        active: bool,
        notes: Optional[str] = None,
    ) -> None:
        """Overwrite scheduled transaction fields."""
        pass

    @abstractmethod
    def set_next_due_date(self, scheduled_id: int, next_due_date: datetime) -> None:
        """Store a new next due date for a scheduled transaction."""
        pass

    @abstractmethod
    def delete_scheduled_transaction(self, scheduled_id: int) -> None:
        """Delete a scheduled transaction, detaching the transactions it spawned."""
        pass

    # Investment operations
    @abstractmethod
    def create_investment(
        self,
        name: str,
        investment_type: str,
        initial_amount: Decimal,
        start_date: datetime,
        user_id: int,
        current_value: Optional[Decimal] = None,
        end_date: Optional[datetime] = None,
        expected_return_rate: Optional[Decimal] = None,
        notes: Optional[str] = None,
        ticker: Optional[str] = None,
    ) -> int:
        """Create an investment. Returns investment ID."""
        pass

    @abstractmethod
    def get_investment(self, investment_id: int) -> Optional[Investment]:
        """Get investment by ID."""
        pass

    @abstractmethod
    def list_investments(
        self, user_id: Optional[int] = None, investment_type: Optional[str] = None
    ) -> list[Investment]:
        """List investments, optionally filtered by user and/or type."""
        pass

    @abstractmethod
    def update_investment(
        self,
        investment_id: int,
        name: str,
        investment_type: str,
        initial_amount: Decimal,
        start_date: datetime,
        current_value: Optional[Decimal] = None,
        end_date: Optional[datetime] = None,
        expected_return_rate: Optional[Decimal] = None,
        notes: Optional[str] = None,
        ticker: Optional[str] = None,
    ) -> None:
        """Overwrite investment fields."""
        pass

    @abstractmethod
    def update_investment_value(self, investment_id: int, current_value: Decimal) -> None:
        """Store a new current value for an investment."""
        pass

    @abstractmethod
    def delete_investment(self, investment_id: int) -> None:
        """Delete an investment."""
        pass
