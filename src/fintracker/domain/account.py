"""Account domain service."""

import logging
from decimal import Decimal
from typing import Optional

from fintracker.database.base import Database
from fintracker.domain.entities import Account, round_to_cents
from fintracker.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    user_not_found,
)

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing accounts.

    Balances are only changed through the BalanceUpdater; this service sets
    the opening balance and nothing else.
    """

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_account(
        self,
        name: str,
        account_type: str,
        user_id: int,
        balance: Decimal = Decimal("0"),
    ) -> Account:
        """Create a new account for a user.

        Args:
            name: Account name
            account_type: Free-form type such as SAVINGS or CHECKING
            user_id: Owning user ID
            balance: Opening balance, rounded to cents

        Returns:
            Created account entity

        Raises:
            ValidationError: If name or type is blank
            NotFoundError: If the user doesn't exist
        """
        if not name or not name.strip():
            raise ValidationError("Account name is required")
        if not account_type or not account_type.strip():
            raise ValidationError("Account type is required")
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))

        account_id = self.db.create_account(
            name=name, account_type=account_type, user_id=user_id, balance=round_to_cents(balance)
        )
        logger.info("Created account '%s' (ID: %s) for user %s", name, account_id, user_id)
        return self.get_account(account_id)

    def get_account(self, account_id: int) -> Account:
        """Get account by ID.

        Raises:
            NotFoundError: If the account doesn't exist
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, user_id: Optional[int] = None) -> list[Account]:
        """List all accounts, or only those owned by ``user_id``."""
        return self.db.list_accounts(user_id=user_id)

    def update_account(self, account_id: int, name: str, account_type: str) -> Account:
        """Update account name and type.

        Raises:
            NotFoundError: If the account doesn't exist
            ValidationError: If name or type is blank
        """
        self.get_account(account_id)
        if not name or not name.strip():
            raise ValidationError("Account name is required")
        if not account_type or not account_type.strip():
            raise ValidationError("Account type is required")

        self.db.update_account(account_id=account_id, name=name, account_type=account_type)
        return self.get_account(account_id)

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If the account doesn't exist
            ConflictError: If transactions or schedules still reference it
        """
        self.get_account(account_id)
        self.db.delete_account(account_id)
        logger.info("Deleted account %s", account_id)
