"""Transaction domain service (the Transaction Manager)."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fintracker.database.base import Database
from fintracker.domain.balance import BalanceUpdater
from fintracker.domain.entities import BalanceEffect, Transaction, enum_value, round_to_cents
from fintracker.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    amount_not_positive,
    category_not_found,
    transaction_not_found,
    user_not_found,
)
from fintracker.utils.logging_utils import log_operation

logger = logging.getLogger(__name__)


def _effect_of(transaction: Transaction) -> BalanceEffect:
    return BalanceEffect(
        account_id=transaction.account_id,
        amount=transaction.amount,
        transaction_type=transaction.transaction_type,
    )


class TransactionService:
    """Service for managing transactions.

    Every write keeps the owning account balance in step: creation applies
    the transaction's effect, update reverses the old effect and applies the
    new one, deletion reverses it. Each write and its balance change share
    one unit of work.
    """

    def __init__(self, db: Database, balance_updater: Optional[BalanceUpdater] = None):
        """Initialize transaction service.

        Args:
            db: Database instance
            balance_updater: Balance updater, built from ``db`` when omitted
        """
        self.db = db
        self.balance_updater = balance_updater or BalanceUpdater(db)

    def create_transaction(
        self,
        amount: Decimal,
        transaction_type: str,
        account_id: int,
        category_id: int,
        user_id: int,
        transaction_date: Optional[datetime] = None,
        description: Optional[str] = None,
        notes: Optional[str] = None,
        scheduled_transaction_id: Optional[int] = None,
    ) -> Transaction:
        """Create a transaction and apply it to the account balance.

        Args:
            amount: Positive magnitude of the transaction
            transaction_type: EXPENSE, INCOME or TRANSFER
            account_id: Account the transaction books against
            category_id: Category ID
            user_id: Creating user ID
            transaction_date: When it happened (defaults to now)
            description: Optional description
            notes: Optional notes
            scheduled_transaction_id: Scheduled transaction that spawned it, if any

        Returns:
            Created transaction entity

        Raises:
            ValidationError: If amount is not positive
            NotFoundError: If account, category or user doesn't exist
        """
        amount = self._validate_amount(amount)
        if transaction_date is None:
            transaction_date = datetime.now()

        with log_operation(logger, "create_transaction", account_id=account_id, amount=amount):
            with self.db.unit_of_work():
                self._require_account(account_id)
                self._require_category(category_id)
                if self.db.get_user(user_id) is None:
                    raise NotFoundError(user_not_found(user_id))

                self.balance_updater.apply(
                    BalanceEffect(
                        account_id=account_id,
                        amount=amount,
                        transaction_type=transaction_type,
                    )
                )
                transaction_id = self.db.create_transaction(
                    amount=amount,
                    transaction_date=transaction_date,
                    transaction_type=enum_value(transaction_type),
                    account_id=account_id,
                    category_id=category_id,
                    created_by_id=user_id,
                    description=description,
                    notes=notes,
                    scheduled_transaction_id=scheduled_transaction_id,
                )
                return self.get_transaction(transaction_id)

    def update_transaction(
        self,
        transaction_id: int,
        amount: Decimal,
        transaction_type: str,
        transaction_date: datetime,
        description: Optional[str] = None,
        notes: Optional[str] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> Transaction:
        """Overwrite a transaction and correct the balances it touches.

        ``account_id`` and ``category_id`` keep their current values when
        omitted. The old effect is reversed on the old account and the new
        effect applied on the (possibly different) new account.

        Raises:
            ValidationError: If amount is not positive
            NotFoundError: If the transaction, account or category doesn't exist
        """
        amount = self._validate_amount(amount)

        with log_operation(logger, "update_transaction", transaction_id=transaction_id):
            with self.db.unit_of_work():
                existing = self.get_transaction(transaction_id)

                new_account_id = existing.account_id if account_id is None else account_id
                new_category_id = existing.category_id if category_id is None else category_id
                if new_account_id != existing.account_id:
                    self._require_account(new_account_id)
                if new_category_id != existing.category_id:
                    self._require_category(new_category_id)

                self.balance_updater.recompute(
                    _effect_of(existing),
                    BalanceEffect(
                        account_id=new_account_id,
                        amount=amount,
                        transaction_type=transaction_type,
                    ),
                )
                self.db.update_transaction(
                    transaction_id=transaction_id,
                    amount=amount,
                    transaction_date=transaction_date,
                    transaction_type=enum_value(transaction_type),
                    account_id=new_account_id,
                    category_id=new_category_id,
                    description=description,
                    notes=notes,
                )
                return self.get_transaction(transaction_id)

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction and reverse its balance effect.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        with log_operation(logger, "delete_transaction", transaction_id=transaction_id):
            with self.db.unit_of_work():
                existing = self.get_transaction(transaction_id)
                self.balance_updater.revert(_effect_of(existing))
                self.db.delete_transaction(transaction_id)

    def get_transaction(self, transaction_id: int) -> Transaction:
        """Get transaction by ID.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        transaction = self.db.get_transaction(transaction_id)
        if transaction is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        return transaction

    def list_transactions(
        self,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        user_id: Optional[int] = None,
        start_date: Optional[datetime] = None,
        end_date: Optional[datetime] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters.

        ``user_id`` matches the creating user. Dates are inclusive.
        """
        return self.db.list_transactions(
            account_id=account_id,
            category_id=category_id,
            created_by_id=user_id,
            start_date=start_date,
            end_date=end_date,
        )

    def list_by_account(self, account_id: int) -> list[Transaction]:
        return self.db.list_transactions(account_id=account_id)

    def list_by_category(self, category_id: int) -> list[Transaction]:
        return self.db.list_transactions(category_id=category_id)

    def list_by_user(self, user_id: int) -> list[Transaction]:
        return self.db.list_transactions(created_by_id=user_id)

    def list_by_date_range(self, start_date: datetime, end_date: datetime) -> list[Transaction]:
        return self.db.list_transactions(start_date=start_date, end_date=end_date)

    def list_by_user_and_date_range(
        self, user_id: int, start_date: datetime, end_date: datetime
    ) -> list[Transaction]:
        return self.db.list_transactions(
            created_by_id=user_id, start_date=start_date, end_date=end_date
        )

    def list_by_account_and_date_range(
        self, account_id: int, start_date: datetime, end_date: datetime
    ) -> list[Transaction]:
        return self.db.list_transactions(
            account_id=account_id, start_date=start_date, end_date=end_date
        )

    def list_by_scheduled_transaction(self, scheduled_id: int) -> list[Transaction]:
        """List transactions spawned by a scheduled transaction."""
        return self.db.list_transactions(scheduled_transaction_id=scheduled_id)

    def _require_account(self, account_id: int) -> None:
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

    def _require_category(self, category_id: int) -> None:
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

    @staticmethod
    def _validate_amount(amount: Decimal) -> Decimal:
        """Return the amount rounded to cents, rejecting non-positive values."""
        if amount is None:
            raise ValidationError(amount_not_positive())
        amount = round_to_cents(amount)
        if amount <= 0:
            raise ValidationError(amount_not_positive())
        return amount
