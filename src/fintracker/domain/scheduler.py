"""Scheduled transaction domain service (the Scheduler Engine)."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from dateutil.relativedelta import relativedelta

from fintracker.database.base import Database
from fintracker.domain.entities import (
    Frequency,
    ScheduledTransaction,
    Transaction,
    enum_value,
    round_to_cents,
)
from fintracker.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    amount_not_positive,
    category_not_found,
    scheduled_transaction_not_found,
    user_not_found,
)
from fintracker.domain.transaction import TransactionService
from fintracker.utils.logging_utils import log_operation

logger = logging.getLogger(__name__)

FREQUENCY_STEPS = {
    Frequency.DAILY.value: relativedelta(days=1),
    Frequency.WEEKLY.value: relativedelta(weeks=1),
    Frequency.MONTHLY.value: relativedelta(months=1),
    Frequency.YEARLY.value: relativedelta(years=1),
}


def advance_due_date(next_due_date: datetime, frequency: str) -> datetime:
    """Move a due date forward by exactly one frequency unit.

    Months and years are calendar units; Jan 31 + 1 month is the last day
    of February. An unrecognized frequency leaves the date unchanged.
    """
    step = FREQUENCY_STEPS.get(enum_value(frequency))
    if step is None:
        logger.warning(
            "Unrecognized frequency %r; next due date stays at %s", frequency, next_due_date
        )
        return next_due_date
    return next_due_date + step


class ScheduledTransactionService:
    """Service for managing and executing scheduled transactions."""

    def __init__(self, db: Database, transaction_service: Optional[TransactionService] = None):
        """Initialize scheduled transaction service.

        Args:
            db: Database instance
            transaction_service: Service used to book spawned transactions
        """
        self.db = db
        self.transaction_service = transaction_service or TransactionService(db)

    def create_scheduled_transaction(
        self,
        description: str,
        amount: Decimal,
        frequency: str,
        next_due_date: datetime,
        transaction_type: str,
        account_id: int,
        category_id: int,
        user_id: int,
        notes: Optional[str] = None,
    ) -> ScheduledTransaction:
        """Create a scheduled transaction. New schedules always start active.

        Raises:
            ValidationError: If description is blank or amount is not positive
            NotFoundError: If account, category or user doesn't exist
        """
        amount = self._validate(description, amount)
        self._require_references(account_id, category_id)
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))

        scheduled_id = self.db.create_scheduled_transaction(
            description=description,
            amount=amount,
            frequency=enum_value(frequency),
            next_due_date=next_due_date,
            transaction_type=enum_value(transaction_type),
            account_id=account_id,
            category_id=category_id,
            created_by_id=user_id,
            notes=notes,
            active=True,
        )
        logger.info("Created scheduled transaction %s due %s", scheduled_id, next_due_date)
        return self.get_scheduled_transaction(scheduled_id)

    def get_scheduled_transaction(self, scheduled_id: int) -> ScheduledTransaction:
        """Get scheduled transaction by ID.

        Raises:
            NotFoundError: If it doesn't exist
        """
        scheduled = self.db.get_scheduled_transaction(scheduled_id)
        if scheduled is None:
            raise NotFoundError(scheduled_transaction_not_found(scheduled_id))
        return scheduled

    def list_scheduled_transactions(
        self,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
        user_id: Optional[int] = None,
        active: Optional[bool] = None,
    ) -> list[ScheduledTransaction]:
        """List scheduled transactions with optional filters."""
        return self.db.list_scheduled_transactions(
            account_id=account_id,
            category_id=category_id,
            created_by_id=user_id,
            active=active,
        )

    def list_upcoming(self, before: datetime) -> list[ScheduledTransaction]:
        """List schedules due before ``before``, active or not."""
        return self.db.list_scheduled_transactions(due_before=before)

    def list_due(self, now: datetime) -> list[ScheduledTransaction]:
        """List active schedules whose next due date is before ``now``."""
        return self.db.list_scheduled_transactions(due_before=now, active=True)

    def update_scheduled_transaction(
        self,
        scheduled_id: int,
        description: str,
        amount: Decimal,
        frequency: str,
        next_due_date: datetime,
        transaction_type: str,
        active: bool,
        notes: Optional[str] = None,
        account_id: Optional[int] = None,
        category_id: Optional[int] = None,
    ) -> ScheduledTransaction:
        """Overwrite a scheduled transaction.

        This is the only way to deactivate or reactivate a schedule.
        ``account_id`` and ``category_id`` keep their current values when omitted.

        Raises:
            NotFoundError: If the schedule, account or category doesn't exist
            ValidationError: If description is blank or amount is not positive
        """
        existing = self.get_scheduled_transaction(scheduled_id)
        amount = self._validate(description, amount)
        account_id = existing.account_id if account_id is None else account_id
        category_id = existing.category_id if category_id is None else category_id
        self._require_references(account_id, category_id)

        self.db.update_scheduled_transaction(
            scheduled_id=scheduled_id,
            description=description,
            amount=amount,
            frequency=enum_value(frequency),
            next_due_date=next_due_date,
            transaction_type=enum_value(transaction_type),
            account_id=account_id,
            category_id=category_id,
            active=active,
            notes=notes,
        )
        return self.get_scheduled_transaction(scheduled_id)

    def delete_scheduled_transaction(self, scheduled_id: int) -> None:
        """Delete a schedule. Transactions it spawned are kept but detached.

        Raises:
            NotFoundError: If it doesn't exist
        """
        self.get_scheduled_transaction(scheduled_id)
        self.db.delete_scheduled_transaction(scheduled_id)
        logger.info("Deleted scheduled transaction %s", scheduled_id)

    def get_spawned_transactions(self, scheduled_id: int) -> list[Transaction]:
        """List the transactions a schedule has produced so far."""
        self.get_scheduled_transaction(scheduled_id)
        return self.transaction_service.list_by_scheduled_transaction(scheduled_id)

    def execute_scheduled_transaction(
        self, scheduled_id: int, now: Optional[datetime] = None
    ) -> Transaction:
        """Book one occurrence of a schedule and advance its due date.

        The new transaction is dated ``now`` and linked back to the schedule.
        Booking, the balance change and the due-date advance commit together.

        Args:
            scheduled_id: Scheduled transaction ID
            now: Booking time (defaults to the current time)

        Returns:
            The created transaction

        Raises:
            NotFoundError: If the schedule or any entity it references is missing
        """
        if now is None:
            now = datetime.now()

        with log_operation(logger, "execute_scheduled_transaction", scheduled_id=scheduled_id):
            with self.db.unit_of_work():
                scheduled = self.get_scheduled_transaction(scheduled_id)
                transaction = self.transaction_service.create_transaction(
                    amount=scheduled.amount,
                    transaction_type=scheduled.transaction_type,
                    account_id=scheduled.account_id,
                    category_id=scheduled.category_id,
                    user_id=scheduled.created_by_id,
                    transaction_date=now,
                    description=scheduled.description,
                    notes=scheduled.notes,
                    scheduled_transaction_id=scheduled.id,
                )
                self.db.set_next_due_date(
                    scheduled.id, advance_due_date(scheduled.next_due_date, scheduled.frequency)
                )
                return transaction

    def sweep(self, now: Optional[datetime] = None) -> list[Transaction]:
        """Execute every active schedule due before ``now``, one at a time.

        The whole sweep is one unit of work: if any execution fails, nothing
        from this sweep is kept and the error propagates.

        Returns:
            Transactions created, in execution order
        """
        if now is None:
            now = datetime.now()

        with self.db.unit_of_work():
            due = self.list_due(now)
            logger.info("Sweep at %s: %d scheduled transaction(s) due", now, len(due))
            created = [self.execute_scheduled_transaction(item.id, now=now) for item in due]
        logger.info("Sweep at %s finished: %d transaction(s) created", now, len(created))
        return created

    def _require_references(self, account_id: int, category_id: int) -> None:
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        if self.db.get_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))

    @staticmethod
    def _validate(description: str, amount: Decimal) -> Decimal:
        """Check the description and return the amount rounded to cents."""
        if not description or not description.strip():
            raise ValidationError("Description is required")
        if amount is None:
            raise ValidationError(amount_not_positive())
        amount = round_to_cents(amount)
        if amount <= 0:
            raise ValidationError(amount_not_positive())
        return amount
