"""Investment domain service."""

import logging
from datetime import datetime
from decimal import Decimal
from typing import Optional

from fintracker.database.base import Database
from fintracker.domain.entities import Investment
from fintracker.domain.errors import (
    NotFoundError,
    ValidationError,
    amount_not_positive,
    investment_not_found,
    user_not_found,
)
from fintracker.domain.returns import investment_return_rate

logger = logging.getLogger(__name__)


class InvestmentService:
    """Service for managing investments and their returns."""

    def __init__(self, db: Database):
        """Initialize investment service.

        Args:
            db: Database instance
        """
        self.db = db

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
    ) -> Investment:
        """Create an investment for a user.

        The current value starts at the initial amount unless given.

        Args:
            name: Investment name
            investment_type: Free-form type such as STOCK or MUTUAL_FUND
            initial_amount: Amount invested, must be positive
            start_date: When the holding started
            user_id: Owning user ID
            current_value: Optional current value
            end_date: Optional end (e.g. maturity) date
            expected_return_rate: Optional expected yearly return in percent
            notes: Optional notes
            ticker: Optional market ticker symbol

        Returns:
            Created investment entity

        Raises:
            ValidationError: If name is blank or initial amount is not positive
            NotFoundError: If the user doesn't exist
        """
        self._validate(name, initial_amount)
        if self.db.get_user(user_id) is None:
            raise NotFoundError(user_not_found(user_id))
        if current_value is None:
            current_value = initial_amount

        investment_id = self.db.create_investment(
            name=name,
            investment_type=investment_type,
            initial_amount=initial_amount,
            start_date=start_date,
            user_id=user_id,
            current_value=current_value,
            end_date=end_date,
            expected_return_rate=expected_return_rate,
            notes=notes,
            ticker=ticker,
        )
        logger.info("Created investment '%s' (ID: %s) for user %s", name, investment_id, user_id)
        return self.get_investment(investment_id)

    def get_investment(self, investment_id: int) -> Investment:
        """Get investment by ID.

        Raises:
            NotFoundError: If the investment doesn't exist
        """
        investment = self.db.get_investment(investment_id)
        if investment is None:
            raise NotFoundError(investment_not_found(investment_id))
        return investment

    def list_investments(
        self, user_id: Optional[int] = None, investment_type: Optional[str] = None
    ) -> list[Investment]:
        """List investments, optionally by user, type or both."""
        return self.db.list_investments(user_id=user_id, investment_type=investment_type)

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
    ) -> Investment:
        """Overwrite every field of an investment.

        Raises:
            NotFoundError: If the investment doesn't exist
            ValidationError: If name is blank or initial amount is not positive
        """
        self.get_investment(investment_id)
        self._validate(name, initial_amount)
        self.db.update_investment(
            investment_id=investment_id,
            name=name,
            investment_type=investment_type,
            initial_amount=initial_amount,
            start_date=start_date,
            current_value=current_value,
            end_date=end_date,
            expected_return_rate=expected_return_rate,
            notes=notes,
            ticker=ticker,
        )
        return self.get_investment(investment_id)

    def update_investment_value(self, investment_id: int, current_value: Decimal) -> Investment:
        """Record a new current value."""
        self.get_investment(investment_id)
        self.db.update_investment_value(investment_id, current_value)
        return self.get_investment(investment_id)

    def delete_investment(self, investment_id: int) -> None:
        """Delete an investment.

        Raises:
            NotFoundError: If the investment doesn't exist
        """
        self.get_investment(investment_id)
        self.db.delete_investment(investment_id)
        logger.info("Deleted investment %s", investment_id)

    def calculate_return_rate(self, investment_id: int, now: Optional[datetime] = None) -> Decimal:
        """Percentage return of an investment as of ``now`` (defaults to the current time).

        Raises:
            NotFoundError: If the investment doesn't exist
        """
        investment = self.get_investment(investment_id)
        if now is None:
            now = datetime.now()
        return investment_return_rate(investment, now)

    @staticmethod
    def _validate(name: str, initial_amount: Decimal) -> None:
        if not name or not name.strip():
            raise ValidationError("Investment name is required")
        if initial_amount is None or initial_amount <= 0:
            raise ValidationError(amount_not_positive("Initial amount"))
