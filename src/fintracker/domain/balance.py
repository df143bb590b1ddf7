"""Balance Updater: the single place account balances change."""

import logging
from decimal import Decimal

from fintracker.database.base import Database
from fintracker.domain.entities import BalanceEffect

logger = logging.getLogger(__name__)


class BalanceUpdater:
    """Apply, revert and recompute transaction effects on account balances.

    Every change goes through ``Database.adjust_account_balance``, an atomic
    increment, so unrelated account fields are never rewritten.
    """

    def __init__(self, db: Database):
        """Initialize balance updater.

        Args:
            db: Database instance
        """
        self.db = db

    def apply_delta(self, account_id: int, signed_amount: Decimal) -> None:
        """Add ``signed_amount`` to the account balance. Zero is a no-op.

        Raises:
            NotFoundError: If the account doesn't exist
        """
        if signed_amount == 0:
            return
        account = self.db.adjust_account_balance(account_id, signed_amount)
        logger.info(
            "Adjusted balance of account %s by %s (new balance %s)",
            account_id,
            signed_amount,
            account.balance,
        )

    def apply(self, effect: BalanceEffect) -> None:
        """Apply a transaction's effect to its account."""
        self.apply_delta(effect.account_id, effect.signed_amount)

    def revert(self, effect: BalanceEffect) -> None:
        """Undo a previously applied effect.

        Uses the old type with the negated amount, so reverting an EXPENSE
        adds the money back and reverting an INCOME takes it away.
        """
        self.apply(effect.reversed())

    def recompute(self, old: BalanceEffect, new: BalanceEffect) -> None:
        """Replace ``old`` with ``new``: revert the old effect, then apply the new one.

        These are two independent corrections, so a change of account moves
        the old effect off the old account and the new effect onto the new
        one. Both run in one unit of work.
        """
        with self.db.unit_of_work():
            self.revert(old)
            self.apply(new)
