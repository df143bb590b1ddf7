"""Tests for BalanceUpdater."""

from decimal import Decimal

import pytest

from fintracker.domain.entities import BalanceEffect, TransactionType
from fintracker.domain.errors import NotFoundError


def effect(account, amount, transaction_type):
    return BalanceEffect(
        account_id=account.id, amount=Decimal(amount), transaction_type=transaction_type
    )


class TestApply:
    def test_income_increases_balance(self, temp_db, balance_updater, sample_account):
        balance_updater.apply(effect(sample_account, "250.50", TransactionType.INCOME))

        assert temp_db.get_account(sample_account.id).balance == Decimal("1250.50")

    def test_expense_decreases_balance(self, temp_db, balance_updater, sample_account):
        balance_updater.apply(effect(sample_account, "100.25", "EXPENSE"))

        assert temp_db.get_account(sample_account.id).balance == Decimal("899.75")

    def test_transfer_leaves_balance_untouched(self, temp_db, balance_updater, sample_account):
        balance_updater.apply(effect(sample_account, "300", TransactionType.TRANSFER))

        assert temp_db.get_account(sample_account.id).balance == Decimal("1000.00")

    def test_unknown_type_leaves_balance_untouched(self, temp_db, balance_updater, sample_account):
        balance_updater.apply(effect(sample_account, "300", "REFUND"))

        assert temp_db.get_account(sample_account.id).balance == Decimal("1000.00")

    def test_balance_may_go_negative(self, temp_db, balance_updater, sample_account):
        balance_updater.apply(effect(sample_account, "1500", "EXPENSE"))

        assert temp_db.get_account(sample_account.id).balance == Decimal("-500.00")

    def test_missing_account_raises_not_found(self, balance_updater):
        with pytest.raises(NotFoundError, match="Account not found with id: 999"):
            balance_updater.apply_delta(999, Decimal("10"))

    def test_zero_delta_is_noop(self, temp_db, balance_updater, sample_account):
        balance_updater.apply_delta(sample_account.id, Decimal("0"))

        assert temp_db.get_account(sample_account.id).balance == Decimal("1000.00")

    def test_other_account_fields_are_not_rewritten(
        self, temp_db, balance_updater, account_service, sample_account
    ):
        account_service.update_account(sample_account.id, name="Renamed", account_type="CURRENT")

        balance_updater.apply(effect(sample_account, "10", "INCOME"))

        account = temp_db.get_account(sample_account.id)
        assert account.name == "Renamed"
        assert account.account_type == "CURRENT"
        assert account.balance == Decimal("1010.00")


class TestRevert:
    def test_reverting_expense_adds_money_back(self, temp_db, balance_updater, sample_account):
        spent = effect(sample_account, "40", "EXPENSE")
        balance_updater.apply(spent)
        balance_updater.revert(spent)

        assert temp_db.get_account(sample_account.id).balance == Decimal("1000.00")

    def test_reverting_income_takes_money_away(self, temp_db, balance_updater, sample_account):
        balance_updater.revert(effect(sample_account, "40", "INCOME"))

        assert temp_db.get_account(sample_account.id).balance == Decimal("960.00")


class TestRecompute:
    def test_same_account_applies_difference(self, temp_db, balance_updater, sample_account):
        old = effect(sample_account, "100", "EXPENSE")
        balance_updater.apply(old)

        balance_updater.recompute(old, effect(sample_account, "150", "EXPENSE"))

        assert temp_db.get_account(sample_account.id).balance == Decimal("850.00")

    def test_type_change_flips_direction(self, temp_db, balance_updater, sample_account):
        old = effect(sample_account, "100", "EXPENSE")
        balance_updater.apply(old)

        balance_updater.recompute(old, effect(sample_account, "100", "INCOME"))

        assert temp_db.get_account(sample_account.id).balance == Decimal("1100.00")

    def test_account_change_corrects_both_accounts(
        self, temp_db, balance_updater, sample_account, second_account
    ):
        old = effect(sample_account, "100", "EXPENSE")
        balance_updater.apply(old)

        balance_updater.recompute(old, effect(second_account, "70", "EXPENSE"))

        assert temp_db.get_account(sample_account.id).balance == Decimal("1000.00")
        assert temp_db.get_account(second_account.id).balance == Decimal("430.00")

    def test_failure_applying_new_effect_keeps_old_balance(
        self, temp_db, balance_updater, sample_account
    ):
        old = effect(sample_account, "100", "EXPENSE")
        balance_updater.apply(old)

        bad = BalanceEffect(account_id=999, amount=Decimal("5"), transaction_type="EXPENSE")
        with pytest.raises(NotFoundError):
            balance_updater.recompute(old, bad)

        assert temp_db.get_account(sample_account.id).balance == Decimal("900.00")


def test_unit_of_work_rolls_back_balance_change(temp_db, balance_updater, sample_account):
    with pytest.raises(RuntimeError):
        with temp_db.unit_of_work():
            balance_updater.apply(effect(sample_account, "500", "INCOME"))
            raise RuntimeError("boom")

    assert temp_db.get_account(sample_account.id).balance == Decimal("1000.00")
