"""Tests for the SQLAlchemy Database implementation."""

from datetime import datetime
from decimal import Decimal

import pytest

from fintracker.database.factories import create_database, create_sqlite_database
from fintracker.database.sqlalchemy_db import SQLAlchemyDatabase
from fintracker.domain import entities
from fintracker.domain.errors import ConflictError, NotFoundError


@pytest.fixture
def user_id(temp_db):
    return temp_db.create_user(username="asha", password_hash="x", email="asha@example.com")


@pytest.fixture
def account_id(temp_db, user_id):
    return temp_db.create_account(
        name="Savings", account_type="SAVINGS", user_id=user_id, balance=Decimal("100.00")
    )


@pytest.fixture
def category_id(temp_db):
    return temp_db.create_category(name="Groceries", category_type="EXPENSE")


def add_transaction(db, account_id, category_id, user_id, day, amount="10.00", **kwargs):
    return db.create_transaction(
        amount=Decimal(amount),
        transaction_date=datetime(2024, 3, day),
        transaction_type="EXPENSE",
        account_id=account_id,
        category_id=category_id,
        created_by_id=user_id,
        **kwargs,
    )


class TestDomainModels:
    """Reads return frozen domain entities, never ORM rows."""

    def test_get_account_returns_domain_model(self, temp_db, account_id, user_id):
        account = temp_db.get_account(account_id)

        assert isinstance(account, entities.Account)
        assert account.balance == Decimal("100.00")
        assert account.user_id == user_id
        assert isinstance(account.created_at, datetime)

    def test_missing_rows_return_none(self, temp_db):
        assert temp_db.get_user(1) is None
        assert temp_db.get_account(1) is None
        assert temp_db.get_category(1) is None
        assert temp_db.get_transaction(1) is None
        assert temp_db.get_scheduled_transaction(1) is None
        assert temp_db.get_investment(1) is None

    def test_enum_members_stored_as_plain_strings(self, temp_db):
        category_id = temp_db.create_category(name="Salary", category_type=entities.CategoryType.INCOME)

        assert temp_db.get_category(category_id).category_type == "INCOME"

    def test_user_exists_checks(self, temp_db, user_id):
        assert temp_db.username_exists("asha")
        assert not temp_db.username_exists("ravi")
        assert temp_db.email_exists("asha@example.com")
        assert not temp_db.email_exists("ravi@example.com")


class TestAdjustAccountBalance:
    def test_increments_in_place(self, temp_db, account_id):
        temp_db.adjust_account_balance(account_id, Decimal("25.50"))
        account = temp_db.adjust_account_balance(account_id, Decimal("-5.25"))

        assert account.balance == Decimal("120.25")
        assert temp_db.get_account(account_id).balance == Decimal("120.25")

    def test_missing_account(self, temp_db):
        with pytest.raises(NotFoundError, match="Account not found with id: 9"):
            temp_db.adjust_account_balance(9, Decimal("1"))

    def test_sees_writes_from_another_connection(self, temp_db, account_id):
        other = create_sqlite_database(database_path=temp_db.database_path)
        try:
            temp_db.get_account(account_id)
            other.adjust_account_balance(account_id, Decimal("50"))

            account = temp_db.adjust_account_balance(account_id, Decimal("1"))
        finally:
            other.disconnect()

        assert account.balance == Decimal("151.00")


class TestUnitOfWork:
    def test_commits_on_success(self, temp_db, account_id):
        with temp_db.unit_of_work():
            temp_db.adjust_account_balance(account_id, Decimal("5"))
            temp_db.adjust_account_balance(account_id, Decimal("5"))

        temp_db.disconnect()
        assert temp_db.get_account(account_id).balance == Decimal("110.00")

    def test_rolls_back_everything_on_error(self, temp_db, account_id, category_id, user_id):
        with pytest.raises(RuntimeError):
            with temp_db.unit_of_work():
                temp_db.adjust_account_balance(account_id, Decimal("-10"))
                add_transaction(temp_db, account_id, category_id, user_id, day=1)
                raise RuntimeError("abort")

        assert temp_db.get_account(account_id).balance == Decimal("100.00")
        assert temp_db.list_transactions() == []

    def test_nested_units_join_outer(self, temp_db, account_id):
        with pytest.raises(RuntimeError):
            with temp_db.unit_of_work():
                with temp_db.unit_of_work():
                    temp_db.adjust_account_balance(account_id, Decimal("30"))
                raise RuntimeError("abort after inner unit")

        assert temp_db.get_account(account_id).balance == Decimal("100.00")

    def test_interrupt_rolls_back_and_resets_depth(self, temp_db, account_id):
        with pytest.raises(KeyboardInterrupt):
            with temp_db.unit_of_work():
                temp_db.adjust_account_balance(account_id, Decimal("7"))
                raise KeyboardInterrupt

        assert temp_db.get_account(account_id).balance == Decimal("100.00")

        # A plain write after the interrupt commits again
        temp_db.adjust_account_balance(account_id, Decimal("1"))
        temp_db.disconnect()
        assert temp_db.get_account(account_id).balance == Decimal("101.00")

    def test_usable_after_rollback(self, temp_db, account_id):
        with pytest.raises(RuntimeError):
            with temp_db.unit_of_work():
                raise RuntimeError("abort")

        with temp_db.unit_of_work():
            temp_db.adjust_account_balance(account_id, Decimal("1"))

        assert temp_db.get_account(account_id).balance == Decimal("101.00")


class TestConstraints:
    def test_duplicate_username_conflicts(self, temp_db, user_id):
        with pytest.raises(ConflictError, match="user creation"):
            temp_db.create_user(username="asha", password_hash="y", email="other@example.com")

        # Session stays usable after the rollback
        assert [u.username for u in temp_db.list_users()] == ["asha"]

    def test_delete_referenced_category_conflicts(self, temp_db, account_id, category_id, user_id):
        add_transaction(temp_db, account_id, category_id, user_id, day=1)

        with pytest.raises(ConflictError):
            temp_db.delete_category(category_id)

        assert temp_db.get_category(category_id) is not None

    def test_missing_foreign_key_conflicts(self, temp_db, category_id, user_id):
        with pytest.raises(ConflictError):
            add_transaction(temp_db, 404, category_id, user_id, day=1)


class TestListFilters:
    def test_transactions_filtered_and_ordered_by_id(
        self, temp_db, account_id, category_id, user_id
    ):
        first = add_transaction(temp_db, account_id, category_id, user_id, day=5)
        second = add_transaction(temp_db, account_id, category_id, user_id, day=1)
        third = add_transaction(temp_db, account_id, category_id, user_id, day=20)

        ids = lambda items: [t.id for t in items]
        assert ids(temp_db.list_transactions()) == [first, second, third]
        assert ids(
            temp_db.list_transactions(
                start_date=datetime(2024, 3, 1), end_date=datetime(2024, 3, 5)
            )
        ) == [first, second]
        assert ids(temp_db.list_transactions(start_date=datetime(2024, 3, 6))) == [third]

    def test_user_filter_follows_account_owner(self, temp_db, account_id, category_id, user_id):
        other_user = temp_db.create_user(username="ravi", password_hash="x", email="ravi@example.com")
        other_account = temp_db.create_account(name="Ravi", account_type="CASH", user_id=other_user)
        # Created by asha on ravi's account
        on_other = add_transaction(temp_db, other_account, category_id, user_id, day=2)
        own = add_transaction(temp_db, account_id, category_id, user_id, day=3)

        assert [t.id for t in temp_db.list_transactions(user_id=other_user)] == [on_other]
        assert [t.id for t in temp_db.list_transactions(created_by_id=user_id)] == [on_other, own]

    def test_scheduled_due_before_is_strict(self, temp_db, account_id, category_id, user_id):
        def schedule(due):
            return temp_db.create_scheduled_transaction(
                description="Rent",
                amount=Decimal("10"),
                frequency="MONTHLY",
                next_due_date=due,
                transaction_type="EXPENSE",
                account_id=account_id,
                category_id=category_id,
                created_by_id=user_id,
            )

        early = schedule(datetime(2024, 3, 1))
        schedule(datetime(2024, 3, 10))

        due = temp_db.list_scheduled_transactions(due_before=datetime(2024, 3, 10))

        assert [s.id for s in due] == [early]

    def test_delete_scheduled_detaches_transactions(
        self, temp_db, account_id, category_id, user_id
    ):
        scheduled_id = temp_db.create_scheduled_transaction(
            description="Rent",
            amount=Decimal("10"),
            frequency="MONTHLY",
            next_due_date=datetime(2024, 3, 1),
            transaction_type="EXPENSE",
            account_id=account_id,
            category_id=category_id,
            created_by_id=user_id,
        )
        txn_id = add_transaction(
            temp_db, account_id, category_id, user_id, day=1, scheduled_transaction_id=scheduled_id
        )

        temp_db.delete_scheduled_transaction(scheduled_id)

        temp_db.disconnect()
        assert temp_db.get_scheduled_transaction(scheduled_id) is None
        assert temp_db.get_transaction(txn_id).scheduled_transaction_id is None


class TestFactories:
    def test_sqlite_path_from_environment(self, tmp_path, monkeypatch):
        path = tmp_path / "env.db"
        monkeypatch.setenv("FINTRACKER_DB_PATH", str(path))

        db = create_sqlite_database()

        assert db.database_url == f"sqlite:///{path}"

    def test_url_takes_precedence(self, tmp_path, monkeypatch):
        monkeypatch.delenv("FINTRACKER_DATABASE_URL", raising=False)
        url = f"sqlite:///{tmp_path / 'url.db'}"

        db = create_database(database_url=url, database_path=str(tmp_path / "ignored.db"))

        assert isinstance(db, SQLAlchemyDatabase)
        assert db.database_url == url

    def test_url_from_environment(self, tmp_path, monkeypatch):
        url = f"sqlite:///{tmp_path / 'env-url.db'}"
        monkeypatch.setenv("FINTRACKER_DATABASE_URL", url)

        assert create_database().database_url == url
