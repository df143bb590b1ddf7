"""Shared pytest fixtures for fintracker tests."""

import os
import tempfile
from datetime import datetime
from decimal import Decimal

import pytest

from fintracker.database.factories import create_sqlite_database
from fintracker.domain.account import AccountService
from fintracker.domain.balance import BalanceUpdater
from fintracker.domain.category import CategoryService
from fintracker.domain.investment import InvestmentService
from fintracker.domain.scheduler import ScheduledTransactionService
from fintracker.domain.transaction import TransactionService
from fintracker.domain.user import UserService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def user_service(temp_db):
    return UserService(temp_db)


@pytest.fixture
def account_service(temp_db):
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    return CategoryService(temp_db)


@pytest.fixture
def balance_updater(temp_db):
    return BalanceUpdater(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    return TransactionService(temp_db)


@pytest.fixture
def scheduled_service(temp_db):
    return ScheduledTransactionService(temp_db)


@pytest.fixture
def investment_service(temp_db):
    return InvestmentService(temp_db)


@pytest.fixture
def sample_user(user_service):
    """Create a sample user for testing."""
    return user_service.create_user(
        username="asha", password="secret", email="asha@example.com", full_name="Asha Rao"
    )


@pytest.fixture
def sample_account(account_service, sample_user):
    """Create a sample account with an opening balance of 1000."""
    return account_service.create_account(
        name="Savings", account_type="SAVINGS", user_id=sample_user.id, balance=Decimal("1000.00")
    )


@pytest.fixture
def second_account(account_service, sample_user):
    """Create a second account with an opening balance of 500."""
    return account_service.create_account(
        name="Wallet", account_type="CASH", user_id=sample_user.id, balance=Decimal("500.00")
    )


@pytest.fixture
def expense_category(category_service):
    return category_service.create_category(name="Groceries", category_type="EXPENSE")


@pytest.fixture
def income_category(category_service):
    return category_service.create_category(name="Salary", category_type="INCOME")


@pytest.fixture
def now():
    """A fixed 'current time' for time-dependent behavior."""
    return datetime(2024, 3, 10, 9, 30)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
