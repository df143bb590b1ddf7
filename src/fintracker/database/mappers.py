"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic so that services never see ORM rows.
"""

from fintracker.domain import entities as domain
from fintracker.database.models import (
    User as ORMUser,
    Account as ORMAccount,
    Category as ORMCategory,
    Transaction as ORMTransaction,
    ScheduledTransaction as ORMScheduledTransaction,
    Investment as ORMInvestment,
)


def user_to_domain(orm_user: ORMUser) -> domain.User:
    """Convert SQLAlchemy User model to domain User entity."""
    return domain.User(
        id=orm_user.id,
        username=orm_user.username,
        password_hash=orm_user.password_hash,
        full_name=orm_user.full_name,
        email=orm_user.email,
        created_at=orm_user.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        account_type=orm_account.account_type,
        balance=orm_account.balance,
        user_id=orm_account.user_id,
        created_at=orm_account.created_at,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.Category:
    """Convert SQLAlchemy Category model to domain Category entity."""
    return domain.Category(
        id=orm_category.id,
        name=orm_category.name,
        category_type=orm_category.category_type,
        description=orm_category.description,
        parent_id=orm_category.parent_id,
        created_at=orm_category.created_at,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        description=orm_transaction.description,
        amount=orm_transaction.amount,
        transaction_date=orm_transaction.transaction_date,
        transaction_type=orm_transaction.transaction_type,
        account_id=orm_transaction.account_id,
        category_id=orm_transaction.category_id,
        created_by_id=orm_transaction.created_by_id,
        scheduled_transaction_id=orm_transaction.scheduled_transaction_id,
        notes=orm_transaction.notes,
        created_at=orm_transaction.created_at,
    )


def scheduled_transaction_to_domain(
    orm_scheduled: ORMScheduledTransaction,
) -> domain.ScheduledTransaction:
    """Convert SQLAlchemy ScheduledTransaction model to domain entity."""
    return domain.ScheduledTransaction(
        id=orm_scheduled.id,
        description=orm_scheduled.description,
        amount=orm_scheduled.amount,
        frequency=orm_scheduled.frequency,
        next_due_date=orm_scheduled.next_due_date,
        transaction_type=orm_scheduled.transaction_type,
        account_id=orm_scheduled.account_id,
        category_id=orm_scheduled.category_id,
        created_by_id=orm_scheduled.created_by_id,
        notes=orm_scheduled.notes,
        active=orm_scheduled.active,
        created_at=orm_scheduled.created_at,
    )


def investment_to_domain(orm_investment: ORMInvestment) -> domain.Investment:
    """Convert SQLAlchemy Investment model to domain Investment entity."""
    return domain.Investment(
        id=orm_investment.id,
        name=orm_investment.name,
        investment_type=orm_investment.investment_type,
        initial_amount=orm_investment.initial_amount,
        current_value=orm_investment.current_value,
        start_date=orm_investment.start_date,
        end_date=orm_investment.end_date,
        expected_return_rate=orm_investment.expected_return_rate,
        user_id=orm_investment.user_id,
        notes=orm_investment.notes,
        ticker=orm_investment.ticker,
        created_at=orm_investment.created_at,
    )
