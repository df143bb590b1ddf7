"""Resolve user-supplied names or IDs to entities."""

from fintracker.domain.account import AccountService
from fintracker.domain.category import CategoryService
from fintracker.domain.entities import Account, Category, User
from fintracker.domain.errors import NotFoundError
from fintracker.domain.user import UserService


def _as_id(value):
    """Return ``value`` as an int if it looks like one, else None."""
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def resolve_account(account_service: AccountService, account: str | int) -> Account:
    """Resolve account name or ID to the account.

    Numeric input is an ID; anything else matches the account name.

    Raises:
        NotFoundError: If no account matches
    """
    account_id = _as_id(account)
    if account_id is not None:
        return account_service.get_account(account_id)

    for candidate in account_service.list_accounts():
        if candidate.name == account:
            return candidate
    raise NotFoundError(f"Account '{account}' not found")


def resolve_user(user_service: UserService, user: str | int) -> User:
    """Resolve username or ID to the user.

    Raises:
        NotFoundError: If no user matches
    """
    user_id = _as_id(user)
    if user_id is not None:
        return user_service.get_user(user_id)
    return user_service.get_user_by_username(str(user))


def resolve_category(category_service: CategoryService, category: str | int) -> Category:
    """Resolve category path ("Parent > Child") or ID to the category.

    Raises:
        NotFoundError: If no category matches
    """
    category_id = _as_id(category)
    if category_id is not None:
        return category_service.get_category(category_id)
    return category_service.get_category_by_path(str(category))
