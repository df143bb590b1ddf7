"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling. ``code`` is a stable
    identifier the boundary layer can map to its own status values.
    """

    code = "DOMAIN_ERROR"


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""

    code = "VALIDATION_ERROR"


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""

    code = "NOT_FOUND"


class ConflictError(DomainError):
    """Storage constraint violation, such as a foreign-key conflict on delete."""

    code = "DATA_INTEGRITY"


def not_found(entity: str, entity_id: int) -> str:
    """Return message for a missing entity looked up by ID."""
    return f"{entity} not found with id: {entity_id}"


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return not_found("Account", account_id)


def category_not_found(category_id: int) -> str:
    """Return message for missing category by ID."""
    return not_found("Category", category_id)


def category_path_not_found(path: str) -> str:
    """Return message for missing category by path."""
    return f"Category '{path}' not found"


def user_not_found(user_id: int) -> str:
    """Return message for missing user by ID."""
    return not_found("User", user_id)


def username_not_found(username: str) -> str:
    """Return message for missing user by username."""
    return f"User not found with username: {username}"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return not_found("Transaction", transaction_id)


def scheduled_transaction_not_found(scheduled_id: int) -> str:
    """Return message for missing scheduled transaction."""
    return not_found("Scheduled transaction", scheduled_id)


def investment_not_found(investment_id: int) -> str:
    """Return message for missing investment."""
    return not_found("Investment", investment_id)


def amount_not_positive(field: str = "Amount") -> str:
    """Return message for a non-positive monetary amount."""
    return f"{field} must be positive"


def integrity_violation(operation: str) -> str:
    """Return message for a storage constraint violation."""
    return (
        f"Data integrity violation during {operation}. "
        "The operation conflicts with existing data."
    )
