"""User domain service."""

import logging
from typing import Optional

import bcrypt

from fintracker.database.base import Database
from fintracker.domain.entities import User
from fintracker.domain.errors import (
    NotFoundError,
    ValidationError,
    user_not_found,
    username_not_found,
)

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    """Return a bcrypt hash for a plain-text password."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def check_password(password: str, password_hash: str) -> bool:
    """Check a plain-text password against a stored bcrypt hash."""
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


class UserService:
    """Service for managing users."""

    def __init__(self, db: Database):
        """Initialize user service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_user(
        self, username: str, password: str, email: str, full_name: Optional[str] = None
    ) -> User:
        """Create a new user with a hashed password.

        Args:
            username: Unique login name
            password: Plain-text password, stored only as a bcrypt hash
            email: Unique email address
            full_name: Optional display name

        Returns:
            Created user entity

        Raises:
            ValidationError: If username or email already exists, or password is empty
        """
        if self.db.username_exists(username):
            raise ValidationError("Username already exists")
        if self.db.email_exists(email):
            raise ValidationError("Email already exists")
        if not password:
            raise ValidationError("Password is required")

        user_id = self.db.create_user(
            username=username,
            password_hash=hash_password(password),
            email=email,
            full_name=full_name,
        )
        logger.info("Created user %s (ID: %s)", username, user_id)
        return self.get_user(user_id)

    def get_user(self, user_id: int) -> User:
        """Get user by ID.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = self.db.get_user(user_id)
        if user is None:
            raise NotFoundError(user_not_found(user_id))
        return user

    def get_user_by_username(self, username: str) -> User:
        """Get user by username.

        Raises:
            NotFoundError: If the user does not exist
        """
        user = self.db.get_user_by_username(username)
        if user is None:
            raise NotFoundError(username_not_found(username))
        return user

    def list_users(self) -> list[User]:
        """List all users."""
        return self.db.list_users()

    def update_user(
        self,
        user_id: int,
        username: str,
        email: str,
        full_name: Optional[str] = None,
        password: Optional[str] = None,
    ) -> User:
        """Update a user.

        Uniqueness is only re-checked for values that actually change. The
        password is re-hashed only when a new non-empty one is given.

        Raises:
            NotFoundError: If the user does not exist
            ValidationError: If the new username or email is taken
        """
        user = self.get_user(user_id)

        if user.username != username and self.db.username_exists(username):
            raise ValidationError("Username already exists")
        if user.email != email and self.db.email_exists(email):
            raise ValidationError("Email already exists")

        password_hash = hash_password(password) if password else None
        self.db.update_user(
            user_id=user_id,
            username=username,
            email=email,
            full_name=full_name,
            password_hash=password_hash,
        )
        return self.get_user(user_id)

    def delete_user(self, user_id: int) -> None:
        """Delete a user.

        Raises:
            NotFoundError: If the user does not exist
            ConflictError: If accounts or other records still reference the user
        """
        self.get_user(user_id)
        self.db.delete_user(user_id)
        logger.info("Deleted user %s", user_id)

    def verify_password(self, username: str, password: str) -> bool:
        """Check credentials. Unknown users simply fail verification."""
        user = self.db.get_user_by_username(username)
        if user is None:
            return False
        return check_password(password, user.password_hash)
