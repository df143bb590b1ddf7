"""Tests for UserService."""

from decimal import Decimal

import pytest

from fintracker.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_user_hashes_password(user_service):
    user = user_service.create_user("asha", "secret", "asha@example.com", full_name="Asha Rao")

    assert user.id is not None
    assert user.username == "asha"
    assert user.full_name == "Asha Rao"
    assert user.password_hash != "secret"
    assert user.password_hash.startswith("$2")


def test_duplicate_username_rejected_before_save(temp_db, user_service, sample_user, monkeypatch):
    calls = []
    monkeypatch.setattr(temp_db, "create_user", lambda **kwargs: calls.append(kwargs))

    with pytest.raises(ValidationError, match="Username already exists"):
        user_service.create_user("asha", "pw", "other@example.com")

    assert calls == []


def test_duplicate_email_rejected_before_save(temp_db, user_service, sample_user, monkeypatch):
    calls = []
    monkeypatch.setattr(temp_db, "create_user", lambda **kwargs: calls.append(kwargs))

    with pytest.raises(ValidationError, match="Email already exists"):
        user_service.create_user("someone", "pw", "asha@example.com")

    assert calls == []


def test_empty_password_rejected(user_service):
    with pytest.raises(ValidationError, match="Password is required"):
        user_service.create_user("asha", "", "asha@example.com")


def test_verify_password(user_service, sample_user):
    assert user_service.verify_password("asha", "secret") is True
    assert user_service.verify_password("asha", "wrong") is False
    assert user_service.verify_password("nobody", "secret") is False


def test_get_user_by_id_and_username(user_service, sample_user):
    assert user_service.get_user(sample_user.id) == sample_user
    assert user_service.get_user_by_username("asha") == sample_user

    with pytest.raises(NotFoundError, match="User not found with id: 99"):
        user_service.get_user(99)
    with pytest.raises(NotFoundError, match="User not found with username: ghost"):
        user_service.get_user_by_username("ghost")


def test_list_users(user_service, sample_user):
    other = user_service.create_user("ravi", "pw", "ravi@example.com")

    assert [u.username for u in user_service.list_users()] == ["asha", "ravi"]
    assert other.full_name is None


class TestUpdateUser:
    def test_update_keeps_password_when_not_given(self, user_service, sample_user):
        updated = user_service.update_user(
            sample_user.id, username="asha.rao", email="asha@example.com", full_name="Asha R."
        )

        assert updated.username == "asha.rao"
        assert updated.full_name == "Asha R."
        assert updated.password_hash == sample_user.password_hash
        assert user_service.verify_password("asha.rao", "secret")

    def test_update_rehashes_new_password(self, user_service, sample_user):
        user_service.update_user(
            sample_user.id, username="asha", email="asha@example.com", password="n3w"
        )

        assert user_service.verify_password("asha", "n3w")
        assert not user_service.verify_password("asha", "secret")

    def test_same_values_do_not_conflict_with_self(self, user_service, sample_user):
        updated = user_service.update_user(sample_user.id, username="asha", email="asha@example.com")
        assert updated.username == "asha"

    def test_taken_username_and_email(self, user_service, sample_user):
        user_service.create_user("ravi", "pw", "ravi@example.com")

        with pytest.raises(ValidationError, match="Username already exists"):
            user_service.update_user(sample_user.id, username="ravi", email="asha@example.com")
        with pytest.raises(ValidationError, match="Email already exists"):
            user_service.update_user(sample_user.id, username="asha", email="ravi@example.com")

    def test_missing_user(self, user_service):
        with pytest.raises(NotFoundError):
            user_service.update_user(5, username="x", email="x@example.com")


def test_delete_user(user_service, sample_user):
    user_service.delete_user(sample_user.id)

    with pytest.raises(NotFoundError):
        user_service.get_user(sample_user.id)


def test_delete_user_with_accounts_conflicts(user_service, account_service, sample_user):
    account_service.create_account("Savings", "SAVINGS", sample_user.id, Decimal("0"))

    with pytest.raises(ConflictError) as excinfo:
        user_service.delete_user(sample_user.id)

    assert excinfo.value.code == "DATA_INTEGRITY"
    assert user_service.get_user(sample_user.id).username == "asha"
