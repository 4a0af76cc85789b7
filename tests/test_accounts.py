"""Tests for the Account Directory: registration, authentication, listing."""

import pytest
from sqlalchemy import select
from sqlalchemy.exc import OperationalError

from ideaboard.errors import DuplicateAccount, InternalError, InvalidCredentials, ValidationError
from ideaboard.models.user import User
from ideaboard.security import hash_password, verify_password


class TestRegister:

    async def test_register_returns_new_account(self, accounts):
        user = await accounts.register("Ann", "555-0001", "secret1")
        assert user.id is not None
        assert user.full_name == "Ann"
        assert user.phone_number == "555-0001"

    async def test_distinct_phone_numbers_get_distinct_ids(self, accounts):
        ids = {
            (await accounts.register(f"User {i}", f"555-010{i}", "secret1")).id
            for i in range(4)
        }
        assert len(ids) == 4

    async def test_password_is_stored_hashed(self, accounts, session):
        await accounts.register("Ann", "555-0001", "secret1")
        stored = (await session.scalars(select(User))).one()
        assert stored.password_hash != "secret1"
        assert verify_password("secret1", stored.password_hash)

    async def test_inputs_are_trimmed(self, accounts):
        user = await accounts.register("  Ann  ", " 555-0001 ", "secret1")
        assert user.full_name == "Ann"
        assert user.phone_number == "555-0001"

    async def test_duplicate_phone_number_fails_regardless_of_other_fields(self, accounts):
        await accounts.register("Ann", "555-0001", "secret1")
        with pytest.raises(DuplicateAccount):
            await accounts.register("Someone Else", "555-0001", "different-password")

    @pytest.mark.parametrize(
        "full_name,phone,password",
        [
            ("", "555-0001", "secret1"),
            ("Ann", "", "secret1"),
            ("Ann", "555-0001", ""),
            (None, "555-0001", "secret1"),
            ("   ", "555-0001", "secret1"),
        ],
    )
    async def test_missing_fields_are_rejected(self, accounts, full_name, phone, password):
        with pytest.raises(ValidationError):
            await accounts.register(full_name, phone, password)

    async def test_short_password_is_rejected(self, accounts):
        with pytest.raises(ValidationError, match="at least 6"):
            await accounts.register("Ann", "555-0001", "12345")

    async def test_password_over_bcrypt_limit_is_rejected(self, accounts):
        with pytest.raises(ValidationError):
            await accounts.register("Ann", "555-0001", "x" * 73)

    async def test_unique_index_catches_duplicates_missed_by_precheck(self, accounts, monkeypatch):
        await accounts.register("Ann", "555-0001", "secret1")

        async def no_match(phone_number):
            return None

        # Simulate a concurrent insert slipping past the existence check.
        monkeypatch.setattr(accounts, "get_by_phone", no_match)
        with pytest.raises(DuplicateAccount):
            await accounts.register("Ann Again", "555-0001", "secret1")


class TestAuthenticate:

    async def test_correct_credentials_return_registered_account(self, accounts):
        created = await accounts.register("Ann", "555-0001", "secret1")
        user = await accounts.authenticate("555-0001", "secret1")
        assert user.id == created.id

    async def test_wrong_password_and_unknown_phone_fail_identically(self, accounts):
        await accounts.register("Ann", "555-0001", "secret1")

        with pytest.raises(InvalidCredentials) as wrong_password:
            await accounts.authenticate("555-0001", "wrong-password")
        with pytest.raises(InvalidCredentials) as unknown_phone:
            await accounts.authenticate("555-9999", "secret1")

        assert wrong_password.value.message == unknown_phone.value.message
        assert wrong_password.value.status_code == unknown_phone.value.status_code

    async def test_missing_credentials_are_invalid(self, accounts):
        with pytest.raises(InvalidCredentials):
            await accounts.authenticate("", "")


class TestListAccounts:

    async def test_lists_every_account_in_id_order(self, accounts):
        await accounts.register("Ann", "555-0001", "secret1")
        await accounts.register("Bob", "555-0002", "secret2")
        users = await accounts.list_accounts()
        assert [u.full_name for u in users] == ["Ann", "Bob"]

    async def test_empty_directory(self, accounts):
        assert await accounts.list_accounts() == []


def test_hash_password_is_salted():
    first = hash_password("secret1", rounds=4)
    second = hash_password("secret1", rounds=4)
    assert first != second
    assert verify_password("secret1", first)
    assert verify_password("secret1", second)
    assert not verify_password("secret2", first)


def test_verify_password_rejects_malformed_hash():
    assert verify_password("secret1", "not-a-bcrypt-hash") is False


async def _store_down(*args, **kwargs):
    raise OperationalError("statement", {}, Exception("disk I/O error"))


class TestStoreFailures:

    async def test_lookup_failure_during_register(self, accounts, session, monkeypatch):
        monkeypatch.setattr(session, "scalars", _store_down)
        with pytest.raises(InternalError):
            await accounts.register("Ann", "555-0001", "secret1")

    async def test_commit_failure_during_register(self, accounts, session, monkeypatch):
        monkeypatch.setattr(session, "commit", _store_down)
        with pytest.raises(InternalError, match="during registration"):
            await accounts.register("Ann", "555-0001", "secret1")

    async def test_lookup_failure_during_login(self, accounts, session, monkeypatch):
        await accounts.register("Ann", "555-0001", "secret1")
        monkeypatch.setattr(session, "scalars", _store_down)
        with pytest.raises(InternalError):
            await accounts.authenticate("555-0001", "secret1")

    async def test_get_by_id_failure(self, accounts, session, monkeypatch):
        monkeypatch.setattr(session, "get", _store_down)
        with pytest.raises(InternalError):
            await accounts.get_by_id(1)

    async def test_list_failure(self, accounts, session, monkeypatch):
        monkeypatch.setattr(session, "scalars", _store_down)
        with pytest.raises(InternalError) as exc_info:
            await accounts.list_accounts()
        assert exc_info.value.status_code == 500
        assert isinstance(exc_info.value.__cause__, OperationalError)
