from __future__ import annotations

import pytest

from ledger_accounts.domain.auth.credentials import (
    AccountValidationError,
    normalize_account_email,
    normalize_account_username,
    require_password,
)


def test_email_is_trimmed_and_lowercased() -> None:
    assert normalize_account_email(email="  Alice@X.com ") == "alice@x.com"


@pytest.mark.parametrize("email", [None, "", "   "])
def test_blank_email_is_rejected(email: str | None) -> None:
    with pytest.raises(AccountValidationError, match="email is required"):
        normalize_account_email(email=email)


def test_username_is_trimmed_but_keeps_case() -> None:
    assert normalize_account_username(username=" Alice ") == "Alice"


@pytest.mark.parametrize("username", [None, "", "\t"])
def test_blank_username_is_rejected(username: str | None) -> None:
    with pytest.raises(AccountValidationError, match="username is required"):
        normalize_account_username(username=username)


def test_password_is_returned_unchanged() -> None:
    assert require_password(password=" Secret123 ") == " Secret123 "


@pytest.mark.parametrize("password", [None, ""])
def test_empty_password_is_rejected(password: str | None) -> None:
    with pytest.raises(AccountValidationError, match="password is required"):
        require_password(password=password)



def test_password_longer_than_bcrypt_input_is_accepted() -> None:
    long_password = "é" * 40

    assert require_password(password=long_password) == long_password
