from __future__ import annotations

import bcrypt
import pytest

from ledger_accounts.application.ports.password_hasher_port import HashingError
from ledger_accounts.infrastructure.security import password_hasher as password_hasher_module
from ledger_accounts.infrastructure.security.password_hasher import BcryptPasswordHasher


def _fast_hasher() -> BcryptPasswordHasher:
    return BcryptPasswordHasher(rounds=4)


def test_hash_password_never_stores_plaintext_and_verifies() -> None:
    hasher = _fast_hasher()
    password = "super-secret-password"

    password_hash = hasher.hash_password(password)

    assert password_hash != password
    assert password not in password_hash
    assert hasher.verify_password(password=password, password_hash=password_hash) is True


def test_wrong_password_fails_verification() -> None:
    hasher = _fast_hasher()
    password_hash = hasher.hash_password("correct")

    assert hasher.verify_password(password="wrong", password_hash=password_hash) is False


def test_default_cost_factor_is_ten_and_hash_is_sixty_chars() -> None:
    hasher = BcryptPasswordHasher()

    password_hash = hasher.hash_password("Secret123")

    assert password_hash.startswith("$2b$10$")
    assert len(password_hash) == 60
    assert hasher.is_well_formed(password_hash) is True


def test_explicit_cost_factor_overrides_default() -> None:
    hasher = _fast_hasher()

    password_hash = hasher.hash_password("Secret123", cost_factor=5)

    assert password_hash.startswith("$2b$05$")


def test_same_password_hashes_differently_but_both_verify() -> None:
    hasher = _fast_hasher()

    first = hasher.hash_password("Secret123")
    second = hasher.hash_password("Secret123")

    assert first != second
    assert hasher.verify_password(password="Secret123", password_hash=first) is True
    assert hasher.verify_password(password="Secret123", password_hash=second) is True


def test_verify_accepts_2a_and_2y_prefixed_hashes_from_other_bcrypt_libraries() -> None:
    hasher = _fast_hasher()
    password_hash = hasher.hash_password("Secret123")
    legacy_hash = "$2a$" + password_hash[4:]

    assert hasher.is_well_formed(legacy_hash) is True
    assert hasher.verify_password(password="Secret123", password_hash=legacy_hash) is True


@pytest.mark.parametrize(
    "value",
    [
        "",
        "Secret123",
        "$2b$10$short",
        "$2c$10$" + "a" * 53,
        "$2b$xx$" + "a" * 53,
        "$2b$10$" + "a" * 54,
        None,
        12345,
    ],
)
def test_is_well_formed_rejects_non_hash_values_without_raising(value: object) -> None:
    assert _fast_hasher().is_well_formed(value) is False


def test_verify_raises_hashing_error_for_malformed_hash() -> None:
    with pytest.raises(HashingError):
        _fast_hasher().verify_password(password="Secret123", password_hash="not-a-hash")


def test_invalid_cost_factor_raises_hashing_error() -> None:
    with pytest.raises(HashingError):
        _fast_hasher().hash_password("Secret123", cost_factor=2)


def test_salt_generation_failure_raises_hashing_error(monkeypatch: pytest.MonkeyPatch) -> None:
    def _failing_gensalt(rounds: int = 12, prefix: bytes = b"2b") -> bytes:
        raise OSError("entropy source unavailable")

    monkeypatch.setattr(password_hasher_module.bcrypt, "gensalt", _failing_gensalt)

    with pytest.raises(HashingError):
        _fast_hasher().hash_password("Secret123")


def test_password_over_72_bytes_hashes_and_verifies() -> None:
    hasher = _fast_hasher()
    password = "p" * 80

    password_hash = hasher.hash_password(password)

    assert hasher.is_well_formed(password_hash) is True
    assert hasher.verify_password(password=password, password_hash=password_hash) is True
    assert hasher.verify_password(password="q" * 80, password_hash=password_hash) is False


def test_only_first_72_bytes_take_part_in_verification() -> None:
    hasher = _fast_hasher()
    password_hash = hasher.hash_password("a" * 72 + "tail-one")

    assert hasher.verify_password(password="a" * 72 + "tail-two", password_hash=password_hash)
    assert hasher.verify_password(password="a" * 71 + "b", password_hash=password_hash) is False


def test_legacy_hash_of_truncated_multibyte_password_verifies() -> None:
    password = "é" * 40
    legacy_hash = bcrypt.hashpw(
        password.encode("utf-8")[:72],
        bcrypt.gensalt(rounds=4, prefix=b"2a"),
    ).decode("utf-8")

    assert _fast_hasher().verify_password(password=password, password_hash=legacy_hash) is True
