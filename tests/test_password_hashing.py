"""Unit tests for the bcrypt helpers in auth/tokens.py.

Covers:
- the stored hash is never the plaintext and verifies against it
- two hashes of the same password differ (per-hash salt)
- wrong passwords and non-bcrypt stored values do not verify
- the work factor is fixed at 10 rounds
"""

import pytest

from auth.tokens import hash_password, verify_password


@pytest.mark.parametrize("plain", ["hunter2", "correct horse battery staple", "pässwörd-ünicode", "x"])
def test_hash_is_not_plaintext_and_verifies(plain: str) -> None:
    hashed = hash_password(plain)
    assert hashed != plain
    assert plain not in hashed
    assert verify_password(plain, hashed)


def test_same_password_hashes_differently() -> None:
    assert hash_password("same-password") != hash_password("same-password")


def test_wrong_password_does_not_verify() -> None:
    hashed = hash_password("right-password")
    assert not verify_password("wrong-password", hashed)
    assert not verify_password("", hashed)


def test_non_bcrypt_stored_value_does_not_verify() -> None:
    """A plaintext or corrupt value in the hash column counts as a mismatch, not a crash."""
    assert not verify_password("secret", "secret")
    assert not verify_password("secret", "")


def test_work_factor_is_ten_rounds() -> None:
    # bcrypt hashes look like $2b$<rounds>$<salt+hash>
    assert hash_password("anything").split("$")[2] == "10"
