"""Tests for password hashing."""

from cardapio.auth.passwords import hash_password, verify_password


def test_hash_and_verify():
    hashed = hash_password("cantina123")
    assert hashed != "cantina123"
    assert verify_password("cantina123", hashed) is True
    assert verify_password("wrong-pass", hashed) is False


def test_hashes_are_salted():
    """Same password, different hashes."""
    assert hash_password("cantina123") != hash_password("cantina123")


def test_malformed_hash_never_matches():
    assert verify_password("cantina123", "not-a-bcrypt-hash") is False
    assert verify_password("cantina123", "") is False
    assert verify_password("cantina123", None) is False
