"""Unit tests for password hashing."""

from whisper.util.password import hash_password, verify_password


def test_hash_verifies_original_password():
    password_hash = hash_password("hunter22")

    assert password_hash != "hunter22"
    assert verify_password("hunter22", password_hash)
    assert not verify_password("hunter23", password_hash)


def test_hashes_are_salted():
    assert hash_password("hunter22") != hash_password("hunter22")


def test_malformed_hash_is_a_mismatch():
    assert not verify_password("hunter22", "not-a-hash")
