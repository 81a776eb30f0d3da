from __future__ import annotations

from contractpro.core.security import hash_password, verify_password


def test_hash_password_round_trip_with_pepper():
    hashed = hash_password("s3cret!", pepper="pep", iterations=1000)

    assert hashed.startswith("pbkdf2_sha256$1000$")
    assert verify_password("s3cret!", hashed, pepper="pep")
    assert not verify_password("s3cret!", hashed, pepper="other")
    assert not verify_password("wrong", hashed, pepper="pep")


def test_hash_password_salts_each_hash():
    assert hash_password("same", iterations=1000) != hash_password("same", iterations=1000)


def test_verify_password_rejects_malformed_hash():
    assert not verify_password("anything", "plaintext")
    assert not verify_password("anything", "md5$1$salt$digest")
