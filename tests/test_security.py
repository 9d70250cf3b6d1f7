"""Tests for password hashing and access tokens."""

from datetime import datetime, timedelta, timezone

from jobfair.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    is_password_hashed,
    next_midnight,
    verify_password,
)


def test_hash_and_verify_password():
    hashed = hash_password("secret123")

    assert is_password_hashed(hashed)
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)


def test_verify_against_malformed_hash():
    assert verify_password("secret123", "$2b$not-a-real-hash") is False


def test_plain_text_is_not_hashed():
    assert not is_password_hashed("secret123")


def test_next_midnight():
    now = datetime(2026, 3, 1, 23, 59, tzinfo=timezone(timedelta(hours=7)))

    assert next_midnight(now) == datetime(2026, 3, 2, 0, 0, tzinfo=timezone(timedelta(hours=7)))


def test_token_round_trip():
    token = create_access_token(7, "seeker@example.com", "JOB_SEEKER")

    payload = decode_access_token(token)

    assert payload["sub"] == "7"
    assert payload["email"] == "seeker@example.com"
    assert payload["role"] == "JOB_SEEKER"
    assert payload["exp"] > datetime.now(timezone.utc).timestamp()


def test_tampered_token_rejected():
    token = create_access_token(7, "seeker@example.com", "JOB_SEEKER")

    header_and_payload = token.rsplit(".", 1)[0]
    assert decode_access_token(f"{header_and_payload}.c2lnbmF0dXJl") is None
    assert decode_access_token("garbage") is None
