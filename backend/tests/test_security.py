"""
Tests for password hashing and access tokens.
"""
from datetime import datetime, timedelta, timezone

from jose import jwt

from movieapi.core.auth import (
    create_access_token, decode_access_token, get_password_hash,
    hash_refresh_token, generate_refresh_token, verify_password
)
from movieapi.core.config import get_settings


def test_password_hash_round_trip():
    hashed = get_password_hash("s3cret!")
    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)


def test_passwords_longer_than_bcrypt_limit():
    long_password = "x" * 100
    hashed = get_password_hash(long_password)
    assert verify_password(long_password, hashed)
    assert not verify_password("x" * 99, hashed)


def test_verify_against_non_bcrypt_value():
    assert verify_password("anything", "not-a-hash") is False


def test_access_token_claims():
    token, expiration = create_access_token("user-1", "alice", "alice@example.com")
    payload = decode_access_token(token)
    settings = get_settings()

    assert payload["sub"] == "user-1"
    assert payload["name"] == "alice"
    assert payload["email"] == "alice@example.com"
    assert payload["iss"] == settings.JWT_ISSUER
    assert payload["aud"] == settings.JWT_AUDIENCE
    assert payload["exp"] == int(expiration.timestamp())

    lifetime = expiration - datetime.now(timezone.utc)
    assert timedelta(minutes=59) < lifetime <= timedelta(minutes=60)


def test_expired_token_is_rejected():
    token, _ = create_access_token("user-1", "alice", None, expires_delta=timedelta(seconds=-5))
    assert decode_access_token(token) is None


def test_token_signed_with_other_key_is_rejected():
    settings = get_settings()
    token = jwt.encode(
        {
            "sub": "user-1",
            "iss": settings.JWT_ISSUER,
            "aud": settings.JWT_AUDIENCE,
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        },
        "some-other-key",
        algorithm="HS256",
    )
    assert decode_access_token(token) is None


def test_token_for_other_audience_is_rejected():
    settings = get_settings()
    token = jwt.encode(
        {
            "sub": "user-1",
            "iss": settings.JWT_ISSUER,
            "aud": "someone-else",
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        },
        settings.JWT_KEY,
        algorithm="HS256",
    )
    assert decode_access_token(token) is None


def test_token_from_other_issuer_is_rejected():
    settings = get_settings()
    token = jwt.encode(
        {
            "sub": "user-1",
            "iss": "someone-else",
            "aud": settings.JWT_AUDIENCE,
            "exp": datetime.now(timezone.utc) + timedelta(minutes=5),
        },
        settings.JWT_KEY,
        algorithm="HS256",
    )
    assert decode_access_token(token) is None


def test_garbage_token_is_rejected():
    assert decode_access_token("not.a.jwt") is None


def test_refresh_tokens_are_random_and_hashed():
    first, second = generate_refresh_token(), generate_refresh_token()
    assert first != second
    assert len(hash_refresh_token(first)) == 64
    assert hash_refresh_token(first) == hash_refresh_token(first)
    assert hash_refresh_token(first) != first
