from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.core.config import settings
from app.core.exceptions import ConfigurationError, InvalidToken
from app.core.security import (
    ACCESS_TOKEN_EXPIRE_SECONDS,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_is_salted_and_verifiable():
    first = hash_password("secret1")
    second = hash_password("secret1")

    assert first != "secret1"
    assert first != second
    assert verify_password("secret1", first)
    assert not verify_password("secret2", first)


def test_password_hash_uses_configured_work_factor():
    hashed = hash_password("secret1")
    # bcrypt format: $2b$<rounds>$...
    assert int(hashed.split("$")[2]) >= 10


def test_password_past_bcrypt_limit_never_verifies():
    hashed = hash_password("a" * 72)

    assert verify_password("a" * 72, hashed)
    assert not verify_password("a" * 72 + "x", hashed)
    assert not verify_password("å" * 37, hash_password("å" * 36))


def test_token_round_trip_returns_identity():
    token = create_access_token("user-1", "a@b.se")

    claims = decode_access_token(token)

    assert claims.user_id == "user-1"
    assert claims.email == "a@b.se"


def test_token_expires_exactly_one_day_after_issue():
    token = create_access_token("user-1", "a@b.se")

    payload = jwt.get_unverified_claims(token)

    assert ACCESS_TOKEN_EXPIRE_SECONDS == 86400
    assert payload["exp"] - payload["iat"] == 86400


def test_tampered_token_is_rejected():
    token = create_access_token("user-1", "a@b.se")
    forged = jwt.encode(
        {**jwt.get_unverified_claims(token), "sub": "someone-else"},
        "not-the-real-key",
        algorithm="HS256",
    )

    with pytest.raises(InvalidToken):
        decode_access_token(forged)


def test_expired_token_is_rejected():
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {
            "sub": "user-1",
            "email": "a@b.se",
            "iat": now - timedelta(days=2),
            "exp": now - timedelta(seconds=1),
        },
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )

    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_token_without_identity_claims_is_rejected():
    token = jwt.encode(
        {"exp": datetime.now(timezone.utc) + timedelta(minutes=5)},
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM,
    )

    with pytest.raises(InvalidToken):
        decode_access_token(token)


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidToken):
        decode_access_token("not.a.jwt")


def test_missing_secret_refuses_to_issue_or_verify(monkeypatch):
    token = create_access_token("user-1", "a@b.se")
    monkeypatch.setattr(settings, "SECRET_KEY", "")

    with pytest.raises(ConfigurationError):
        create_access_token("user-1", "a@b.se")
    with pytest.raises(ConfigurationError):
        decode_access_token(token)
