"""Tests for password hashing and session token helpers."""
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from auth_backend.config import Settings
from auth_backend.exceptions import (
    InvalidCredentialsError,
    TokenInvalidError,
    UnexpectedFailureError,
)
from auth_backend.models.user import User
from auth_backend.services import auth_service


@pytest.fixture()
def token_settings() -> Settings:
    return Settings(_env_file=None, jwt_secret_key="unit-test-secret", bcrypt_rounds=4)


def test_hash_password_never_stores_plaintext():
    hashed = auth_service.hash_password("12345678", rounds=4)

    assert hashed != "12345678"
    assert hashed.startswith("$2b$04$")
    assert auth_service.verify_password("12345678", hashed)
    assert not auth_service.verify_password("wrong-password", hashed)


def test_hash_password_is_salted():
    first = auth_service.hash_password("same-password", rounds=4)
    second = auth_service.hash_password("same-password", rounds=4)

    assert first != second


def test_default_cost_factor_is_twelve():
    assert Settings(_env_file=None).bcrypt_rounds == 12
    assert auth_service.DEFAULT_BCRYPT_ROUNDS == 12


def test_verify_password_rejects_malformed_hash():
    assert auth_service.verify_password("12345678", "not-a-bcrypt-hash") is False


def test_long_password_uses_first_72_bytes():
    password = "p" * 80
    hashed = auth_service.hash_password(password, rounds=4)

    assert auth_service.verify_password(password, hashed)
    # Anything past byte 72 is not part of the hash
    assert auth_service.verify_password("p" * 72 + "different", hashed)
    assert not auth_service.verify_password("p" * 71, hashed)


def test_long_multibyte_password_round_trips():
    password = "contraseña-ñandú-" * 6
    hashed = auth_service.hash_password(password, rounds=4)

    assert auth_service.verify_password(password, hashed)


def test_session_token_carries_user_id_claim(token_settings):
    token = auth_service.create_session_token(7, "ada@example.com", token_settings)

    payload = jwt.decode(
        token, token_settings.jwt_secret_key, algorithms=[token_settings.jwt_algorithm]
    )

    assert set(payload) == {"userId", "email", "iat", "exp"}
    assert payload["userId"] == "7"


def test_session_token_requires_user_id_claim(token_settings):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"sub": "1", "email": "ada@example.com", "iat": now, "exp": now + timedelta(hours=1)},
        token_settings.jwt_secret_key,
        algorithm=token_settings.jwt_algorithm,
    )

    with pytest.raises(TokenInvalidError):
        auth_service.decode_session_token(token, token_settings)


def test_session_token_round_trip(token_settings):
    token = auth_service.create_session_token(7, "ada@example.com", token_settings)

    claims = auth_service.decode_session_token(token, token_settings)

    assert claims.user_id == "7"
    assert claims.email == "ada@example.com"
    assert claims.exp - claims.iat == 24 * 60 * 60


def test_session_token_valid_just_before_expiry(token_settings):
    issued_at = datetime.now(timezone.utc) - timedelta(hours=23, minutes=59)
    token = auth_service.create_session_token(1, "ada@example.com", token_settings, issued_at=issued_at)

    assert auth_service.decode_session_token(token, token_settings).user_id == "1"


def test_session_token_rejected_just_after_expiry(token_settings):
    issued_at = datetime.now(timezone.utc) - timedelta(hours=24, minutes=1)
    token = auth_service.create_session_token(1, "ada@example.com", token_settings, issued_at=issued_at)

    with pytest.raises(TokenInvalidError):
        auth_service.decode_session_token(token, token_settings)


def test_session_token_rejects_other_secret(token_settings):
    other = Settings(_env_file=None, jwt_secret_key="someone-elses-secret")
    token = auth_service.create_session_token(1, "ada@example.com", other)

    with pytest.raises(TokenInvalidError):
        auth_service.decode_session_token(token, token_settings)


def test_session_token_rejects_tampering(token_settings):
    token = auth_service.create_session_token(1, "ada@example.com", token_settings)
    header, payload, signature = token.split(".")
    forged = auth_service.create_session_token(2, "eve@example.com", token_settings)
    forged_payload = forged.split(".")[1]

    with pytest.raises(TokenInvalidError):
        auth_service.decode_session_token(f"{header}.{forged_payload}.{signature}", token_settings)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c"])
def test_session_token_rejects_malformed(token_settings, token):
    with pytest.raises(TokenInvalidError):
        auth_service.decode_session_token(token, token_settings)


def test_session_token_requires_email_claim(token_settings):
    now = datetime.now(timezone.utc)
    token = jwt.encode(
        {"userId": "1", "iat": now, "exp": now + timedelta(hours=1)},
        token_settings.jwt_secret_key,
        algorithm=token_settings.jwt_algorithm,
    )

    with pytest.raises(TokenInvalidError):
        auth_service.decode_session_token(token, token_settings)


def test_user_model_normalizes_email():
    user = User(name="  Ada Lovelace ", email=" Ada@Example.com ", password_hash="x")

    assert user.email == "ada@example.com"
    assert user.name == "Ada Lovelace"


@pytest.mark.parametrize(
    "name, email",
    [
        ("A", "ada@example.com"),
        ("A" * 51, "ada@example.com"),
        ("Ada", "not-an-email"),
        ("Ada", "ada@example"),
    ],
)
def test_user_model_rejects_invalid_fields(name, email):
    with pytest.raises(ValueError):
        User(name=name, email=email, password_hash="x")


def test_session_max_age_follows_expiry_hours(monkeypatch):
    monkeypatch.setenv("JWT_EXPIRE_HOURS", "1")

    assert Settings(_env_file=None).session_max_age == 3600


def test_auth_error_message_defaults_and_overrides():
    assert InvalidCredentialsError().message == "Invalid email or password"
    assert InvalidCredentialsError(None).message == "Invalid email or password"

    error = UnexpectedFailureError("Server error during registration. Please try again later.")

    assert error.status_code == 500
    assert str(error) == "Server error during registration. Please try again later."
