"""Unit tests for JWT handler."""

from datetime import timedelta
from unittest.mock import patch

import pytest
from jose import jwt

from config.settings import settings
from src.pk_common.errors import InvalidCredentialsError
from src.pk_gateway.auth.jwt_handler import create_access_token, decode_token


def test_access_token_contains_correct_claims() -> None:
    token = create_access_token("GWALLET123", kyb_verified=True)
    # Decode without verification to inspect claims
    payload = jwt.get_unverified_claims(token)
    assert payload["sub"] == "GWALLET123"
    assert payload["kyb"] is True
    assert payload["type"] == "access"


def test_kyb_defaults_to_false() -> None:
    payload = jwt.get_unverified_claims(create_access_token("GWALLET123"))
    assert payload["kyb"] is False


def test_decode_valid_access_token() -> None:
    payload = decode_token(create_access_token("GWALLET123"))
    assert payload["sub"] == "GWALLET123"


def test_expired_access_token_raises_credentials_error() -> None:
    with patch(
        "src.pk_gateway.auth.jwt_handler._ACCESS_EXPIRE",
        timedelta(seconds=-1),
    ):
        token = create_access_token("GWALLET123")
    with pytest.raises(InvalidCredentialsError):
        decode_token(token)


def test_tampered_token_raises_error() -> None:
    token = create_access_token("GWALLET123")
    tampered = token[:-4] + ("xxxx" if not token.endswith("xxxx") else "yyyy")
    with pytest.raises(InvalidCredentialsError):
        decode_token(tampered)


def test_non_access_token_rejected() -> None:
    token = jwt.encode(
        {"sub": "GWALLET123", "type": "refresh"}, settings.JWT_SECRET, algorithm="HS256"
    )
    with pytest.raises(InvalidCredentialsError):
        decode_token(token)


def test_wrong_secret_rejected() -> None:
    token = jwt.encode({"sub": "GWALLET123", "type": "access"}, "other-secret", algorithm="HS256")
    with pytest.raises(InvalidCredentialsError):
        decode_token(token)
