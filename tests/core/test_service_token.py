"""Tests for service token creation."""

from typing import Any

import jwt
import pytest

from src.core.service_token import (
    SERVICE_AUTH_AUDIENCE,
    SERVICE_AUTH_ISSUER,
    Permissions,
    create_service_token,
)

SECRET = "test-secret-0123456789abcdef0123456789"


def decode(token: str, secret: str = SECRET) -> dict[str, Any]:
    return jwt.decode(
        token,
        secret,
        algorithms=["HS256"],
        audience=SERVICE_AUTH_AUDIENCE,
        issuer=SERVICE_AUTH_ISSUER,
    )


def test_token_carries_service_claims() -> None:
    token = create_service_token(
        "provider-directory", SECRET, permissions=[Permissions.PROVIDERS_READ]
    )

    payload = decode(token)

    assert payload["service_name"] == "provider-directory"
    assert payload["sub"] == "service:provider-directory"
    assert payload["aud"] == SERVICE_AUTH_AUDIENCE
    assert payload["permissions"] == ["providers.read"]


def test_token_rejected_with_wrong_secret() -> None:
    token = create_service_token("provider-directory", SECRET)

    with pytest.raises(jwt.InvalidSignatureError):
        decode(token, "other-secret-0123456789abcdef012345678")


def test_expired_token_rejected() -> None:
    token = create_service_token("provider-directory", SECRET, expires_minutes=-5)

    with pytest.raises(jwt.ExpiredSignatureError):
        decode(token)
