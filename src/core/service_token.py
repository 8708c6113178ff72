"""
Service JWT tokens for calls from this service to the provider document store.

The document store accepts HS256 tokens signed with a shared secret
(``settings.document_store_auth_secret``).
"""

import os
from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

SERVICE_AUTH_ISSUER = "provider-directory"
SERVICE_AUTH_AUDIENCE = "document-store"


def create_service_token(
    service_name: str,
    secret: str,
    permissions: list[str] | None = None,
    expires_minutes: int = 60,
) -> str:
    """Create a service JWT token.

    Args:
        service_name: Name of the calling service
        secret: Shared HS256 signing secret
        permissions: List of permission strings
        expires_minutes: Token validity in minutes

    Returns:
        The signed JWT token
    """
    now = datetime.now(timezone.utc)
    expires = now + timedelta(minutes=expires_minutes)

    payload: dict[str, Any] = {
        "service_name": service_name,
        "iss": SERVICE_AUTH_ISSUER,
        "sub": f"service:{service_name}",
        "aud": SERVICE_AUTH_AUDIENCE,
        "iat": int(now.timestamp()),
        "exp": int(expires.timestamp()),
        "permissions": permissions or [],
        "environment": os.getenv("ENVIRONMENT", "production"),
    }

    return jwt.encode(payload, secret, algorithm="HS256")



class Permissions:
    """Permission constants understood by the document store."""

    PROVIDERS_READ = "providers.read"
    PROVIDERS_WRITE = "providers.write"
