"""GitHub App authentication.

Handles JWT generation for GitHub App auth. The JWT is exchanged for an
installation access token by `github_app_token.github.client`.

GitHub App auth flow:
1. Generate a JWT signed with the App's private key
2. Exchange the JWT for a short-lived installation access token
3. Use the installation token for API calls or Git over HTTPS
"""

import time
from typing import Optional

import jwt
import structlog
from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from github_app_token.errors import KeyFormatError
from github_app_token.github.types import AppAssertion

logger = structlog.get_logger(__name__)

# GitHub accepts App JWTs valid for at most 10 minutes.
JWT_LIFETIME_SECONDS = 9 * 60
JWT_ALGORITHM = "RS256"


def _load_private_key(private_key: str) -> rsa.RSAPrivateKey:
    """Decode a PKCS#1 or PKCS#8 PEM private key.

    Public keys, encrypted keys, non-RSA keys and anything that is not PEM
    all raise KeyFormatError. The underlying error is not chained since its
    message can quote key material.
    """
    try:
        key = serialization.load_pem_private_key(private_key.encode(), password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm):
        raise KeyFormatError(
            "Private key does not appear to be a PEM-encoded private key."
        ) from None

    if not isinstance(key, rsa.RSAPrivateKey):
        raise KeyFormatError(
            "Private key is not an RSA key; GitHub Apps sign with RS256."
        )
    return key


def create_app_jwt(
    app_id: str,
    private_key: str,
    *,
    now: Optional[int] = None,
) -> AppAssertion:
    """Create a JWT for authenticating as the GitHub App.

    JWTs are valid for up to 10 minutes. We use 9 minutes
    to avoid clock-skew rejections.
    """
    key = _load_private_key(private_key)

    issued_at = int(time.time()) if now is None else now
    expires_at = issued_at + JWT_LIFETIME_SECONDS
    payload = {
        "iat": issued_at,
        "exp": expires_at,
        "iss": app_id,
    }

    token = jwt.encode(payload, key, algorithm=JWT_ALGORITHM)
    logger.info("app_jwt_created", issuer=app_id, expires_at=expires_at)

    return AppAssertion(
        token=token,
        issuer=app_id,
        issued_at=issued_at,
        expires_at=expires_at,
    )
