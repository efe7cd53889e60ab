"""Shared test fixtures for the github-app-token test suite.

RSA keys are generated once per session; 2048-bit generation is slow
enough to matter when every signer test needs one.
"""

import json
import sys

import httpx
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from github_app_token.core.logging import configure_structlog

GITHUB_ENV_VARS = (
    "GITHUB_APP_ID",
    "GITHUB_APP_ID_FILE",
    "GITHUB_APP_PRIVATE_KEY",
    "GITHUB_APP_PRIVATE_KEY_FILE",
    "GITHUB_APP_INSTALLATION_ID",
    "GITHUB_APP_INSTALLATION_ID_FILE",
    "GITHUB_URL",
    "GITHUB_API_URL",
    "HTTP_TIMEOUT",
    "DEBUG",
)


@pytest.fixture(autouse=True)
def _logs_to_stderr():
    """Keep log output off stdout, which tests inspect for the token."""
    configure_structlog(verbose=False, stream=sys.stderr)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Run in an empty directory with no GitHub App variables set."""
    for name in GITHUB_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Keys
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def rsa_key() -> rsa.RSAPrivateKey:
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


@pytest.fixture(scope="session")
def private_key_pem(rsa_key) -> str:
    """PKCS#1 PEM, the format GitHub hands out."""
    return rsa_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.TraditionalOpenSSL,
        serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def pkcs8_private_key_pem(rsa_key) -> str:
    return rsa_key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()


@pytest.fixture(scope="session")
def public_key_pem(rsa_key) -> str:
    return rsa_key.public_key().public_bytes(
        serialization.Encoding.PEM,
        serialization.PublicFormat.SubjectPublicKeyInfo,
    ).decode()


@pytest.fixture(scope="session")
def ec_private_key_pem() -> str:
    key = ec.generate_private_key(ec.SECP256R1())
    return key.private_bytes(
        serialization.Encoding.PEM,
        serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption(),
    ).decode()


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

def json_response(status_code: int, payload) -> httpx.Response:
    return httpx.Response(status_code, content=json.dumps(payload).encode())


def mock_client(handler) -> httpx.Client:
    """An httpx.Client whose requests are answered by `handler`."""
    return httpx.Client(transport=httpx.MockTransport(handler))
