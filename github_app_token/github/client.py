"""GitHub API client for the installation token exchange.

Uses httpx for a single synchronous POST. The request is never retried:
a failure is reported to the operator, who can re-run the command.
"""

import json
from typing import Any, Optional
from urllib.parse import quote

import httpx
import structlog

from github_app_token.core.config import API_TIMEOUT, DEFAULT_GITHUB_API_URL
from github_app_token.errors import ConfigurationError, ExchangeError, MissingFieldError, TransportError
from github_app_token.github.types import AppAssertion, IssuedToken

logger = structlog.get_logger(__name__)

GITHUB_ACCEPT = "application/vnd.github.v3+json"

# Segments a URL parser would drop or collapse
_DOT_SEGMENTS = frozenset({"", ".", ".."})


def access_tokens_url(api_url: str, installation_id: str) -> str:
    """Build the access_tokens endpoint for an installation.

    The installation ID is escaped as a single path segment so that
    values like "../../orgs" stay inside the installations collection.
    "." and ".." survive escaping and would be collapsed as dot-segments,
    so they are refused along with an empty ID.
    """
    if installation_id in _DOT_SEGMENTS:
        raise ConfigurationError(
            f"App installation ID {installation_id!r} is not a valid path segment."
        )
    base = (api_url or DEFAULT_GITHUB_API_URL).rstrip("/")
    segment = quote(installation_id, safe="")
    return f"{base}/app/installations/{segment}/access_tokens"


def _auth_headers(app_id: str, assertion: AppAssertion) -> dict[str, str]:
    return {
        "User-Agent": app_id,
        "Accept": GITHUB_ACCEPT,
        "Authorization": f"Bearer {assertion.token}",
    }


def _error_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


def get_installation_token(
    api_url: str,
    installation_id: str,
    app_id: str,
    assertion: AppAssertion,
    *,
    client: Optional[httpx.Client] = None,
    timeout: float = API_TIMEOUT,
) -> tuple[IssuedToken, dict]:
    """Exchange a GitHub App JWT for an installation access token.

    Installation tokens are scoped to the repos the installation was
    granted and expire after 1 hour.

    Returns the token and the full JSON response body.

    Raises:
        TransportError: DNS, TLS, connection or timeout failure.
        ExchangeError: GitHub answered with a non-2xx status.
        MissingFieldError: The response has no string 'token' field.
        ConfigurationError: The installation ID is empty, "." or "..".
    """
    url = access_tokens_url(api_url, installation_id)
    headers = _auth_headers(app_id, assertion)

    logger.info("requesting_installation_token", url=url, installation_id=installation_id)

    try:
        if client is None:
            with httpx.Client(timeout=timeout) as own_client:
                response = own_client.post(url, headers=headers)
        else:
            response = client.post(url, headers=headers)
    except httpx.TransportError as exc:
        raise TransportError(url, exc) from exc

    if not response.is_success:
        body = _error_body(response)
        logger.warning(
            "installation_token_rejected",
            status_code=response.status_code,
            installation_id=installation_id,
        )
        raise ExchangeError(response.status_code, body)

    raw = response.text
    try:
        data = json.loads(raw)
    except ValueError:
        raise MissingFieldError(raw) from None

    if not isinstance(data, dict) or not isinstance(data.get("token"), str):
        raise MissingFieldError(raw)

    issued = IssuedToken.from_response(data)
    logger.info(
        "installation_token_issued",
        installation_id=installation_id,
        expires_at=issued.expires_at,
        repository_selection=issued.repository_selection,
    )
    return issued, data
